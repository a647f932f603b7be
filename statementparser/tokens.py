"""Date and amount token parsing.

Both parsers are pure functions that return ``None`` for anything they
cannot read; neither raises on bad input.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Optional

from .models import DateOrder
from .patterns import (
  CURRENCY_SYMBOLS,
  DAY_MONTH_RE,
  ISO_DATE_RE,
  MINUS_SIGN_RE,
  MONTH_DAY_RE,
  MONTHS,
  NUMERIC_DATE_RE,
  SIGNED_DECIMAL_RE,
  SUFFIX_RE,
)

# Two-digit years below the pivot are 20xx, the rest 19xx
CENTURY_PIVOT = 70

_STRIP_CHARS = re.compile(rf"[(),{re.escape(CURRENCY_SYMBOLS)}\s]")


def normalize_year(year: int) -> int:
  if year < 100:
    return 1900 + year if year >= CENTURY_PIVOT else 2000 + year
  return year


def to_iso_date(year: int, month: int, day: int) -> Optional[str]:
  """Return ``YYYY-MM-DD`` if the triple is a real calendar date."""
  try:
    return date(year, month, day).isoformat()
  except ValueError:
    return None


def _month_number(name: str) -> Optional[int]:
  return MONTHS.get(name.lower())


def parse_date(raw: str, order: DateOrder = DateOrder.UNSPECIFIED,
               default_year: Optional[int] = None) -> Optional[str]:
  """Resolve a date token to an ISO date string.

  Numeric ``D/M/Y`` tokens that cannot be disambiguated on their own
  (neither component above 12) are read according to ``order``, falling
  back to day-first. Textual dates without a year use ``default_year``, or
  the current UTC year.
  """
  value = (raw or "").strip()
  if not value:
    return None
  if default_year is None:
    default_year = datetime.now(timezone.utc).year

  m = ISO_DATE_RE.match(value)
  if m:
    return to_iso_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

  m = NUMERIC_DATE_RE.match(value)
  if m:
    first, second = int(m.group(1)), int(m.group(2))
    year = normalize_year(int(m.group(3)))
    if first > 12:
      return to_iso_date(year, second, first)
    if second > 12:
      return to_iso_date(year, first, second)
    if order is DateOrder.MONTH_FIRST:
      return to_iso_date(year, first, second)
    return to_iso_date(year, second, first)

  m = DAY_MONTH_RE.match(value)
  if m:
    month = _month_number(m.group(2))
    if not month:
      return None
    year = normalize_year(int(m.group(3))) if m.group(3) else default_year
    return to_iso_date(year, month, int(m.group(1)))

  m = MONTH_DAY_RE.match(value)
  if m:
    month = _month_number(m.group(1))
    if not month:
      return None
    year = normalize_year(int(m.group(3))) if m.group(3) else default_year
    return to_iso_date(year, month, int(m.group(2)))

  return None


def parse_amount(raw: str) -> Optional[float]:
  """Parse a statement amount into a signed float.

  ``CR`` always means a credit. Otherwise parentheses, a minus sign or a
  ``DR`` suffix make the amount negative.
  """
  text = (raw or "").strip().upper()
  if not text:
    return None

  suffix = SUFFIX_RE.search(text)
  is_credit = bool(suffix) and suffix.group(1) == "CR"
  is_debit = bool(suffix) and suffix.group(1) == "DR"
  if suffix:
    text = text[:suffix.start()]
  is_paren = "(" in text and ")" in text
  is_minus = bool(MINUS_SIGN_RE.search(text))

  numeric = _STRIP_CHARS.sub("", text)
  if not SIGNED_DECIMAL_RE.match(numeric):
    return None
  value = float(numeric)
  if not math.isfinite(value):
    return None

  if is_credit:
    return abs(value)
  if is_paren or is_minus or is_debit:
    return -abs(value)
  return value
