"""Line-level helpers: normalisation, classification and document-wide votes.

Classification is an ordered list of predicates; the first one that fires
decides the line's ``LineKind``::

    metadata > header > candidate > continuation > unclassified
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .models import ColumnLayout, DateOrder, LineKind
from .patterns import (
  AMOUNT_TOKEN,
  DATE_AT_START,
  HEADER_KEYWORD_RE,
  HEADER_LINE_KEYWORDS,
  METADATA_LINE,
  NUMERIC_DATE_RE,
  SPLIT_COLUMN_KEYWORDS,
)

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------
def normalize_line(line: str) -> str:
  return _WS_RE.sub(" ", line).strip()


def normalize_lines(text: Optional[str]) -> List[str]:
  """Split raw text into cleaned, non-empty lines.

  ``str.splitlines`` also breaks on form feeds, which PDF text extractors
  emit between pages.
  """
  if not text:
    return []
  cleaned = (normalize_line(line) for line in text.splitlines())
  return [line for line in cleaned if line]


# ---------------------------------------------------------------------------
# Token probes
# ---------------------------------------------------------------------------
def leading_date(line: str) -> Optional[str]:
  m = DATE_AT_START.match(line)
  return m.group(1) if m else None


def has_amount_token(line: str) -> bool:
  return AMOUNT_TOKEN.search(line) is not None


def header_keywords(text: str) -> Set[str]:
  found = set()
  for m in HEADER_KEYWORD_RE.finditer(text):
    found.add((m.group(1) or m.group(2)).lower())
  return found


def is_header_text(text: str) -> bool:
  """True when ``text`` mentions a table column.

  A single date/description/amount/balance/debit/credit word is enough, so
  descriptions such as "Direct Debit Gym" are treated as header text too.
  Lines naming only the wider columns (details, withdrawals, deposits) need
  three of them.
  """
  keywords = header_keywords(text)
  return bool(keywords & HEADER_LINE_KEYWORDS) or len(keywords) >= 3


def is_table_header(text: str) -> bool:
  """Stricter test used before a header is allowed to fix the column layout:
  the date column alongside another column, or three distinct columns."""
  keywords = header_keywords(text)
  if "date" in keywords and len(keywords) >= 2:
    return True
  return len(keywords) >= 3


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------
def is_metadata(line: str) -> bool:
  return METADATA_LINE.search(line) is not None


def is_header(line: str) -> bool:
  return is_header_text(line) and leading_date(line) is None


def is_candidate(line: str) -> bool:
  return leading_date(line) is not None


def is_continuation(line: str) -> bool:
  return not has_amount_token(line)


# Order matters: each predicate is only reached when all earlier ones failed.
_RULES: Tuple[Tuple[LineKind, Callable[[str], bool]], ...] = (
  (LineKind.METADATA, is_metadata),
  (LineKind.HEADER, is_header),
  (LineKind.CANDIDATE, is_candidate),
  (LineKind.CONTINUATION, is_continuation),
)


def classify_line(line: str) -> LineKind:
  for kind, predicate in _RULES:
    if predicate(line):
      return kind
  return LineKind.UNCLASSIFIED


# ---------------------------------------------------------------------------
# Document-level detection
# ---------------------------------------------------------------------------
def detect_date_order(lines: Iterable[str]) -> DateOrder:
  """Vote on day-first vs month-first across every numeric leading date."""
  day_first = month_first = 0
  for line in lines:
    token = leading_date(line)
    if not token:
      continue
    m = NUMERIC_DATE_RE.match(token)
    if not m:
      continue
    first, second = int(m.group(1)), int(m.group(2))
    if first > 12 and second <= 12:
      day_first += 1
    if second > 12 and first <= 12:
      month_first += 1

  logger.debug(f"Date-order votes: day-first={day_first} month-first={month_first}")
  if day_first > month_first:
    return DateOrder.DAY_FIRST
  if month_first > day_first:
    return DateOrder.MONTH_FIRST
  return DateOrder.UNSPECIFIED


def column_layout(header_line: str) -> ColumnLayout:
  keywords = header_keywords(header_line)
  return ColumnLayout(
    has_balance="balance" in keywords,
    split_columns=len(keywords & SPLIT_COLUMN_KEYWORDS) >= 2,
  )
