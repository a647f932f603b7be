"""Turn a single (possibly merged) statement line into a ``Transaction``."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .lines import is_header_text, is_metadata, leading_date, normalize_line
from .models import ColumnLayout, DateOrder, Transaction
from .patterns import AMOUNT_TOKEN
from .tokens import parse_amount, parse_date

logger = logging.getLogger(__name__)

# Running balances are printed to the cent
BALANCE_TOLERANCE = 0.01


def _is_unsigned(token: str) -> bool:
  upper = token.upper()
  return not ("-" in token or "(" in token or upper.endswith("CR") or upper.endswith("DR"))


def _sign_from_delta(amount: float, balance: Optional[float],
                     previous_balance: Optional[float]) -> float:
  """Give an unsigned amount the sign implied by the running balance.

  Only applied when the balance moved by exactly the amount; anything
  else leaves the amount untouched.
  """
  if balance is None or previous_balance is None:
    return amount
  delta = round(balance - previous_balance, 2)
  if delta == 0 or abs(abs(delta) - abs(amount)) >= BALANCE_TOLERANCE:
    return amount
  return abs(amount) if delta > 0 else -abs(amount)


def _select_amount(tokens: List[re.Match], layout: Optional[ColumnLayout]):
  """Pick (amount token, balance token) from the row's amount tokens.

  Statements usually print the amount followed by the running balance, so
  with two or more tokens the second-to-last is the amount. A header that
  declared no balance column means the last token is the amount.
  """
  if layout is not None and not layout.has_balance:
    return tokens[-1], None
  if len(tokens) >= 2:
    return tokens[-2], tokens[-1]
  return tokens[-1], None


def extract_transaction(line: str, order: DateOrder = DateOrder.UNSPECIFIED,
                        layout: Optional[ColumnLayout] = None,
                        previous_balance: Optional[float] = None) -> Optional[Transaction]:
  """Extract one transaction from ``line`` or return None.

  ``layout`` is the column layout of the most recent table header, if one
  was seen; ``previous_balance`` is the running balance before this row and
  is only consulted for split debit/credit layouts.
  """
  clean = normalize_line(line)
  if not clean or is_metadata(clean):
    return None

  date_raw = leading_date(clean)
  if not date_raw:
    return None
  iso_date = parse_date(date_raw, order)
  if not iso_date:
    logger.debug(f"Rejected date token {date_raw!r}: {clean}")
    return None

  remainder = clean[len(date_raw):]
  tokens = list(AMOUNT_TOKEN.finditer(remainder))
  if not tokens:
    return None

  amount_match, balance_match = _select_amount(tokens, layout)
  amount = parse_amount(amount_match.group(0))
  if amount is None:
    return None

  balance = None
  if balance_match is not None:
    balance = parse_amount(balance_match.group(0))

  description = normalize_line(remainder[:amount_match.start()])
  if not description or is_header_text(description):
    return None

  if layout is not None and layout.split_columns and _is_unsigned(amount_match.group(0)):
    amount = _sign_from_delta(amount, balance, previous_balance)

  return Transaction(date=iso_date, description=description, amount=amount, balance=balance)
