# -*- coding: utf-8 -*-
"""stream.py
Single-pass statement text parser.

Walks the normalised lines of a statement once and builds ``Transaction``
objects with a two-state machine:

* ``IDLE``    - no row is waiting for more text.
* ``PENDING`` - a date-led row failed to parse on its own (typically the
  amount and balance wrapped onto the next physical line) and is held so
  the following line can be merged into it.

Wrapped description text that arrives after a row was emitted is appended
to that row in place. Nothing bank-specific is hard-coded; the day/month
order and the column layout are inferred from the document itself.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import List, Optional

from .extractor import extract_transaction
from .lines import classify_line, column_layout, detect_date_order, is_table_header, normalize_lines
from .models import ColumnLayout, DateOrder, LineKind, ParseResult, Transaction
from .patterns import AMOUNT_TOKEN, OPENING_BALANCE_RE
from .scoring import score_rows
from .tokens import parse_amount

logger = logging.getLogger(__name__)

__all__ = [
  "MergeState",
  "StreamParser",
  "parse_statement_text",
]

TRUNCATED_ROW_WARNING = "Final row could not be parsed; the statement may be truncated."


class MergeState(Enum):
  IDLE = "idle"
  PENDING = "pending_candidate"


# ---------------------------------------------------------------------------
# StreamParser implementation
# ---------------------------------------------------------------------------
class StreamParser:
  """Streaming transaction parser using a tiny FSM."""

  def __init__(self, order: DateOrder = DateOrder.UNSPECIFIED):
    self.order = order
    self.state = MergeState.IDLE
    self.held: Optional[str] = None
    self.transactions: List[Transaction] = []
    self.layout: Optional[ColumnLayout] = None
    self.opening_balance: Optional[float] = None
    self.candidate_rows = 0
    self.dropped_rows = 0

  # ------------------------------------------------------------------
  # Public API
  # ------------------------------------------------------------------
  def feed_line(self, line: str):
    """Process one normalised line."""
    kind = classify_line(line)

    if kind is LineKind.METADATA:
      self._capture_opening_balance(line)
      return
    if kind is LineKind.HEADER:
      if self.layout is None and is_table_header(line):
        self.layout = column_layout(line)
        logger.info(f"Detected table header ({self.layout.describe()}): {line}")
      return

    if kind is LineKind.CANDIDATE:
      self.candidate_rows += 1
      if self.state is MergeState.PENDING:
        logger.debug(f"Dropping unresolved row: {self.held}")
        self._drop_held()
      self._handle_candidate(line)
    elif self.state is MergeState.PENDING:
      self._handle_pending(line, kind)
    elif kind is LineKind.CONTINUATION and self.transactions:
      self.transactions[-1].append_description(line)

  def finalise(self) -> ParseResult:
    """Close the stream and score what was collected."""
    truncated = self.state is MergeState.PENDING
    if truncated:
      logger.info(f"Unresolved row at end of input: {self.held}")
      self._drop_held()

    score = score_rows(self.candidate_rows, self.transactions)
    warnings = list(score.warnings)
    if truncated:
      warnings.append(TRUNCATED_ROW_WARNING)

    debug = {
      "candidate_rows": self.candidate_rows,
      "parsed_rows": len(self.transactions),
      "valid_rows": score.valid_rows,
      "valid_ratio": round(score.ratio, 2),
      "date_preference": self.order.value,
      "column_layout": self.layout.describe() if self.layout else None,
      "dropped_rows": self.dropped_rows,
      "opening_balance": self.opening_balance,
    }
    # Rows are copied so later feed_line calls cannot edit a returned result
    return ParseResult(
      transactions=[replace(txn) for txn in self.transactions],
      warnings=warnings,
      confidence=score.confidence,
      debug=debug,
    )

  # ------------------------------------------------------------------
  # State handlers
  # ------------------------------------------------------------------
  def _handle_candidate(self, line: str):
    txn = self._extract(line)
    if txn:
      self._emit(txn)
    else:
      self.state = MergeState.PENDING
      self.held = line

  def _handle_pending(self, line: str, kind: LineKind):
    merged = f"{self.held} {line}"
    txn = self._extract(merged)
    if txn:
      self._emit(txn)
    elif kind is LineKind.CONTINUATION:
      self.held = merged
    else:
      logger.debug(f"Dropping unresolved row: {self.held} | {line}")
      self._drop_held()

  # ------------------------------------------------------------------
  # Helpers
  # ------------------------------------------------------------------
  def _extract(self, text: str) -> Optional[Transaction]:
    return extract_transaction(
      text,
      self.order,
      layout=self.layout,
      previous_balance=self._previous_balance(),
    )

  def _previous_balance(self) -> Optional[float]:
    for txn in reversed(self.transactions):
      if txn.balance is not None:
        return txn.balance
    return self.opening_balance

  def _emit(self, txn: Transaction):
    self.transactions.append(txn)
    self.state = MergeState.IDLE
    self.held = None

  def _drop_held(self):
    self.dropped_rows += 1
    self.state = MergeState.IDLE
    self.held = None

  def _capture_opening_balance(self, line: str):
    if self.opening_balance is not None or self.transactions:
      return
    if not OPENING_BALANCE_RE.search(line):
      return
    tokens = AMOUNT_TOKEN.findall(line)
    if tokens:
      self.opening_balance = parse_amount(tokens[-1])


# ---------------------------------------------------------------------------
# Public helper
# ---------------------------------------------------------------------------
def parse_statement_text(text: Optional[str]) -> ParseResult:
  """Parse statement text into transactions, warnings and a confidence.

  Never raises on malformed input: text with no recognisable rows comes back
  as an empty result with confidence 0 and a warning.
  """
  lines = normalize_lines(text)
  order = detect_date_order(lines)

  parser = StreamParser(order)
  for line in lines:
    parser.feed_line(line)
  result = parser.finalise()

  logger.info(
    f"Parsed {result.debug['parsed_rows']} of {result.debug['candidate_rows']} candidate rows "
    f"from {len(lines)} lines (confidence {result.confidence:.2f}, {order.value})"
  )
  return result
