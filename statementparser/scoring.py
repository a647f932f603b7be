"""Confidence scoring for a parsed statement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .models import Transaction

RATIO_WEIGHT = 0.7
SIZE_WEIGHT = 0.3
# Number of valid rows at which sample size stops adding confidence
SIZE_SATURATION = 8
RELIABILITY_THRESHOLD = 0.8

NO_ROWS_WARNING = "No transaction-like rows were detected in extracted text."
FEW_ROWS_WARNING = "Few rows were parsed; review output carefully."
LOW_RELIABILITY_WARNING = "Low parse reliability: fewer than 80% of candidate rows were valid."


@dataclass(frozen=True)
class RowScore:
  candidate_rows: int
  valid_rows: int
  ratio: float
  confidence: float
  warnings: List[str]


def is_valid(txn: Transaction) -> bool:
  return bool(txn.date) and isinstance(txn.amount, (int, float)) and math.isfinite(txn.amount)


def score_rows(candidate_rows: int, transactions: Sequence[Transaction]) -> RowScore:
  """Blend extraction reliability with sample size into a 0-1 score."""
  valid_rows = sum(1 for t in transactions if is_valid(t))
  ratio = valid_rows / candidate_rows if candidate_rows > 0 else 0.0
  size_factor = min(1.0, valid_rows / SIZE_SATURATION)
  if candidate_rows == 0:
    confidence = 0.0
  else:
    confidence = round(ratio * RATIO_WEIGHT + size_factor * SIZE_WEIGHT, 2)

  warnings = []
  if candidate_rows == 0:
    warnings.append(NO_ROWS_WARNING)
  if 0 < valid_rows < 3:
    warnings.append(FEW_ROWS_WARNING)
  if 0 < ratio < RELIABILITY_THRESHOLD:
    warnings.append(LOW_RELIABILITY_WARNING)

  return RowScore(
    candidate_rows=candidate_rows,
    valid_rows=valid_rows,
    ratio=ratio,
    confidence=confidence,
    warnings=warnings,
  )
