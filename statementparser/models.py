"""Output records produced by the statement text parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

COLUMNS = ["date", "description", "amount", "balance"]


class DateOrder(Enum):
  """How ambiguous numeric dates (03/04/26) are read for one document."""

  DAY_FIRST = "day-first"
  MONTH_FIRST = "month-first"
  UNSPECIFIED = "unspecified"


class LineKind(Enum):
  METADATA = "metadata"
  HEADER = "header"
  CANDIDATE = "candidate"
  CONTINUATION = "continuation"
  UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ColumnLayout:
  """Column structure implied by a table header row.

  ``split_columns`` is True when money out and money in live in separate
  columns (Debit/Credit, Withdrawals/Deposits), in which case the amount
  token usually carries no sign of its own.
  """

  has_balance: bool = True
  split_columns: bool = False

  def describe(self) -> str:
    parts = ["debit/credit" if self.split_columns else "amount"]
    if self.has_balance:
      parts.append("balance")
    return "+".join(parts)


@dataclass
class Transaction:
  """A single statement row.

  ``amount`` follows the statement's native convention: debits are
  negative, credits positive. ``balance`` is the statement's own running
  balance, only set when the row carried a second amount token.
  """

  date: str
  description: str
  amount: float
  balance: Optional[float] = None

  def append_description(self, text: str):
    text = " ".join(text.split())
    if text:
      self.description = f"{self.description} {text}".strip()

  def to_dict(self) -> Dict[str, Any]:
    row = {"date": self.date, "description": self.description, "amount": self.amount}
    if self.balance is not None:
      row["balance"] = self.balance
    return row


@dataclass(frozen=True)
class ParseResult:
  transactions: Tuple[Transaction, ...] = ()
  warnings: Tuple[str, ...] = ()
  confidence: float = 0.0
  debug: Mapping[str, Any] = field(default_factory=dict)

  def __post_init__(self):
    object.__setattr__(self, "transactions", tuple(self.transactions))
    object.__setattr__(self, "warnings", tuple(self.warnings))
    object.__setattr__(self, "debug", MappingProxyType(dict(self.debug)))

  def to_dict(self) -> Dict[str, Any]:
    """JSON-ready representation."""
    return {
      "transactions": [t.to_dict() for t in self.transactions],
      "warnings": list(self.warnings),
      "confidence": self.confidence,
      "debug": dict(self.debug),
    }

  def to_dataframe(self) -> pd.DataFrame:
    data = [
      {
        "date": t.date,
        "description": t.description,
        "amount": t.amount,
        "balance": np.nan if t.balance is None else t.balance,
      }
      for t in self.transactions
    ]
    return pd.DataFrame(data, columns=COLUMNS)
