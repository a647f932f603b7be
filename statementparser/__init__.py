"""
Statement Text Parser Package

Recovers dated, signed transactions from the loosely formatted text of
bank statements, with a confidence score and diagnostic warnings.
"""

from .models import ColumnLayout, DateOrder, LineKind, ParseResult, Transaction
from .stream import StreamParser, parse_statement_text
from .tokens import parse_amount, parse_date

__version__ = "1.0.0"
__author__ = "Statement Text Parser Team"

__all__ = [
  "ColumnLayout",
  "DateOrder",
  "LineKind",
  "ParseResult",
  "StreamParser",
  "Transaction",
  "parse_amount",
  "parse_date",
  "parse_statement_text",
]
