"""Regexes and lookup tables shared by the line classifier and token parsers.

Everything here is static, read-only data built once at import time.
"""

import re
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Month names
# ---------------------------------------------------------------------------
MONTHS = MappingProxyType({
  "jan": 1, "january": 1,
  "feb": 2, "february": 2,
  "mar": 3, "march": 3,
  "apr": 4, "april": 4,
  "may": 5,
  "jun": 6, "june": 6,
  "jul": 7, "july": 7,
  "aug": 8, "august": 8,
  "sep": 9, "sept": 9, "september": 9,
  "oct": 10, "october": 10,
  "nov": 11, "november": 11,
  "dec": 12, "december": 12,
})

# Longest names first so "September" is not cut short at "Sep"
MONTHS_RE = "|".join(sorted(MONTHS, key=len, reverse=True))

CURRENCY_SYMBOLS = "$£€¥"

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------
# A year or day number must not run straight into the digits of an amount
# ("Feb 16 12.50"), hence the trailing guards.
_NUM_END = r"(?!\d|[.,]\d)"

DATE_AT_START = re.compile(
  rf"""^(
      \d{{4}}[/.-]\d{{1,2}}[/.-]\d{{1,2}}                                  # 2026-02-15
    | \d{{1,2}}[/.-]\d{{1,2}}[/.-]\d{{2,4}}                                # 15/02/2026, 02.15.26
    | \d{{1,2}}[\s-]+(?:{MONTHS_RE})(?![A-Za-z])(?:[\s-]+\d{{2,4}}{_NUM_END})?   # 15 Feb [2026]
    | (?:{MONTHS_RE})(?![A-Za-z])\s+\d{{1,2}}{_NUM_END}(?:,?\s+\d{{2,4}}{_NUM_END})?  # Feb 15[, 2026]
  )""",
  re.IGNORECASE | re.VERBOSE,
)

ISO_DATE_RE = re.compile(r"^(\d{4})[/.-](\d{1,2})[/.-](\d{1,2})$")
NUMERIC_DATE_RE = re.compile(r"^(\d{1,2})[/.-](\d{1,2})[/.-](\d{2,4})$")
DAY_MONTH_RE = re.compile(r"^(\d{1,2})[\s-]+([A-Za-z]{3,9})(?:[\s-]+(\d{2,4}))?$")
MONTH_DAY_RE = re.compile(r"^([A-Za-z]{3,9})\s+(\d{1,2})(?:,?\s+(\d{2,4}))?$")

# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------
# (54.23), -$54.23, £2,450.77, 54.23 CR. Never a percentage, never a slice
# of a longer number and never part of a dotted date such as 15.02.26.
# A sign, bracket or currency prefix may follow anything ("AU#6071356-$49.00");
# a bare digit may not continue another number, but may follow leader dots.
_CUR = f"[{re.escape(CURRENCY_SYMBOLS)}]"
AMOUNT_TOKEN = re.compile(
  rf"(?:\({_CUR}?\d[\d,]*\.\d{{2}}\)"
  rf"|(?:-{_CUR}?|{_CUR}|(?<!\d)(?<!\d[.,]))\d[\d,]*\.\d{{2}}(?!\d|\.\d|\s?%))"
  r"(?:\s?(?:CR|DR)(?![A-Za-z]))?",
  re.IGNORECASE,
)

SIGNED_DECIMAL_RE = re.compile(r"^-?\d+(?:\.\d*)?$")
MINUS_SIGN_RE = re.compile(rf"(^|[^\d])-\s*{_CUR}?\d")
SUFFIX_RE = re.compile(r"(?<![A-Z])(CR|DR)\s*$")

# ---------------------------------------------------------------------------
# Boilerplate & headers
# ---------------------------------------------------------------------------
METADATA_LINE = re.compile(
  r"""^(
      (date|transaction|showing|order):\s
    | history\s*https?:
    | account\s+history
    | uncleared\s+funds\b
    | \d+\s+of\s+\d+\b
    | page\s+\d+
  )
  | \b(opening|closing|previous)\s+balance\b
  | \bbalance\s+(brought|carried)\s+forward\b
  | ://
  | ^www\.\S+$
  """,
  re.IGNORECASE | re.VERBOSE,
)

# Sentinels whose amount is the balance before the first transaction
OPENING_BALANCE_RE = re.compile(
  r"\b(opening|previous)\s+balance\b|\bbalance\s+brought\s+forward\b", re.IGNORECASE
)

HEADER_KEYWORDS = (
  "date", "description", "details", "particulars", "amount", "balance",
  "debit", "credit", "withdrawal", "deposit",
)

# Any one of these marks an undated line as a header
HEADER_LINE_KEYWORDS = frozenset({"date", "description", "amount", "balance", "debit", "credit"})

# Either a standalone word or a capitalised word glued to a lower-case letter
# ("DateDescriptionAmountBalance"), with an optional plural. The next word
# may only be glued on as a capitalised word, so "MANDATE", "update",
# "Dated" and "CREDITORS" never count.
_KEYWORD_END = r"[sS]?(?![a-z]|[A-Z](?![a-z]))"
HEADER_KEYWORD_RE = re.compile(
  r"(?:(?<![A-Za-z])(?i:(" + "|".join(HEADER_KEYWORDS) + r"))" + _KEYWORD_END +
  r"|(?<=[a-z])(" + "|".join(k.capitalize() for k in HEADER_KEYWORDS) + r")" + _KEYWORD_END + ")"
)

# Header keywords that imply separate money-out / money-in columns
SPLIT_COLUMN_KEYWORDS = frozenset({"debit", "credit", "withdrawal", "deposit"})
