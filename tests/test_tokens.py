import math
import unittest

from statementparser.models import DateOrder
from statementparser.tokens import normalize_year, parse_amount, parse_date, to_iso_date


class ParseDateTest(unittest.TestCase):
  def test_common_formats(self):
    self.assertEqual(parse_date("2026-02-16"), "2026-02-16")
    self.assertEqual(parse_date("16/02/2026"), "2026-02-16")
    self.assertEqual(parse_date("02/16/2026"), "2026-02-16")
    self.assertEqual(parse_date("16 Feb 2026"), "2026-02-16")
    self.assertEqual(parse_date("16-Feb-2026"), "2026-02-16")
    self.assertEqual(parse_date("Feb 16, 2026"), "2026-02-16")
    self.assertEqual(parse_date("February 16 2026"), "2026-02-16")
    self.assertEqual(parse_date("2026/2/3"), "2026-02-03")

  def test_iso_dates_round_trip(self):
    for iso in ("2024-02-29", "1999-12-31", "2026-01-01", "2030-07-04"):
      self.assertEqual(parse_date(iso), iso)

  def test_ambiguous_dates_follow_order(self):
    self.assertEqual(parse_date("03/04/26", DateOrder.DAY_FIRST), "2026-04-03")
    self.assertEqual(parse_date("03/04/26", DateOrder.MONTH_FIRST), "2026-03-04")
    self.assertEqual(parse_date("03/04/26"), "2026-04-03")
    self.assertEqual(parse_date("03.04.2026", DateOrder.MONTH_FIRST), "2026-03-04")

  def test_unambiguous_components_override_order(self):
    self.assertEqual(parse_date("15/02/2026", DateOrder.MONTH_FIRST), "2026-02-15")
    self.assertEqual(parse_date("02/15/2026", DateOrder.DAY_FIRST), "2026-02-15")

  def test_two_digit_years(self):
    self.assertEqual(parse_date("15/02/69"), "2069-02-15")
    self.assertEqual(parse_date("15/02/70"), "1970-02-15")
    self.assertEqual(normalize_year(5), 2005)
    self.assertEqual(normalize_year(99), 1999)
    self.assertEqual(normalize_year(2026), 2026)

  def test_missing_year_uses_default(self):
    self.assertEqual(parse_date("16 Feb", default_year=2025), "2025-02-16")
    self.assertEqual(parse_date("Mar 3", default_year=2024), "2024-03-03")

  def test_invalid_calendar_dates(self):
    self.assertIsNone(parse_date("31/04/2026"))
    self.assertIsNone(parse_date("30 Feb 2026"))
    self.assertIsNone(parse_date("2025-02-29"))
    self.assertIsNone(parse_date("13/13/2026"))
    self.assertIsNone(to_iso_date(2026, 0, 1))

  def test_unknown_text(self):
    self.assertIsNone(parse_date(""))
    self.assertIsNone(parse_date(None))
    self.assertIsNone(parse_date("16 Foo 2026"))
    self.assertIsNone(parse_date("hello"))


class ParseAmountTest(unittest.TestCase):
  def test_sign_table(self):
    self.assertEqual(parse_amount("-54.23"), -54.23)
    self.assertEqual(parse_amount("(54.23)"), -54.23)
    self.assertEqual(parse_amount("54.23 DR"), -54.23)
    self.assertEqual(parse_amount("54.23 CR"), 54.23)
    self.assertEqual(parse_amount("2,450.77"), 2450.77)

  def test_currency_symbols(self):
    self.assertEqual(parse_amount("-$32.13"), -32.13)
    self.assertEqual(parse_amount("$12,424.08"), 12424.08)
    self.assertEqual(parse_amount("£1,000.00"), 1000.0)
    self.assertEqual(parse_amount("(€5.00)"), -5.0)

  def test_glued_suffix(self):
    self.assertEqual(parse_amount("54.23CR"), 54.23)
    self.assertEqual(parse_amount("54.23dr"), -54.23)

  def test_credit_wins_over_negative_markers(self):
    self.assertEqual(parse_amount("(54.23) CR"), 54.23)
    self.assertEqual(parse_amount("-54.23 CR"), 54.23)

  def test_rejects_non_numbers(self):
    self.assertIsNone(parse_amount(""))
    self.assertIsNone(parse_amount(None))
    self.assertIsNone(parse_amount("CR"))
    self.assertIsNone(parse_amount("12.34.56"))
    self.assertIsNone(parse_amount("abc"))

  def test_result_is_finite(self):
    value = parse_amount("1,234,567.89")
    self.assertTrue(math.isfinite(value))
    self.assertEqual(value, 1234567.89)


if __name__ == '__main__':
  unittest.main()
