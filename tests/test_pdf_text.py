import os
import tempfile
import unittest

from statementparser import parse_statement_text
from statementparser.pdf_text import StatementTextError, extract_text_from_pdf

from helpers import make_pdf


class ExtractTextFromPdfTest(unittest.TestCase):
  def test_text_strategy_from_path(self):
    with tempfile.TemporaryDirectory() as tmp:
      pdf_path = make_pdf(path=os.path.join(tmp, 'sample.pdf'))
      text = extract_text_from_pdf(pdf_path)
    self.assertIn('Grocery Store Purchase', text)

    result = parse_statement_text(text)
    self.assertEqual(len(result.transactions), 3)
    self.assertEqual(result.transactions[0].date, '2026-01-15')
    self.assertEqual(result.transactions[0].amount, -54.23)

  def test_words_strategy_from_bytes(self):
    text = extract_text_from_pdf(make_pdf(), strategy='words')
    result = parse_statement_text(text)
    self.assertEqual([t.balance for t in result.transactions], [2450.77, 4950.77, 4850.77])

  def test_blank_pdf_has_no_text(self):
    self.assertEqual(extract_text_from_pdf(make_pdf([])).strip(), '')

  def test_unreadable_document(self):
    with self.assertRaises(StatementTextError):
      extract_text_from_pdf(b'this is not a pdf')
    with self.assertRaises(StatementTextError):
      extract_text_from_pdf('/nonexistent/statement.pdf')

  def test_unknown_strategy(self):
    with self.assertRaises(ValueError):
      extract_text_from_pdf(b'%PDF-1.4', strategy='ocr')


if __name__ == '__main__':
  unittest.main()
