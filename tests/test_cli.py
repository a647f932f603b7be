import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from statementparser.__main__ import main

from helpers import make_pdf

FIXTURES = os.path.join(os.path.dirname(__file__), 'fixtures')


class CliTest(unittest.TestCase):
  def _run(self, *argv):
    out = io.StringIO()
    with redirect_stdout(out):
      code = main(list(argv))
    return code, out.getvalue()

  def test_json_from_text_file(self):
    code, out = self._run(os.path.join(FIXTURES, 'sample-statement.txt'))
    self.assertEqual(code, 0)
    body = json.loads(out)
    self.assertEqual(len(body['transactions']), 3)
    self.assertEqual(body['source_file'], os.path.join(FIXTURES, 'sample-statement.txt'))

  def test_table_from_pdf(self):
    with tempfile.TemporaryDirectory() as tmp:
      pdf_path = make_pdf(path=os.path.join(tmp, 'sample.pdf'))
      code, out = self._run(pdf_path, '--format', 'table')
    self.assertEqual(code, 0)
    self.assertIn('Grocery Store Purchase', out)
    self.assertIn('confidence 0.81', out)

  def test_missing_file(self):
    code, out = self._run('/nonexistent/statement.txt', os.path.join(FIXTURES, 'sample-statement.txt'))
    self.assertEqual(code, 1)
    self.assertEqual(len(json.loads(out)['transactions']), 3)


if __name__ == '__main__':
  unittest.main()
