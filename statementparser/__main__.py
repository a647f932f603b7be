import argparse
import json
import logging
import sys

import pandas as pd

from .pdf_text import STRATEGIES, StatementTextError, extract_text_from_pdf
from .stream import parse_statement_text

logger = logging.getLogger("statementparser")


def read_source(path, strategy):
  """Return the statement text held in ``path`` (PDF or plain text)."""
  if path.lower().endswith('.pdf'):
    return extract_text_from_pdf(path, strategy=strategy)
  with open(path, encoding='utf-8') as f:
    return f.read()


def main(argv=None):
  parser = argparse.ArgumentParser(description='Extract transactions from bank statement text')
  parser.add_argument('inputs', nargs='+', help='Input PDF or text files')
  parser.add_argument('--format', choices=['json', 'table'], default='json', help='Output format')
  parser.add_argument('--strategy', choices=STRATEGIES, default='text', help='PDF text extraction strategy')
  parser.add_argument('--verbose', action='store_true', help='Log per-line parsing decisions')
  args = parser.parse_args(argv)

  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.WARNING,
    format="%(levelname)s | %(message)s",
  )

  results = []
  failed = False
  for path in args.inputs:
    try:
      text = read_source(path, args.strategy)
    except (OSError, UnicodeDecodeError, StatementTextError) as e:
      logger.error(f"Error reading {path}: {e}")
      failed = True
      continue
    results.append((path, parse_statement_text(text)))

  if args.format == 'table':
    with pd.option_context('display.max_rows', None, 'display.width', 200):
      for path, result in results:
        print(f"# {path} (confidence {result.confidence:.2f})")
        for warning in result.warnings:
          print(f"! {warning}")
        print(result.to_dataframe().to_string(index=False))
  else:
    payload = [dict(result.to_dict(), source_file=path) for path, result in results]
    print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))

  return 1 if failed else 0


if __name__ == '__main__':
  sys.exit(main())
