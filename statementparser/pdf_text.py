"""Raw text extraction from PDF statements.

Two strategies are available:

* ``text``  - pdfplumber's own page text, which keeps the reading order of
  most generated statements.
* ``words`` - PyMuPDF word boxes clustered into physical rows by their
  baseline. Useful when a PDF stores every cell as a separate text object
  and plain text extraction splits a table row across several lines.

Pages are joined with newlines so the result can go straight into
``parse_statement_text``.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Dict, List, Tuple, Union

import fitz  # PyMuPDF
import pdfplumber

logger = logging.getLogger(__name__)

STRATEGIES = ("text", "words")

PdfSource = Union[str, os.PathLike, bytes]


class StatementTextError(Exception):
  """Raised when a document cannot be read as a PDF."""


def _open_fitz(source: PdfSource):
  if isinstance(source, (bytes, bytearray)):
    return fitz.open(stream=bytes(source), filetype="pdf")
  return fitz.open(os.fspath(source))


def _open_plumber(source: PdfSource):
  if isinstance(source, (bytes, bytearray)):
    return pdfplumber.open(io.BytesIO(bytes(source)))
  return pdfplumber.open(os.fspath(source))


def extract_rows_words(source: PdfSource, y_tol: float = 1.5) -> List[str]:
  """Cluster words into physical rows using their *y0* coordinate.

  A small vertical tolerance keeps tightly spaced statement rows apart;
  some statements position successive baselines only ~2 units apart.
  """
  y_tol = y_tol or 1.5
  rows: List[str] = []
  with _open_fitz(source) as doc:
    for page in doc:
      buckets: Dict[int, List[Tuple[float, str]]] = {}
      for x0, y0, x1, y1, text, *_ in page.get_text("words"):
        key = int(y0 // y_tol)
        buckets.setdefault(key, []).append((x0, text))
      for key in sorted(buckets):
        row_txt = " ".join(t for x, t in sorted(buckets[key], key=lambda it: it[0]))
        rows.append(row_txt.strip())
  logger.info(f"Word-bucket clustering produced {len(rows)} rows")
  return rows


def extract_rows_text(source: PdfSource) -> List[str]:
  pages = []
  with _open_plumber(source) as pdf:
    for page_num, page in enumerate(pdf.pages):
      text = page.extract_text() or ""
      logger.debug(f"Page {page_num + 1}: {len(text)} characters")
      pages.append(text)
  return pages


def extract_text_from_pdf(source: PdfSource, strategy: str = "text") -> str:
  """Return the text of every page of ``source`` (a path or PDF bytes).

  Raises ``StatementTextError`` if the document cannot be opened or read.
  """
  if strategy not in STRATEGIES:
    raise ValueError(f"Unknown extraction strategy {strategy!r}; expected one of {STRATEGIES}")

  try:
    if strategy == "words":
      parts = extract_rows_words(source)
    else:
      parts = extract_rows_text(source)
  except Exception as e:
    raise StatementTextError(f"Could not read PDF: {e}") from e

  text = "\n".join(parts)
  logger.info(f"Extracted {len(text)} characters using the {strategy!r} strategy")
  return text
