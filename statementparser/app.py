import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from .pdf_text import StatementTextError, extract_text_from_pdf
from .stream import parse_statement_text

PARSER_VERSION = "2026-02-17-generic-v1"
EMPTY_PDF_WARNING = "No text extracted from PDF. OCR fallback is not implemented yet."

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('STATEMENT_MAX_UPLOAD_MB', 25)) * 1024 * 1024
app.config['PDF_STRATEGY'] = os.environ.get('STATEMENT_PDF_STRATEGY', 'text')


def _failure(message, status):
  return jsonify({
    'success': False,
    'error': message,
    'warnings': [message],
    'confidence': 0,
    'transactions': [],
    'debug': {'parser_version': PARSER_VERSION},
  }), status


def _read_upload():
  """Return (text, extra debug, extra warnings) for the current request."""
  upload = request.files.get('file')
  if upload is not None and upload.filename:
    if not upload.filename.lower().endswith('.pdf'):
      raise ValueError('Please upload a valid PDF file')
    pdf = upload.read()
    text = extract_text_from_pdf(pdf, strategy=app.config['PDF_STRATEGY'])
    warnings = [] if text.strip() else [EMPTY_PDF_WARNING]
    return text, {'bytes': len(pdf), 'extracted_chars': len(text)}, warnings

  payload = request.get_json(silent=True)
  if not isinstance(payload, dict):
    payload = {}
  text = payload.get('text', request.form.get('text'))
  if not isinstance(text, str):
    raise ValueError('Provide a PDF "file" upload or a "text" field')
  return text, {'extracted_chars': len(text)}, []


@app.route('/health')
def health():
  return jsonify({'success': True, 'parser_version': PARSER_VERSION})


@app.route('/parse', methods=['POST'])
def parse():
  try:
    text, debug, warnings = _read_upload()
  except ValueError as e:
    return jsonify({'success': False, 'error': str(e)}), 400
  except StatementTextError as e:
    logger.error(f"Parse failed: {e}")
    return _failure(f'Failed to parse statement PDF: {e}', 500)

  try:
    result = parse_statement_text(text)
  except Exception as e:
    logger.exception("Parse failed")
    return _failure(f'Failed to parse statement: {e}', 500)

  body = result.to_dict()
  body['success'] = True
  body['warnings'] = body['warnings'] + warnings
  body['debug'] = {'parser_version': PARSER_VERSION, **debug, **body['debug']}
  return jsonify(body)


@app.errorhandler(RequestEntityTooLarge)
def too_large(e):
  return jsonify({'success': False, 'error': 'Uploaded file is too large'}), 413


if __name__ == '__main__':
  logging.basicConfig(
    level=os.environ.get('STATEMENT_LOG_LEVEL', 'INFO').upper(),
    format="%(levelname)s | %(message)s",
  )
  app.run(debug=True, host='0.0.0.0', port=8080)
