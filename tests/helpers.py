from fpdf import FPDF

STATEMENT_LINES = [
  'Date Description Amount Balance',
  '2026-01-15 Grocery Store Purchase -54.23 2,450.77',
  '2026-01-16 PAYROLL DEPOSIT 2,500.00 4,950.77',
  '2026-01-17 ONLINE TRANSFER TO SAVINGS -100.00 4,850.77',
]


def make_pdf(lines=STATEMENT_LINES, path=None):
  """Render ``lines`` one per row; return the PDF bytes or write ``path``."""
  pdf = FPDF()
  pdf.add_page()
  pdf.set_font('Helvetica', size=11)
  for line in lines:
    pdf.cell(0, 10, line, new_x='LMARGIN', new_y='NEXT')
  if path:
    pdf.output(path)
    return path
  return bytes(pdf.output())
