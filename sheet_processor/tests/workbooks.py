# In-memory spreadsheets for the tests
from io import BytesIO
from openpyxl import Workbook

def xlsx_bytes(header, rows=(), extra_sheets=None):
    """
    Builds an .xlsx workbook whose first sheet holds the header and rows.

    Args:
        header (list): Header cells, None for a blank cell. Pass None for no header row.
        rows (list): Data rows, None for a blank cell.
        extra_sheets (dict): Sheet title to rows for sheets after the first.
    """
    workbook = Workbook()
    sheet = workbook.active
    if header is not None:
        sheet.append(list(header))
    for row in rows:
        sheet.append(list(row))
    for title, sheet_rows in (extra_sheets or {}).items():
        other = workbook.create_sheet(title)
        for row in sheet_rows:
            other.append(list(row))
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()

CITY_SALES_HEADER = ['City', 'Sales']
CITY_SALES_ROWS = [('A', 10), ('B', 'x'), ('C', 5)]
