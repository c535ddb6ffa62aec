import io
import os
import pandas as pd
from .scalars import MISSING, normalize_cell, to_label
from .exceptions import UnsupportedFileKind, EmptyDataset, MalformedSpreadsheet
import logging

logger = logging.getLogger(__name__)

# Supported spreadsheet containers and the pandas engine that reads each of them
SUPPORTED_FILE_KINDS = {
    '.xls': 'xlrd',
    '.xlsx': 'openpyxl',
}

UNNAMED_COLUMN_FORMAT = 'Unnamed: {}'


def file_kind_for(filename):
    """Returns the lower-cased extension of a filename, e.g. '.xlsx'."""
    return os.path.splitext(filename or '')[1].lower()


class ParsedDataset:
    """
    The {columns, rows} structure produced from one uploaded spreadsheet.

    Attributes:
        columns (tuple): Distinct column names in header order.
        rows (tuple): One dict per data row, mapping column name to a scalar. Empty cells are absent.
        renamed_columns (dict): Disambiguated duplicate header names mapped to the original header text.
    """
    def __init__(self, columns, rows, renamed_columns=None):
        self.columns:tuple = tuple(columns)
        self.rows:tuple = tuple(dict(row) for row in rows)
        self.renamed_columns:dict = dict(renamed_columns or {})

    def to_json_object(self):
        # The canonical transport shape shared by upload, history and view responses
        return {
            "columns": list(self.columns),
            "rows": [dict(row) for row in self.rows],
        }

    @staticmethod
    def from_json_object(data):
        if not isinstance(data, dict):
            raise ValueError("Dataset data must be a dictionary.")
        columns = data.get("columns") or []
        rows = data.get("rows") or []
        if not isinstance(columns, list) or not isinstance(rows, list):
            raise ValueError("Dataset 'columns' and 'rows' must be lists.")
        if not all(isinstance(row, dict) for row in rows):
            raise ValueError("Dataset rows must be dictionaries.")
        return ParsedDataset([str(column) for column in columns], rows)

    def __eq__(self, other):
        if not isinstance(other, ParsedDataset):
            return NotImplemented
        return self.columns == other.columns and self.rows == other.rows

    def __repr__(self):
        return f"ParsedDataset(columns={list(self.columns)!r}, rows={len(self.rows)})"


class DatasetParser:
    """
    Turns the bytes of an .xls or .xlsx workbook into a ParsedDataset.

    Only the first sheet is read. Its first non-blank row is the header and every
    non-blank row below it is a data row. Cell values keep their spreadsheet type.
    """

    @staticmethod
    def parse(file_bytes, file_kind):
        """
        Parses the first sheet of a workbook.

        Args:
            file_bytes (bytes): The raw workbook.
            file_kind (str): The file extension, '.xls' or '.xlsx'.

        Raises:
            UnsupportedFileKind: The extension is not a supported spreadsheet container.
            MalformedSpreadsheet: The workbook could not be read.
            EmptyDataset: The sheet has no data rows below the header.
        """
        engine = SUPPORTED_FILE_KINDS.get((file_kind or '').lower())
        if engine is None:
            raise UnsupportedFileKind(f"Only .xls and .xlsx files are allowed, got '{file_kind}'")

        try:
            sheet = pd.read_excel(io.BytesIO(file_bytes), sheet_name=0, header=None, dtype=object, engine=engine)
        except Exception as e:
            raise MalformedSpreadsheet(f"Error reading spreadsheet: {str(e)}") from e

        # Blank rows and columns never carry data
        sheet = sheet.dropna(how='all').dropna(axis=1, how='all')
        if sheet.empty:
            raise EmptyDataset("Excel file is empty or has no data")

        columns, renamed_columns = DatasetParser._header_columns(sheet.iloc[0])
        rows = []
        for values in sheet.iloc[1:].itertuples(index=False, name=None):
            row = {}
            for column, cell in zip(columns, values):
                value = normalize_cell(cell)
                if value is not MISSING:
                    row[column] = value
            if row:
                rows.append(row)

        if not rows:
            raise EmptyDataset("Excel file is empty or has no data")

        if renamed_columns:
            logger.warning("Duplicate header names were renamed: %s", renamed_columns)
        logger.info("Parsed %s sheet with %d columns and %d rows", file_kind, len(columns), len(rows))
        return ParsedDataset(columns, rows, renamed_columns=renamed_columns)

    @staticmethod
    def _header_columns(header):
        """
        Builds distinct column names from the header row.

        Blank header cells take pandas' 'Unnamed: <position>' placeholder and repeated
        names get a '.1', '.2', ... suffix in the same way pandas mangles duplicates.
        """
        columns = []
        renamed_columns = {}
        used = set()
        next_suffix = {}
        for position, cell in header.items():
            value = normalize_cell(cell)
            if value is MISSING or not str(value).strip():
                name = UNNAMED_COLUMN_FORMAT.format(position)
            else:
                name = to_label(value)

            if name in used:
                suffix = next_suffix.get(name, 1)
                candidate = f"{name}.{suffix}"
                while candidate in used:
                    suffix += 1
                    candidate = f"{name}.{suffix}"
                next_suffix[name] = suffix + 1
                renamed_columns[candidate] = name
                name = candidate

            used.add(name)
            columns.append(name)
        return columns, renamed_columns
