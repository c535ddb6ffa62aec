import datetime
import unittest
from unittest.mock import patch
import pandas as pd
from sheet_processor.utils.dataset_parser import DatasetParser, ParsedDataset, file_kind_for
from sheet_processor.utils.exceptions import UnsupportedFileKind, EmptyDataset, MalformedSpreadsheet
from .workbooks import xlsx_bytes, CITY_SALES_HEADER, CITY_SALES_ROWS

class TestDatasetParser(unittest.TestCase):
    def test_two_column_sheet_yields_header_width_and_row_count(self):
        dataset = DatasetParser.parse(xlsx_bytes(CITY_SALES_HEADER, CITY_SALES_ROWS), '.xlsx')

        self.assertEqual(dataset.columns, ('City', 'Sales'))
        self.assertEqual(len(dataset.rows), 3)
        # Cells keep their spreadsheet type, no coercion at parse time
        self.assertEqual(dataset.rows[0], {'City': 'A', 'Sales': 10})
        self.assertEqual(dataset.rows[1], {'City': 'B', 'Sales': 'x'})
        self.assertIsInstance(dataset.rows[0]['Sales'], int)

    def test_header_only_sheet_is_empty_dataset(self):
        with self.assertRaises(EmptyDataset):
            DatasetParser.parse(xlsx_bytes(CITY_SALES_HEADER), '.xlsx')

    def test_blank_sheet_is_empty_dataset(self):
        with self.assertRaises(EmptyDataset):
            DatasetParser.parse(xlsx_bytes(None), '.xlsx')

    def test_unsupported_kind_is_rejected_before_reading(self):
        with patch('sheet_processor.utils.dataset_parser.pd.read_excel') as read_excel:
            with self.assertRaises(UnsupportedFileKind):
                DatasetParser.parse(b'City,Sales\nA,10\n', '.csv')
            read_excel.assert_not_called()

    def test_unreadable_bytes_are_malformed(self):
        with self.assertRaises(MalformedSpreadsheet):
            DatasetParser.parse(b'this is not a workbook', '.xlsx')

    # xlrd only reads workbooks and openpyxl only writes .xlsx, so legacy .xls
    # content cannot be built here; the engine choice is checked with read_excel patched.
    def test_xls_is_read_with_xlrd(self):
        sheet = pd.DataFrame([['City', 'Sales'], ['A', 10]], dtype=object)
        with patch('sheet_processor.utils.dataset_parser.pd.read_excel', return_value=sheet) as read_excel:
            dataset = DatasetParser.parse(b'xls bytes', '.XLS')
        self.assertEqual(read_excel.call_args.kwargs['engine'], 'xlrd')
        self.assertEqual(read_excel.call_args.kwargs['sheet_name'], 0)
        self.assertEqual(dataset.rows, ({'City': 'A', 'Sales': 10},))

    def test_xlsx_content_named_xls_is_malformed(self):
        # Read by the real xlrd engine, which rejects anything but legacy .xls workbooks
        with self.assertRaises(MalformedSpreadsheet):
            DatasetParser.parse(xlsx_bytes(CITY_SALES_HEADER, CITY_SALES_ROWS), '.xls')

    def test_sparse_rows_omit_empty_cells(self):
        dataset = DatasetParser.parse(xlsx_bytes(['City', 'Sales', 'Region'], [('A', 10, 'North'), ('B', None, None)]), '.xlsx')
        self.assertEqual(dataset.columns, ('City', 'Sales', 'Region'))
        self.assertEqual(dataset.rows[1], {'City': 'B'})

    def test_blank_rows_are_skipped(self):
        dataset = DatasetParser.parse(xlsx_bytes(CITY_SALES_HEADER, [('A', 1), (None, None), ('B', 2)]), '.xlsx')
        self.assertEqual([row['City'] for row in dataset.rows], ['A', 'B'])

    def test_blank_header_cell_keeps_placeholder_name(self):
        dataset = DatasetParser.parse(xlsx_bytes(['City', None, 'Sales'], [('A', 'note', 10)]), '.xlsx')
        self.assertEqual(dataset.columns, ('City', 'Unnamed: 1', 'Sales'))
        self.assertEqual(dataset.rows[0]['Unnamed: 1'], 'note')

    def test_duplicate_headers_are_suffixed_and_reported(self):
        dataset = DatasetParser.parse(xlsx_bytes(['Name', 'Name', 'Age', 'Name'], [('Ann', 'Lee', 30, 'Jo')]), '.xlsx')

        self.assertEqual(dataset.columns, ('Name', 'Name.1', 'Age', 'Name.2'))
        self.assertEqual(dataset.renamed_columns, {'Name.1': 'Name', 'Name.2': 'Name'})
        # No value is shadowed by a later column of the same name
        self.assertEqual(dataset.rows[0], {'Name': 'Ann', 'Name.1': 'Lee', 'Age': 30, 'Name.2': 'Jo'})

    def test_only_first_sheet_is_read(self):
        content = xlsx_bytes(CITY_SALES_HEADER, [('A', 1)], extra_sheets={'Other': [['X', 'Y'], [1, 2], [3, 4]]})
        dataset = DatasetParser.parse(content, '.xlsx')
        self.assertEqual(dataset.columns, ('City', 'Sales'))
        self.assertEqual(len(dataset.rows), 1)

    def test_booleans_and_dates_are_json_safe(self):
        content = xlsx_bytes(['Active', 'Joined'], [(True, datetime.datetime(2024, 1, 2))])
        dataset = DatasetParser.parse(content, '.xlsx')
        self.assertIs(dataset.rows[0]['Active'], True)
        self.assertEqual(dataset.rows[0]['Joined'], '2024-01-02T00:00:00')

    def test_file_kind_for(self):
        self.assertEqual(file_kind_for('Report.XLSX'), '.xlsx')
        self.assertEqual(file_kind_for('legacy.xls'), '.xls')
        self.assertEqual(file_kind_for('notes'), '')

class TestParsedDataset(unittest.TestCase):
    def test_json_object_shape(self):
        dataset = ParsedDataset(['City', 'Sales'], [{'City': 'A', 'Sales': 10}])
        self.assertEqual(dataset.to_json_object(), {'columns': ['City', 'Sales'], 'rows': [{'City': 'A', 'Sales': 10}]})
        self.assertEqual(ParsedDataset.from_json_object(dataset.to_json_object()), dataset)

    def test_from_json_object_rejects_bad_shapes(self):
        with self.assertRaises(ValueError):
            ParsedDataset.from_json_object(['City'])
        with self.assertRaises(ValueError):
            ParsedDataset.from_json_object({'columns': ['City'], 'rows': ['A']})

if __name__ == '__main__':
    unittest.main()
