import datetime
import unittest
import numpy as np
import pandas as pd
from sheet_processor.utils.scalars import ScalarKind, MISSING, scalar_kind, normalize_cell, to_number, to_label

class TestScalars(unittest.TestCase):
    def test_scalar_kind(self):
        self.assertEqual(scalar_kind(3), ScalarKind.NUMBER)
        self.assertEqual(scalar_kind(np.float64(2.5)), ScalarKind.NUMBER)
        self.assertEqual(scalar_kind(True), ScalarKind.BOOLEAN)
        self.assertEqual(scalar_kind('3'), ScalarKind.TEXT)
        self.assertEqual(scalar_kind(None), ScalarKind.MISSING)
        self.assertEqual(scalar_kind(float('nan')), ScalarKind.MISSING)

    def test_normalize_cell(self):
        self.assertIs(normalize_cell(float('nan')), MISSING)
        self.assertIs(normalize_cell(pd.NaT), MISSING)
        self.assertEqual(normalize_cell(np.int64(7)), 7)
        self.assertIsInstance(normalize_cell(np.int64(7)), int)
        self.assertEqual(normalize_cell(pd.Timestamp('2024-03-01')), '2024-03-01T00:00:00')
        self.assertEqual(normalize_cell(datetime.date(2024, 3, 1)), '2024-03-01')

    def test_to_number_accepts_numbers_and_decimal_text(self):
        self.assertEqual(to_number(10), 10)
        self.assertEqual(to_number(2.5), 2.5)
        self.assertEqual(to_number(' 7.5 '), 7.5)
        self.assertEqual(to_number('-3'), -3.0)
        self.assertEqual(to_number('1e3'), 1000.0)
        self.assertEqual(to_number('.5'), 0.5)

    def test_to_number_rejects_everything_else(self):
        for value in ['x', '', '   ', 'nan', 'inf', '0x10', '1_000', '1,5', True, False, None, float('inf'), float('nan'), MISSING]:
            self.assertIsNone(to_number(value), value)

    def test_to_label(self):
        self.assertEqual(to_label('A'), 'A')
        self.assertEqual(to_label(2.0), '2')
        self.assertEqual(to_label(2.5), '2.5')
        self.assertEqual(to_label(12), '12')
        self.assertEqual(to_label(False), 'false')

if __name__ == '__main__':
    unittest.main()
