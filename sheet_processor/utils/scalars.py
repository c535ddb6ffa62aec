# Scalar cell values used in dataset rows
# Rows are sparse mappings of column name to a number, text or boolean. Missing cells are absent.
import datetime
import math
import re
from enum import Enum

import numpy as np
import pandas as pd


class ScalarKind(Enum):
    NUMBER = 'number'
    TEXT = 'text'
    BOOLEAN = 'boolean'
    MISSING = 'missing'


# Marker returned by normalize_cell for empty cells
MISSING = object()

# Plain decimal literals only: no hex, no 'inf'/'nan', no digit separators
DECIMAL_LITERAL = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')


def scalar_kind(value):
    """
    Classify a row value.

    Args:
        value: A value read from a dataset row, or MISSING/None for an absent cell.
    """
    if value is MISSING or value is None:
        return ScalarKind.MISSING
    # bool is a subclass of int and must be checked first
    if isinstance(value, (bool, np.bool_)):
        return ScalarKind.BOOLEAN
    if isinstance(value, (int, float, np.integer, np.floating)):
        if isinstance(value, (float, np.floating)) and math.isnan(value):
            return ScalarKind.MISSING
        return ScalarKind.NUMBER
    return ScalarKind.TEXT


def normalize_cell(value):
    """
    Convert a cell read by pandas into a JSON-safe scalar.

    numpy scalars become Python scalars, date and time values become ISO-8601 text,
    and NaN/NaT become MISSING.
    """
    if value is None or value is pd.NaT:
        return MISSING
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return MISSING
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return str(value)
    return str(value)


def to_number(value):
    """
    Coerce a row value to a number.

    Returns the number, or None when the value is not numeric. Booleans, blank text
    and non-finite values are never numeric.
    """
    kind = scalar_kind(value)
    if kind == ScalarKind.NUMBER:
        if isinstance(value, np.generic):
            value = value.item()
        if isinstance(value, int):
            return value
        return value if math.isfinite(value) else None
    if kind == ScalarKind.TEXT:
        text = str(value).strip()
        if not DECIMAL_LITERAL.match(text):
            return None
        number = float(text)
        return number if math.isfinite(number) else None
    return None


def to_label(value):
    """String form of a row value used for category labels."""
    kind = scalar_kind(value)
    if kind == ScalarKind.BOOLEAN:
        return 'true' if value else 'false'
    if kind == ScalarKind.NUMBER and isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    if kind == ScalarKind.MISSING:
        return ''
    return str(value)
