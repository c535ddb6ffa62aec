"""
Turns two selected columns of a dataset into chart-ready series.

Bar, line and pie charts take category labels from the x column and numeric values
from the y column. Scatter and 3D column charts need both columns to be numeric.
Rows that do not qualify are skipped; when none qualify the result is NoData.
"""
from enum import Enum
from .scalars import ScalarKind, scalar_kind, to_number, to_label
from .exceptions import InvalidRequest


class ChartKind(Enum):
    BAR = 'bar'
    LINE = 'line'
    PIE = 'pie'
    SCATTER = 'scatter'
    COLUMN_3D = '3d'


# Chart kinds whose x column must be numeric as well
BOTH_NUMERIC_KINDS = {ChartKind.SCATTER, ChartKind.COLUMN_3D}
# Chart kinds rendered from (x, y) points rather than labels and values
POINT_KINDS = {ChartKind.SCATTER}

friendly_to_chart_kind_map = {kind.value: kind for kind in ChartKind}

NO_DATA_MESSAGE = "No valid data found for selected columns"


class CategorySeries:
    def __init__(self, labels, values, title=''):
        self.labels:list = labels
        self.values:list = values
        self.title:str = title

    def to_json_object(self):
        return {"kind": "category", "title": self.title, "labels": self.labels, "values": self.values}

    def __eq__(self, other):
        return isinstance(other, CategorySeries) and (self.labels, self.values, self.title) == (other.labels, other.values, other.title)

    def __repr__(self):
        return f"CategorySeries(labels={self.labels!r}, values={self.values!r})"


class PointSeries:
    def __init__(self, points, title=''):
        self.points:list = points
        self.title:str = title

    def to_json_object(self):
        return {"kind": "point", "title": self.title, "points": [{"x": x, "y": y} for x, y in self.points]}

    def __eq__(self, other):
        return isinstance(other, PointSeries) and (self.points, self.title) == (other.points, other.title)

    def __repr__(self):
        return f"PointSeries(points={self.points!r})"


class NoData:
    """A normal outcome: nothing to plot for the selected columns."""
    def __init__(self, reason=NO_DATA_MESSAGE):
        self.reason = reason

    def to_json_object(self):
        return {"kind": "no_data", "message": self.reason}

    def __eq__(self, other):
        return isinstance(other, NoData)

    def __repr__(self):
        return f"NoData({self.reason!r})"


def chart_kind_for(value):
    """Looks up a ChartKind by its friendly name, e.g. 'bar' or '3d'."""
    if isinstance(value, ChartKind):
        return value
    kind = friendly_to_chart_kind_map.get(str(value or '').strip().lower())
    if kind is None:
        raise InvalidRequest(f"Unsupported chart kind: {value}")
    return kind


def project(dataset, x_column, y_column, chart_kind):
    """
    Projects two columns of a dataset into series data.

    Args:
        dataset: A ParsedDataset (only its rows are read).
        x_column (str): The column for labels or x values.
        y_column (str): The column for values or y values.
        chart_kind: A ChartKind or its friendly name.

    Returns:
        CategorySeries, PointSeries or NoData.
    """
    kind = chart_kind_for(chart_kind)
    if not _is_selected(x_column) or not _is_selected(y_column):
        return NoData("Select both an X and a Y column")

    x_numeric = kind in BOTH_NUMERIC_KINDS
    xs, ys = [], []
    for row in dataset.rows:
        if scalar_kind(row.get(x_column)) == ScalarKind.MISSING:
            continue
        y = to_number(row.get(y_column))
        if y is None:
            continue
        if x_numeric and to_number(row[x_column]) is None:
            continue
        if kind in POINT_KINDS:
            x = to_number(row[x_column])
        else:
            x = to_label(row[x_column])
        xs.append(x)
        ys.append(y)

    if not xs:
        return NoData()

    title = f"{y_column} vs {x_column}"
    if kind in POINT_KINDS:
        return PointSeries(list(zip(xs, ys)), title=title)
    # 3D columns keep the bar chart shape
    return CategorySeries(xs, ys, title=title)


def _is_selected(column):
    return isinstance(column, str) and column.strip() != ''
