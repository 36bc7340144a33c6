import pytest

from fastawrparse.awr.layout import ColumnLayout
from fastawrparse.awr.models import ColumnLayoutError

from awr_samples import row, separator


def test_six_runs():
    layout = ColumnLayout.from_header(separator((30, 12, 11, 6, 6, 10)))
    assert len(layout) == 6
    assert layout.columns == ((1, 30), (32, 43), (45, 55), (57, 62), (64, 69), (71, 80))


def test_seven_runs():
    layout = ColumnLayout.from_header(separator((28, 12, 5, 11, 8, 8, 6)))
    assert len(layout) == 7
    assert layout.columns[0] == (1, 28)
    assert layout.columns[-1] == (79, 84)


@pytest.mark.parametrize("widths", [(10, 10, 10, 10, 10), (5, 5, 5, 5, 5, 5, 5, 5)])
def test_run_count_outside_range_is_rejected(widths):
    with pytest.raises(ColumnLayoutError):
        ColumnLayout.from_header(separator(widths))


def test_non_dash_run_is_rejected():
    with pytest.raises(ColumnLayoutError):
        ColumnLayout.from_header("------ ------ ------ ~~~~~~ ------ ------")


def test_slice_and_number_follow_separator_positions():
    widths = (30, 12, 11, 6, 6, 10)
    layout = ColumnLayout.from_header(separator(widths))
    line = row(widths, ("db file sequential read", "1,000,000", "1,200", "1", "16.7", "User I/O"))
    assert layout.slice(line, 1) == "db file sequential read"
    assert layout.number(line, 2) == "1000000"
    assert layout.number(line, 3) == "1200"
    assert layout.slice(line, 6) == "User I/O"


def test_slice_returns_none_for_empty_or_missing_column():
    widths = (30, 12, 11, 6, 6, 10)
    layout = ColumnLayout.from_header(separator(widths))
    line = row(widths, ("DB CPU", "", "3,600", "", "50.0", ""))
    assert layout.slice(line, 2) is None
    assert layout.slice(line, 6) is None
    assert layout.slice(line, 7) is None
    assert layout.number(line, 3) == "3600"
