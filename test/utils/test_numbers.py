import pytest

from datapivot.utils.numbers import compare_cells, format_number, parse_number


@pytest.mark.parametrize("cell", ["nan", "NaN", "inf", "-inf", "Infinity", "1e400"])
def test_non_finite_cells_are_not_numbers(cell):
    assert parse_number(cell) is None


@pytest.mark.parametrize(
    "value,expected",
    [
        (60, "60.0"),
        (14.25, "14.25"),
        (1e16, "10000000000000000.0"),
        (-1.5e17, "-150000000000000000.0"),
        (1e-05, "0.00001"),
        (0.1 + 0.2, "0.30000000000000004"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_compare_cells_is_transitive_with_nan():
    assert compare_cells("1", "3") == -1
    assert compare_cells("3", "nan") == -1
    assert compare_cells("1", "nan") == -1
