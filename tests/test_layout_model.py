import pytest

from ambilight.models.layout_model import DEFAULT_MONITOR_SIZE, StripLayout, parse_monitor_size


def test_21_inch_monitor():
    layout = StripLayout.from_monitor_size(21.0)
    assert (layout.top, layout.right, layout.bottom, layout.left) == (15, 9, 15, 9)
    assert layout.total == 48


@pytest.mark.parametrize("size,expected", [(10.0, (8, 4, 8, 4)), (27.0, (19, 12, 19, 12))])
def test_other_sizes(size, expected):
    layout = StripLayout.from_monitor_size(size)
    assert (layout.top, layout.right, layout.bottom, layout.left) == expected


def test_side_ranges():
    layout = StripLayout.from_monitor_size()
    assert layout.right_range(1920) == (1728, 1914)
    assert layout.left_range(1920) == (28, 192)


@pytest.mark.parametrize("text,expected", [("27", 27.0), (" 15,6 ", 15.6), ("32.5", 32.5)])
def test_parse_monitor_size(text, expected):
    assert parse_monitor_size(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "0", "-3", "nan", "inf", "-inf", "1e999"])
def test_parse_monitor_size_falls_back_to_default(text):
    assert parse_monitor_size(text) == DEFAULT_MONITOR_SIZE
    StripLayout.from_monitor_size(parse_monitor_size(text))


@pytest.mark.parametrize("size", [float("nan"), float("inf"), 0.0, -1.0])
def test_from_monitor_size_rejects_bad_sizes(size):
    with pytest.raises(ValueError):
        StripLayout.from_monitor_size(size)
