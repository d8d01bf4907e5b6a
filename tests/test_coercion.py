import math

import pytest

from scatterexplorer.model.coercion import to_label, to_number


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 7.0),
        ("", 7.0),
        ("   ", 7.0),
        ("abc", 7.0),
        ("nan", 7.0),
        ("inf", 7.0),
        (float("-inf"), 7.0),
        ([1, 2], 7.0),
        ("3.5", 3.5),
        (" 42 ", 42.0),
        (0, 0.0),
        (-1.25, -1.25),
        (True, 1.0),
    ],
)
def test_to_number(value, expected):
    assert to_number(value, 7.0) == expected


def test_to_number_accepts_nan_default():
    assert math.isnan(to_number("not a number", math.nan))


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "Unknown"),
        ("", "Unknown"),
        ("  ", "Unknown"),
        (" North ", "North"),
        (3, "3"),
    ],
)
def test_to_label(value, expected):
    assert to_label(value) == expected


def test_to_label_custom_default():
    assert to_label(None, "N/A") == "N/A"
