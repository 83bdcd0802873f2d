"""
Tests for hour input parsing and resource lookup.
"""

import pytest

from internship_tracker.utils import get_resource_path, parse_hours


@pytest.mark.parametrize("raw, expected", [
    ("3", 3.0),
    ("2.5", 2.5),
    (" 1.25 ", 1.25),
    (".5", 0.5),
    ("4.", 4.0),
    ("2.5h", 2.5),
    ("1e1", 10.0),
    ("+2", 2.0),
    (7, 7.0),
    (0.75, 0.75),
])
def test_numeric_input(raw, expected):
    assert parse_hours(raw) == expected


@pytest.mark.parametrize("raw", [
    "abc", "-5", -5, "", "   ", None, True, "h2", "NaN", "Infinity", float("nan"), float("-inf"), "0",
    10 ** 400, -(10 ** 400), "1e400",
])
def test_invalid_input_becomes_zero(raw):
    assert parse_hours(raw) == 0.0


def test_bundled_templates_are_found():
    templates = get_resource_path("resources/templates")
    assert (templates / "hours_summary.txt").exists()
    assert (templates / "hours_summary.md").exists()
