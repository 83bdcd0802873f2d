import math
import re
import sys
from pathlib import Path
from typing import Any

# Longest leading decimal literal, the way a browser's parseFloat reads input
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to a bundled resource, works for dev and for PyInstaller.

    Args:
        relative_path: Relative path from the package root (e.g., "resources/templates")

    Returns:
        Absolute Path object
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = Path(sys._MEIPASS) / "internship_tracker"
    else:
        # This file is in internship_tracker/utils.py
        base_path = Path(__file__).parent.absolute()

    return base_path / relative_path


def parse_hours(raw_value: Any) -> float:
    """
    Parse user input for an hours cell.

    Non-numeric, negative, NaN and infinite input all become 0; data entry
    is never rejected. Text is read up to the first character that can't be
    part of a number, so "2.5h" gives 2.5.

    Args:
        raw_value: Text from an input field, or a number

    Returns:
        A finite, non-negative float
    """
    if raw_value is None or isinstance(raw_value, bool):
        return 0.0

    if isinstance(raw_value, (int, float)):
        try:
            value = float(raw_value)
        except OverflowError:
            return 0.0
    else:
        match = _LEADING_NUMBER.match(str(raw_value))
        if not match:
            return 0.0
        try:
            value = float(match.group().strip())
        except ValueError:
            return 0.0

    if not math.isfinite(value) or value <= 0:
        return 0.0
    return value
