# -*- coding: utf-8 -*-
"""Validation utilities for survey data.

Shots and coordinates are loaded with relaxed validation so that
incomplete rows survive a round-trip; the helpers below are used by the
models to *report* problems rather than to reject them.
"""

import math
import re
from re import Pattern
from typing import Any

# Station names: non-empty, no leading or trailing whitespace
STATION_NAME_PATTERN: Pattern[str] = re.compile(r"^\S(?:.*\S)?$", re.DOTALL)


def is_valid_float(value: Any) -> bool:
    """Check that ``value`` is a finite real number (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_valid_station_name(name: str | None) -> bool:
    """Check if a station name is valid.

    Valid station names:
    - 1 or more characters
    - No leading or trailing whitespace

    Args:
        name: Station name to validate

    Returns:
        True if valid, False otherwise
    """
    if not name:
        return False
    return bool(STATION_NAME_PATTERN.fullmatch(name))


def validate_station_name(name: str) -> None:
    """Validate a station name, raising an error if invalid.

    Args:
        name: Station name to validate

    Raises:
        ValueError: If the station name is invalid
    """
    if not is_valid_station_name(name):
        msg = f"Invalid station name: {name!r}"
        raise ValueError(msg)
