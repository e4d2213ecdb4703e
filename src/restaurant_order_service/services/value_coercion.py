"""Helpers turning loosely typed request values into numbers."""

import math
from typing import Any


def coerce_number(value: Any) -> int | float | None:
    """Convert a request value to a number.

    Integral values come back as int so they serialize without a trailing ".0".

    Args:
        value: Number or numeric string from a request body

    Returns:
        The numeric value, or None if the value is not a finite number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            pass

    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(number):
        return None

    return int(number) if number.is_integer() else number


def coerce_quantity(value: Any) -> int:
    """Convert an order quantity to a positive integer, defaulting to 1."""
    number = coerce_number(value)
    if number is None or number < 1:
        return 1
    return int(number)
