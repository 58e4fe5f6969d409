"""
Utility Functions for the EcoRun Track Pipeline

This module provides helper functions for rounding, numeric checks and
number formatting used by the codec and the export renderer.
"""

import math
from typing import Optional


def is_finite_number(value) -> bool:
    """
    Check whether a value is a real, finite number.

    Args:
        value: Value to check.

    Returns:
        False for NaN, +/-Infinity and non-numeric values, True otherwise.
    """
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def round_half_up(value, digits: int = 0):
    """
    Round to a fixed number of decimal places, with ties going up.

    Matches the rounding used by the mobile client for stored tracks
    (2.5 -> 3, 12.25 -> 12.3, -2.5 -> -2). NaN and Inf are returned
    unchanged.

    Args:
        value: Value to round.
        digits: Number of decimal places. 0 returns an int.

    Returns:
        Rounded float, or int when digits is 0 and value is finite.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    scale = 10 ** digits
    rounded = math.floor(value * scale + 0.5)
    if digits == 0:
        return int(rounded)
    return rounded / scale


def round_float(value: float, digits: int) -> float:
    """
    Round a float to a fixed number of decimal places, ties going up.

    NaN and Inf are returned unchanged; this layer does not validate input.

    Args:
        value: Value to round.
        digits: Number of decimal places.

    Returns:
        Rounded float.
    """
    return float(round_half_up(value, digits))


def round_optional(value: Optional[float], digits: int) -> Optional[float]:
    """Round a value that may be None, keeping None."""
    if value is None:
        return None
    return round_float(value, digits)


def format_number(value) -> str:
    """
    Render a number in its shortest textual form.

    Integral values are written without a fractional part ("10", not "10.0");
    other floats use Python's shortest round-trip representation.

    Args:
        value: Integer or float.

    Returns:
        String representation suitable for XML attributes and elements.
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)
