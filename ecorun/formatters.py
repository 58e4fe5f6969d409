"""
Display Formatting for the EcoRun Track Pipeline

Human-readable strings for durations, paces and life gained.
"""

import math

from . import utils


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS, or HH:MM:SS from one hour up."""
    if not utils.is_finite_number(seconds):
        return "--:--"
    seconds = int(seconds)
    hrs, rest = divmod(seconds, 3600)
    mins, secs = divmod(rest, 60)
    if hrs > 0:
        return f"{hrs:02d}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"


def format_pace(pace_minutes: float) -> str:
    """
    Format a pace in minutes per kilometer as MM:SS.

    Returns "--:--" for 0 (no distance yet), NaN and Infinity.
    """
    if pace_minutes == 0 or not utils.is_finite_number(pace_minutes):
        return "--:--"
    minutes = math.floor(pace_minutes)
    seconds = utils.round_half_up((pace_minutes - minutes) * 60)
    if seconds == 60:
        minutes, seconds = minutes + 1, 0
    return f"{minutes:02d}:{seconds:02d}"


def format_life_gained(hours: float) -> str:
    """
    Format life gained: minutes under an hour, hours under a day, then days.

    Examples: 0.5 -> "30min", 3.5 -> "3.5h", 30 -> "1d 6h".
    """
    if hours < 1:
        return f"{utils.round_half_up(hours * 60)}min"
    if hours < 24:
        return f"{hours:.1f}h"
    days = math.floor(hours / 24)
    remaining_hours = utils.round_half_up(hours % 24)
    return f"{days}d {remaining_hours}h"
