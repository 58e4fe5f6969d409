"""
Geo-Metrics for the EcoRun Track Pipeline

This module computes distances between GPS samples and the eco metrics shown
during and after an activity: pace, CO2 saved versus driving, and life
expectancy gained. Every function here is total: degenerate input maps to a
defined number (usually 0) instead of raising, since these run once per
incoming GPS fix.
"""

import numpy as np

from . import constants
from . import utils
from .models import ActivityKind


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Uses the Haversine formula on a sphere of radius EARTH_RADIUS_M.
    Out-of-range angles are not rejected; NaN input yields NaN.

    Args:
        lat1, lon1: Latitude and longitude of first point in degrees.
        lat2, lon2: Latitude and longitude of second point in degrees.

    Returns:
        Distance in meters between the two points.
    """
    R = constants.EARTH_RADIUS_M
    lat1_rad, lat2_rad = np.deg2rad(lat1), np.deg2rad(lat2)

    dlat = np.deg2rad(lat2 - lat1)
    dlon = np.deg2rad(lon2 - lon1)

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return float(R * c)


def haversine_series_m(lats, lons) -> np.ndarray:
    """
    Compute consecutive segment distances along a sequence of points.

    Args:
        lats: Sequence or array of latitudes in degrees.
        lons: Sequence or array of longitudes in degrees.

    Returns:
        Array of the same length as the input where element i is the distance
        from point i-1 to point i in meters; element 0 is 0.
    """
    lat = np.asarray(lats, dtype=float)
    lon = np.asarray(lons, dtype=float)
    if lat.size == 0:
        return np.zeros(0)

    lat_rad = np.deg2rad(lat)
    dlat = np.diff(lat_rad)
    dlon = np.deg2rad(np.diff(lon))

    a = np.sin(dlat / 2) ** 2 + np.cos(lat_rad[:-1]) * np.cos(lat_rad[1:]) * np.sin(dlon / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return np.concatenate(([0.0], constants.EARTH_RADIUS_M * c))


def calculate_distance(pos_a, pos_b) -> float:
    """
    Distance in meters between two positions.

    Args:
        pos_a: Object with ``latitude`` and ``longitude`` attributes.
        pos_b: Object with ``latitude`` and ``longitude`` attributes.

    Returns:
        Non-negative distance in meters; exactly 0 for identical points.
    """
    return haversine_m(pos_a.latitude, pos_a.longitude, pos_b.latitude, pos_b.longitude)


def calculate_co2_savings(distance_km: float) -> float:
    """
    CO2 saved (kg) by covering distance_km without a car.

    NaN and infinite input return 0. Negative distances are passed through
    unchanged.
    """
    if not utils.is_finite_number(distance_km):
        return 0.0
    return distance_km * constants.CAR_CO2_KG_PER_KM


def calculate_life_gained(duration_hours: float) -> float:
    """
    Life expectancy gained (hours): one hour of activity is worth seven.

    Same NaN/Infinity clamp and negative pass-through as
    calculate_co2_savings().
    """
    if not utils.is_finite_number(duration_hours):
        return 0.0
    return duration_hours * constants.LIFE_GAINED_PER_HOUR


def calculate_pace(distance_km: float, duration_seconds: float) -> float:
    """
    Pace in minutes per kilometer.

    Args:
        distance_km: Distance covered in kilometers.
        duration_seconds: Elapsed time in seconds.

    Returns:
        Minutes per kilometer, or 0 when no distance has been covered yet.
    """
    if distance_km == 0:
        return 0.0
    duration_minutes = duration_seconds / 60
    return duration_minutes / distance_km


def max_speed_kmh(kind) -> float:
    """
    Highest plausible speed for an activity kind.

    Args:
        kind: ActivityKind or its string value.

    Returns:
        Speed limit in km/h.

    Raises:
        ValueError: If kind is not a supported activity kind.
    """
    kind = ActivityKind.coerce(kind)
    if kind is ActivityKind.RUNNING:
        return constants.RUNNING_MAX_SPEED_KMH
    if kind is ActivityKind.BIKING:
        return constants.BIKING_MAX_SPEED_KMH
    raise ValueError(f"No speed limit defined for activity kind {kind!r}")


def filter_speed(speed_kmh: float, kind) -> float:
    """
    Zero out implausible speeds.

    Args:
        speed_kmh: Reported speed in km/h.
        kind: ActivityKind or its string value.

    Returns:
        speed_kmh if it lies within [0, max_speed_kmh(kind)], otherwise 0.
    """
    if constants.MIN_SPEED_KMH <= speed_kmh <= max_speed_kmh(kind):
        return speed_kmh
    return 0.0
