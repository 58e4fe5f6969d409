"""
Track Summary for the EcoRun Track Pipeline

This module recomputes activity statistics from a position sequence,
typically one restored from storage, by laying it out as a DataFrame and
reapplying the geo-metrics to it.
"""

from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd

from . import metrics
from .models import ActivityKind, RawPosition

FRAME_COLUMNS = [
    "timestamp_ms",
    "timestamp",
    "lat",
    "lon",
    "speed_kmh",
    "elapsed_s",
    "segment_distance_m",
    "distance_m",
]


def positions_to_frame(positions: Sequence[RawPosition]) -> pd.DataFrame:
    """
    Flatten positions into a DataFrame, keeping input order.

    Args:
        positions: Raw or restored positions.

    Returns:
        DataFrame with columns: timestamp_ms, timestamp (UTC), lat, lon,
        speed_kmh (NaN when absent), elapsed_s, segment_distance_m and
        distance_m (cumulative).
    """
    if not positions:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    df = pd.DataFrame(
        {
            "timestamp_ms": [pos.timestamp for pos in positions],
            "lat": [pos.latitude for pos in positions],
            "lon": [pos.longitude for pos in positions],
            "speed_kmh": [np.nan if pos.speed is None else pos.speed for pos in positions],
        }
    )
    df["timestamp"] = pd.to_datetime(df["timestamp_ms"], unit="ms", utc=True)
    df["elapsed_s"] = (df["timestamp_ms"] - df["timestamp_ms"].iloc[0]) / 1000.0

    df["segment_distance_m"] = metrics.haversine_series_m(df["lat"], df["lon"])
    df["distance_m"] = df["segment_distance_m"].cumsum()

    return df[FRAME_COLUMNS]


def _optional_stat(values: pd.Series, how: str) -> Optional[float]:
    values = values.dropna()
    if values.empty:
        return None
    return float(getattr(values, how)())


def summarize_track(positions: Sequence[RawPosition], activity_kind) -> Dict:
    """
    Compute summary statistics for a track.

    Speeds are passed through filter_speed() for the activity kind before
    averaging, so implausible values count as 0 rather than skewing the
    maximum.

    Args:
        positions: Raw or restored positions, in order.
        activity_kind: ActivityKind or its string value.

    Returns:
        Dictionary with activity_type, sample_count, distance_m, distance_km,
        duration_s, pace_min_per_km, co2_saved_kg, life_gained_h,
        avg_speed_kmh and max_speed_kmh (None when no speeds were reported).
    """
    kind = ActivityKind.coerce(activity_kind)
    df = positions_to_frame(positions)

    if df.empty:
        distance_m = 0.0
        duration_s = 0.0
        speeds = pd.Series(dtype=float)
    else:
        distance_m = float(df["segment_distance_m"].sum())
        duration_s = float(df["elapsed_s"].iloc[-1])
        speeds = df["speed_kmh"].map(
            lambda speed: speed if np.isnan(speed) else metrics.filter_speed(speed, kind)
        )

    distance_km = distance_m / 1000
    return {
        "activity_type": kind.value,
        "sample_count": int(len(df)),
        "distance_m": distance_m,
        "distance_km": distance_km,
        "duration_s": duration_s,
        "pace_min_per_km": metrics.calculate_pace(distance_km, duration_s),
        "co2_saved_kg": metrics.calculate_co2_savings(distance_km),
        "life_gained_h": metrics.calculate_life_gained(duration_s / 3600),
        "avg_speed_kmh": _optional_stat(speeds, "mean"),
        "max_speed_kmh": _optional_stat(speeds, "max"),
    }
