"""
EcoRun Track Pipeline

This module gathers the public API of the package in one place: geo-metrics,
the track codec, GPX export, activity record helpers, live tracking sessions
and track summaries. Import from here rather than from the individual
modules when only the public surface is needed.
"""

# Import constants
from .constants import (
    CODEC_MAX_SPEED_KMH,
    COORD_DECIMALS,
    GPX_CREATOR,
    REDUNDANT_DISTANCE_M,
)

# Import data models
from .models import (
    ActivityKind,
    OptimizedPosition,
    RawPosition,
)

# Import metrics functions
from .metrics import (
    haversine_m,
    haversine_series_m,
    calculate_distance,
    calculate_co2_savings,
    calculate_life_gained,
    calculate_pace,
    max_speed_kmh,
    filter_speed,
)

# Import codec functions
from .codec import (
    optimize_positions,
    restore_positions,
)

# Import export functions
from .export import (
    format_gpx_time,
    generate_gpx,
)

# Import activity record helpers
from .records import (
    serialize_positions,
    parse_positions_field,
    start_time_ms,
    restore_activity,
)

# Import live tracking
from .session import (
    FinishedActivity,
    LiveMetrics,
    TrackingSession,
)

# Import summary functions
from .summary import (
    positions_to_frame,
    summarize_track,
)

# Import formatters
from .formatters import (
    format_time,
    format_pace,
    format_life_gained,
)

__all__ = [
    # Constants
    "CODEC_MAX_SPEED_KMH",
    "COORD_DECIMALS",
    "GPX_CREATOR",
    "REDUNDANT_DISTANCE_M",
    # Models
    "ActivityKind",
    "OptimizedPosition",
    "RawPosition",
    # Metrics
    "haversine_m",
    "haversine_series_m",
    "calculate_distance",
    "calculate_co2_savings",
    "calculate_life_gained",
    "calculate_pace",
    "max_speed_kmh",
    "filter_speed",
    # Codec
    "optimize_positions",
    "restore_positions",
    # Export
    "format_gpx_time",
    "generate_gpx",
    # Records
    "serialize_positions",
    "parse_positions_field",
    "start_time_ms",
    "restore_activity",
    # Live tracking
    "FinishedActivity",
    "LiveMetrics",
    "TrackingSession",
    # Summary
    "positions_to_frame",
    "summarize_track",
    # Formatters
    "format_time",
    "format_pace",
    "format_life_gained",
]
