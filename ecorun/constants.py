"""
Constants for the EcoRun Track Pipeline

This module defines the thresholds and physical constants used throughout
the metrics, codec and export modules.
"""

import math

# Spherical earth model (not WGS84 ellipsoid)
EARTH_RADIUS_M = 6371000.0

# Codec: redundancy threshold and storage precision.
# One COORD_DECIMALS step must stay well below REDUNDANT_DISTANCE_M, otherwise
# rounding alone could move a retained point by more than the threshold.
REDUNDANT_DISTANCE_M = 2.0
COORD_DECIMALS = 6
SPEED_DECIMALS = 1
COORD_RESOLUTION_M = EARTH_RADIUS_M * math.radians(10 ** -COORD_DECIMALS)
CODEC_MAX_SPEED_KMH = 80.0

# Activity-aware plausibility gates (km/h)
RUNNING_MAX_SPEED_KMH = 50.0
BIKING_MAX_SPEED_KMH = 80.0
MIN_SPEED_KMH = 0.0

# Eco metrics
CAR_CO2_KG_PER_KM = 0.12
LIFE_GAINED_PER_HOUR = 7.0

# Live tracking: segments at or above this length are treated as GPS jumps
LIVE_MAX_SEGMENT_M = 100.0

# GPX export
GPX_CREATOR = "EcoRun"
GPX_MEDIA_TYPE = "application/gpx+xml"
