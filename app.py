"""
FastAPI Web Application for the EcoRun Track Pipeline

This module exposes the track codec, summaries, eco metrics and GPX export
over HTTP so the mobile client and the persistence layer can share one
implementation.
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from ecorun import eco_track
from ecorun.constants import GPX_MEDIA_TYPE


# ============================================================================
# APPLICATION SETUP
# ============================================================================

app = FastAPI(title="ecorun-tracks")


# ============================================================================
# REQUEST / RESPONSE MODELS
# ============================================================================

class PositionIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    latitude: float
    longitude: float
    timestamp: float
    speed: Optional[float] = None
    accuracy: Optional[float] = None

    def to_raw(self) -> eco_track.RawPosition:
        return eco_track.RawPosition(
            latitude=self.latitude,
            longitude=self.longitude,
            timestamp=self.timestamp,
            speed=self.speed,
            accuracy=self.accuracy,
        )


class StoredPositionIn(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    lat: float
    lng: float
    t: int
    s: Optional[float] = None

    def to_optimized(self) -> eco_track.OptimizedPosition:
        return eco_track.OptimizedPosition(lat=self.lat, lng=self.lng, t=self.t, s=self.s)


class OptimizeRequest(BaseModel):
    positions: List[PositionIn] = Field(default_factory=list)


class RestoreRequest(BaseModel):
    positions: List[StoredPositionIn] = Field(default_factory=list)
    start_time: int = Field(description="Epoch milliseconds the track was encoded against")


class SummaryRequest(BaseModel):
    positions: List[PositionIn] = Field(default_factory=list)
    activity_type: str = "running"


class GpxRequest(BaseModel):
    positions: List[PositionIn] = Field(default_factory=list)
    name: str = "Activity"


def _raw_positions(positions: List[PositionIn]) -> List[eco_track.RawPosition]:
    return [pos.to_raw() for pos in positions]


# ============================================================================
# API ROUTES - TRACK CODEC
# ============================================================================

@app.post("/api/tracks/optimize")
def optimize_track(request: OptimizeRequest):
    """
    Compress a raw track for storage.

    Returns:
        Dictionary with the stored-form positions and the sample counts
        before and after optimization.
    """
    optimized = eco_track.optimize_positions(_raw_positions(request.positions))
    return {
        "positions": [pos.to_dict() for pos in optimized],
        "raw_count": len(request.positions),
        "optimized_count": len(optimized),
    }


@app.post("/api/tracks/restore")
def restore_track(request: RestoreRequest):
    """
    Expand a stored track back into timestamped positions.

    Returns:
        Dictionary with the restored positions.
    """
    optimized = [pos.to_optimized() for pos in request.positions]
    restored = eco_track.restore_positions(optimized, request.start_time)
    return {"positions": [pos.to_dict() for pos in restored]}


@app.post("/api/tracks/summary")
def summarize_track(request: SummaryRequest):
    """
    Compute distance, duration, pace, eco metrics and speed statistics.

    Raises:
        HTTPException: If activity_type is unknown (status 400).
    """
    try:
        return eco_track.summarize_track(_raw_positions(request.positions), request.activity_type)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ============================================================================
# API ROUTES - METRICS
# ============================================================================

@app.get("/api/metrics")
def get_metrics(
    distance_km: float = Query(..., allow_inf_nan=False, description="Distance covered in kilometers"),
    duration_s: float = Query(..., allow_inf_nan=False, description="Elapsed time in seconds"),
):
    """
    Compute pace and eco metrics for a distance and duration.

    Returns:
        Dictionary with pace_min_per_km, co2_saved_kg, life_gained_h and
        their display strings.
    """
    pace = eco_track.calculate_pace(distance_km, duration_s)
    life_gained = eco_track.calculate_life_gained(duration_s / 3600)
    return {
        "pace_min_per_km": pace,
        "pace_display": eco_track.format_pace(pace),
        "co2_saved_kg": eco_track.calculate_co2_savings(distance_km),
        "life_gained_h": life_gained,
        "life_gained_display": eco_track.format_life_gained(life_gained),
        "duration_display": eco_track.format_time(duration_s),
    }


# ============================================================================
# API ROUTES - EXPORT
# ============================================================================

@app.post("/api/export/gpx")
def export_gpx(request: GpxRequest):
    """
    Export positions as a GPX 1.1 document.

    Returns:
        PlainTextResponse: GPX file with Content-Disposition header
        for download. Filename: activity.gpx

    Raises:
        HTTPException: If a timestamp has no ISO-8601 form (status 400).
    """
    try:
        body = eco_track.generate_gpx(_raw_positions(request.positions), request.name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    headers = {"Content-Disposition": "attachment; filename=activity.gpx"}
    return PlainTextResponse(
        body,
        media_type=GPX_MEDIA_TYPE,
        headers=headers
    )


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload
