"""
Live Tracking Session for the EcoRun Track Pipeline

This module holds the state of one activity while it is being recorded:
accumulated samples, running distance and paused time. The location provider
feeds samples one at a time through add_position(); finish() hands the
complete track to the codec exactly once.

Times are passed in explicitly as epoch milliseconds so callers (and tests)
control the clock.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from . import constants
from . import metrics
from .codec import optimize_positions
from .models import ActivityKind, OptimizedPosition, RawPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiveMetrics:
    """Metrics shown while an activity is in progress."""

    activity_kind: ActivityKind
    duration_s: int
    distance_km: float
    pace_min_per_km: float
    co2_saved_kg: float
    life_gained_h: float


@dataclass(frozen=True)
class FinishedActivity:
    """A completed activity, ready to be handed to persistence."""

    metrics: LiveMetrics
    positions: List[RawPosition]
    optimized: List[OptimizedPosition]


@dataclass
class TrackingSession:
    """
    Accumulator for one activity being recorded.

    Attributes:
        activity_kind: Running or biking.
        started_at_ms: Epoch ms at which start() was called.
        positions: Samples received so far, in arrival order.
        distance_m: Running distance, excluding jumps of LIVE_MAX_SEGMENT_M or more.
        paused_ms: Total time spent paused, excluding a pause still in progress.
    """

    activity_kind: ActivityKind = ActivityKind.RUNNING
    started_at_ms: Optional[int] = None
    positions: List[RawPosition] = field(default_factory=list)
    distance_m: float = 0.0
    paused_ms: int = 0
    pause_started_ms: Optional[int] = None
    finished: bool = False

    def __post_init__(self):
        self.activity_kind = ActivityKind.coerce(self.activity_kind)

    @classmethod
    def start(cls, activity_kind, now_ms: int) -> "TrackingSession":
        """Begin a new session at now_ms."""
        session = cls(activity_kind=activity_kind, started_at_ms=now_ms)
        logger.debug("Started %s session at %s", session.activity_kind.value, now_ms)
        return session

    @property
    def is_paused(self) -> bool:
        return self.pause_started_ms is not None

    def _require_active(self) -> None:
        if self.started_at_ms is None:
            raise RuntimeError("Tracking session has not been started")
        if self.finished:
            raise RuntimeError("Tracking session is already finished")

    def add_position(self, position: RawPosition) -> float:
        """
        Append a sample and update the running distance.

        Samples keep arriving while paused (background tracking does not stop),
        so they are recorded in that state too.

        Args:
            position: Newest GPS sample.

        Returns:
            Length in meters of the segment that was added to the distance
            (0 for the first sample or a rejected jump).
        """
        self._require_active()

        added = 0.0
        if self.positions:
            segment = metrics.calculate_distance(self.positions[-1], position)
            if segment < constants.LIVE_MAX_SEGMENT_M:
                added = segment
            else:
                logger.warning("Ignoring %.1f m jump between consecutive GPS samples", segment)

        self.positions.append(position)
        self.distance_m += added
        return added

    def pause(self, now_ms: int) -> None:
        self._require_active()
        if self.is_paused:
            raise RuntimeError("Tracking session is already paused")
        self.pause_started_ms = now_ms

    def resume(self, now_ms: int) -> None:
        self._require_active()
        if not self.is_paused:
            raise RuntimeError("Tracking session is not paused")
        self.paused_ms += now_ms - self.pause_started_ms
        self.pause_started_ms = None

    def elapsed_seconds(self, now_ms: int) -> int:
        """Whole seconds of activity time, not counting pauses."""
        if self.started_at_ms is None:
            return 0
        paused = self.paused_ms
        if self.pause_started_ms is not None:
            paused += now_ms - self.pause_started_ms
        return max(0, int((now_ms - self.started_at_ms - paused) // 1000))

    def snapshot(self, now_ms: int) -> LiveMetrics:
        """Current duration, distance and eco metrics."""
        duration_s = self.elapsed_seconds(now_ms)
        distance_km = self.distance_m / 1000
        return LiveMetrics(
            activity_kind=self.activity_kind,
            duration_s=duration_s,
            distance_km=distance_km,
            pace_min_per_km=metrics.calculate_pace(distance_km, duration_s),
            co2_saved_kg=metrics.calculate_co2_savings(distance_km),
            life_gained_h=metrics.calculate_life_gained(duration_s / 3600),
        )

    def finish(self, now_ms: int) -> FinishedActivity:
        """
        Close the session and encode its track.

        Returns:
            FinishedActivity with the final metrics, the raw samples and their
            optimized form.
        """
        self._require_active()
        if self.is_paused:
            self.resume(now_ms)

        final_metrics = self.snapshot(now_ms)
        positions = list(self.positions)
        optimized = optimize_positions(positions)
        self.finished = True

        logger.info(
            "Finished %s session: %s samples, %.2f km, %s s",
            self.activity_kind.value,
            len(positions),
            final_metrics.distance_km,
            final_metrics.duration_s,
        )
        return FinishedActivity(metrics=final_metrics, positions=positions, optimized=optimized)
