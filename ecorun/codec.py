"""
Track Codec for the EcoRun Track Pipeline

This module shrinks a recorded GPS track for storage and expands it back.

Encoding drops samples that are within REDUNDANT_DISTANCE_M of the last kept
sample or that report an implausible speed, rounds coordinates and speed,
and replaces absolute timestamps with whole seconds since the first sample.
Decoding needs the same start time the track was encoded against; it is not
stored in the encoded payload.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from . import constants
from . import metrics
from . import utils
from .models import OptimizedPosition, RawPosition

logger = logging.getLogger(__name__)

StoredPosition = Union[OptimizedPosition, Dict]


def _is_redundant(last_kept: Optional[RawPosition], candidate: RawPosition) -> bool:
    if last_kept is None:
        return False
    return metrics.calculate_distance(last_kept, candidate) < constants.REDUNDANT_DISTANCE_M


def _is_too_fast(candidate: RawPosition) -> bool:
    # Activity kind is unknown here, so the loosest limit applies to all.
    return candidate.speed is not None and candidate.speed > constants.CODEC_MAX_SPEED_KMH


def optimize_positions(positions: Sequence[RawPosition]) -> List[OptimizedPosition]:
    """
    Compress a raw GPS track for storage.

    Processes samples in input order. A sample is dropped if it lies less than
    REDUNDANT_DISTANCE_M from the last *retained* sample (not the previous raw
    one), if it reports a speed above CODEC_MAX_SPEED_KMH, or if its offset
    from the first input sample is not a finite number. Retained samples are
    rounded half up to COORD_DECIMALS / SPEED_DECIMALS and timed in whole
    seconds relative to the first input sample.

    Args:
        positions: Ordered raw samples of one activity.

    Returns:
        Ordered list of OptimizedPosition; empty for empty input.
    """
    if not positions:
        return []

    start_time = positions[0].timestamp
    optimized: List[OptimizedPosition] = []
    last_kept: Optional[RawPosition] = None
    redundant = 0
    too_fast = 0
    bad_time = 0
    previous_timestamp = start_time

    for pos in positions:
        if pos.timestamp < previous_timestamp:
            logger.warning(
                "Non-monotonic timestamp in track: %s after %s", pos.timestamp, previous_timestamp
            )
        if utils.is_finite_number(pos.timestamp):
            previous_timestamp = pos.timestamp

        if _is_redundant(last_kept, pos):
            redundant += 1
            continue
        if _is_too_fast(pos):
            too_fast += 1
            continue

        offset_s = (pos.timestamp - start_time) / 1000
        if not utils.is_finite_number(offset_s):
            logger.warning("Dropping sample with invalid timestamp: %s", pos.timestamp)
            bad_time += 1
            continue

        optimized.append(
            OptimizedPosition(
                lat=utils.round_float(pos.latitude, constants.COORD_DECIMALS),
                lng=utils.round_float(pos.longitude, constants.COORD_DECIMALS),
                t=utils.round_half_up(offset_s),
                s=utils.round_optional(pos.speed, constants.SPEED_DECIMALS),
            )
        )
        last_kept = pos

    logger.debug(
        "Optimized track: %s -> %s samples (%s redundant, %s too fast, %s bad time)",
        len(positions),
        len(optimized),
        redundant,
        too_fast,
        bad_time,
    )
    return optimized


def _as_optimized(position: StoredPosition) -> OptimizedPosition:
    if isinstance(position, OptimizedPosition):
        return position
    return OptimizedPosition.from_dict(position)


def restore_positions(optimized: Iterable[StoredPosition], start_time: float) -> List[RawPosition]:
    """
    Expand a stored track back into raw-shaped positions.

    Args:
        optimized: OptimizedPosition objects or their persisted mappings.
        start_time: Epoch milliseconds the track was encoded against,
            normally the owning activity's creation time.

    Returns:
        List of RawPosition with ``accuracy`` always None.
    """
    restored = []
    for pos in optimized:
        pos = _as_optimized(pos)
        restored.append(
            RawPosition(
                latitude=pos.lat,
                longitude=pos.lng,
                timestamp=start_time + pos.t * 1000,
                speed=pos.s,
            )
        )
    return restored
