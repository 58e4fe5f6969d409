"""
Activity Record Helpers for the EcoRun Track Pipeline

This module converts between position sequences and the ``positions`` field
of a stored activity record. The field holds a JSON array of
``{lat, lng, t, s?}`` objects; the record's ``created_at`` timestamp is the
start time used to restore it.
"""

import json
import logging
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from . import utils
from .codec import optimize_positions, restore_positions
from .models import OptimizedPosition, RawPosition

logger = logging.getLogger(__name__)

PositionsField = Union[str, bytes, List[Dict], None]


def serialize_positions(positions: Sequence[RawPosition]) -> str:
    """
    Optimize a raw track and serialize it for the ``positions`` field.

    Args:
        positions: Ordered raw samples of one activity.

    Returns:
        Compact JSON array text.
    """
    optimized = optimize_positions(positions)
    return json.dumps([pos.to_dict() for pos in optimized], separators=(",", ":"))


def parse_positions_field(field: PositionsField) -> List[OptimizedPosition]:
    """
    Parse a stored ``positions`` field.

    The backend may hand the field back as JSON text or as an already decoded
    list, depending on the column type.

    Args:
        field: JSON text, bytes, list of mappings, or None.

    Returns:
        List of OptimizedPosition; empty when the field is None or empty.

    Raises:
        ValueError: If the text is not valid JSON, the payload is not an
            array, or an entry lacks lat/lng/t.
    """
    if field is None:
        return []

    if isinstance(field, (str, bytes, bytearray)):
        if not field.strip():
            return []
        try:
            field = json.loads(field)
        except json.JSONDecodeError as exc:
            raise ValueError(f"positions field is not valid JSON: {exc}") from exc

    if not isinstance(field, list):
        raise ValueError(f"positions field must be an array, got {type(field).__name__}")

    return [OptimizedPosition.from_dict(entry) for entry in field]


def start_time_ms(created_at) -> int:
    """
    Convert an activity's creation timestamp to epoch milliseconds.

    Args:
        created_at: ISO-8601 string, datetime, or epoch milliseconds.
            Naive values are treated as UTC.

    Returns:
        Epoch milliseconds.

    Raises:
        ValueError: If created_at cannot be parsed.
    """
    if isinstance(created_at, (int, float)) and not isinstance(created_at, bool):
        if not utils.is_finite_number(created_at):
            raise ValueError(f"created_at must be finite, got {created_at!r}")
        return int(created_at)
    try:
        ts = pd.Timestamp(created_at)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Cannot parse created_at {created_at!r}") from exc
    if ts is pd.NaT:
        raise ValueError(f"Cannot parse created_at {created_at!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000)


def restore_activity(record: Dict, start_time: Optional[int] = None) -> List[RawPosition]:
    """
    Restore the positions of a stored activity record.

    Args:
        record: Mapping with ``positions`` and ``created_at`` keys.
        start_time: Overrides ``created_at`` when given (epoch ms).

    Returns:
        Restored positions, empty when the record has none.

    Raises:
        ValueError: If the positions field or created_at is malformed.
    """
    optimized = parse_positions_field(record.get("positions"))
    if not optimized:
        return []

    if start_time is None:
        if record.get("created_at") is None:
            raise ValueError("Activity record has positions but no created_at")
        start_time = start_time_ms(record["created_at"])

    logger.debug("Restoring %s stored positions from %s", len(optimized), start_time)
    return restore_positions(optimized, start_time)
