"""
Export Functions for the EcoRun Track Pipeline

This module renders a position sequence (raw or restored) as a GPX 1.1
document for use in other GPS tools.
"""

import io
from datetime import datetime, timedelta, timezone
from typing import Sequence
from xml.sax.saxutils import escape, quoteattr

from . import constants
from . import utils
from .models import RawPosition

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_gpx_time(timestamp_ms: float) -> str:
    """
    Format epoch milliseconds as ISO-8601 UTC with millisecond precision.

    Args:
        timestamp_ms: Unix epoch milliseconds.

    Returns:
        String like "2024-05-01T08:30:00.000Z".

    Raises:
        ValueError: If timestamp_ms is not finite or falls outside the years
            1 to 9999, which ISO-8601 cannot express.
    """
    try:
        moment = _EPOCH + timedelta(milliseconds=timestamp_ms)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"Timestamp {timestamp_ms!r} ms cannot be written as a GPX time") from exc
    return moment.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def generate_gpx(
    positions: Sequence[RawPosition],
    activity_name: str,
    creator: str = constants.GPX_CREATOR,
) -> str:
    """
    Render positions as a GPX 1.1 track.

    One <trkpt> is written per position, in input order, with its time and,
    when the position has a speed, a <speed> extension. Coordinates are not
    validated, deduplicated or reordered.

    Args:
        positions: Positions with latitude, longitude, timestamp and speed.
        activity_name: Free-text track name (XML-escaped).
        creator: Value of the gpx ``creator`` attribute.

    Returns:
        GPX document as a string. An empty sequence yields an empty <trkseg>.

    Raises:
        ValueError: If a timestamp cannot be expressed as an ISO-8601 time
            (see format_gpx_time).
    """
    buffer = io.StringIO()

    buffer.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    buffer.write(f'<gpx version="1.1" creator={quoteattr(creator)}>\n')
    buffer.write("  <trk>\n")
    buffer.write(f"    <name>{escape(activity_name)}</name>\n")
    buffer.write("    <trkseg>\n")

    for pos in positions:
        lat = utils.format_number(pos.latitude)
        lon = utils.format_number(pos.longitude)
        buffer.write(f'      <trkpt lat="{lat}" lon="{lon}">\n')
        buffer.write(f"        <time>{format_gpx_time(pos.timestamp)}</time>\n")
        if pos.speed is not None:
            speed = utils.format_number(pos.speed)
            buffer.write(f"        <extensions><speed>{speed}</speed></extensions>\n")
        buffer.write("      </trkpt>\n")

    buffer.write("    </trkseg>\n")
    buffer.write("  </trk>\n")
    buffer.write("</gpx>\n")

    return buffer.getvalue()
