"""
Data Models for the EcoRun Track Pipeline

Raw GPS fixes as delivered by the location provider, their compact stored
form, and the closed set of activity kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ActivityKind(str, Enum):
    """Closed set of supported activity kinds."""

    RUNNING = "running"
    BIKING = "biking"

    @classmethod
    def coerce(cls, value) -> "ActivityKind":
        """
        Convert an enum member or its string value to an ActivityKind.

        Raises:
            ValueError: If value does not name a supported activity kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            allowed = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown activity kind {value!r} (expected one of: {allowed})") from exc


@dataclass(frozen=True)
class RawPosition:
    """
    A single GPS fix.

    Attributes:
        latitude: Latitude in decimal degrees (range is not enforced).
        longitude: Longitude in decimal degrees (range is not enforced).
        timestamp: Unix epoch milliseconds.
        speed: Instantaneous speed in km/h, None when not reported.
        accuracy: Horizontal accuracy in meters. Never stored by the codec.
    """

    latitude: float
    longitude: float
    timestamp: float
    speed: Optional[float] = None
    accuracy: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        record = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": self.timestamp,
        }
        if self.speed is not None:
            record["speed"] = self.speed
        if self.accuracy is not None:
            record["accuracy"] = self.accuracy
        return record


@dataclass(frozen=True)
class OptimizedPosition:
    """
    Compact stored form of one retained sample.

    Attributes:
        lat: Latitude rounded to 6 decimals.
        lng: Longitude rounded to 6 decimals.
        t: Whole seconds since the first sample of the encoded sequence.
        s: Speed in km/h rounded to 0.1, None when absent.
    """

    lat: float
    lng: float
    t: int
    s: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Persisted shape; ``s`` is omitted rather than written as null."""
        record = {"lat": self.lat, "lng": self.lng, "t": self.t}
        if self.s is not None:
            record["s"] = self.s
        return record

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "OptimizedPosition":
        """
        Build an OptimizedPosition from its persisted mapping.

        Raises:
            ValueError: If a required key is missing or not numeric, or if
                ``t`` is not a whole number of seconds.
        """
        try:
            t = float(record["t"])
            if not t.is_integer():
                raise ValueError(f"t must be a whole number of seconds, got {record['t']!r}")
            return cls(
                lat=float(record["lat"]),
                lng=float(record["lng"]),
                t=int(t),
                s=None if record.get("s") is None else float(record["s"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid stored position {record!r}: {exc}") from exc
