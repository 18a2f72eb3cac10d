from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class Point:
    """
    One decoded track sample.

    Notes
    - latitude/longitude in degrees, altitude in metres, speed as recorded.
    - time is seconds since the Unix epoch; the fractional part carries sub-second precision.
    - Points are pre-allocated with zeros and filled channel by channel, hence not frozen.
    """
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0
    speed: float = 0.0
    time: float = 0.0


class Channel(str, Enum):
    """The five measurement series of a track, keyed by their wire name."""

    ALT = "alt"
    LAT = "lat"
    LON = "lon"
    SPEED = "speed"
    TIME = "time"

    @property
    def field(self) -> str:
        """Name of the :class:`Point` attribute this channel fills."""
        return _POINT_FIELDS[self]

    @classmethod
    def from_name(cls, name: str) -> "Channel | None":
        try:
            return cls(name)
        except ValueError:
            return None


_POINT_FIELDS = {
    Channel.ALT: "altitude",
    Channel.LAT: "latitude",
    Channel.LON: "longitude",
    Channel.SPEED: "speed",
    Channel.TIME: "time",
}
