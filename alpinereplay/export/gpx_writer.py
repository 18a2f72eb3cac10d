"""GPX 1.1 output for decoded track segments.

One ``<trk>`` holding one ``<trkseg>`` per segment, in the order given.
Point times are UTC, truncated (not rounded) to milliseconds. Coordinates and
elevation are handed to the document as plain decimals so that they never
serialize in exponent notation.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
import math
from typing import Iterable, Sequence, TextIO

import gpx
import numpy as np

from alpinereplay.models.point import Point

DEFAULT_CREATOR = "alpinereplay/1"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def point_time(t: float) -> datetime:
    """Seconds since the epoch -> aware UTC datetime, truncated to milliseconds."""
    secs = math.floor(t)
    nanos = math.floor((t - secs) * 1_000_000_000)
    return _EPOCH + timedelta(seconds=secs, milliseconds=nanos // 1_000_000)


def plain_decimal(x: float) -> Decimal:
    """``-5e-05`` -> ``Decimal("-0.00005")``; integral values lose their ``.0``."""
    return Decimal(np.format_float_positional(float(x), trim="-"))


def build_gpx(segments: Iterable[Sequence[Point]], *, creator: str = DEFAULT_CREATOR) -> gpx.GPX:
    gpx_inst = gpx.GPX()
    gpx_inst.creator = creator

    for seg in segments:
        gpx_inst.tracks.append(gpx.track.Track())
        gpx_inst.tracks[-1].segments.append(gpx.track_segment.TrackSegment())
        segment = gpx_inst.tracks[-1].segments[-1]
        for p in seg:
            wp = gpx.Waypoint()
            wp.lat = plain_decimal(p.latitude)
            wp.lon = plain_decimal(p.longitude)
            wp.ele = plain_decimal(p.altitude)
            wp.time = point_time(p.time)
            segment.append(wp)

    return gpx_inst


def to_gpx_string(segments: Iterable[Sequence[Point]], *, creator: str = DEFAULT_CREATOR) -> str:
    return build_gpx(segments, creator=creator).to_string()


def write_gpx(stream: TextIO, segments: Iterable[Sequence[Point]], *, creator: str = DEFAULT_CREATOR) -> None:
    text = to_gpx_string(segments, creator=creator)
    stream.write(text)
    if not text.endswith("\n"):
        stream.write("\n")
