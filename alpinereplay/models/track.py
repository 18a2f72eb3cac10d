from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from alpinereplay.errors import MalformedInput
from alpinereplay.models.point import Channel, Point
from alpinereplay.models.segments import Segment


POINT_COLUMNS = ("latitude", "longitude", "altitude", "speed", "time")


@dataclass(frozen=True)
class LengthMismatch:
    """A decoded channel whose length differs from the track's declared size (non-fatal)."""
    track_id: str
    channel: Channel
    actual: int
    expected: int

    def __str__(self) -> str:
        return (
            f"track '{self.track_id}': wrong number of points for {self.channel.value} "
            f"channel: {self.actual} vs expected {self.expected}"
        )


@dataclass(frozen=True)
class SegmentSizeMismatch:
    """A base64/diff segment that produced a different count than it declared (non-fatal)."""
    track_id: str
    channel: Channel
    segment_index: int
    actual: int
    declared: int

    def __str__(self) -> str:
        return (
            f"track '{self.track_id}': {self.channel.value} segment {self.segment_index} "
            f"decoded {self.actual} values, declared size {self.declared}"
        )


Diagnostic = Union[LengthMismatch, SegmentSizeMismatch]


@dataclass(frozen=True)
class TrackSpec:
    """
    Validated, typed view of one track entry of the document.

    channels holds every known channel in document order; unknown channel names
    are not kept, only reported in warnings.
    """
    track_id: str
    size: int
    channels: Dict[Channel, Tuple[Segment, ...]]
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TrackFrame:
    """
    One assembled track: ``size`` points filled positionally from the channels.

    Notes
    - points has exactly ``size`` entries, whatever the channel lengths were.
    - Short channels leave the remaining point fields at 0.0 (see diagnostics).
    """
    track_id: str
    size: int
    points: List[Point]
    diagnostics: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def start_time(self) -> Optional[float]:
        """Time of the first point, or None for an empty track."""
        if not self.points:
            return None
        return self.points[0].time

    def sort_key(self) -> int:
        """``floor(first point time)``; empty tracks sort as 0."""
        t0 = self.start_time
        if t0 is None:
            return 0
        if not math.isfinite(t0):
            raise MalformedInput(f"track '{self.track_id}': first point time is {t0}")
        return int(math.floor(t0))

    def to_dataframe(self) -> pd.DataFrame:
        """Points as a float64 DataFrame with one column per point field."""
        data = {c: np.fromiter((getattr(p, c) for p in self.points), dtype=np.float64, count=len(self.points))
                for c in POINT_COLUMNS}
        return pd.DataFrame(data, columns=list(POINT_COLUMNS))


@dataclass(frozen=True)
class DecodeResult:
    """
    Output of a document decode: tracks ordered by first timestamp, plus diagnostics.

    Track identifiers are kept on the frames for reporting; the formatter only
    consumes :attr:`segments`.
    """
    tracks: Tuple[TrackFrame, ...]
    diagnostics: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[str, ...] = field(default=())

    @property
    def segments(self) -> List[List[Point]]:
        return [t.points for t in self.tracks]

    @property
    def length_mismatches(self) -> Tuple[LengthMismatch, ...]:
        return tuple(d for d in self.diagnostics if isinstance(d, LengthMismatch))

    def to_dataframe(self) -> pd.DataFrame:
        """All tracks concatenated in output order, with a ``track`` id column."""
        frames = []
        for t in self.tracks:
            df = t.to_dataframe()
            df.insert(0, "track", t.track_id)
            frames.append(df)
        if not frames:
            return pd.DataFrame(columns=["track", *POINT_COLUMNS])
        return pd.concat(frames, ignore_index=True)
