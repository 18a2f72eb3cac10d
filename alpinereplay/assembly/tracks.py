"""Track assembly: decoded channels -> point records -> ordered track set.

Channel values are distributed positionally into ``size`` pre-allocated
points. A channel of the wrong length is tolerated (sensor dropout is common)
and reported as a :class:`LengthMismatch`; indices past a short channel keep
their 0.0 default, values past ``size`` are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from alpinereplay.decode.channel import decode_channel_checked
from alpinereplay.errors import DecodeError, MalformedInput
from alpinereplay.ingest.schema import parse_document
from alpinereplay.models.config import DecoderConfig, EmptyTrackPolicy
from alpinereplay.models.point import Channel, Point
from alpinereplay.models.track import (
    DecodeResult,
    Diagnostic,
    LengthMismatch,
    TrackFrame,
    TrackSpec,
)

logger = logging.getLogger(__name__)

ChannelKey = Union[Channel, str]


def assemble_track(
    channel_values: Mapping[ChannelKey, Sequence[float]],
    expected_count: int,
    *,
    track_id: str = "",
) -> TrackFrame:
    """Build ``expected_count`` points from per-channel sample arrays.

    Parameters
    ----------
    channel_values : mapping
        Channel (or wire name such as ``"lat"``) -> decoded samples.
        Names outside the five known channels are ignored.
    expected_count : int
        Declared number of points of the track.
    track_id : str
        Used in diagnostics only.

    Returns
    -------
    TrackFrame
        Always ``expected_count`` points. A known channel whose length differs
        from expected_count (including an absent one) adds a LengthMismatch.
    """
    n = int(expected_count)
    if n < 0:
        raise ValueError(f"expected_count must be >= 0, got {n}")

    by_channel: Dict[Channel, np.ndarray] = {}
    for key, values in channel_values.items():
        channel = key if isinstance(key, Channel) else Channel.from_name(str(key))
        if channel is None:
            continue
        by_channel[channel] = np.asarray(values, dtype=np.float64)

    points = [Point() for _ in range(n)]
    diagnostics: List[Diagnostic] = []

    for channel in Channel:
        values = by_channel.get(channel, np.empty(0, dtype=np.float64))
        if values.size != n:
            d = LengthMismatch(track_id, channel, int(values.size), n)
            logger.warning("%s", d)
            diagnostics.append(d)
        attr = channel.field
        for point, value in zip(points, values.tolist()):
            setattr(point, attr, value)

    return TrackFrame(
        track_id=track_id,
        size=n,
        points=points,
        diagnostics=tuple(diagnostics),
        warnings=tuple(str(d) for d in diagnostics),
    )


def order_tracks(
    frames: Iterable[TrackFrame],
    *,
    empty_tracks: EmptyTrackPolicy = "skip",
) -> Tuple[List[TrackFrame], List[str]]:
    """
    Order tracks by ``floor(first point time)`` ascending.

    The sort is stable, so tracks starting in the same second keep document
    order. Empty tracks have no first point: with ``"skip"`` they are dropped
    (one warning each), with ``"keep"`` they sort with key 0.

    Returns (ordered_frames, warnings).
    """
    if empty_tracks not in ("skip", "keep"):
        raise ValueError(f"empty_tracks must be 'skip' or 'keep', got {empty_tracks!r}")

    kept: List[TrackFrame] = []
    warnings: List[str] = []
    for frame in frames:
        if not frame.points and empty_tracks == "skip":
            warnings.append(f"track '{frame.track_id}': no points, skipped")
            continue
        kept.append(frame)
    kept.sort(key=TrackFrame.sort_key)
    return kept, warnings


@dataclass
class TrackDecoder:
    """
    Decode a whole parsed document into a :class:`DecodeResult`.

    Any fatal error aborts the document: no partial track set is returned.
    """
    config: Optional[DecoderConfig] = None

    def __post_init__(self) -> None:
        if self.config is None:
            self.config = DecoderConfig()

    def decode_track(self, spec: TrackSpec) -> TrackFrame:
        where = f"track '{spec.track_id}'"
        for w in spec.warnings:
            logger.warning("%s", w)
        values: Dict[Channel, np.ndarray] = {}
        seg_diagnostics: List[Diagnostic] = []
        for channel, segments in spec.channels.items():
            try:
                vals, diags = decode_channel_checked(segments, track_id=spec.track_id, channel=channel)
            except DecodeError as exc:
                raise exc.at(f"{where} / {channel.value}")
            values[channel] = vals
            seg_diagnostics.extend(diags)

        frame = assemble_track(values, spec.size, track_id=spec.track_id)
        if self.config.strict_lengths and frame.diagnostics:
            raise MalformedInput("; ".join(str(d) for d in frame.diagnostics), location=where)

        return TrackFrame(
            track_id=frame.track_id,
            size=frame.size,
            points=frame.points,
            diagnostics=tuple(seg_diagnostics) + frame.diagnostics,
            warnings=spec.warnings + tuple(str(d) for d in seg_diagnostics) + frame.warnings,
        )

    def decode(self, tree: Any) -> DecodeResult:
        specs = parse_document(tree)
        frames = [self.decode_track(spec) for spec in specs]
        ordered, order_warnings = order_tracks(frames, empty_tracks=self.config.empty_tracks)
        for w in order_warnings:
            logger.warning("%s", w)

        diagnostics: List[Diagnostic] = []
        warnings: List[str] = []
        for frame in frames:
            diagnostics.extend(frame.diagnostics)
            warnings.extend(frame.warnings)
        warnings.extend(order_warnings)

        logger.debug(
            "decoded %d tracks (%d emitted, %d points, %d diagnostics)",
            len(frames), len(ordered), sum(f.n_points for f in ordered), len(diagnostics),
        )
        return DecodeResult(tracks=tuple(ordered), diagnostics=tuple(diagnostics), warnings=tuple(warnings))


def decode_document(tree: Any, config: Optional[DecoderConfig] = None) -> DecodeResult:
    """Convenience wrapper around ``TrackDecoder(config).decode(tree)``."""
    return TrackDecoder(config).decode(tree)
