"""Channel decoder: segment list -> float64 sample array.

Segments of one channel are decoded in document order and concatenated.
Any failure is fatal for the channel; a silently dropped segment would shift
every later sample against the other channels.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import List, Mapping, Sequence, Tuple, Union

import numpy as np

from alpinereplay.decode.bitunpack import unpack, unpacked_count
from alpinereplay.errors import BadTransport, DecodeError
from alpinereplay.ingest.schema import parse_segment
from alpinereplay.models.point import Channel
from alpinereplay.models.segments import DiffSegment, FreqSegment, Segment
from alpinereplay.models.track import SegmentSizeMismatch

logger = logging.getLogger(__name__)

SegmentLike = Union[Segment, Mapping[str, object]]


def decode_transport(text: str) -> bytes:
    """Decode the base64 payload of a diff segment (strict alphabet and padding)."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise BadTransport(f"invalid base64 payload ({exc})") from exc


def sign_extend(values: np.ndarray, bitwidth: int) -> np.ndarray:
    """Reinterpret unsigned ``bitwidth``-bit integers as two's complement."""
    modulus = 1 << int(bitwidth)
    values = np.asarray(values, dtype=np.int64)
    return np.where(values >= modulus // 2, values - modulus, values)


def decode_freq(seg: FreqSegment) -> np.ndarray:
    out = np.empty(max(int(seg.size), 0), dtype=np.float64)
    val = float(seg.base)
    # repeated addition, not base + i*step, to reproduce the recorder's rounding
    for i in range(out.size):
        out[i] = val
        val += seg.step
    return out


def decode_diff(seg: DiffSegment) -> np.ndarray:
    """
    ``base`` followed by the running sum of sign-extended, scaled deltas.
    """
    raw = decode_transport(seg.data)
    n = unpacked_count(len(raw), seg.bitwidth)
    ints = np.fromiter(unpack(raw, seg.bitwidth), dtype=np.int64, count=n)
    out = np.empty(n + 1, dtype=np.float64)
    out[0] = seg.base
    out[1:] = sign_extend(ints, seg.bitwidth).astype(np.float64) * seg.factor
    # add.accumulate is sequential, so this matches a running total exactly
    return np.cumsum(out)


def _as_segment(seg: SegmentLike) -> Segment:
    if isinstance(seg, (FreqSegment, DiffSegment)):
        return seg
    return parse_segment(seg)


def _decode_typed(seg: Segment) -> np.ndarray:
    if isinstance(seg, FreqSegment):
        return decode_freq(seg)
    return decode_diff(seg)


def decode_segment(seg: SegmentLike) -> np.ndarray:
    """Decode one segment (typed, or a raw document mapping) into samples."""
    return _decode_typed(_as_segment(seg))


def decode_channel_checked(
    segments: Sequence[SegmentLike],
    *,
    track_id: str = "",
    channel: Channel = Channel.TIME,
) -> Tuple[np.ndarray, List[SegmentSizeMismatch]]:
    """
    Decode and concatenate a channel's segments, collecting non-fatal diagnostics.

    Returns (values_float64, diagnostics). Fatal errors are re-raised with the
    segment index added to their location.
    """
    parts: List[np.ndarray] = []
    diagnostics: List[SegmentSizeMismatch] = []
    for i, seg in enumerate(segments):
        try:
            seg = _as_segment(seg)
            values = _decode_typed(seg)
        except DecodeError as exc:
            raise exc.at(f"segment {i}")
        if isinstance(seg, DiffSegment) and values.size != seg.size:
            d = SegmentSizeMismatch(track_id, channel, i, int(values.size), int(seg.size))
            logger.debug("%s", d)
            diagnostics.append(d)
        parts.append(values)

    if not parts:
        return np.empty(0, dtype=np.float64), diagnostics
    return np.concatenate(parts), diagnostics


def decode_channel(segments: Sequence[SegmentLike]) -> np.ndarray:
    """Decode a channel's ordered segment list into one float64 array."""
    values, _ = decode_channel_checked(segments)
    return values
