"""Boundary validation: generic JSON tree -> typed track and segment records.

Every lookup into the document goes through a helper that turns a missing
key or a wrong JSON type into MalformedInput / MissingField.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Tuple

from alpinereplay.errors import (
    DecodeError,
    MalformedInput,
    MissingField,
    UnsupportedBitwidth,
    UnsupportedEncoding,
)
from alpinereplay.models.point import Channel
from alpinereplay.models.segments import (
    BASE64_DIFF,
    FREQ,
    SUPPORTED_BITWIDTHS,
    SUPPORTED_TYPE,
    DiffSegment,
    FreqSegment,
    Segment,
)
from alpinereplay.models.track import TrackSpec

_MISSING = object()


def _is_number(v: Any) -> bool:
    # bool is an int subclass but JSON true/false is not a number
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _is_integer(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _number(seg: Mapping[str, Any], key: str) -> float:
    v = seg.get(key, _MISSING)
    if v is _MISSING or v is None:
        raise MissingField(key)
    if not _is_number(v):
        raise MissingField(key, reason=f"not a number ({type(v).__name__})")
    try:
        value = float(v)
    except OverflowError:
        value = math.inf
    if not math.isfinite(value):
        raise MalformedInput(f"'{key}' must be a finite number, got {v!r}")
    return value


def _integer(seg: Mapping[str, Any], key: str) -> int:
    v = seg.get(key, _MISSING)
    if v is _MISSING or v is None:
        raise MissingField(key)
    if not _is_integer(v):
        raise MissingField(key, reason=f"not an integer ({type(v).__name__})")
    return int(v)


def _string(seg: Mapping[str, Any], key: str) -> str:
    v = seg.get(key, _MISSING)
    if v is _MISSING or v is None:
        raise MissingField(key)
    if not isinstance(v, str):
        raise MissingField(key, reason=f"not a string ({type(v).__name__})")
    return v


def parse_segment(seg: Any) -> Segment:
    """Validate one raw segment object and return its typed record.

    Raises
    ------
    MalformedInput
        The segment is not an object, or a number is not finite.
    MissingField
        A parameter required by its encoding is absent or mistyped.
    UnsupportedEncoding
        Unknown encoding, a value type other than ``"double"``, or unsigned diff data.
    UnsupportedBitwidth
        A diff bitwidth other than 8 or 12.
    """
    if not isinstance(seg, Mapping):
        raise MalformedInput(f"segment must be an object, got {type(seg).__name__}")

    value_type = _string(seg, "type")
    if value_type != SUPPORTED_TYPE:
        raise UnsupportedEncoding(value_type)
    encoding = _string(seg, "encoding")
    if encoding not in (FREQ, BASE64_DIFF):
        raise UnsupportedEncoding(encoding)

    base = _number(seg, "base")
    # a negative size is tolerated: freq emits nothing, diff output does not depend on it
    size = _integer(seg, "size")

    if encoding == FREQ:
        return FreqSegment(base=base, size=size, step=_number(seg, "step"))

    bitwidth = _integer(seg, "bitwidth")
    if bitwidth not in SUPPORTED_BITWIDTHS:
        raise UnsupportedBitwidth(bitwidth)
    # every recorded file carries signed=true; unsigned deltas have never been seen
    signed = seg.get("signed", True)
    if signed is not True:
        raise UnsupportedEncoding(f"{BASE64_DIFF} (signed={signed!r})")
    return DiffSegment(
        base=base,
        size=size,
        bitwidth=bitwidth,
        factor=_number(seg, "factor"),
        data=_string(seg, "data"),
    )


def parse_segments(channel_entry: Any) -> Tuple[Segment, ...]:
    """Parse a channel entry ``{"segments": [...]}`` in document order."""
    if not isinstance(channel_entry, Mapping):
        raise MalformedInput(f"channel entry must be an object, got {type(channel_entry).__name__}")
    segments = channel_entry.get("segments", _MISSING)
    if segments is _MISSING:
        raise MalformedInput("channel entry has no 'segments' list")
    if not isinstance(segments, list):
        raise MalformedInput(f"'segments' must be a list, got {type(segments).__name__}")

    out: List[Segment] = []
    for i, seg in enumerate(segments):
        try:
            out.append(parse_segment(seg))
        except DecodeError as exc:
            raise exc.at(f"segment {i}")
    return tuple(out)


def parse_track(track_id: str, entry: Any) -> TrackSpec:
    """
    Validate one track entry ``{"size": int, "data": {channel: {...}}}``.

    All five known channels are required. Unknown channels are not decoded;
    they are listed in TrackSpec.warnings.
    """
    where = f"track '{track_id}'"
    if not isinstance(entry, Mapping):
        raise MalformedInput(f"track entry must be an object, got {type(entry).__name__}", location=where)

    size = entry.get("size", _MISSING)
    if size is _MISSING:
        raise MalformedInput("missing 'size'", location=where)
    if not _is_integer(size) or size < 0:
        raise MalformedInput(f"'size' must be a non-negative integer, got {size!r}", location=where)

    data = entry.get("data", _MISSING)
    if data is _MISSING:
        raise MalformedInput("missing 'data'", location=where)
    if not isinstance(data, Mapping):
        raise MalformedInput(f"'data' must be an object, got {type(data).__name__}", location=where)

    missing = [c.value for c in Channel if c.value not in data]
    if missing:
        raise MalformedInput(f"missing channels: {missing}", location=where)

    channels: Dict[Channel, Tuple[Segment, ...]] = {}
    warnings: List[str] = []
    for name, channel_entry in data.items():
        channel = Channel.from_name(name)
        if channel is None:
            warnings.append(f"{where}: ignored unknown channel '{name}'")
            continue
        try:
            channels[channel] = parse_segments(channel_entry)
        except DecodeError as exc:
            raise exc.at(f"{where} / {name}")

    return TrackSpec(track_id=str(track_id), size=int(size), channels=channels, warnings=tuple(warnings))


def parse_document(tree: Any) -> List[TrackSpec]:
    """Validate the whole document: an object mapping track id -> track entry."""
    if not isinstance(tree, Mapping):
        raise MalformedInput(f"document must be an object of tracks, got {type(tree).__name__}")
    return [parse_track(track_id, entry) for track_id, entry in tree.items()]
