"""alpinereplay -- decoder for AlpineReplay-style compressed telemetry tracks (*.trk).

A *.trk file is a JSON document wrapped in ``onTrackReady(...)``. Each track
stores five channels (alt, lat, lon, speed, time) as lists of segments, either
arithmetic runs ("freq") or base64-packed 8/12-bit deltas ("base64/diff").

This package provides tools for:
- Stripping the envelope and validating the document into typed records
- Unpacking packed integers and reconstructing float channels
- Assembling point records per track and ordering tracks by start time
- Writing the result as GPX

Key principles:
- Unknown encodings or bitwidths fail loudly; nothing is guessed
- Channel length mismatches are tolerated but always reported

Main subpackages:
- ingest: envelope handling and document validation
- decode: bit unpacking and channel decoding
- assembly: point assembly, track ordering, whole-document decoding
- export: GPX output
- models: Point, Channel, segment records, frames and config
"""

from .assembly import TrackDecoder, decode_document
from .errors import (
    BadTransport,
    DecodeError,
    MalformedInput,
    MissingField,
    UnsupportedBitwidth,
    UnsupportedEncoding,
)
from .models import DecodeResult, DecoderConfig, Point, TrackFrame

__all__ = [
    "TrackDecoder",
    "decode_document",
    "BadTransport",
    "DecodeError",
    "MalformedInput",
    "MissingField",
    "UnsupportedBitwidth",
    "UnsupportedEncoding",
    "DecodeResult",
    "DecoderConfig",
    "Point",
    "TrackFrame",
]
