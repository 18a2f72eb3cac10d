"""Ingest package - reading *.trk files and validating the document tree.

Design principle:
- Every lookup into the parsed JSON is checked here; decoding code only sees typed records.
"""

from .envelope import load_document, read_track_file, strip_envelope
from .schema import parse_document, parse_segment, parse_segments, parse_track

__all__ = [
    "load_document",
    "read_track_file",
    "strip_envelope",
    "parse_document",
    "parse_segment",
    "parse_segments",
    "parse_track",
]
