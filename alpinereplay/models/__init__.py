from .config import DecoderConfig
from .point import Channel, Point
from .segments import DiffSegment, FreqSegment, Segment
from .track import DecodeResult, LengthMismatch, SegmentSizeMismatch, TrackFrame, TrackSpec

__all__ = [
    "DecoderConfig",
    "Channel",
    "Point",
    "DiffSegment",
    "FreqSegment",
    "Segment",
    "DecodeResult",
    "LengthMismatch",
    "SegmentSizeMismatch",
    "TrackFrame",
    "TrackSpec",
]
