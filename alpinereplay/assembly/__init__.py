from .tracks import TrackDecoder, assemble_track, decode_document, order_tracks

__all__ = [
    "TrackDecoder",
    "assemble_track",
    "decode_document",
    "order_tracks",
]
