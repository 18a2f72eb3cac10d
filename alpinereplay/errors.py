"""Exception hierarchy for track decoding.

All fatal conditions derive from :class:`DecodeError`, itself a ``ValueError``,
so callers that only care about "bad input" can catch ``ValueError``.
Non-fatal conditions are never raised; they travel as diagnostics on the
decoded frames (see :mod:`alpinereplay.models.track`).
"""

from __future__ import annotations

from typing import Optional


class DecodeError(ValueError):
    """Base class for every fatal decoding failure.

    ``location`` optionally names the offending part of the document,
    e.g. ``"track 'a1' / lat / segment 2"``.
    """

    def __init__(self, message: str, *, location: Optional[str] = None):
        self.message = message
        self.location = location
        super().__init__(self._format())

    def _format(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message

    def at(self, location: str) -> "DecodeError":
        """Prefix ``location`` onto the current location and return self."""
        self.location = f"{location} / {self.location}" if self.location else location
        self.args = (self._format(),)
        return self


class MalformedInput(DecodeError):
    """The document (or a track entry) does not have the expected shape."""


class MissingField(DecodeError):
    """A required segment parameter is absent or has the wrong JSON type."""

    def __init__(self, field: str, *, reason: str = "missing", location: Optional[str] = None):
        self.field = field
        super().__init__(f"required field '{field}' is {reason}", location=location)


class UnsupportedEncoding(DecodeError):
    """An encoding (or value type) this decoder does not implement."""

    def __init__(self, encoding: object, *, location: Optional[str] = None):
        self.encoding = encoding
        super().__init__(f"unsupported encoding {encoding!r}", location=location)


class UnsupportedBitwidth(DecodeError):
    """A packed-integer bitwidth other than 8 or 12."""

    def __init__(self, bitwidth: object, *, location: Optional[str] = None):
        self.bitwidth = bitwidth
        super().__init__(f"unsupported bitwidth {bitwidth!r} (expected 8 or 12)", location=location)


class BadTransport(DecodeError):
    """The textual transport encoding (base64) of a payload is invalid."""


__all__ = [
    "DecodeError",
    "MalformedInput",
    "MissingField",
    "UnsupportedEncoding",
    "UnsupportedBitwidth",
    "BadTransport",
]
