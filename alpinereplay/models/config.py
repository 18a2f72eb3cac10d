"""Decoder configuration.

A DecoderConfig groups every switch that changes decoding behaviour into one
frozen dataclass. It can be overridden field-by-field via
``dataclasses.replace()`` and serialized to/from a dict for provenance.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal

EmptyTrackPolicy = Literal["skip", "keep"]


@dataclass(frozen=True)
class DecoderConfig:
    """
    envelope_prefix:
      JSONP callback wrapper that surrounds the JSON document in *.trk files.
    require_envelope:
      - True: input must start with envelope_prefix (MalformedInput otherwise).
      - False: bare JSON is accepted as well; the prefix is stripped when present.
    empty_tracks:
      - "skip": tracks with zero points are dropped from the ordered output (reported as a warning).
      - "keep": they are kept and sort with key 0.
    strict_lengths:
      Promote channel length mismatches from diagnostics to a fatal MalformedInput.
    """
    envelope_prefix: str = "onTrackReady("
    require_envelope: bool = True
    empty_tracks: EmptyTrackPolicy = "skip"
    strict_lengths: bool = False

    def __post_init__(self) -> None:
        if self.empty_tracks not in ("skip", "keep"):
            raise ValueError(f"empty_tracks must be 'skip' or 'keep', got {self.empty_tracks!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> DecoderConfig:
        return cls(**dict(d))
