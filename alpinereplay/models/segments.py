from __future__ import annotations

from dataclasses import dataclass
from typing import Union


FREQ = "freq"
BASE64_DIFF = "base64/diff"

SUPPORTED_TYPE = "double"
SUPPORTED_BITWIDTHS = (8, 12)


@dataclass(frozen=True)
class FreqSegment:
    """
    Uniformly spaced run: ``base, base + step, base + 2*step, ...`` (``size`` values).
    """
    base: float
    size: int
    step: float

    encoding = FREQ


@dataclass(frozen=True)
class DiffSegment:
    """
    Delta-encoded run.

    data holds the base64 text exactly as found in the document; it is only
    decoded to bytes when the segment itself is decoded. The segment yields
    ``1 + N`` values, N being the number of packed integers in data.
    """
    base: float
    size: int
    bitwidth: int
    factor: float
    data: str

    encoding = BASE64_DIFF


Segment = Union[FreqSegment, DiffSegment]
