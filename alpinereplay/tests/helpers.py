"""Builders for synthetic track documents used across the tests."""

from __future__ import annotations

import base64
import json
from typing import Any, Dict, Optional, Sequence


def b64(data: Sequence[int]) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def freq(base: float, step: float, size: int) -> Dict[str, Any]:
    return {"type": "double", "encoding": "freq", "base": base, "size": size, "step": step}


def diff(base: float, factor: float, data: Sequence[int], *, bitwidth: int = 8, size: Optional[int] = None) -> Dict[str, Any]:
    n = (8 * len(data)) // bitwidth
    return {
        "type": "double",
        "encoding": "base64/diff",
        "base": base,
        "size": n + 1 if size is None else size,
        "bitwidth": bitwidth,
        "factor": factor,
        "signed": True,
        "data": b64(data),
    }


def track(size: int, t0: float = 0.0, **overrides: Any) -> Dict[str, Any]:
    """A consistent track of ``size`` points starting at time ``t0`` (1 Hz)."""
    data = {
        "alt": {"segments": [freq(1000.0, 0.5, size)]},
        "lat": {"segments": [freq(46.0, 0.001, size)]},
        "lon": {"segments": [freq(7.0, 0.002, size)]},
        "speed": {"segments": [freq(0.0, 1.0, size)]},
        "time": {"segments": [freq(t0, 1.0, size)]},
    }
    for name, segments in overrides.items():
        data[name] = {"segments": segments}
    return {"size": size, "data": data}


def envelope(doc: Dict[str, Any]) -> str:
    return "onTrackReady(" + json.dumps(doc) + ")"
