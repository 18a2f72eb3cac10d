from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Optional

from alpinereplay.errors import MalformedInput
from alpinereplay.models.config import DecoderConfig


def strip_envelope(text: str, prefix: str = "onTrackReady(", *, required: bool = True) -> str:
    """
    Remove the JSONP wrapper ``<prefix>{...})`` around a track document.

    Trailing whitespace and a trailing ``;`` after the closing parenthesis are tolerated.
    With ``required=False`` text without the prefix is returned unchanged (bare JSON).
    """
    body = text.lstrip("\ufeff")
    if not body.startswith(prefix):
        if required:
            raise MalformedInput(f"input does not start with {prefix!r}")
        return body
    body = body[len(prefix):].rstrip()
    if body.endswith(";"):
        body = body[:-1].rstrip()
    if not body.endswith(")"):
        raise MalformedInput(f"input starts with {prefix!r} but has no closing ')'")
    return body[:-1]


def _reject_constant(name: str) -> float:
    raise MalformedInput(f"invalid JSON: non-standard constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise MalformedInput(f"invalid JSON: number {text} is out of range")
    return value


def load_document(text: str, config: Optional[DecoderConfig] = None) -> Any:
    """Strip the envelope and parse the JSON document into a plain tree."""
    cfg = config or DecoderConfig()
    body = strip_envelope(text, cfg.envelope_prefix, required=cfg.require_envelope)
    try:
        return json.loads(body, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"invalid JSON: {exc}") from exc


def read_track_file(file_path: str | Path, config: Optional[DecoderConfig] = None) -> Any:
    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(str(path))
    return load_document(path.read_text(encoding="utf-8"), config)
