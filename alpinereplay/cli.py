from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import Optional, Sequence

from alpinereplay.assembly.tracks import TrackDecoder
from alpinereplay.errors import DecodeError
from alpinereplay.export.gpx_writer import write_gpx
from alpinereplay.ingest.envelope import read_track_file
from alpinereplay.models.config import DecoderConfig


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m alpinereplay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Convert an AlpineReplay *.trk track file to GPX.

            Tracks are written in order of their first timestamp. Channel length
            mismatches are reported on stderr and do not stop the conversion.
            """
        ),
    )
    p.add_argument("input", help="Track file (onTrackReady({...}) JSON)")
    p.add_argument("-o", "--output", default=None, help="Output GPX path (default: stdout)")
    p.add_argument("--keep-empty", action="store_true", help="Keep tracks with no points (sorted first)")
    p.add_argument("--strict", action="store_true", help="Treat channel length mismatches as errors")
    p.add_argument("--no-envelope", action="store_true", help="Also accept bare JSON without onTrackReady(")
    g = p.add_mutually_exclusive_group()
    g.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    g.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    ns = p.parse_args(list(argv) if argv is not None else None)

    level = logging.DEBUG if ns.verbose else (logging.ERROR if ns.quiet else logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    cfg = DecoderConfig(
        require_envelope=not ns.no_envelope,
        empty_tracks="keep" if ns.keep_empty else "skip",
        strict_lengths=bool(ns.strict),
    )

    try:
        tree = read_track_file(ns.input, cfg)
        result = TrackDecoder(cfg).decode(tree)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 2
    except DecodeError as e:
        print(f"Error decoding {ns.input}: {type(e).__name__}: {e}", file=sys.stderr)
        return 2

    if ns.output:
        out = Path(ns.output).expanduser()
        try:
            with open(out, "w", encoding="utf-8") as f:
                write_gpx(f, result.segments)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 2
    else:
        write_gpx(sys.stdout, result.segments)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
