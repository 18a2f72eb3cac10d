"""Tests for GPX output."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
import xml.etree.ElementTree as ET

from alpinereplay.export.gpx_writer import plain_decimal, point_time, to_gpx_string
from alpinereplay.models.point import Point


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse(text: str) -> ET.Element:
    return ET.fromstring(text.encode("utf-8"))


def _children(el: ET.Element, name: str):
    return [c for c in el if _local(c.tag) == name]


def _child(el: ET.Element, name: str) -> ET.Element:
    found = _children(el, name)
    assert len(found) == 1, f"expected one <{name}> in <{_local(el.tag)}>"
    return found[0]


def _parse_time(text: str) -> datetime:
    return datetime.fromisoformat(text.strip().replace("Z", "+00:00"))


# -----------------------------------------------------------------------
# helpers
# -----------------------------------------------------------------------


def test_point_time_truncates_to_millis() -> None:
    assert point_time(1577836800.0) == datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert point_time(1577836800.25) == datetime(2020, 1, 1, 0, 0, 0, 250_000, tzinfo=timezone.utc)
    assert point_time(1577836800.9999) == datetime(2020, 1, 1, 0, 0, 0, 999_000, tzinfo=timezone.utc)


def test_point_time_before_epoch() -> None:
    assert point_time(-0.5) == datetime(1969, 12, 31, 23, 59, 59, 500_000, tzinfo=timezone.utc)


def test_plain_decimal_never_uses_exponent() -> None:
    assert str(plain_decimal(100.0)) == "100"
    assert str(plain_decimal(46.5)) == "46.5"
    assert str(plain_decimal(-0.00005)) == "-0.00005"
    assert plain_decimal(0.1) == Decimal("0.1")


# -----------------------------------------------------------------------
# document
# -----------------------------------------------------------------------


def test_gpx_structure_one_track_per_segment() -> None:
    segs = [
        [Point(latitude=46.5, longitude=7.25, altitude=1200.0, time=1577836800.5)],
        [Point(latitude=1.0, longitude=2.0, altitude=3.0, time=0.0), Point(time=1.0)],
    ]
    root = _parse(to_gpx_string(segs, creator="unit-test"))
    assert _local(root.tag) == "gpx"
    assert root.get("creator") == "unit-test"

    trks = _children(root, "trk")
    assert len(trks) == 2
    trksegs = [_child(t, "trkseg") for t in trks]
    assert [len(_children(s, "trkpt")) for s in trksegs] == [1, 2]

    pt = _child(trksegs[0], "trkpt")
    assert Decimal(pt.get("lat")) == Decimal("46.5")
    assert Decimal(pt.get("lon")) == Decimal("7.25")
    assert Decimal(_child(pt, "ele").text) == Decimal("1200")
    assert _parse_time(_child(pt, "time").text) == datetime(2020, 1, 1, 0, 0, 0, 500_000, tzinfo=timezone.utc)


def test_small_coordinates_are_plain_decimals() -> None:
    root = _parse(to_gpx_string([[Point(latitude=51.47, longitude=-0.00005, altitude=0.00002)]]))
    pt = _child(_child(_child(root, "trk"), "trkseg"), "trkpt")
    for text in (pt.get("lat"), pt.get("lon"), _child(pt, "ele").text):
        assert "e" not in text.lower()
    assert Decimal(pt.get("lon")) == Decimal("-0.00005")


def test_gpx_no_segments() -> None:
    root = _parse(to_gpx_string([]))
    assert _children(root, "trk") == []
