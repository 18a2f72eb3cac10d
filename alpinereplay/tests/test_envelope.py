import unittest
import tempfile
from pathlib import Path

from alpinereplay.errors import MalformedInput
from alpinereplay.ingest.envelope import load_document, read_track_file, strip_envelope
from alpinereplay.models.config import DecoderConfig
from alpinereplay.tests.helpers import envelope, track


class TestEnvelope(unittest.TestCase):
    def test_strip_basic(self):
        self.assertEqual(strip_envelope('onTrackReady({"a": 1})'), '{"a": 1}')

    def test_strip_tolerates_trailing_semicolon_and_newline(self):
        self.assertEqual(strip_envelope('onTrackReady({})\n'), "{}")
        self.assertEqual(strip_envelope('onTrackReady({});\r\n'), "{}")

    def test_strip_rejects_missing_prefix(self):
        with self.assertRaises(MalformedInput):
            strip_envelope('{"a": 1}')

    def test_strip_rejects_missing_close(self):
        with self.assertRaises(MalformedInput):
            strip_envelope('onTrackReady({"a": 1}')

    def test_bare_json_when_not_required(self):
        self.assertEqual(strip_envelope('{"a": 1}', required=False), '{"a": 1}')

    def test_load_document_invalid_json(self):
        with self.assertRaises(MalformedInput):
            load_document("onTrackReady({not json})")

    def test_load_document_rejects_non_finite_constants(self):
        for constant in ("NaN", "Infinity", "-Infinity"):
            with self.subTest(constant=constant):
                with self.assertRaises(MalformedInput):
                    load_document('onTrackReady({"t": {"size": 1, "base": ' + constant + '}})')

    def test_load_document_rejects_out_of_range_float(self):
        with self.assertRaises(MalformedInput):
            load_document('onTrackReady({"t": {"base": 1e400}})')

    def test_load_document_keeps_finite_floats(self):
        tree = load_document('onTrackReady({"t": {"base": 1.5e3, "n": 2}})')
        self.assertEqual(tree, {"t": {"base": 1500.0, "n": 2}})

    def test_load_document_custom_prefix(self):
        cfg = DecoderConfig(envelope_prefix="cb(")
        self.assertEqual(load_document('cb({"x": {"size": 0}})', cfg), {"x": {"size": 0}})


class TestReadTrackFile(unittest.TestCase):
    def test_read_roundtrip(self):
        doc = {"t1": track(3, t0=10.0)}
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "ride.trk"
            p.write_text(envelope(doc), encoding="utf-8")
            self.assertEqual(read_track_file(p), doc)

    def test_read_missing_file(self):
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(FileNotFoundError):
                read_track_file(Path(d) / "nope.trk")


class TestDecoderConfig(unittest.TestCase):
    def test_dict_roundtrip(self):
        cfg = DecoderConfig(empty_tracks="keep", strict_lengths=True)
        self.assertEqual(DecoderConfig.from_dict(cfg.to_dict()), cfg)

    def test_rejects_unknown_policy(self):
        with self.assertRaises(ValueError):
            DecoderConfig(empty_tracks="first")


if __name__ == "__main__":
    unittest.main()
