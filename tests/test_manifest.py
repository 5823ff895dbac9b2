"""Tests for manifest loading, output targets and validation."""

import json
from pathlib import Path

import pytest

from clipcut.manifest import (
    EncodeConfig,
    ExportRequest,
    load_manifest,
    parse_output_target,
)
from clipcut.models import MergeTarget, Segment, SplitTarget


class TestEncodeConfig:
    def test_defaults(self):
        cfg = EncodeConfig()
        assert cfg.stream_copy is False
        assert cfg.video_codec == "libx264"
        assert cfg.preset == "fast"
        assert cfg.crf == 18
        assert cfg.audio_codec == "aac"
        assert cfg.audio_bitrate == "192k"
        assert cfg.faststart is True

    def test_custom_values(self):
        cfg = EncodeConfig(stream_copy=True, crf=23)
        assert cfg.stream_copy is True
        assert cfg.crf == 23


class TestExportRequest:
    def test_merge_derived_from_target(self):
        r = ExportRequest(input=Path("in.mp4"), target=MergeTarget(Path("out.mp4")))
        assert r.merge is True
        assert r.segments == []

    def test_split(self):
        r = ExportRequest(input=Path("in.mp4"), target=SplitTarget(Path("out")))
        assert r.merge is False


class TestSplitTarget:
    def test_supplied_names_then_default(self):
        t = SplitTarget(Path("dir"), ("a.mp4", "b.mp4"))
        assert t.name_for(0) == "a.mp4"
        assert t.name_for(1) == "b.mp4"
        assert t.name_for(2) == "video_3.mp4"

    def test_empty_name_uses_default(self):
        t = SplitTarget(Path("dir"), ("", "b.mp4"))
        assert t.name_for(0) == "video_1.mp4"
        assert t.name_for(1) == "b.mp4"


class TestParseOutputTarget:
    def test_merge_uses_whole_value(self):
        assert parse_output_target("out/x|y.mp4", merge=True) == MergeTarget(Path("out/x|y.mp4"))

    def test_split_composite(self):
        t = parse_output_target("dir|a.mp4|b.mp4", merge=False)
        assert t == SplitTarget(Path("dir"), ("a.mp4", "b.mp4"))

    def test_empty_field_keeps_later_names_in_place(self):
        t = parse_output_target("dir||b.mp4", merge=False)
        assert t.name_for(0) == "video_1.mp4"
        assert t.name_for(1) == "b.mp4"
        assert t.name_for(2) == "video_3.mp4"

    def test_trailing_empty_field(self):
        t = parse_output_target("dir|a.mp4|", merge=False)
        assert t.name_for(0) == "a.mp4"
        assert t.name_for(1) == "video_2.mp4"

    def test_split_directory_only(self):
        t = parse_output_target("dir", merge=False)
        assert t == SplitTarget(Path("dir"), ())
        assert t.name_for(0) == "video_1.mp4"


class TestLoadManifest:
    def test_load_sample(self, sample_manifest_path: Path):
        r = load_manifest(sample_manifest_path)
        assert r.input == Path("video.mp4")
        assert r.target == MergeTarget(Path("highlights.mp4"))
        assert r.segments == [Segment(12.0, 15.5), Segment(2.0, 4.0)]
        assert r.encode.crf == 20
        assert r.encode.preset == "fast"

    def test_load_split_object(self, tmp_path: Path):
        p = tmp_path / "m.json"
        p.write_text(json.dumps({
            "input": "in.mp4",
            "output": {"directory": "clips", "names": ["intro.mp4"]},
            "segments": [{"start": 0, "end": 1}],
        }))
        r = load_manifest(p)
        assert r.target == SplitTarget(Path("clips"), ("intro.mp4",))
        assert r.encode == EncodeConfig()

    def test_load_composite_string(self, tmp_path: Path):
        p = tmp_path / "m.json"
        p.write_text(json.dumps({
            "input": "in.mp4",
            "output": "clips|a.mp4|b.mp4",
            "merge": False,
            "segments": [],
        }))
        r = load_manifest(p)
        assert r.target == SplitTarget(Path("clips"), ("a.mp4", "b.mp4"))

    def test_load_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            load_manifest(bad)

    def test_load_missing_fields(self, tmp_path: Path):
        incomplete = tmp_path / "incomplete.json"
        incomplete.write_text('{"input": "in.mp4"}')
        with pytest.raises(ValueError, match="must contain"):
            load_manifest(incomplete)

    def test_split_object_without_directory(self, tmp_path: Path):
        p = tmp_path / "m.json"
        p.write_text('{"input": "in.mp4", "output": {"names": ["a.mp4"]}}')
        with pytest.raises(ValueError, match="directory"):
            load_manifest(p)
