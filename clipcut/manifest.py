"""JSON manifest schema: the contract between CLI/API and engine."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from clipcut.models import MergeTarget, OutputTarget, Segment, SplitTarget

COMPOSITE_DELIMITER = "|"


@dataclass
class EncodeConfig:
    """ffmpeg encoding settings for each cut segment.

    With ``stream_copy`` the cuts are re-muxed instead of re-encoded: much
    faster, but boundaries snap to keyframes.
    """

    stream_copy: bool = False
    video_codec: str = "libx264"
    preset: str = "fast"
    crf: int = 18
    audio_codec: str = "aac"
    audio_bitrate: str = "192k"
    faststart: bool = True


@dataclass
class ExportRequest:
    """Top-level export request."""

    input: Path
    target: OutputTarget
    segments: list[Segment] = field(default_factory=list)
    encode: EncodeConfig = field(default_factory=EncodeConfig)

    @property
    def merge(self) -> bool:
        return isinstance(self.target, MergeTarget)


def parse_output_target(value: str, merge: bool) -> OutputTarget:
    """Decode the composite ``"dir|a.mp4|b.mp4"`` output string.

    In merge mode the whole value is the output file path.
    """
    if merge:
        return MergeTarget(Path(value))
    directory, *names = value.split(COMPOSITE_DELIMITER)
    return SplitTarget(Path(directory), tuple(names))


def parse_segments(items: list[dict]) -> list[Segment]:
    return [Segment(start=float(s["start"]), end=float(s["end"])) for s in items]


def _parse_target(data: dict) -> OutputTarget:
    output = data["output"]
    if isinstance(output, dict):
        if "directory" not in output:
            raise ValueError("Split output must contain a 'directory' field")
        return SplitTarget(Path(output["directory"]), tuple(output.get("names", [])))
    return parse_output_target(output, merge=data.get("merge", True))


def load_manifest(path: str | Path) -> ExportRequest:
    """Load and validate an export manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if "input" not in data or "output" not in data:
        raise ValueError("Manifest must contain 'input' and 'output' fields")

    encode = EncodeConfig(**data["encode"]) if "encode" in data else EncodeConfig()

    return ExportRequest(
        input=Path(data["input"]),
        target=_parse_target(data),
        segments=parse_segments(data.get("segments", [])),
        encode=encode,
    )
