"""Shared data types used across ClipCut."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Segment:
    """A start/end time pair in seconds (half-open)."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class MergeTarget:
    """Write every segment, in start order, into one file."""

    path: Path


@dataclass(frozen=True)
class SplitTarget:
    """Write one file per segment into ``directory``.

    ``names`` follows processing (start) order. Positions past the end of
    ``names``, and empty names, fall back to ``video_<n>.mp4``.
    """

    directory: Path
    names: tuple[str, ...] = ()

    def name_for(self, index: int) -> str:
        if index < len(self.names) and self.names[index]:
            return self.names[index]
        return f"video_{index + 1}.mp4"


OutputTarget = MergeTarget | SplitTarget


@dataclass
class ToolOutput:
    """Exit status and captured stderr of one ffmpeg run."""

    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass
class ExportResult:
    success: bool
    message: str
    outputs: list[Path] = field(default_factory=list)


@dataclass
class CleanupReport:
    """What the workspace managed to remove, and what it left behind."""

    directory: Path
    removed: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.failed
