"""Shared test fixtures."""

from pathlib import Path

import pytest

from clipcut.models import ToolOutput

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeFFmpeg:
    """Stands in for ``ffutil.run_tool``.

    Cut commands write the ``-ss`` value into their output file; concat
    commands write the contents of every listed file, in list order. Call
    number ``fail_on`` (1-based) exits non-zero after leaving a partial file.
    """

    def __init__(self, fail_on: int | None = None, stderr: str = "boom"):
        self.fail_on = fail_on
        self.stderr = stderr
        self.calls: list[list[str]] = []

    @property
    def concat_calls(self) -> list[list[str]]:
        return [c for c in self.calls if "concat" in c]

    def __call__(self, args: list[str]) -> ToolOutput:
        self.calls.append(list(args))
        output = Path(args[-1])

        if self.fail_on == len(self.calls):
            output.write_text("partial")
            return ToolOutput(returncode=1, stderr=self.stderr)

        if "concat" in args:
            list_path = Path(args[args.index("-i") + 1])
            parts = []
            for line in list_path.read_text().splitlines():
                listed = line[len("file '"):-1]
                parts.append(Path(listed).read_text())
            output.write_text("".join(parts))
        else:
            output.write_text(args[args.index("-ss") + 1] + "\n")
        return ToolOutput(returncode=0)


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def fake_ffmpeg() -> FakeFFmpeg:
    return FakeFFmpeg()


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Parent directory for per-run workspaces, kept separate from outputs."""
    return tmp_path / "tmp"
