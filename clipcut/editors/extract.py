"""Segment extractor: cuts each requested range into its own temporary file."""

from pathlib import Path
from typing import Callable

from clipcut import ffutil
from clipcut.errors import SegmentFailureError
from clipcut.logging import logger
from clipcut.manifest import EncodeConfig
from clipcut.models import Segment
from clipcut.workspace import Workspace


def sort_segments(segments: list[Segment]) -> list[Segment]:
    return sorted(segments, key=lambda s: s.start)


def extract_segments(
    ffmpeg: Path,
    input_path: Path,
    segments: list[Segment],
    workspace: Workspace,
    encode: EncodeConfig | None = None,
    run_tool: ffutil.RunTool = ffutil.run_tool,
    on_progress: Callable[[int, int], None] | None = None,
) -> list[Path]:
    """Cut *segments* in ascending start order, one ffmpeg run each.

    Returns the temporary files in processing order. Stops at the first
    failing segment and raises SegmentFailureError with its 1-based
    position; files already cut stay in *workspace* for its cleanup.

    Args:
        on_progress: Optional callback(done, total), called before each cut
            and once more when all are done.
    """
    encode = encode or EncodeConfig()
    ordered = sort_segments(segments)
    total = len(ordered)
    artifacts: list[Path] = []

    for i, seg in enumerate(ordered):
        if on_progress:
            on_progress(i, total)
        output = workspace.path(f"segment_{i}.mp4")
        cmd = ffutil.build_cut_command(ffmpeg, input_path, seg, output, encode)
        logger.info("Cutting segment %d/%d (%.3fs-%.3fs)", i + 1, total, seg.start, seg.end)

        result = run_tool(cmd)
        if not result.ok:
            logger.error("Segment %d failed with exit code %d", i + 1, result.returncode)
            raise SegmentFailureError(index=i + 1, stderr=result.stderr)

        artifacts.append(output)

    if on_progress:
        on_progress(total, total)
    return artifacts
