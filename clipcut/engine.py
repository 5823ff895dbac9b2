"""Orchestrator: runs the export pipeline defined by an ExportRequest."""

from pathlib import Path
from typing import Callable

from clipcut import ffutil
from clipcut.editors.assemble import assemble
from clipcut.editors.extract import extract_segments
from clipcut.errors import InvalidSegmentError, NoSegmentsError
from clipcut.logging import logger
from clipcut.manifest import ExportRequest
from clipcut.models import CleanupReport, ExportResult, Segment
from clipcut.workspace import Workspace

SUCCESS_MESSAGE = "Video exported successfully"


def validate_segments(segments: list[Segment]) -> None:
    """Reject an empty list, negative starts and empty/reversed ranges."""
    if not segments:
        raise NoSegmentsError()
    for i, seg in enumerate(segments, 1):
        if seg.start < 0 or seg.end <= seg.start:
            raise InvalidSegmentError(i, seg.start, seg.end)


def export_video(
    request: ExportRequest,
    *,
    ffmpeg: Path | None = None,
    resource_dir: Path | None = None,
    temp_root: Path | None = None,
    run_tool: ffutil.RunTool = ffutil.run_tool,
    on_progress: Callable[[str, float], None] | None = None,
    on_cleanup: Callable[[CleanupReport], None] | None = None,
) -> ExportResult:
    """Cut the requested segments and write the merged or split output.

    Either every requested output is written or none is; the per-run
    temporary directory is removed before returning on every path.

    Args:
        request: What to cut and where to write it.
        ffmpeg: Explicit ffmpeg binary; located via ffutil.locate_ffmpeg if None.
        resource_dir: Where to look for a bundled ffmpeg.
        temp_root: Parent for the per-run temporary directory.
        run_tool: Runs one ffmpeg command; swapped for a fake in tests.
        on_progress: Optional callback(stage_name, fraction_complete).
        on_cleanup: Optional callback receiving the CleanupReport.
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    def _cut_progress(done: int, total: int) -> None:
        if done < total:
            _progress(f"Cutting segment {done + 1}/{total}", 0.9 * done / total)

    validate_segments(request.segments)
    ffmpeg = ffmpeg or ffutil.locate_ffmpeg(resource_dir)

    mode = "merge" if request.merge else "split"
    logger.info(
        "Exporting %d segment(s) from %s (%s)", len(request.segments), request.input, mode
    )

    with Workspace.create(temp_root, on_cleanup=on_cleanup) as workspace:
        artifacts = extract_segments(
            ffmpeg,
            request.input,
            request.segments,
            workspace,
            encode=request.encode,
            run_tool=run_tool,
            on_progress=_cut_progress,
        )

        _progress("Assembling output", 0.9)
        outputs = assemble(
            ffmpeg, artifacts, request.target, workspace,
            encode=request.encode, run_tool=run_tool,
        )

    _progress("Done", 1.0)
    return ExportResult(success=True, message=SUCCESS_MESSAGE, outputs=outputs)
