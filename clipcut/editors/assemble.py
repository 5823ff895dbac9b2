"""Assembler: turns cut segments into the final output file(s)."""

import os
import shutil
from pathlib import Path

from clipcut import ffutil
from clipcut.errors import AssemblyError
from clipcut.logging import logger
from clipcut.manifest import EncodeConfig
from clipcut.models import MergeTarget, OutputTarget, SplitTarget
from clipcut.workspace import Workspace


def _remove_quietly(paths: list[Path]) -> None:
    for p in paths:
        try:
            p.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial output %s: %s", p, e)


def staging_path(dest: Path) -> Path:
    """Hidden sibling of *dest* that a copy is written to before it replaces *dest*."""
    return dest.with_name(f".{dest.name}.partial")


def publish(pairs: list[tuple[Path, Path]]) -> list[Path]:
    """Copy each ``(source, dest)`` pair into place; all or nothing.

    Every source is first copied next to its destination under a staging
    name. Destinations are only replaced once every copy has succeeded, so a
    failed copy leaves files that already existed untouched.
    """
    staged: list[Path] = []
    try:
        for src, dest in pairs:
            tmp = staging_path(dest)
            staged.append(tmp)
            shutil.copy2(src, tmp)
    except OSError as e:
        _remove_quietly(staged)
        raise AssemblyError(str(e)) from e

    written: list[Path] = []
    try:
        for tmp, (_, dest) in zip(staged, pairs):
            os.replace(tmp, dest)
            written.append(dest)
    except OSError as e:
        _remove_quietly(staged[len(written):])
        raise AssemblyError(str(e)) from e
    return written


def merge(
    ffmpeg: Path,
    artifacts: list[Path],
    output_path: Path,
    workspace: Workspace,
    encode: EncodeConfig,
    run_tool: ffutil.RunTool = ffutil.run_tool,
) -> Path:
    """Join *artifacts* (already in order) into *output_path*.

    A single artifact is copied as-is so it is not remuxed a second time.
    Several are concatenated inside the workspace first; *output_path* is
    only touched once ffmpeg has succeeded.
    """
    if len(artifacts) == 1:
        logger.info("Single segment, copying to %s", output_path)
        publish([(artifacts[0], output_path)])
        return output_path

    list_path = workspace.path("concat_list.txt")
    try:
        ffutil.write_concat_list(artifacts, list_path)
    except OSError as e:
        raise AssemblyError(f"Could not write concat list: {e}") from e

    merged = workspace.path("merged.mp4")
    logger.info("Concatenating %d segments into %s", len(artifacts), output_path)
    cmd = ffutil.build_concat_command(ffmpeg, list_path, merged, faststart=encode.faststart)
    result = run_tool(cmd)
    if not result.ok:
        raise AssemblyError(result.stderr)

    publish([(merged, output_path)])
    return output_path


def split(artifacts: list[Path], target: SplitTarget) -> list[Path]:
    """Copy each artifact to its own named file; all or nothing."""
    try:
        target.directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise AssemblyError(str(e)) from e

    pairs = []
    for i, artifact in enumerate(artifacts):
        dest = target.directory / target.name_for(i)
        logger.info("Writing segment %d to %s", i + 1, dest)
        pairs.append((artifact, dest))
    return publish(pairs)


def assemble(
    ffmpeg: Path,
    artifacts: list[Path],
    target: OutputTarget,
    workspace: Workspace,
    encode: EncodeConfig | None = None,
    run_tool: ffutil.RunTool = ffutil.run_tool,
) -> list[Path]:
    """Produce the final outputs for *target* and return their paths."""
    encode = encode or EncodeConfig()
    if isinstance(target, MergeTarget):
        return [merge(ffmpeg, artifacts, target.path, workspace, encode, run_tool)]
    return split(artifacts, target)
