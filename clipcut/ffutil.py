"""FFmpeg subprocess helpers."""

import subprocess
import sys
from pathlib import Path
from typing import Callable

from clipcut.errors import ToolLaunchError, ToolNotFoundError
from clipcut.logging import logger
from clipcut.manifest import EncodeConfig
from clipcut.models import Segment, ToolOutput

DEFAULT_RESOURCE_DIR = Path(__file__).parent / "resources"

# Sidecar binaries shipped under <resource_dir>/binaries/, one per OS.
BUNDLED_NAMES = {
    "win32": "ffmpeg-x86_64-pc-windows-msvc.exe",
    "darwin": "ffmpeg-x86_64-apple-darwin",
    "linux": "ffmpeg-x86_64-unknown-linux-gnu",
}

RunTool = Callable[[list[str]], ToolOutput]


def format_time(seconds: float) -> str:
    """Render seconds as ``HH:MM:SS.mmm`` for ffmpeg's ``-ss``.

    Hours are never truncated, so 100+ hours render with three digits.
    """
    total_ms = round(seconds * 1000)
    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def format_duration(seconds: float) -> str:
    """Plain decimal seconds for ``-t`` (``5.0`` -> ``"5"``)."""
    text = f"{seconds:.6f}".rstrip("0").rstrip(".")
    return text or "0"


def bundled_name(platform: str | None = None) -> str:
    platform = platform or sys.platform
    if platform.startswith("win"):
        return BUNDLED_NAMES["win32"]
    if platform == "darwin":
        return BUNDLED_NAMES["darwin"]
    return BUNDLED_NAMES["linux"]


def locate_ffmpeg(resource_dir: Path | None = None) -> Path:
    """Find ffmpeg: the bundled sidecar first, then ``ffmpeg`` on PATH.

    The PATH candidate is accepted if ``ffmpeg -version`` launches; its exit
    status is not checked. Raises ToolNotFoundError if both probes fail.
    """
    resource_dir = resource_dir or DEFAULT_RESOURCE_DIR
    sidecar = resource_dir / "binaries" / bundled_name()
    if sidecar.exists():
        logger.debug("Using bundled ffmpeg at %s", sidecar)
        return sidecar

    try:
        subprocess.run(["ffmpeg", "-version"], capture_output=True)
    except OSError as e:
        raise ToolNotFoundError(
            f"ffmpeg not found (no bundled binary at {sidecar} and not on PATH: {e})"
        ) from e
    logger.debug("Using ffmpeg from PATH")
    return Path("ffmpeg")


def run_tool(args: list[str]) -> ToolOutput:
    """Run ffmpeg synchronously and capture its stderr.

    A non-zero exit is returned, not raised; only a failure to launch
    raises (ToolLaunchError).
    """
    logger.debug("Running: %s", subprocess.list2cmdline(args))
    try:
        result = subprocess.run(args, capture_output=True, text=True, errors="replace")
    except OSError as e:
        raise ToolLaunchError(str(e)) from e
    return ToolOutput(returncode=result.returncode, stderr=result.stderr or "")


def build_cut_command(
    ffmpeg: Path,
    input_path: Path,
    segment: Segment,
    output_path: Path,
    encode: EncodeConfig,
) -> list[str]:
    """ffmpeg arguments that cut one segment into its own file."""
    cmd = [
        str(ffmpeg), "-y",
        "-ss", format_time(segment.start),
        "-i", str(input_path),
        "-t", format_duration(segment.duration),
    ]
    if encode.stream_copy:
        cmd += ["-c", "copy"]
    else:
        cmd += [
            "-c:v", encode.video_codec,
            "-preset", encode.preset,
            "-crf", str(encode.crf),
            "-c:a", encode.audio_codec,
            "-b:a", encode.audio_bitrate,
        ]
    if encode.faststart:
        cmd += ["-movflags", "+faststart"]
    cmd += ["-avoid_negative_ts", "make_zero", str(output_path)]
    return cmd


def build_concat_command(
    ffmpeg: Path, list_path: Path, output_path: Path, faststart: bool = True
) -> list[str]:
    """ffmpeg arguments that joins a concat list with stream copy."""
    cmd = [
        str(ffmpeg), "-y",
        "-f", "concat",
        "-safe", "0",
        "-i", str(list_path),
        "-c", "copy",
    ]
    if faststart:
        cmd += ["-movflags", "+faststart"]
    cmd.append(str(output_path))
    return cmd


def concat_line(path: Path) -> str:
    """One ``file '...'`` entry of a concat demuxer list."""
    escaped = str(path).replace("\\", "/").replace("'", "'\\''")
    return f"file '{escaped}'"


def write_concat_list(paths: list[Path], list_path: Path) -> Path:
    list_path.write_text("\n".join(concat_line(p) for p in paths) + "\n", encoding="utf-8")
    return list_path
