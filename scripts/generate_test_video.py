#!/usr/bin/env python3
"""Generate a synthetic test video for trying out ClipCut exports.

Produces a 20-second video made of four 5-second colour blocks, each with its
own tone, so every exported segment is easy to identify by eye and ear:
  0-5s   blue   + 440 Hz
  5-10s  red    + 660 Hz
  10-15s green  + 880 Hz
  15-20s yellow + 1100 Hz

Example:
  python scripts/generate_test_video.py /tmp/blocks.mp4
  clipcut export /tmp/blocks.mp4 -s 10-12 -s 1-3 -o /tmp/merged.mp4
"""

import subprocess
import sys
from pathlib import Path

BLOCKS = [("blue", 440), ("red", 660), ("green", 880), ("yellow", 1100)]
BLOCK_SECONDS = 5


def generate_test_video(output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)

    n = len(BLOCKS)
    audio_parts = [f"sine=f={freq}:d={BLOCK_SECONDS}[a{i}]" for i, (_, freq) in enumerate(BLOCKS)]
    video_parts = [
        f"color=c={color}:s=320x240:d={BLOCK_SECONDS}:r=30[v{i}]"
        for i, (color, _) in enumerate(BLOCKS)
    ]
    audio_concat = "".join(f"[a{i}]" for i in range(n)) + f"concat=n={n}:v=0:a=1[aout]"
    video_concat = "".join(f"[v{i}]" for i in range(n)) + f"concat=n={n}:v=1:a=0[vout]"

    filter_complex = ";".join(audio_parts + [audio_concat] + video_parts + [video_concat])

    cmd = [
        "ffmpeg", "-y",
        "-filter_complex", filter_complex,
        "-map", "[vout]",
        "-map", "[aout]",
        "-c:v", "libx264",
        "-c:a", "aac",
        "-shortest",
        str(output),
    ]
    subprocess.run(cmd, check=True)
    print(f"Generated: {output}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/blocks.mp4")
    generate_test_video(out)
