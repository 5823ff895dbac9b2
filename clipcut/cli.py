"""Thin CLI entry point. Builds an ExportRequest and calls the engine."""

import argparse
import sys
from pathlib import Path

from clipcut.engine import export_video
from clipcut.errors import ExportError
from clipcut.logging import configure_logging
from clipcut.manifest import (
    EncodeConfig,
    ExportRequest,
    load_manifest,
    parse_output_target,
)
from clipcut.models import MergeTarget, Segment, SplitTarget


def parse_range(value: str) -> Segment:
    """Parse ``START-END`` (seconds) into a Segment."""
    try:
        start, end = value.split("-", 1)
        return Segment(start=float(start), end=float(end))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected START-END in seconds, got {value!r}")


def _build_request(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ExportRequest:
    if args.manifest:
        return load_manifest(args.manifest)

    if args.video is None:
        parser.error("provide either a VIDEO argument or --manifest")

    if args.target:
        target = parse_output_target(args.target, merge=False)
    elif args.split:
        target = SplitTarget(args.split, tuple(args.name or ()))
    else:
        output = args.output or args.video.with_stem(args.video.stem + "_cut")
        target = MergeTarget(output)

    return ExportRequest(
        input=args.video,
        target=target,
        segments=list(args.segment or []),
        encode=EncodeConfig(
            stream_copy=args.stream_copy,
            faststart=not args.no_faststart,
        ),
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="clipcut",
        description="ClipCut: cut time ranges out of a video and merge or split them.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log ffmpeg commands")
    sub = parser.add_subparsers(dest="command")

    exp = sub.add_parser("export", help="Export segments of a video file")
    exp.add_argument("video", nargs="?", type=Path, help="Input video file")
    exp.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    exp.add_argument(
        "--segment", "-s", type=parse_range, action="append",
        help="Range to keep as START-END seconds (repeatable)",
    )
    exp.add_argument("--output", "-o", type=Path, help="Merged output file path")
    exp.add_argument("--split", type=Path, help="Write one file per segment into this directory")
    exp.add_argument("--name", action="append", help="File name for the next split segment (repeatable)")
    exp.add_argument("--target", type=str, help='Split target as "DIR|name1.mp4|name2.mp4"')
    exp.add_argument("--stream-copy", action="store_true", help="Cut without re-encoding (keyframe accurate only)")
    exp.add_argument("--no-faststart", action="store_true", help="Do not move the index to the front of the file")
    exp.add_argument("--ffmpeg", type=Path, help="Path to the ffmpeg binary")

    serve = sub.add_parser("serve", help="Launch the web API")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args()
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from clipcut.web import create_app
        app = create_app()
        print(f"ClipCut API: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        request = _build_request(args, parser)
    except (OSError, TypeError, ValueError) as e:
        print(f"Error: invalid manifest: {e}", file=sys.stderr)
        sys.exit(1)

    def on_progress(stage: str, frac: float) -> None:
        print(f"  [{frac:3.0%}] {stage}")

    try:
        result = export_video(request, ffmpeg=args.ffmpeg, on_progress=on_progress)
    except ExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print(f"{result.message}!")
    for path in result.outputs:
        print(f"  {path}")


if __name__ == "__main__":
    main()
