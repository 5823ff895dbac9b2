"""Package logger and logging setup for ClipCut."""

from __future__ import annotations

import logging

logger = logging.getLogger("clipcut")


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the clipcut package.

    Args:
        verbose: If True, log DEBUG (including every ffmpeg command line);
            otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
