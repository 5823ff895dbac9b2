"""Exception classes raised by the export pipeline.

Every failure surfaces as an ExportError subclass whose ``str()`` is the
message shown to the user.
"""


class ExportError(Exception):
    """Base exception for all ClipCut export errors."""

    pass


class ToolNotFoundError(ExportError):
    """Neither the bundled ffmpeg nor one on PATH could be found."""

    pass


class NoSegmentsError(ExportError):
    def __init__(self, message: str = "At least one segment must be selected"):
        super().__init__(message)


class InvalidSegmentError(ExportError):
    """A segment has a negative start or does not end after it starts."""

    def __init__(self, index: int, start: float, end: float):
        self.index = index
        self.start = start
        self.end = end
        super().__init__(f"Segment {index} is invalid: start={start}, end={end}")


class ToolLaunchError(ExportError):
    """ffmpeg could not be started at all."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Could not execute ffmpeg: {cause}")


class SegmentFailureError(ExportError):
    """ffmpeg exited non-zero while cutting one segment.

    ``index`` is 1-based, in processing (start) order.
    """

    def __init__(self, index: int, stderr: str):
        self.index = index
        self.stderr = stderr
        super().__init__(f"Segment {index} failed: {stderr}")


class AssemblyError(ExportError):
    """Copying or concatenating the cut segments failed."""

    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(f"Assembling output failed: {stderr}")


class WorkspaceError(ExportError):
    """The temporary working directory could not be created."""

    pass
