"""Per-run temporary directory that is always cleaned up."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable

from clipcut.errors import WorkspaceError
from clipcut.logging import logger
from clipcut.models import CleanupReport


class Workspace:
    """Temporary working directory for one export run.

    Every artifact handed out by :meth:`path` is tracked. :meth:`cleanup`
    removes each one, then the directory itself; it never raises. Use it as
    a context manager so cleanup runs on every exit path.
    """

    def __init__(
        self,
        directory: Path,
        on_cleanup: Callable[[CleanupReport], None] | None = None,
    ):
        self.directory = directory
        self.artifacts: list[Path] = []
        self._on_cleanup = on_cleanup
        self._closed = False

    @classmethod
    def create(
        cls,
        root: Path | None = None,
        on_cleanup: Callable[[CleanupReport], None] | None = None,
    ) -> "Workspace":
        """Make a fresh, uniquely named directory under *root* (or the system temp dir)."""
        try:
            if root is not None:
                Path(root).mkdir(parents=True, exist_ok=True)
            directory = Path(tempfile.mkdtemp(prefix="clipcut_", dir=root))
        except OSError as e:
            raise WorkspaceError(f"Could not create temporary directory: {e}") from e
        logger.debug("Created workspace %s", directory)
        return cls(directory, on_cleanup=on_cleanup)

    def path(self, name: str) -> Path:
        """Return (and track) the path of an artifact inside the workspace."""
        p = self.directory / name
        self.artifacts.append(p)
        return p

    def cleanup(self) -> CleanupReport:
        report = CleanupReport(directory=self.directory)
        if self._closed:
            return report
        self._closed = True

        for p in self.artifacts:
            try:
                p.unlink(missing_ok=True)
                report.removed.append(p)
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", p, e)
                report.failed.append(p)

        try:
            shutil.rmtree(self.directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temporary directory %s: %s", self.directory, e)
            report.failed.append(self.directory)

        if self._on_cleanup:
            try:
                self._on_cleanup(report)
            except Exception:
                logger.exception("Cleanup hook raised")
        return report

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
