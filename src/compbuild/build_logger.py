"""Build-run logger: reports completion or wraps failures with run context."""

import logging
import time
from pathlib import Path
from typing import Optional

from .errors import BuildFailedError
from .output import log, log_build_complete, log_error

logger = logging.getLogger(__name__)


class BuildLogger:
    """Tracks one named build run (e.g. "compile") from start to finish.

    Args:
        context: Name of the build run, included in wrapped errors
        src_dir: Source directory of the run, for error context
    """

    def __init__(self, context: str, src_dir: Optional[Path] = None):
        self.context = context
        self.src_dir = src_dir
        self.start_time = time.time()
        self.finished = False

    @property
    def elapsed(self) -> float:
        return time.time() - self.start_time

    def start(self) -> None:
        self.start_time = time.time()
        logger.info(f"{self.context} started (src={self.src_dir})")
        log(f"{self.context} started")

    def finish(self) -> None:
        """Report successful completion of the run."""
        self.finished = True
        elapsed = self.elapsed
        logger.info(f"{self.context} finished in {elapsed:.2f}s")
        log_build_complete(elapsed)

    def fail(self, err: BaseException) -> BuildFailedError:
        """Report a failure and return it wrapped with the run's context.

        The caller raises the returned error, chaining the original.
        """
        elapsed = self.elapsed
        message = f"{type(err).__name__}: {err}"
        logger.error(f"{self.context} failed after {elapsed:.2f}s: {message}")
        log_error(f"{self.context} failed: {message}")
        return BuildFailedError(self.context, message, src_dir=self.src_dir, elapsed=elapsed)
