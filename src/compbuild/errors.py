"""
Build error hierarchy.

Errors fall into four groups:
- Soft traversal faults (unreadable directories) are plain OSErrors that the
  walker logs and swallows; they never reach this hierarchy.
- TransformError: a Parser or StyleProcessor failed on one file.
- Fatal errors (is_fatal = True, e.g. ConfigError) pass through the top-level
  build wrapper unchanged so callers can tell them apart.
- Anything else is wrapped into BuildFailedError with build-run context.
"""

from pathlib import Path
from typing import Optional


class BuildError(Exception):
    """Base class for all compbuild errors."""

    is_fatal = False


class ConfigError(BuildError):
    """Raised when the build configuration is invalid."""

    is_fatal = True


class TransformError(BuildError):
    """Raised when a collaborator fails while transforming a single file."""

    def __init__(self, file_path: Path, message: str):
        self.file_path = file_path
        super().__init__(f"{file_path}: {message}")


class EmitError(BuildError):
    """Raised when the module emitter cannot render an output format."""

    pass


class BuildFailedError(BuildError):
    """Generic build failure wrapped with the context of the build run.

    Attributes:
        context: Name of the build run (e.g. "compile")
        src_dir: Source directory of the run, if known
        elapsed: Seconds between build start and failure
    """

    def __init__(self, context: str, message: str, src_dir: Optional[Path] = None, elapsed: float = 0.0):
        self.context = context
        self.src_dir = src_dir
        self.elapsed = elapsed
        super().__init__(f"[{context}] {message}")


def is_fatal_error(err: BaseException) -> bool:
    """Return True if the error is marked fatal and must not be wrapped."""
    return bool(getattr(err, "is_fatal", False))
