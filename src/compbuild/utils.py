"""Path and file-writing helpers shared by the compiler and emitter."""

import asyncio
import logging
import os
import posixpath
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Convert a path to forward slashes and collapse redundant separators."""
    return posixpath.normpath(path.replace("\\", "/"))


def relative_import(path_from: Path, path_to: Path) -> str:
    """Compute an ES module import specifier from one file to another.

    The result is relative to the directory of path_from, always starts with
    "." and uses forward slashes, e.g. "./esm/es2017/app.mjs.js" or
    "../es5/app.mjs.js".

    Args:
        path_from: File containing the import statement
        path_to: File being imported

    Returns:
        Relative import specifier
    """
    relative_dir = os.path.relpath(path_to.parent, path_from.parent)
    relative_dir = normalize_path(relative_dir)
    if relative_dir == ".":
        prefix = "."
    elif relative_dir == ".." or relative_dir.startswith("../"):
        prefix = relative_dir
    else:
        prefix = f"./{relative_dir}"
    return f"{prefix}/{path_to.name}"


def write_text_atomic(path: Path, content: str) -> None:
    """Write a text file atomically (unique temp file + rename), creating parents.

    Concurrent writers of the same path each use their own temp file; the
    last rename wins.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(temp_name, 0o644)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


async def write_file(path: Path, content: str) -> None:
    """Write a text file without blocking the event loop."""
    await asyncio.to_thread(write_text_atomic, path, content)
    logger.debug(f"Wrote {path} ({len(content)} chars)")
