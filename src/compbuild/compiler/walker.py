"""
Concurrent source tree walker.

Recursively enumerates a source directory and dispatches every source file
to the FileTransformer. All entries of one directory are dispatched together
and the directory is done once every child has settled; there is no
ordering guarantee between siblings.

An unreadable directory is a soft failure: it is logged, its subtree yields
no files and the rest of the walk continues. A failing file transform is
not soft: it is raised once the sibling tasks of its directory settle.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from ..models import FileRecord, is_source_file
from ..output import log_warning
from ..progress import BuildProgressCallback, FilePhase, NullCallback
from .transformer import FileTransformer

logger = logging.getLogger(__name__)

# Dependency directories are never walked (matched by name)
DEPENDENCY_DIRS = frozenset({"node_modules"})


class SourceTreeWalker:
    """Walks a source tree once, transforming every source file.

    Args:
        transformer: Transformer receiving each discovered source file
        callback: Progress callback (skipped directories are reported here)
        excluded_dirs: Directory names whose subtrees are skipped
    """

    def __init__(
        self,
        transformer: FileTransformer,
        callback: Optional[BuildProgressCallback] = None,
        excluded_dirs: Iterable[str] = DEPENDENCY_DIRS,
    ):
        self.transformer = transformer
        self.callback = callback if callback is not None else NullCallback()
        self.excluded_dirs = frozenset(excluded_dirs)
        self.files_dispatched = 0
        self.skipped_dirs: list[Path] = []
        self.records: list[FileRecord] = []

    async def walk(self, root_dir: Path) -> None:
        """Walk root_dir to completion.

        Raises:
            TransformError: If any file transform fails (after siblings settle)
        """
        await self._walk_directory(Path(root_dir))

    def is_valid_path(self, path: Path) -> bool:
        return path.name not in self.excluded_dirs

    def _read_dir(self, directory: Path) -> list[tuple[Path, bool]]:
        """List (path, is_dir) pairs for a directory. Runs in a worker thread."""
        with os.scandir(directory) as it:
            return [(Path(entry.path), entry.is_dir()) for entry in it]

    async def _walk_directory(self, directory: Path) -> None:
        try:
            entries = await asyncio.to_thread(self._read_dir, directory)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            log_warning(f"Skipping unreadable directory {directory}")
            self.skipped_dirs.append(directory)
            self.callback.on_file(directory, FilePhase.SKIPPED, f"unreadable: {e}")
            return

        pending = []
        for path, is_dir in entries:
            if not self.is_valid_path(path):
                logger.debug(f"Skipping dependency directory {path}")
                continue
            if is_dir:
                pending.append(self._walk_directory(path))
            elif is_source_file(path):
                self.files_dispatched += 1
                pending.append(self.transformer.transform_file(path))

        results = await asyncio.gather(*pending, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
            if isinstance(result, FileRecord):
                self.records.append(result)
