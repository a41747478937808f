"""
Per-build file record cache.

Maps an absolute file path to a single FileRecord for the duration of one
build invocation. There is no eviction and nothing is persisted; a new
cache is created for every build.

Concurrent first access to the same path is coalesced: the first request
stores an in-flight task for the path and later requests await that same
task, so each path is read at most once while caching is enabled. With
caching disabled every request performs its own read.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from ..models import FileRecord

logger = logging.getLogger(__name__)


def cache_key(file_path: Path | str) -> Path:
    """Normalize a path into the absolute form used as the cache key."""
    return Path(os.path.abspath(file_path))


def read_source(file_path: Path) -> str:
    """Read a source file as UTF-8, replacing undecodable bytes."""
    return file_path.read_text(encoding="utf-8", errors="replace")


class FileRecordCache:
    """Get-or-create store of FileRecords keyed by absolute path.

    Args:
        cache_files: Memoize records (False forces a fresh read per request)
        max_open_files: Cap on concurrent file reads (None = unbounded)
    """

    def __init__(self, cache_files: bool = True, max_open_files: Optional[int] = None):
        self.cache_files = cache_files
        self.max_open_files = max_open_files
        self.read_count = 0
        self._records: dict[Path, FileRecord] = {}
        self._in_flight: dict[Path, "asyncio.Task[FileRecord]"] = {}
        self._semaphore: Optional[asyncio.Semaphore] = None

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, file_path: object) -> bool:
        if not isinstance(file_path, (str, Path)):
            return False
        return cache_key(file_path) in self._records

    def records(self) -> list[FileRecord]:
        """All cached records, in insertion order."""
        return list(self._records.values())

    def get(self, file_path: Path | str) -> Optional[FileRecord]:
        """Return the cached record for a path without reading, or None."""
        return self._records.get(cache_key(file_path))

    async def get_file(self, file_path: Path | str) -> FileRecord:
        """Return the record for a path, reading the file if needed.

        Args:
            file_path: Path to the file

        Returns:
            FileRecord for the path

        Raises:
            OSError: If the file cannot be read
        """
        key = cache_key(file_path)
        if not self.cache_files:
            return await self._read_record(key)

        record = self._records.get(key)
        if record is not None:
            logger.debug(f"Cache hit: {key}")
            return record

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._read_and_store(key))
            self._in_flight[key] = task
        else:
            logger.debug(f"Awaiting in-flight read: {key}")
        return await task

    def get_file_sync(self, file_path: Path | str) -> FileRecord:
        """Blocking variant of get_file() for callers outside the event loop."""
        key = cache_key(file_path)
        if self.cache_files:
            record = self._records.get(key)
            if record is not None:
                return record

        src_text = read_source(key)
        self.read_count += 1
        record = FileRecord.create(key, src_text)
        if self.cache_files:
            self._records[key] = record
        return record

    async def _read_and_store(self, key: Path) -> FileRecord:
        try:
            record = await self._read_record(key)
            self._records[key] = record
            return record
        finally:
            self._in_flight.pop(key, None)

    async def _read_record(self, key: Path) -> FileRecord:
        if self.max_open_files is None:
            src_text = await asyncio.to_thread(read_source, key)
        else:
            if self._semaphore is None:
                self._semaphore = asyncio.Semaphore(self.max_open_files)
            async with self._semaphore:
                src_text = await asyncio.to_thread(read_source, key)

        self.read_count += 1
        logger.debug(f"Read {key} ({len(src_text)} chars)")
        return FileRecord.create(key, src_text)
