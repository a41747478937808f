"""Per-file transform policy.

A file is handed to the Parser only when it is a source file containing
component syntax. When the Parser attaches component metadata, the
StyleProcessor runs next; otherwise the file is treated as ordinary code.
"""

import logging
from pathlib import Path
from typing import Optional

from ..collaborators import NullStyleProcessor, Parser, StyleProcessor, maybe_await
from ..config import BuildConfig
from ..errors import TransformError, is_fatal_error
from ..models import FileRecord
from ..output import log_file
from ..progress import BuildProgressCallback, FilePhase, NullCallback
from .file_cache import FileRecordCache

logger = logging.getLogger(__name__)


class FileTransformer:
    """Runs the Parser and StyleProcessor over eligible file records.

    Args:
        config: Build configuration (passed through to collaborators)
        cache: File record cache for the current build
        parser: Component parser
        style_processor: Style processor (defaults to a no-op)
        callback: Progress callback
    """

    def __init__(
        self,
        config: BuildConfig,
        cache: FileRecordCache,
        parser: Parser,
        style_processor: Optional[StyleProcessor] = None,
        callback: Optional[BuildProgressCallback] = None,
    ):
        self.config = config
        self.cache = cache
        self.parser = parser
        self.style_processor = style_processor if style_processor is not None else NullStyleProcessor()
        self.callback = callback if callback is not None else NullCallback()

    async def transform_file(self, file_path: Path) -> FileRecord:
        """Fetch a file through the cache, then transform it."""
        record = await self.cache.get_file(file_path)
        self.callback.on_file(record.file_path, FilePhase.READ, "")
        return await self.transform(record)

    async def transform(self, record: FileRecord) -> FileRecord:
        """Transform one record in place.

        Args:
            record: File record to transform

        Returns:
            The same record

        Raises:
            TransformError: If the Parser or StyleProcessor fails
        """
        if not record.is_source_file or not record.is_transformable:
            self.callback.on_file(record.file_path, FilePhase.SKIPPED, "no component syntax")
            return record

        if record.cmp_meta is not None:
            # Already transformed earlier in this build
            log_file("component", record.file_name, cached=True)
            return record

        try:
            await maybe_await(self.parser.parse(record, self.config))
        except Exception as e:
            self.callback.on_file(record.file_path, FilePhase.FAILED, str(e))
            if isinstance(e, TransformError) or is_fatal_error(e):
                raise
            raise TransformError(record.file_path, f"parse failed: {e}") from e

        if record.cmp_meta is None:
            logger.debug(f"No component found in {record.file_path}")
            self.callback.on_file(record.file_path, FilePhase.SKIPPED, "not a component")
            return record

        self.callback.on_file(record.file_path, FilePhase.PARSED, record.cmp_meta.tag_name)

        try:
            await self.style_processor.process(record, self.config)
        except Exception as e:
            self.callback.on_file(record.file_path, FilePhase.FAILED, str(e))
            if isinstance(e, TransformError) or is_fatal_error(e):
                raise
            raise TransformError(record.file_path, f"style processing failed: {e}") from e

        self.callback.on_file(record.file_path, FilePhase.STYLED, record.cmp_meta.tag_name)
        self.callback.on_file(record.file_path, FilePhase.DONE, record.cmp_meta.tag_name)
        logger.debug(f"Transformed component <{record.cmp_meta.tag_name}> from {record.file_path}")
        log_file("component", record.file_name)
        return record
