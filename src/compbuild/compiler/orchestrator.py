"""
Build orchestration for the component compiler.

Design:
    BuildContext is created once per build invocation and owns the file
    record cache; it is passed by reference to every component and is never
    shared between builds.

    BuildOrchestrator.compile() runs the transform pass over the whole source
    tree and only then writes manifest.json, so a failed pass never leaves a
    partial manifest behind.

    compile_components() is the top-level entry point: it validates the
    configuration, runs the orchestrator and reports the outcome through a
    BuildLogger. Errors marked fatal propagate unchanged; anything else is
    wrapped with the build-run context.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..build_logger import BuildLogger
from ..collaborators import Parser, StyleProcessor
from ..config import BuildConfig
from ..errors import is_fatal_error
from ..models import FileRecord, Manifest
from ..output import TimedLogger, set_verbose
from ..progress import BuildProgressCallback, NullCallback
from .file_cache import FileRecordCache
from .manifest import build_manifest, write_manifest
from .transformer import FileTransformer
from .walker import SourceTreeWalker

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """State scoped to one build invocation.

    Attributes:
        config: Validated build configuration
        cache: File record cache for this build
    """

    config: BuildConfig
    cache: FileRecordCache = field(init=False)

    def __post_init__(self) -> None:
        self.cache = FileRecordCache(
            cache_files=self.config.cache_files,
            max_open_files=self.config.max_open_files,
        )

    @property
    def files(self) -> list[FileRecord]:
        return self.cache.records()


@dataclass
class BuildResult:
    """Result of a compile run."""

    success: bool
    manifest_path: Optional[Path]
    manifest: Manifest
    files_transformed: int
    build_time: float
    message: str


class BuildOrchestrator:
    """Drives the source tree walk and writes the component manifest.

    Args:
        config: Build configuration
        parser: Component parser
        style_processor: Style processor (defaults to a no-op)
        callback: Progress callback
        context: Existing build context (a fresh one is created if None)
    """

    def __init__(
        self,
        config: BuildConfig,
        parser: Parser,
        style_processor: Optional[StyleProcessor] = None,
        callback: Optional[BuildProgressCallback] = None,
        context: Optional[BuildContext] = None,
    ):
        self.config = config
        self.context = context if context is not None else BuildContext(config)
        self.callback = callback if callback is not None else NullCallback()
        self.transformer = FileTransformer(
            config,
            self.context.cache,
            parser,
            style_processor=style_processor,
            callback=self.callback,
        )
        self.walker = SourceTreeWalker(self.transformer, callback=self.callback)

    async def transform(self) -> list[FileRecord]:
        """Run the transform pass over src_dir.

        Returns every cached record, or the records seen by the walk when
        caching is disabled.
        """
        with TimedLogger(f"Transforming {self.config.src_dir}", phase=(1, 2), verbose_only=True):
            await self.walker.walk(self.config.src_dir)
        if self.config.cache_files:
            return self.context.files
        return list(self.walker.records)

    async def compile(self) -> BuildResult:
        """Transform the source tree, then write manifest.json.

        Returns:
            BuildResult describing the run

        Raises:
            TransformError: If any file fails to transform
            OSError: If the manifest cannot be written
        """
        start_time = time.time()
        records = await self.transform()

        manifest = build_manifest(records)
        with TimedLogger("Writing manifest", phase=(2, 2), verbose_only=True) as timed:
            manifest_path = await write_manifest(self.config.dest_dir, manifest)
            timed.detail(f"Components: {len(manifest.components)}")

        build_time = time.time() - start_time
        return BuildResult(
            success=True,
            manifest_path=manifest_path,
            manifest=manifest,
            files_transformed=self.walker.files_dispatched,
            build_time=build_time,
            message=f"Compiled {len(manifest.components)} components from {len(records)} files",
        )


async def compile_components(
    config: BuildConfig,
    parser: Parser,
    style_processor: Optional[StyleProcessor] = None,
    callback: Optional[BuildProgressCallback] = None,
) -> BuildResult:
    """Validate the configuration and run a full compile.

    Raises:
        ConfigError: Passed through unchanged (fatal)
        BuildFailedError: Any other failure, wrapped with build context
    """
    set_verbose(config.verbose)
    build_logger = BuildLogger("compile", src_dir=config.src_dir)
    build_logger.start()
    try:
        config.validate()
        orchestrator = BuildOrchestrator(config, parser, style_processor=style_processor, callback=callback)
        result = await orchestrator.compile()
    except Exception as e:
        if is_fatal_error(e):
            raise
        raise build_logger.fail(e) from e

    build_logger.finish()
    logger.info(result.message)
    return result


def compile_components_sync(
    config: BuildConfig,
    parser: Parser,
    style_processor: Optional[StyleProcessor] = None,
    callback: Optional[BuildProgressCallback] = None,
) -> BuildResult:
    """Run compile_components() on a fresh event loop."""
    return asyncio.run(compile_components(config, parser, style_processor=style_processor, callback=callback))
