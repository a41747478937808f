"""compbuild - cache-aware component build pipeline.

Public API:
    compile_components: Validate config, transform the source tree, write manifest.json.
    BuildOrchestrator: Lower-level driver of the transform pass and manifest write.
    ModuleEmitter: Renders a module graph into modern/legacy outputs, lazy chunks and shortcuts.
"""

from .build_logger import BuildLogger
from .collaborators import Bundler, NullStyleProcessor, Parser, Renderer, StyleProcessor
from .compiler import (
    BuildContext,
    BuildOrchestrator,
    BuildResult,
    FileRecordCache,
    FileTransformer,
    SourceTreeWalker,
    compile_components,
    compile_components_sync,
)
from .config import BuildConfig, OutputFormat, OutputTarget, load_config
from .emit import EmitResult, FormatOptions, ModuleEmitter
from .errors import BuildError, BuildFailedError, ConfigError, EmitError, TransformError
from .models import ComponentMeta, FileRecord, Manifest, RenderedChunk, RenderedOutput
from .progress import BuildProgressCallback, BuildProgressDisplay, FilePhase, NullCallback

__version__ = "0.1.0"

__all__ = [
    "BuildConfig",
    "BuildContext",
    "BuildError",
    "BuildFailedError",
    "BuildLogger",
    "BuildOrchestrator",
    "BuildProgressCallback",
    "BuildProgressDisplay",
    "BuildResult",
    "Bundler",
    "ComponentMeta",
    "ConfigError",
    "EmitError",
    "EmitResult",
    "FilePhase",
    "FileRecord",
    "FileRecordCache",
    "FileTransformer",
    "FormatOptions",
    "Manifest",
    "ModuleEmitter",
    "NullCallback",
    "NullStyleProcessor",
    "OutputFormat",
    "OutputTarget",
    "Parser",
    "RenderedChunk",
    "RenderedOutput",
    "Renderer",
    "SourceTreeWalker",
    "StyleProcessor",
    "TransformError",
    "compile_components",
    "compile_components_sync",
    "load_config",
]
