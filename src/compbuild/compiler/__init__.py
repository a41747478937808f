"""Source tree transform pass and manifest generation."""

from .file_cache import FileRecordCache
from .manifest import MANIFEST_FILENAME, build_manifest, read_manifest, write_manifest
from .orchestrator import BuildContext, BuildOrchestrator, BuildResult, compile_components, compile_components_sync
from .transformer import FileTransformer
from .walker import DEPENDENCY_DIRS, SourceTreeWalker

__all__ = [
    "DEPENDENCY_DIRS",
    "MANIFEST_FILENAME",
    "BuildContext",
    "BuildOrchestrator",
    "BuildResult",
    "FileRecordCache",
    "FileTransformer",
    "SourceTreeWalker",
    "build_manifest",
    "compile_components",
    "compile_components_sync",
    "read_manifest",
    "write_manifest",
]
