"""Format selection and per-format render options."""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..config import BuildConfig, OutputFormat, OutputTarget

ENTRY_FILE_NAMES = "[name].mjs.js"
DEV_CHUNK_FILE_NAMES = "[name]-[hash].js"
PROD_CHUNK_FILE_NAMES = "[hash].js"

# Loader used for lazy import() calls unless the output is consumed by webpack
DYNAMIC_IMPORT_FUNCTION = "__stencil_import"

_HASH_LENGTH = 8


@dataclass(frozen=True)
class FormatOptions:
    """Options handed to the Renderer for one output format.

    Attributes:
        output_format: MODERN or LEGACY
        format: Module system of the rendered code (always "esm")
        entry_file_names: File name pattern for entry chunks
        chunk_file_names: File name pattern for lazy chunks
        dynamic_import_function: Replacement for native import(), or None
        target: Language level of the rendered code
    """

    output_format: OutputFormat
    format: str
    entry_file_names: str
    chunk_file_names: str
    dynamic_import_function: Optional[str]
    target: str

    def entry_file_name(self, name: str) -> str:
        return self.entry_file_names.replace("[name]", name)

    def chunk_file_name(self, name: str, code: str) -> str:
        return self.chunk_file_names.replace("[name]", name).replace("[hash]", content_hash(code))


def content_hash(code: str) -> str:
    """Short content hash used in chunk file names."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()[:_HASH_LENGTH]


def format_options(config: BuildConfig, output_format: OutputFormat) -> FormatOptions:
    """Build the render options for one format."""
    return FormatOptions(
        output_format=output_format,
        format="esm",
        entry_file_names=ENTRY_FILE_NAMES,
        chunk_file_names=DEV_CHUNK_FILE_NAMES if config.is_dev else PROD_CHUNK_FILE_NAMES,
        dynamic_import_function=None if config.webpack_build else DYNAMIC_IMPORT_FUNCTION,
        target=output_format.value,
    )


def required_formats(config: BuildConfig, targets: Iterable[OutputTarget]) -> list[OutputFormat]:
    """Formats that must be rendered for the given targets.

    MODERN is required when any target has a modern destination. LEGACY is
    required only when build_es5 is set and some target has a legacy
    destination.
    """
    targets = list(targets)
    formats = []
    if any(t.modern_dir is not None for t in targets):
        formats.append(OutputFormat.MODERN)
    if config.build_es5 and any(t.legacy_dir is not None for t in targets):
        formats.append(OutputFormat.LEGACY)
    return formats


def destinations(targets: Iterable[OutputTarget], output_format: OutputFormat) -> list[Path]:
    """Distinct destination directories for a format, in target order."""
    result = []
    for target in targets:
        dest = target.destination(output_format)
        if dest is not None and dest not in result:
            result.append(dest)
    return result
