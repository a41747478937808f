"""
Writes rendered modules and their lazy chunk splits into one destination.

Rendered code refers to lazy chunks by logical name with the placeholder
__CHUNK_URL__(<name>). Each destination gets its own copy of every chunk,
and the placeholders are resolved against the files actually written there,
so every destination's imports are correct for its own location.
"""

import asyncio
import logging
import re
from pathlib import Path

from ..errors import EmitError
from ..models import RenderedChunk, RenderedOutput
from ..output import log_file
from ..utils import relative_import, write_file
from .formats import FormatOptions

logger = logging.getLogger(__name__)

CHUNK_URL_PATTERN = re.compile(r"__CHUNK_URL__\(\s*([\w.\-]+)\s*\)")


def chunk_paths(dest_dir: Path, output: RenderedOutput, options: FormatOptions) -> dict[str, Path]:
    """Map each logical chunk name to the file it is written to in dest_dir."""
    paths: dict[str, Path] = {}
    for chunk in output.chunks:
        if chunk.is_entry:
            paths[chunk.name] = dest_dir / options.entry_file_name(chunk.name)
        else:
            paths[chunk.name] = dest_dir / options.chunk_file_name(chunk.name, chunk.code)
    return paths


def resolve_chunk_urls(code: str, importer: Path, paths: dict[str, Path]) -> str:
    """Replace __CHUNK_URL__(name) placeholders with relative import paths.

    Raises:
        EmitError: If a placeholder names an unknown chunk
    """

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        target = paths.get(name)
        if target is None:
            raise EmitError(f"{importer.name} references unknown chunk '{name}'")
        return relative_import(importer, target)

    return CHUNK_URL_PATTERN.sub(_replace, code)


async def _write_chunks(chunks: list[RenderedChunk], paths: dict[str, Path], kind: str) -> list[Path]:
    async def _write(chunk: RenderedChunk, path: Path) -> Path:
        await write_file(path, resolve_chunk_urls(chunk.code, path, paths))
        log_file(kind, path.name)
        return path

    # Chunks with identical code share one hashed file name
    unique: dict[Path, RenderedChunk] = {}
    for chunk in chunks:
        unique.setdefault(paths[chunk.name], chunk)

    results = await asyncio.gather(*(_write(chunk, path) for path, chunk in unique.items()), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


async def write_entry_modules(dest_dir: Path, output: RenderedOutput, options: FormatOptions) -> list[Path]:
    """Write the entry modules (<name>.mjs.js) of a rendered output."""
    paths = chunk_paths(dest_dir, output, options)
    written = await _write_chunks(output.entries, paths, "entry")
    logger.debug(f"Wrote {len(written)} {options.target} entry modules to {dest_dir}")
    return written


async def write_lazy_modules(dest_dir: Path, output: RenderedOutput, options: FormatOptions) -> list[Path]:
    """Write one file per lazy chunk of a rendered output."""
    paths = chunk_paths(dest_dir, output, options)
    written = await _write_chunks(output.lazy_chunks, paths, "chunk")
    logger.debug(f"Wrote {len(written)} {options.target} lazy chunks to {dest_dir}")
    return written
