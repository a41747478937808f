"""Shortcut files: stable import paths re-exporting a target's real entry point."""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional

from ..config import BuildConfig, OutputTarget
from ..output import log_file
from ..utils import relative_import, write_file
from .formats import ENTRY_FILE_NAMES

logger = logging.getLogger(__name__)

INDEX_ENTRY_NAME = "index"


def shortcut_content(shortcut_file: Path, entry_point: Path) -> str:
    """Re-export statement pointing from shortcut_file to entry_point."""
    return f"export * from '{relative_import(shortcut_file, entry_point)}';"


def entry_directory(config: BuildConfig, target: OutputTarget) -> Optional[Path]:
    """Directory holding the entry files a target's shortcuts point at.

    The legacy directory wins when build_es5 is set and the target has one.
    """
    if config.build_es5 and target.legacy_dir is not None:
        return target.legacy_dir
    return target.modern_dir


def shortcut_entries(config: BuildConfig, target: OutputTarget) -> list[tuple[Path, Path]]:
    """(shortcut file, entry point) pairs declared by one target."""
    if target.modern_dir is None:
        return []
    base_dir = entry_directory(config, target)
    pairs = []
    if target.loader_file is not None:
        pairs.append((target.loader_file, base_dir / ENTRY_FILE_NAMES.replace("[name]", config.namespace)))
    if target.index_file is not None:
        pairs.append((target.index_file, base_dir / ENTRY_FILE_NAMES.replace("[name]", INDEX_ENTRY_NAME)))
    return pairs


async def generate_shortcuts(config: BuildConfig, targets: Iterable[OutputTarget]) -> list[Path]:
    """Write every shortcut file declared by the targets, concurrently.

    A shortcut file shared by several targets is written once, pointing at
    the entry of the first target that declares it.

    Returns:
        Paths of the written shortcut files
    """
    shortcuts: dict[Path, Path] = {}
    for target in targets:
        for shortcut_file, entry_point in shortcut_entries(config, target):
            existing = shortcuts.setdefault(shortcut_file, entry_point)
            if existing != entry_point:
                logger.warning(f"Shortcut {shortcut_file} already points at {existing}, ignoring {entry_point}")

    async def _write(shortcut_file: Path, entry_point: Path) -> Path:
        await write_file(shortcut_file, shortcut_content(shortcut_file, entry_point))
        log_file("shortcut", shortcut_file.name)
        logger.debug(f"Shortcut {shortcut_file} -> {entry_point}")
        return shortcut_file

    results = await asyncio.gather(*(_write(s, e) for s, e in shortcuts.items()), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
