"""Component manifest generation."""

import json
import logging
from pathlib import Path
from typing import Iterable

from ..models import FileRecord, Manifest
from ..utils import write_file

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


def build_manifest(records: Iterable[FileRecord]) -> Manifest:
    """Collect the component descriptor of every record that has one."""
    return Manifest.from_records(list(records))


def encode_manifest(manifest: Manifest) -> str:
    """Serialize a manifest as 2-space indented JSON."""
    return json.dumps(manifest.to_dict(), indent=2)


async def write_manifest(dest_dir: Path, manifest: Manifest) -> Path:
    """Write <dest_dir>/manifest.json, creating dest_dir if needed.

    Returns:
        Path of the written manifest
    """
    manifest_path = dest_dir / MANIFEST_FILENAME
    await write_file(manifest_path, encode_manifest(manifest))
    logger.info(f"Wrote manifest with {len(manifest.components)} components to {manifest_path}")
    return manifest_path


def read_manifest(manifest_path: Path) -> Manifest:
    with open(manifest_path, "r", encoding="utf-8") as f:
        return Manifest.from_dict(json.load(f))
