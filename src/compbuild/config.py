"""
Build configuration.

This module defines:
- OutputFormat: The module formats the emitter can produce
- OutputTarget: One requested physical output location (modern/legacy dirs
  plus optional loader/index shortcut files)
- BuildConfig: Everything the compiler and emitter consume for one build
- load_config(): Reads a BuildConfig from an INI file

Example compbuild.ini:
    [build]
    src_dir = src
    dest_dir = dist
    namespace = mylib
    build_es5 = true

    [target:dist]
    modern_dir = dist/esm/es2017
    legacy_dir = dist/esm/es5
    loader_file = dist/loader/index.mjs.js
"""

import configparser
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from .errors import ConfigError


class OutputFormat(Enum):
    """Module format produced for an output destination."""

    MODERN = "es2017"
    LEGACY = "es5"


@dataclass(frozen=True)
class OutputTarget:
    """One physical output variant.

    Attributes:
        modern_dir: Destination for the modern (es2017) module build
        legacy_dir: Destination for the legacy (es5) module build
        loader_file: Shortcut file re-exporting the namespace entry point
        index_file: Shortcut file re-exporting the index entry point
    """

    modern_dir: Optional[Path] = None
    legacy_dir: Optional[Path] = None
    loader_file: Optional[Path] = None
    index_file: Optional[Path] = None

    def destination(self, fmt: OutputFormat) -> Optional[Path]:
        """Get the destination directory for a format, or None."""
        if fmt == OutputFormat.MODERN:
            return self.modern_dir
        return self.legacy_dir

    @property
    def shortcut_files(self) -> tuple[Path, ...]:
        return tuple(p for p in (self.loader_file, self.index_file) if p is not None)


@dataclass(frozen=True)
class BuildConfig:
    """Configuration for one build invocation.

    Attributes:
        src_dir: Root of the source tree to walk
        dest_dir: Directory receiving manifest.json
        cache_files: Memoize file records for the duration of the build
        build_es5: Also produce the legacy (es5) format
        is_dev: Development build (readable chunk names)
        namespace: Name of the main entry point (<namespace>.mjs.js)
        output_targets: Requested output variants
        webpack_build: Output is consumed by webpack, keep native dynamic import()
        max_open_files: Cap on concurrent file reads (None = unbounded)
        verbose: Enable verbose output
    """

    src_dir: Path
    dest_dir: Path
    cache_files: bool = True
    build_es5: bool = False
    is_dev: bool = False
    namespace: str = "app"
    output_targets: tuple[OutputTarget, ...] = field(default_factory=tuple)
    webpack_build: bool = False
    max_open_files: Optional[int] = None
    verbose: bool = False

    def validate(self) -> None:
        """Validate the configuration once, at build start.

        Raises:
            ConfigError: If any setting is unusable
        """
        if not self.src_dir.exists():
            raise ConfigError(f"Source directory not found: {self.src_dir}")
        if not self.src_dir.is_dir():
            raise ConfigError(f"Source path is not a directory: {self.src_dir}")
        if not self.namespace.strip():
            raise ConfigError("namespace must not be empty")
        if self.max_open_files is not None and self.max_open_files < 1:
            raise ConfigError(f"max_open_files must be positive, got {self.max_open_files}")

        for index, target in enumerate(self.output_targets):
            if target.modern_dir is None and target.legacy_dir is None:
                raise ConfigError(f"Output target #{index} declares no destination directory")
            if target.shortcut_files and target.modern_dir is None:
                raise ConfigError(f"Output target #{index} declares a shortcut file but no modern_dir")


_BUILD_SECTION = "build"
_TARGET_PREFIX = "target:"


def load_config(ini_path: Path) -> BuildConfig:
    """Load a BuildConfig from an INI file.

    Relative paths are resolved against the directory containing the file.
    Targets are read from [target:<name>] sections in file order.

    Args:
        ini_path: Path to the INI file

    Returns:
        BuildConfig (not yet validated)

    Raises:
        ConfigError: If the file is missing, malformed, or lacks required keys
    """
    if not ini_path.exists():
        raise ConfigError(f"Configuration file not found: {ini_path}")

    parser = configparser.ConfigParser(interpolation=configparser.ExtendedInterpolation())
    try:
        parser.read(ini_path, encoding="utf-8")
    except configparser.Error as e:
        raise ConfigError(f"Failed to parse {ini_path}: {e}") from e

    if not parser.has_section(_BUILD_SECTION):
        raise ConfigError(f"[{_BUILD_SECTION}] section missing in {ini_path}")

    base_dir = ini_path.parent.resolve()
    build = parser[_BUILD_SECTION]

    def _path(section: configparser.SectionProxy, key: str) -> Optional[Path]:
        value = section.get(key, fallback="").strip()
        if not value:
            return None
        return (base_dir / value).resolve()

    src_dir = _path(build, "src_dir")
    dest_dir = _path(build, "dest_dir")
    if src_dir is None or dest_dir is None:
        raise ConfigError(f"src_dir and dest_dir are required in [{_BUILD_SECTION}]")

    targets = []
    for section_name in parser.sections():
        if not section_name.startswith(_TARGET_PREFIX):
            continue
        section = parser[section_name]
        targets.append(
            OutputTarget(
                modern_dir=_path(section, "modern_dir"),
                legacy_dir=_path(section, "legacy_dir"),
                loader_file=_path(section, "loader_file"),
                index_file=_path(section, "index_file"),
            )
        )

    try:
        max_open = build.getint("max_open_files", fallback=None)
        return BuildConfig(
            src_dir=src_dir,
            dest_dir=dest_dir,
            cache_files=build.getboolean("cache_files", fallback=True),
            build_es5=build.getboolean("build_es5", fallback=False),
            is_dev=build.getboolean("is_dev", fallback=False),
            namespace=build.get("namespace", fallback="app").strip(),
            output_targets=tuple(targets),
            webpack_build=build.getboolean("webpack_build", fallback=False),
            max_open_files=max_open,
            verbose=build.getboolean("verbose", fallback=False),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid value in {ini_path}: {e}") from e
