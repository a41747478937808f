"""Tests for shortcut re-export files."""

import re

from compbuild.config import BuildConfig, OutputTarget
from compbuild.emit.shortcuts import entry_directory, generate_shortcuts, shortcut_content, shortcut_entries
from conftest import run

_EXPORT_RE = re.compile(r"^export \* from '([^']+)';$")


def _config(tmp_path, **overrides):
    defaults = {"src_dir": tmp_path, "dest_dir": tmp_path / "dist", "namespace": "mylib"}
    defaults.update(overrides)
    return BuildConfig(**defaults)


def _resolve(shortcut):
    match = _EXPORT_RE.match(shortcut.read_text(encoding="utf-8"))
    assert match is not None
    return (shortcut.parent / match.group(1)).resolve()


class TestShortcutEntries:
    def test_modern_entry(self, tmp_path):
        target = OutputTarget(modern_dir=tmp_path / "esm", loader_file=tmp_path / "loader.mjs.js")
        assert shortcut_entries(_config(tmp_path), target) == [
            (tmp_path / "loader.mjs.js", tmp_path / "esm" / "mylib.mjs.js")
        ]

    def test_legacy_preferred_for_es5_builds(self, tmp_path):
        target = OutputTarget(modern_dir=tmp_path / "m", legacy_dir=tmp_path / "l")
        assert entry_directory(_config(tmp_path, build_es5=True), target) == tmp_path / "l"
        assert entry_directory(_config(tmp_path, build_es5=False), target) == tmp_path / "m"

    def test_index_entry(self, tmp_path):
        target = OutputTarget(modern_dir=tmp_path / "esm", index_file=tmp_path / "index.mjs.js")
        assert shortcut_entries(_config(tmp_path), target) == [
            (tmp_path / "index.mjs.js", tmp_path / "esm" / "index.mjs.js")
        ]

    def test_target_without_modern_dir_has_no_shortcuts(self, tmp_path):
        target = OutputTarget(legacy_dir=tmp_path / "l", loader_file=tmp_path / "loader.mjs.js")
        assert shortcut_entries(_config(tmp_path, build_es5=True), target) == []


def test_shortcut_content_format(tmp_path):
    content = shortcut_content(tmp_path / "loader.mjs.js", tmp_path / "esm" / "es2017" / "app.mjs.js")
    assert content == "export * from './esm/es2017/app.mjs.js';"


def test_generate_shortcuts_resolve_to_entries(tmp_path):
    targets = [
        OutputTarget(
            modern_dir=tmp_path / "dist" / "esm" / "es2017",
            legacy_dir=tmp_path / "dist" / "esm" / "es5",
            loader_file=tmp_path / "dist" / "loader" / "index.mjs.js",
            index_file=tmp_path / "dist" / "index.mjs.js",
        ),
        OutputTarget(modern_dir=tmp_path / "www" / "build", loader_file=tmp_path / "www" / "loader.mjs.js"),
    ]
    written = run(generate_shortcuts(_config(tmp_path, build_es5=True), targets))

    assert sorted(written) == sorted(
        [
            tmp_path / "dist" / "loader" / "index.mjs.js",
            tmp_path / "dist" / "index.mjs.js",
            tmp_path / "www" / "loader.mjs.js",
        ]
    )
    assert _resolve(tmp_path / "dist" / "loader" / "index.mjs.js") == (tmp_path / "dist" / "esm" / "es5" / "mylib.mjs.js").resolve()
    assert _resolve(tmp_path / "dist" / "index.mjs.js") == (tmp_path / "dist" / "esm" / "es5" / "index.mjs.js").resolve()
    assert _resolve(tmp_path / "www" / "loader.mjs.js") == (tmp_path / "www" / "build" / "mylib.mjs.js").resolve()


def test_shared_shortcut_file_points_at_first_target(tmp_path):
    loader = tmp_path / "loader.mjs.js"
    targets = [
        OutputTarget(modern_dir=tmp_path / "first", loader_file=loader),
        OutputTarget(modern_dir=tmp_path / "second", loader_file=loader),
    ]
    written = run(generate_shortcuts(_config(tmp_path), targets))

    assert written == [loader]
    assert _resolve(loader) == (tmp_path / "first" / "mylib.mjs.js").resolve()
