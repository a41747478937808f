"""Unit tests for per-file progress reporting."""

import io
from pathlib import Path

from rich.console import Console

from compbuild.progress import BuildProgressCallback, BuildProgressDisplay, FilePhase, NullCallback


class TestFilePhase:
    def test_phase_values(self):
        assert FilePhase("read") == FilePhase.READ
        assert FilePhase.DONE.value == "done"
        assert len(FilePhase) == 6


class TestCallbacks:
    def test_null_callback_satisfies_protocol(self):
        callback = NullCallback()
        assert isinstance(callback, BuildProgressCallback)
        callback.on_file(Path("a.ts"), FilePhase.READ, "")

    def test_display_satisfies_protocol(self):
        assert isinstance(BuildProgressDisplay(console=Console(file=io.StringIO())), BuildProgressCallback)


class TestBuildProgressDisplay:
    """Tests for the Rich progress display."""

    def _display(self, **kwargs):
        console = Console(file=io.StringIO(), width=120)
        return BuildProgressDisplay(console=console, title="src", **kwargs), console

    def test_counts_latest_phase_per_file(self):
        display, _ = self._display()
        display.on_file(Path("/src/a.ts"), FilePhase.READ, "")
        display.on_file(Path("/src/a.ts"), FilePhase.DONE, "x-a")
        display.on_file(Path("/src/b.ts"), FilePhase.SKIPPED, "not a component")

        counts = display.counts()
        assert counts[FilePhase.DONE] == 1
        assert counts[FilePhase.SKIPPED] == 1
        assert counts[FilePhase.READ] == 0

    def test_keeps_only_recent_rows(self):
        display, _ = self._display(max_rows=2)
        for name in ("a.ts", "b.ts", "c.ts"):
            display.on_file(Path("/src") / name, FilePhase.DONE, "")
        assert sum(display.counts().values()) == 3
        assert [p.name for p in display._recent] == ["b.ts", "c.ts"]

    def test_renders_final_state_on_stop(self):
        display, console = self._display()
        with display:
            display.on_file(Path("/src/my-button.tsx"), FilePhase.DONE, "my-button")
        text = console.file.getvalue()
        assert "Compiling src" in text
        assert "my-button.tsx" in text
