"""Per-file progress reporting for the source-tree walk.

The walker and transformer report each file as it moves through the
pipeline:

    Read -> Parsed -> Styled -> Done
    Read -> Skipped              (not a component)
    (any) -> Failed

BuildProgressDisplay renders these events as a live Rich table; NullCallback
discards them.
"""

import threading
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from rich.console import Console, Group
from rich.live import Live
from rich.table import Table
from rich.text import Text


class FilePhase(Enum):
    """Phase of a single file in the transform pipeline."""

    READ = "read"
    PARSED = "parsed"
    STYLED = "styled"
    SKIPPED = "skipped"
    DONE = "done"
    FAILED = "failed"


@runtime_checkable
class BuildProgressCallback(Protocol):
    """Receives per-file progress events from the walker and transformer."""

    def on_file(self, path: Path, phase: FilePhase, detail: str) -> None:
        """Called when a file (or skipped directory) changes phase.

        Args:
            path: File or directory path.
            phase: New phase.
            detail: Human-readable detail (e.g. component tag, error text).
        """
        ...


class NullCallback:
    """Discards all progress events."""

    def on_file(self, path: Path, phase: FilePhase, detail: str) -> None:
        pass


_PHASE_STYLES = {
    FilePhase.READ: ("Read", "dim"),
    FilePhase.PARSED: ("Parsed", "blue"),
    FilePhase.STYLED: ("Styled", "magenta"),
    FilePhase.SKIPPED: ("Skipped", "yellow"),
    FilePhase.DONE: ("Done", "green"),
    FilePhase.FAILED: ("Failed", "red bold"),
}


class BuildProgressDisplay:
    """Live Rich display of the transform pass.

    Shows the most recent files with their phase, followed by a summary of
    how many files are in each phase. Thread-safe; usable as a context
    manager around the build.

    Args:
        console: Rich Console to render to. If None, creates a new one.
        title: Header line (e.g. the source directory).
        max_rows: Number of recent files to keep on screen.
    """

    def __init__(self, console: Optional[Console] = None, title: str = "", max_rows: int = 12, refresh_per_second: int = 10) -> None:
        self._console = console if console is not None else Console()
        self._title = title
        self._max_rows = max_rows
        self._refresh_per_second = refresh_per_second
        self._phases: dict[Path, FilePhase] = {}
        self._details: dict[Path, str] = {}
        self._recent: list[Path] = []
        self._lock = threading.Lock()
        self._live: Optional[Live] = None

    def on_file(self, path: Path, phase: FilePhase, detail: str) -> None:
        with self._lock:
            self._phases[path] = phase
            self._details[path] = detail
            if path in self._recent:
                self._recent.remove(path)
            self._recent.append(path)
            del self._recent[: -self._max_rows]
        self.update()

    def counts(self) -> dict[FilePhase, int]:
        """Number of files currently in each phase."""
        with self._lock:
            result = {phase: 0 for phase in FilePhase}
            for phase in self._phases.values():
                result[phase] += 1
            return result

    def start(self) -> None:
        self._live = Live(
            self._render_display(),
            console=self._console,
            refresh_per_second=self._refresh_per_second,
            transient=False,
        )
        self._live.start()

    def stop(self) -> None:
        if self._live is not None:
            self._live.update(self._render_display())
            self._live.stop()
            self._live = None

    def update(self) -> None:
        if self._live is not None:
            self._live.update(self._render_display())

    def __enter__(self) -> "BuildProgressDisplay":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _render_display(self) -> Group:
        header = Text(f"\nCompiling {self._title}...\n", style="bold")
        return Group(header, self._render_table(), self._render_footer())

    def _render_table(self) -> Table:
        table = Table(show_header=False, show_edge=False, box=None, padding=(0, 1), expand=False)
        table.add_column("File", style="bold", no_wrap=True, min_width=32)
        table.add_column("Phase", no_wrap=True, min_width=10)
        table.add_column("Detail", no_wrap=True)

        with self._lock:
            for path in self._recent:
                label, style = _PHASE_STYLES[self._phases[path]]
                table.add_row(Text(path.name), Text(label, style=style), Text(self._details.get(path, ""), style="dim"))
        return table

    def _render_footer(self) -> Text:
        counts = self.counts()
        parts = [f"{sum(counts.values())} files"]
        for phase in (FilePhase.DONE, FilePhase.SKIPPED, FilePhase.FAILED):
            if counts[phase]:
                parts.append(f"{counts[phase]} {phase.value}")
        return Text(f"\n  {', '.join(parts)}", style="dim")
