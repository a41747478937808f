"""
Timestamped user-facing output for compbuild.

Every line is prefixed with the time elapsed since the build started, in
MM:SS.cc format, so slow phases stand out:

    00:00.02 compile started
    00:00.03 [1/2] Transforming src...
    00:00.41       Components: 12
    00:00.44 [2/2] Writing manifest...

Usage:
    from compbuild.output import log, log_phase, log_detail, init_timer

    init_timer()
    log_phase(1, 2, "Transforming src...")
    log_detail("Components: 12")
"""

import sys
import time
from types import TracebackType
from typing import Optional, TextIO

_start_time: Optional[float] = None
_output_stream: TextIO = sys.stdout
_verbose: bool = True
_output_file: Optional[TextIO] = None


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Set the reference time for all timestamps.

    Called automatically on first log if not called explicitly.

    Args:
        output_stream: Optional output stream (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """Enable or disable verbose-only messages."""
    global _verbose
    _verbose = verbose


def set_output_file(output_file: Optional[TextIO]) -> None:
    """Mirror all output into a file (None disables mirroring)."""
    global _output_file
    _output_file = output_file


def get_elapsed() -> float:
    """Seconds since the timer was initialized."""
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore[operator]


def format_timestamp() -> str:
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    line = f"{format_timestamp()} {message}\n"
    _output_stream.write(line)
    _output_stream.flush()
    if _output_file is not None:
        _output_file.write(line)
        _output_file.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """Log a message with timestamp."""
    if verbose_only and not _verbose:
        return
    _print(message)


def log_phase(phase: int, total: int, message: str, verbose_only: bool = False) -> None:
    """Log a build phase message as "[N/M] message"."""
    if verbose_only and not _verbose:
        return
    _print(f"[{phase}/{total}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """Log an indented detail line."""
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_file(kind: str, filename: str, cached: bool = False, verbose_only: bool = True) -> None:
    """
    Log a per-file message.

    Format: [kind] filename (cached)

    Args:
        kind: What happened to the file (e.g. 'component', 'shortcut', 'chunk')
        filename: Name of the file
        cached: If True, append "(cached)"
        verbose_only: If True, only print in verbose mode
    """
    if verbose_only and not _verbose:
        return
    suffix = " (cached)" if cached else ""
    _print(f"      [{kind}] {filename}{suffix}")


def log_build_complete(build_time: float, verbose_only: bool = False) -> None:
    """Log the total build time."""
    if verbose_only and not _verbose:
        return
    _print(f"Build finished in {build_time:.2f}s")


def log_error(message: str) -> None:
    _print(f"ERROR: {message}")


def log_warning(message: str) -> None:
    _print(f"WARNING: {message}")


class TimedLogger:
    """
    Context manager that logs an operation and its duration.

    Usage:
        with TimedLogger("Emitting modules", phase=(2, 2)) as timed:
            timed.detail("3 destinations")
    """

    def __init__(self, operation: str, phase: Optional[tuple[int, int]] = None, verbose_only: bool = False):
        self.operation = operation
        self.phase = phase
        self.verbose_only = verbose_only
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        if self.phase:
            log_phase(self.phase[0], self.phase[1], f"{self.operation}...", self.verbose_only)
        else:
            log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb
        if exc_type is None:
            log_detail(f"Done ({time.time() - self.start_time:.2f}s)", verbose_only=self.verbose_only)

    def detail(self, message: str) -> None:
        log_detail(message, verbose_only=self.verbose_only)
