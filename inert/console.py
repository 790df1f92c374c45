"""Leveled console output that cooperates with a progress spinner."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol, TextIO, runtime_checkable
import sys


@runtime_checkable
class Spinner(Protocol):
    """Minimal progress indicator interface the console pauses around output."""

    text: str

    def start(self) -> object:
        ...

    def stop(self) -> object:
        ...


class Console:
    """Console output handler with configurable log level.

    Levels: none < error < warn < info < debug
    Errors and warnings go to stderr, everything else to stdout.
    """

    LEVELS = {
        "none": 0,
        "error": 1,
        "warn": 2,
        "info": 3,
        "debug": 4,
    }

    def __init__(
        self,
        level: str = "info",
        spinner: Spinner | None = None,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        if level not in self.LEVELS:
            raise ValueError(f"Unknown log level '{level}'. Expected one of: {', '.join(self.LEVELS)}")
        self.level_name = level
        self.level = self.LEVELS[level]
        self.spinner = spinner
        self._stdout = stdout
        self._stderr = stderr

    @classmethod
    def from_flags(cls, *, logging: bool = True, verbose: bool = True, spinner: Spinner | None = None) -> "Console":
        if not logging:
            return cls("none", spinner)
        return cls("debug" if verbose else "info", spinner)

    @contextmanager
    def paused(self) -> Iterator[None]:
        """Stop the spinner for the duration of the block."""
        if self.spinner is None:
            yield
            return
        self.spinner.stop()
        try:
            yield
        finally:
            self.spinner.start()

    def error(self, message: str) -> None:
        self._emit("error", "[ERROR]", message, self._stderr or sys.stderr)

    def warn(self, message: str) -> None:
        self._emit("warn", "[WARN]", message, self._stderr or sys.stderr)

    def info(self, message: str) -> None:
        self._emit("info", "[INFO]", message, self._stdout or sys.stdout)

    def debug(self, message: str) -> None:
        self._emit("debug", "[DEBUG]", message, self._stdout or sys.stdout)

    def _emit(self, level: str, prefix: str, message: str, stream: TextIO) -> None:
        if self.level < self.LEVELS[level]:
            return
        with self.paused():
            print(f"{prefix} {message}", file=stream)
