"""Severity-prefixed console lines and a per-repository line collector."""

from __future__ import annotations

import typer

from .types import Level

LEVEL_COLORS = {
    Level.info: typer.colors.BLUE,
    Level.success: typer.colors.GREEN,
    Level.warning: typer.colors.YELLOW,
    Level.error: typer.colors.RED,
}


def echo_line(level: Level, message: str) -> None:
    prefix = typer.style(f"[{level.value}]", fg=LEVEL_COLORS[level])
    typer.echo(f"{prefix} {message}")


def info(message: str) -> None:
    echo_line(Level.info, message)


def success(message: str) -> None:
    echo_line(Level.success, message)


def warning(message: str) -> None:
    echo_line(Level.warning, message)


def error(message: str) -> None:
    echo_line(Level.error, message)


class Reporter:
    """Collects the lines of one repository.

    Unbuffered reporters print each line as it is emitted. Buffered ones only
    keep them; the caller prints them as one block so output from parallel
    workers never interleaves.
    """

    def __init__(self, buffered: bool = False) -> None:
        self.buffered = buffered
        self.lines: list[tuple[Level, str]] = []

    def emit(self, level: Level, message: str) -> None:
        self.lines.append((level, message))
        if not self.buffered:
            echo_line(level, message)

    def info(self, message: str) -> None:
        self.emit(Level.info, message)

    def success(self, message: str) -> None:
        self.emit(Level.success, message)

    def warning(self, message: str) -> None:
        self.emit(Level.warning, message)

    def error(self, message: str) -> None:
        self.emit(Level.error, message)
