"""Leveled stderr logging: info/warn/error/debug with a UTC timestamp.

Colors come from click's styling and are stripped automatically when stderr
is not a terminal.
"""

from __future__ import annotations

from datetime import datetime, timezone

import typer

_COLORS = {
    "ERROR": typer.colors.RED,
    "WARN": typer.colors.YELLOW,
    "INFO": typer.colors.GREEN,
    "DEBUG": typer.colors.BLUE,
}

_debug_enabled = False


def configure(*, verbose: bool = False, debug: bool = False) -> None:
    """Turn debug output on when either verbose mode or the DEBUG setting is set."""
    global _debug_enabled
    _debug_enabled = bool(verbose or debug)


def debug_enabled() -> bool:
    return _debug_enabled


def _log(level: str, message: str) -> None:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    typer.secho(f"{ts} [{level}] {message}", fg=_COLORS.get(level), err=True)


def info(message: str) -> None:
    _log("INFO", message)


def warn(message: str) -> None:
    _log("WARN", message)


def error(message: str) -> None:
    _log("ERROR", message)


def debug(message: str) -> None:
    if _debug_enabled:
        _log("DEBUG", message)
