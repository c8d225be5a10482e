"""Interactive prompts backed by Typer (click) so input handling matches the CLI."""

from __future__ import annotations

import typer


def confirm(message: str = "Are you sure?", default: bool = False) -> bool:
    """Ask a yes/no question; `y`, `yes`, `n`, `no` in any case, empty input returns `default`.

    Invalid answers re-prompt until a valid one is given.
    """
    return typer.confirm(message, default=default, err=True)


def prompt(message: str, default: str | None = None) -> str:
    if default:
        return typer.prompt(message, default=default, err=True)
    return typer.prompt(message, err=True)


def read_secret(message: str = "Enter secret") -> str:
    """Read a value without echoing it to the terminal."""
    return typer.prompt(message, hide_input=True, err=True)
