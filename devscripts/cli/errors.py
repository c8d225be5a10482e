"""Turn fatal service errors into logged messages and exit codes."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from ..core import log
from ..core.errors import DevScriptsError


@contextmanager
def exit_on_error() -> Iterator[None]:
    try:
        yield
    except DevScriptsError as e:
        log.error(str(e))
        raise typer.Exit(code=e.exit_code) from e
