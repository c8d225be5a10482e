"""CLI for exporting global devbox packages to devbox.json."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core import log, prompts
from ...core.constants import DEVBOX_OUTPUT_FILE
from ...core.runner import CommandRunner, ensure_commands
from ...services.devbox import write_devbox_json
from ..errors import exit_on_error


def devbox_json(
    output: str = typer.Option(DEVBOX_OUTPUT_FILE, "--output", "-o", help="File to write"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file without asking"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print more output"),
):
    """Convert 'devbox global list' output into a devbox.json file."""
    s = get_settings()
    log.configure(verbose=verbose, debug=s.debug)
    with exit_on_error():
        ensure_commands("devbox")
        write_devbox_json(
            runner=CommandRunner(verbose=verbose),
            output_file=output,
            force=force,
            confirm=prompts.confirm,
        )
