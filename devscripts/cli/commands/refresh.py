"""CLI for refreshing the Claude skill repositories."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core import log
from ...core.clone_list import load_clone_list
from ...core.runner import ensure_commands
from ...services.refresh import refresh_skills as run_refresh
from ..errors import exit_on_error


def refresh_skills(
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be done, don't run git commands"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print more output"),
    clone_file: str | None = typer.Option(
        None, "--clone-file", "-c", help="Read clone list from file (lines: <git-url> [subpath])"
    ),
):
    """Refresh all Claude skill repositories under the skills directory.

    For each repo: fetch, prune remotes, pull with rebase + autostash, then
    init/update submodules. A clone file line '<git-url>' clones the full repo
    into the skills dir; '<git-url> <subpath>' clones into the .repos cache and
    symlinks the subpath.

    Exits 0 even when some repos fail, 2 on usage errors or a missing git
    binary, and 3 when the file given to --clone-file does not exist.
    """
    s = get_settings()
    log.configure(verbose=verbose, debug=s.debug)

    with exit_on_error():
        ensure_commands("git")

        path = clone_file
        if path is None and s.default_clone_file.is_file():
            path = str(s.default_clone_file)
            log.info(f"Using default clone file: {path}")
        entries = load_clone_list(path) if path else []

        report = run_refresh(
            skills_dir=str(s.claude_skills_dir.expanduser()),
            entries=entries,
            dry_run=dry_run,
            verbose=verbose,
        )

    typer.echo(report.render())
    if dry_run:
        log.info("Dry run - no changes were made.")
