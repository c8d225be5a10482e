"""CLI for deleting local branches merged into the default branch."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core import log, prompts
from ...core.git_client import GitClient
from ...core.runner import CommandRunner, ensure_commands
from ...services.branches import clean_up_branches
from ..errors import exit_on_error


def clean_branches(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
    repo: str = typer.Option(".", "--repo", "-C", help="Repository to clean (default: current directory)"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Print the deletions without executing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print more output"),
):
    """Delete local branches merged into the default branch.

    main, master, develop, the default branch and the checked-out branch are
    never deleted.
    """
    s = get_settings()
    log.configure(verbose=verbose, debug=s.debug)
    with exit_on_error():
        ensure_commands("git")
        git = GitClient(CommandRunner(dry_run=dry_run, verbose=verbose))
        clean_up_branches(git=git, repo_dir=repo, force=force, confirm=prompts.confirm)
