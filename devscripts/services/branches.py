"""Service for deleting local branches already merged into the default branch."""

from __future__ import annotations

from typing import Callable

from ..core import log
from ..core.constants import PROTECTED_BRANCHES
from ..core.errors import DevScriptsError, NotAGitRepositoryError
from ..core.git_client import GitClient


def find_merged_branches(git: GitClient, repo_dir: str) -> tuple[str, list[str]]:
    """Return (default_branch, deletable merged branches)."""
    if not git.is_inside_work_tree(repo_dir):
        raise NotAGitRepositoryError("Not inside a git repository")

    default = git.default_branch(repo_dir)
    if not default:
        raise DevScriptsError("Could not determine default branch. Run: git remote set-head origin --auto")

    protected = {*PROTECTED_BRANCHES, default, git.show_current_branch(repo_dir)}
    merged = [b for b in git.merged_branches(repo_dir, default) if b not in protected]
    return default, merged


def clean_up_branches(
    *,
    git: GitClient,
    repo_dir: str,
    force: bool,
    confirm: Callable[[str], bool],
) -> list[str]:
    """Delete merged branches (after confirmation unless forced); returns the deleted names."""
    default, merged = find_merged_branches(git, repo_dir)
    if not merged:
        log.info("No merged branches to clean up.")
        return []

    log.info(f"Found {len(merged)} branch(es) merged into {default}:")
    for b in merged:
        print(f"  {b}")
    print()

    if not force and not confirm("Delete these branches?"):
        log.warn("Aborted.")
        return []

    verb = "Would delete" if git.runner.dry_run else "Deleted"
    deleted: list[str] = []
    for b in merged:
        if git.delete_branch(repo_dir, b).ok:
            log.info(f"{verb} {b}")
            deleted.append(b)
        else:
            log.warn(f"Failed to delete {b}")
    log.info("Done.")
    return deleted
