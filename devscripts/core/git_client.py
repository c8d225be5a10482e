"""Small helpers for running Git commands and performing repo operations.

Every git invocation used by the services goes through `GitClient`, so tests
can substitute an object with the same methods.
"""

from __future__ import annotations

import os

from .runner import CommandRunner
from .types import CommandResult


class GitClient:
    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def _git(self, repo_dir: str, *args: str, capture: bool = False) -> CommandResult:
        return self.runner.run(["git", "-C", repo_dir, *args], capture=capture)

    def _git_query(self, repo_dir: str, *args: str) -> CommandResult:
        return self.runner.query(["git", "-C", repo_dir, *args])

    # ---------- discovery ----------
    @staticmethod
    def is_repo(path: str) -> bool:
        return os.path.isdir(os.path.join(path, ".git"))

    # ---------- clone ----------
    def clone(self, url: str, target: str) -> CommandResult:
        cmd = [
            "git",
            "clone",
            "--recurse-submodules",
            "--shallow-submodules",
            "--depth",
            "1",
            url,
            target,
        ]
        return self.runner.run(cmd, capture=True)

    # ---------- refresh ----------
    def fetch(self, repo_dir: str, *, tags: bool = True, capture: bool = False) -> CommandResult:
        args = ["fetch", "--all", "--prune"]
        if tags:
            args.append("--tags")
        args.append("--quiet")
        return self._git(repo_dir, *args, capture=capture)

    def prune_origin(self, repo_dir: str) -> CommandResult:
        return self._git(repo_dir, "remote", "prune", "origin")

    def pull_rebase(self, repo_dir: str) -> CommandResult:
        return self._git(repo_dir, "pull", "--rebase", "--autostash", capture=True)

    def rebase(self, repo_dir: str, upstream: str) -> CommandResult:
        return self._git(repo_dir, "rebase", "--autostash", upstream, capture=True)

    def submodule_update(self, repo_dir: str) -> CommandResult:
        return self._git(repo_dir, "submodule", "update", "--init", "--recursive", "--quiet")

    def gc(self, repo_dir: str) -> CommandResult:
        return self._git(repo_dir, "gc", "--auto", "--quiet")

    # ---------- per-repo queries ----------
    def current_branch(self, repo_dir: str) -> str | None:
        res = self._git_query(repo_dir, "rev-parse", "--abbrev-ref", "HEAD")
        return res.output.strip() if res.ok and res.output.strip() else None

    def has_remote_branch(self, repo_dir: str, branch: str, remote: str = "origin") -> bool:
        res = self._git_query(repo_dir, "rev-parse", "--verify", "--quiet", f"refs/remotes/{remote}/{branch}")
        return res.ok

    def is_inside_work_tree(self, repo_dir: str) -> bool:
        res = self._git_query(repo_dir, "rev-parse", "--is-inside-work-tree")
        return res.ok and res.output.strip() == "true"

    def default_branch(self, repo_dir: str) -> str | None:
        """Default branch from origin/HEAD, e.g. 'main'."""
        res = self._git_query(repo_dir, "symbolic-ref", "refs/remotes/origin/HEAD")
        ref = res.output.strip() if res.ok else ""
        if not ref:
            return None
        return ref.removeprefix("refs/remotes/origin/")

    def show_current_branch(self, repo_dir: str) -> str:
        res = self._git_query(repo_dir, "branch", "--show-current")
        return res.output.strip() if res.ok else ""

    def merged_branches(self, repo_dir: str, into: str) -> list[str]:
        res = self._git_query(repo_dir, "branch", "--merged", into, "--format=%(refname:short)")
        if not res.ok:
            return []
        return [line.strip() for line in res.output.splitlines() if line.strip()]

    def delete_branch(self, repo_dir: str, branch: str) -> CommandResult:
        return self._git(repo_dir, "branch", "-d", branch, capture=True)
