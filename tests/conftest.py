"""Pytest configuration and fixtures."""

from __future__ import annotations

import os

import pytest

from devscripts.core import log
from devscripts.core.git_client import GitClient
from devscripts.core.runner import CommandRunner
from devscripts.core.types import CommandResult

UP_TO_DATE = CommandResult(0, "Already up to date.")


class FakeGit:
    """In-memory stand-in for GitClient.

    Clones materialize a directory with a `.git` folder plus any subpaths
    registered for the URL; every call is recorded in `calls`.
    """

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner
        self.calls: list[tuple[str, ...]] = []
        self.unreachable: set[str] = set()
        self.contents: dict[str, list[str]] = {}
        self.pull_results: dict[str, CommandResult] = {}
        self.fetch_fails: set[str] = set()
        self.fallback_fetch_fails: set[str] = set()
        self.rebase_fails: set[str] = set()
        self.branches: dict[str, str] = {}
        self.missing_remote_branches: set[str] = set()

    is_repo = staticmethod(GitClient.is_repo)

    @staticmethod
    def _name(repo_dir: str) -> str:
        return os.path.basename(repo_dir.rstrip(os.sep))

    def names_called(self, op: str) -> list[str]:
        return [self._name(c[1]) for c in self.calls if c[0] == op]

    def clone(self, url: str, target: str) -> CommandResult:
        self.calls.append(("clone", target, url))
        if self.runner.dry_run:
            return CommandResult(0)
        if url in self.unreachable:
            return CommandResult(128, f"fatal: unable to access '{url}'")
        os.makedirs(os.path.join(target, ".git"))
        for sub in self.contents.get(url, []):
            os.makedirs(os.path.join(target, sub), exist_ok=True)
        return CommandResult(0)

    def fetch(self, repo_dir: str, *, tags: bool = True, capture: bool = False) -> CommandResult:
        op = "fetch" if tags else "fallback_fetch"
        self.calls.append((op, repo_dir))
        failing = self.fetch_fails if tags else self.fallback_fetch_fails
        return CommandResult(1 if self._name(repo_dir) in failing else 0)

    def prune_origin(self, repo_dir: str) -> CommandResult:
        self.calls.append(("prune", repo_dir))
        return CommandResult(0)

    def pull_rebase(self, repo_dir: str) -> CommandResult:
        self.calls.append(("pull", repo_dir))
        return self.pull_results.get(self._name(repo_dir), UP_TO_DATE)

    def current_branch(self, repo_dir: str) -> str | None:
        return self.branches.get(self._name(repo_dir), "main")

    def has_remote_branch(self, repo_dir: str, branch: str, remote: str = "origin") -> bool:
        return self._name(repo_dir) not in self.missing_remote_branches

    def rebase(self, repo_dir: str, upstream: str) -> CommandResult:
        self.calls.append(("rebase", repo_dir, upstream))
        return CommandResult(1 if self._name(repo_dir) in self.rebase_fails else 0)

    def submodule_update(self, repo_dir: str) -> CommandResult:
        self.calls.append(("submodule", repo_dir))
        return CommandResult(0)

    def gc(self, repo_dir: str) -> CommandResult:
        self.calls.append(("gc", repo_dir))
        return CommandResult(0)


class FakeRunner(CommandRunner):
    """CommandRunner that answers from a table instead of spawning processes."""

    def __init__(self, responses: dict[tuple[str, ...], CommandResult] | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.responses = responses or {}
        self.commands: list[list[str]] = []

    def _answer(self, cmd: list[str]) -> CommandResult:
        self.commands.append(list(cmd))
        return self.responses.get(tuple(cmd), CommandResult(0))

    def run(self, cmd, cwd=None, *, capture=False):
        if self.dry_run:
            self.commands.append(["DRY-RUN", *cmd])
            return CommandResult(0)
        return self._answer(cmd)

    def query(self, cmd, cwd=None, *, merge_stderr=True):
        return self._answer(cmd)


@pytest.fixture(autouse=True)
def quiet_debug():
    """Reset the debug switch between tests."""
    log.configure(verbose=False, debug=False)
    yield
    log.configure(verbose=False, debug=False)


@pytest.fixture
def skills_dir(tmp_path):
    root = tmp_path / "skills"
    root.mkdir()
    return root


@pytest.fixture
def runner():
    return CommandRunner()


@pytest.fixture
def dry_runner():
    return CommandRunner(dry_run=True)


@pytest.fixture
def fake_git(runner):
    return FakeGit(runner)


def make_repo(path, *, gitmodules: bool = False):
    os.makedirs(os.path.join(path, ".git"))
    if gitmodules:
        with open(os.path.join(path, ".gitmodules"), "w") as f:
            f.write("")
    return str(path)
