"""Service: clone, link and refresh the skill repositories under a managed root."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..core import log
from ..core.clone_list import CloneEntry
from ..core.constants import REPOS_CACHE_DIRNAME, UP_TO_DATE_MARKERS
from ..core.git_client import GitClient
from ..core.runner import CommandRunner
from ..core.types import Outcome

_SUMMARY_LABELS = [
    (Outcome.updated, "Updated"),
    (Outcome.up_to_date, "Up-to-date"),
    (Outcome.skipped, "Skipped (exist)"),
    (Outcome.failed, "Failed"),
    (Outcome.not_git, "Not Git"),
]

_DETAIL_HEADINGS = [
    (Outcome.updated, "Updated repos"),
    (Outcome.up_to_date, "Up-to-date repos"),
    (Outcome.skipped, "Skipped"),
    (Outcome.failed, "Failed repos"),
]


@dataclass
class RefreshReport:
    """Outcomes recorded during one sweep, in processing order."""

    records: list[tuple[str, Outcome]] = field(default_factory=list)

    def add(self, name: str, outcome: Outcome) -> None:
        self.records.append((name, outcome))

    def names(self, outcome: Outcome) -> list[str]:
        return [name for name, o in self.records if o is outcome]

    def count(self, outcome: Outcome) -> int:
        return len(self.names(outcome))

    def render(self) -> str:
        lines = ["", "Summary:"]
        width = max(len(label) for _, label in _SUMMARY_LABELS) + 1
        for outcome, label in _SUMMARY_LABELS:
            lines.append(f"  {label + ':':<{width}} {self.count(outcome)}")
        for outcome, heading in _DETAIL_HEADINGS:
            names = self.names(outcome)
            if not names:
                continue
            lines += ["", f"{heading}:"]
            lines += [f"  - {n}" for n in names]
        return "\n".join(lines)


def _is_up_to_date(output: str) -> bool:
    return any(marker in output for marker in UP_TO_DATE_MARKERS)


class RefreshSweep:
    """Materialize clone list entries under `skills_dir` and bring every repo up to date."""

    def __init__(self, skills_dir: str, git: GitClient, runner: CommandRunner) -> None:
        self.skills_dir = skills_dir
        self.cache_dir = os.path.join(skills_dir, REPOS_CACHE_DIRNAME)
        self.git = git
        self.runner = runner

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    # ---------- clone ----------
    def _clone(self, url: str, target: str, report: RefreshReport) -> bool:
        if os.path.isdir(target):
            log.debug(f"Repo already cloned: {target}")
            return True
        log.info(f"Cloning {url} -> {target}")
        res = self.git.clone(url, target)
        if not res.ok:
            log.warn(f"Clone failed for {target}")
            if res.output:
                log.debug(res.output)
            report.add(target, Outcome.failed)
            return False
        return True

    def clone_entries(self, entries: list[CloneEntry], report: RefreshReport) -> None:
        for entry in entries:
            if entry.subpath:
                self.runner.makedirs(self.cache_dir)
                self._clone(entry.url, os.path.join(self.cache_dir, entry.repo_name), report)
                continue

            target = os.path.join(self.skills_dir, entry.repo_name)
            if os.path.isdir(target):
                log.info(f"Exists, skipping clone: {target}")
                report.add(target, Outcome.skipped)
            else:
                self._clone(entry.url, target, report)

    # ---------- symlinks ----------
    def link_entries(self, entries: list[CloneEntry], report: RefreshReport) -> None:
        for entry in entries:
            if not entry.subpath:
                continue
            label = f"{entry.repo_name}/{entry.subpath}"
            cached_repo = os.path.join(self.cache_dir, entry.repo_name)
            src = os.path.join(cached_repo, entry.subpath)
            link = os.path.join(self.skills_dir, entry.link_name)

            if not os.path.isdir(src):
                if self.dry_run and not os.path.isdir(cached_repo):
                    log.info(f"DRY-RUN: would link {label} -> {link} after cloning {entry.repo_name}")
                    continue
                log.warn(f"Subpath '{entry.subpath}' not found in {entry.repo_name}")
                report.add(label, Outcome.failed)
                continue

            if os.path.islink(link):
                log.info(f"Symlink exists, skipping: {link}")
                report.add(link, Outcome.skipped)
            elif os.path.exists(link):
                log.warn(f"Non-symlink already exists at {link}, skipping")
                report.add(link, Outcome.skipped)
            else:
                log.info(f"Linking {label} -> {link}")
                if not self.runner.symlink(src, link):
                    report.add(label, Outcome.failed)

    # ---------- refresh ----------
    def _fallback_rebase(self, repo_dir: str, name: str) -> Outcome:
        if not self.git.fetch(repo_dir, tags=False, capture=True).ok:
            log.warn(f"Fetch failed during fallback for {name}")
            return Outcome.failed

        branch = self.git.current_branch(repo_dir)
        if not branch or branch == "HEAD":
            log.warn(f"Fallback rebase skipped for {name}: HEAD is not on a branch")
            return Outcome.failed
        if not self.git.has_remote_branch(repo_dir, branch):
            log.warn(f"Fallback rebase skipped for {name}: no remote-tracking branch origin/{branch}")
            return Outcome.failed

        res = self.git.rebase(repo_dir, f"origin/{branch}")
        if not res.ok:
            log.warn(f"Fallback rebase failed for {name}")
            if res.output:
                log.debug(res.output)
            return Outcome.failed
        log.info(f"Rebased: {name}")
        return Outcome.updated

    def _integrate(self, repo_dir: str, name: str) -> Outcome:
        res = self.git.pull_rebase(repo_dir)
        if res.ok:
            if _is_up_to_date(res.output):
                log.info(f"Up to date: {name}")
                return Outcome.up_to_date
            log.info(f"Updated: {name}")
            return Outcome.updated

        log.warn(f"Pull failed or merge conflict for {name}. Attempting fallback operations.")
        if res.output:
            log.debug(res.output)
        return self._fallback_rebase(repo_dir, name)

    def refresh_repo(self, repo_dir: str, report: RefreshReport) -> Outcome:
        name = os.path.basename(repo_dir.rstrip(os.sep))

        if not self.git.is_repo(repo_dir):
            log.info(f"Not a git repo, skipping: {name}")
            report.add(name, Outcome.not_git)
            return Outcome.not_git

        log.info(f"Refreshing: {name}")
        if not self.git.fetch(repo_dir).ok:
            log.warn(f"Fetch failed for {name}")
        if not self.git.prune_origin(repo_dir).ok:
            log.warn(f"Remote prune failed for {name}")

        if self.dry_run:
            log.debug(f"DRY RUN: would pull {name}")
            outcome = Outcome.skipped
        else:
            outcome = self._integrate(repo_dir, name)
        report.add(name, outcome)

        if os.path.isfile(os.path.join(repo_dir, ".gitmodules")):
            log.info(f"Updating submodules for {name}")
            if not self.git.submodule_update(repo_dir).ok:
                log.warn(f"Submodule update failed for {name}")

        self.git.gc(repo_dir)
        return outcome

    @staticmethod
    def _children(root: str, *, skip_symlinks: bool = False) -> list[str]:
        if not os.path.isdir(root):
            return []
        paths = []
        for name in sorted(os.listdir(root)):
            if name.startswith("."):
                continue
            path = os.path.join(root, name)
            if skip_symlinks and os.path.islink(path):
                continue
            if os.path.exists(path):
                paths.append(path)
        return paths

    def run(self, entries: list[CloneEntry]) -> RefreshReport:
        """Clone, refresh the cache, link subpaths, then refresh direct repos."""
        report = RefreshReport()
        self.runner.makedirs(self.skills_dir)
        log.info(f"Using skills directory: {self.skills_dir}")

        if entries:
            log.info("Cloning repositories from clone list")
            self.clone_entries(entries, report)

        for repo_dir in self._children(self.cache_dir):
            self.refresh_repo(repo_dir, report)

        if any(e.subpath for e in entries):
            log.info("Creating symlinks for subpath entries")
            self.link_entries(entries, report)

        # symlinked entries point into the cache, which was refreshed above
        for repo_dir in self._children(self.skills_dir, skip_symlinks=True):
            self.refresh_repo(repo_dir, report)

        return report


def refresh_skills(
    *,
    skills_dir: str,
    entries: list[CloneEntry],
    dry_run: bool,
    verbose: bool,
    git: GitClient | None = None,
) -> RefreshReport:
    """Run a full sweep and return its report."""
    runner = CommandRunner(dry_run=dry_run, verbose=verbose)
    sweep = RefreshSweep(skills_dir, git or GitClient(runner), runner)
    return sweep.run(entries)
