"""Command runner honoring dry-run and verbose modes."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess

from . import log
from .errors import MissingCommandsError
from .types import CommandResult


def ensure_commands(*names: str) -> None:
    """Raise MissingCommandsError listing every name that is not on PATH."""
    missing = [n for n in names if not shutil.which(n)]
    if missing:
        raise MissingCommandsError(missing)


class CommandRunner:
    def __init__(self, *, dry_run: bool = False, verbose: bool = False) -> None:
        self.dry_run = dry_run
        self.verbose = verbose

    @staticmethod
    def _printable(cmd: list[str]) -> str:
        return shlex.join(cmd)

    # ---------- process helpers ----------
    def run(self, cmd: list[str], cwd: str | None = None, *, capture: bool = False) -> CommandResult:
        """Run `cmd` without a shell; returns the child's exit status unchanged.

        With `capture`, stdout and stderr are merged and returned as text,
        otherwise both stay attached to our own streams.
        """
        if not cmd:
            raise ValueError("run: no command provided")
        if self.dry_run:
            log.info(f"DRY-RUN: {self._printable(cmd)}")
            return CommandResult(0)
        if self.verbose:
            log.info(f"+ {self._printable(cmd)}")
        return self._execute(cmd, cwd=cwd, capture=capture)

    def run_shell(self, command: str, cwd: str | None = None, *, capture: bool = False) -> CommandResult:
        """Run a raw shell string through `bash -c`. Prefer `run`."""
        if not command:
            raise ValueError("run_shell: no command provided")
        if self.dry_run:
            log.info(f"DRY-RUN (shell): {command}")
            return CommandResult(0)
        if self.verbose:
            log.info(f"+ bash -c {shlex.quote(command)}")
        return self._execute(["bash", "-c", command], cwd=cwd, capture=capture)

    def query(self, cmd: list[str], cwd: str | None = None, *, merge_stderr: bool = True) -> CommandResult:
        """Run a read-only command with captured output, even in dry-run mode.

        With `merge_stderr=False` stderr is discarded so the output can be parsed.
        """
        log.debug(f"+ {self._printable(cmd)}")
        return self._execute(cmd, cwd=cwd, capture=True, merge_stderr=merge_stderr)

    @staticmethod
    def _execute(cmd: list[str], cwd: str | None, capture: bool, merge_stderr: bool = True) -> CommandResult:
        try:
            if capture:
                stderr = subprocess.STDOUT if merge_stderr else subprocess.DEVNULL
                proc = subprocess.run(cmd, cwd=cwd, stdout=subprocess.PIPE, stderr=stderr)
                return CommandResult(proc.returncode, proc.stdout.decode("utf-8", "ignore").strip())
            proc = subprocess.run(cmd, cwd=cwd)
            return CommandResult(proc.returncode)
        except FileNotFoundError as e:
            # same status a shell reports for an unknown command
            return CommandResult(127, f"{e}")

    # ---------- filesystem mutations ----------
    def makedirs(self, path: str) -> None:
        if os.path.isdir(path):
            return
        if self.dry_run:
            log.info(f"DRY-RUN: mkdir -p {shlex.quote(path)}")
            return
        if self.verbose:
            log.info(f"+ mkdir -p {shlex.quote(path)}")
        os.makedirs(path, exist_ok=True)

    def symlink(self, src: str, link: str) -> bool:
        if self.dry_run:
            log.info(f"DRY-RUN: ln -s {shlex.quote(src)} {shlex.quote(link)}")
            return True
        if self.verbose:
            log.info(f"+ ln -s {shlex.quote(src)} {shlex.quote(link)}")
        try:
            os.symlink(src, link)
        except OSError as e:
            log.warn(f"Failed to link {link}: {e}")
            return False
        return True
