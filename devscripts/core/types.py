"""Small types and Enums used by devscripts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Terminal outcome of one processed item in a refresh sweep."""

    updated = "updated"
    up_to_date = "up-to-date"
    skipped = "skipped"
    failed = "failed"
    not_git = "not-git"


@dataclass(frozen=True)
class CommandResult:
    """Exit status (and captured output, if requested) of one external command."""

    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
