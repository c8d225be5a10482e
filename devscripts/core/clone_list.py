"""Declarative clone list: one `<git-url> [subpath]` entry per line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from .errors import CloneListNotFoundError


@dataclass(frozen=True)
class CloneEntry:
    url: str
    subpath: str | None = None

    @property
    def repo_name(self) -> str:
        """Directory/cache key: URL basename without a trailing '.git'."""
        name = os.path.basename(self.url.rstrip("/"))
        return name.removesuffix(".git")

    @property
    def link_name(self) -> str | None:
        if not self.subpath:
            return None
        return os.path.basename(self.subpath.rstrip("/"))


def parse_clone_list(lines: Iterable[str]) -> list[CloneEntry]:
    entries: list[CloneEntry] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        fields = line.split()
        entries.append(CloneEntry(url=fields[0], subpath=fields[1] if len(fields) > 1 else None))
    return entries


def load_clone_list(path: str) -> list[CloneEntry]:
    if not os.path.isfile(path):
        raise CloneListNotFoundError(path)
    with open(path, encoding="utf-8") as f:
        return parse_clone_list(f)
