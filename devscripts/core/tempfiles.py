"""Process-scoped temporary files that are removed when the interpreter exits."""

from __future__ import annotations

import atexit
import os
import tempfile

from . import log

_registered: list[str] = []
_hook_installed = False


def register_temp_file(path: str) -> None:
    global _hook_installed
    _registered.append(path)
    if not _hook_installed:
        atexit.register(cleanup_temp_files)
        _hook_installed = True


def acquire_temp_file(suffix: str = "") -> str:
    """Create a uniquely named file, register it for cleanup and return its path."""
    fd, path = tempfile.mkstemp(prefix="devscripts-", suffix=suffix)
    os.close(fd)
    register_temp_file(path)
    return path


def cleanup_temp_files() -> None:
    while _registered:
        path = _registered.pop()
        if not os.path.exists(path):
            continue
        try:
            os.remove(path)
        except OSError as e:
            log.debug(f"failed to remove temp file: {path} ({e})")
