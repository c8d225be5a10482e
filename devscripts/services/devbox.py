"""Service: turn `devbox global list` output into a project devbox.json."""

from __future__ import annotations

import json
import os
import re
from typing import Any, Callable

from ..core import log
from ..core.constants import DEVBOX_SCHEMA_URL
from ..core.errors import DevboxError
from ..core.runner import CommandRunner

_PACKAGE_LINE_RE = re.compile(r"^\* (\S+)")


def parse_global_list(output: str) -> list[str]:
    """Package names from lines like '* ripgrep@latest - 14.1.0'."""
    packages = []
    for line in output.splitlines():
        m = _PACKAGE_LINE_RE.match(line)
        if m:
            packages.append(m.group(1))
    return packages


def build_devbox_config(packages: list[str]) -> dict[str, Any]:
    return {
        "$schema": DEVBOX_SCHEMA_URL,
        "packages": list(packages),
        "shell": {
            "init_hook": ["echo 'Welcome to devbox!' > /dev/null"],
            "scripts": {
                "test": ['echo "Error: no test specified" && exit 1'],
            },
        },
    }


def global_packages(runner: CommandRunner) -> list[str]:
    log.info("Fetching global packages...")
    res = runner.query(["devbox", "global", "list"])
    if not res.ok:
        log.debug(res.output)
        return []
    return parse_global_list(res.output)


def write_devbox_json(
    *,
    runner: CommandRunner,
    output_file: str,
    force: bool,
    confirm: Callable[[str], bool],
) -> bool:
    """Write `output_file`; returns False when the user declines to overwrite it."""
    packages = global_packages(runner)
    if not packages:
        raise DevboxError("No global packages found. Use 'devbox global add <package>' to install packages globally.")

    if os.path.exists(output_file) and not force:
        if not confirm(f"File {output_file} already exists. Override?"):
            log.warn("Aborted.")
            return False

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(build_devbox_config(packages), f, indent=2)
        f.write("\n")
    log.info(f"Created {output_file} successfully from {len(packages)} global devbox packages!")
    return True
