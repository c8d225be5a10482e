"""Fatal errors raised by services and turned into exit codes by the CLI."""

from __future__ import annotations


class DevScriptsError(RuntimeError):
    exit_code = 1


class MissingCommandsError(DevScriptsError):
    exit_code = 2

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required commands: {' '.join(self.missing)}")


class CloneListNotFoundError(DevScriptsError):
    # kept apart from usage errors and missing tools, which both exit with 2
    exit_code = 3

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Clone file '{path}' not found")


class NotAGitRepositoryError(DevScriptsError):
    pass


class DevboxError(DevScriptsError):
    pass


class AwsError(DevScriptsError):
    pass
