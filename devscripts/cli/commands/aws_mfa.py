"""CLI for refreshing AWS MFA credentials."""

from __future__ import annotations

import sys

import typer

from ...config.settings import get_settings
from ...core import log, prompts
from ...core.constants import MFA_DURATION_DEFAULT, MFA_DURATION_MAX, MFA_DURATION_MIN
from ...core.runner import CommandRunner, ensure_commands
from ...services.aws_mfa import AwsCli, refresh_mfa
from ..errors import exit_on_error


def aws_mfa(
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="AWS profile to refresh (interactive selection if omitted)"
    ),
    duration: int = typer.Option(
        MFA_DURATION_DEFAULT,
        "--duration",
        "-d",
        min=MFA_DURATION_MIN,
        max=MFA_DURATION_MAX,
        help="Token duration in seconds",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print more output"),
):
    """Refresh AWS MFA credentials into the '<profile>-mfa' profile.

    The profile must have mfa_serial configured in ~/.aws/config. You will be
    prompted for your MFA token code.
    """
    s = get_settings()
    log.configure(verbose=verbose, debug=s.debug)
    with exit_on_error():
        ensure_commands("aws")
        refresh_mfa(
            aws=AwsCli(CommandRunner(verbose=verbose)),
            profile=profile,
            duration=duration,
            ask=prompts.prompt,
            read_token=prompts.read_secret,
            interactive=sys.stdin.isatty(),
            default_region=s.aws_default_region,
        )
