"""Service to refresh AWS MFA session credentials into a `<profile>-mfa` profile."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Callable

from ..core import log
from ..core.constants import AWS_DEFAULT_OUTPUT, AWS_DEFAULT_REGION
from ..core.errors import AwsError
from ..core.runner import CommandRunner
from ..core.tempfiles import acquire_temp_file

_TOKEN_RE = re.compile(r"^[0-9]{6}$")


@dataclass(frozen=True)
class SessionCredentials:
    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: str


class AwsCli:
    """Thin wrapper over the `aws` command line client."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def list_profiles(self) -> list[str] | None:
        res = self.runner.query(["aws", "configure", "list-profiles"], merge_stderr=False)
        if not res.ok:
            return None
        return [p.strip() for p in res.output.splitlines() if p.strip()]

    def get(self, key: str, profile: str) -> str | None:
        res = self.runner.query(["aws", "configure", "get", key, "--profile", profile], merge_stderr=False)
        value = res.output.strip() if res.ok else ""
        return value or None

    def set(self, key: str, value: str, profile: str) -> None:
        res = self.runner.run(["aws", "configure", "set", key, value, "--profile", profile])
        if not res.ok:
            raise AwsError(f"Failed to set {key} for profile '{profile}'")

    def get_session_token(self, profile: str, serial: str, token: str, duration: int) -> str:
        """Request temporary credentials; returns the path of the JSON response file."""
        cmd = [
            "aws",
            "sts",
            "get-session-token",
            "--profile",
            profile,
            "--serial-number",
            serial,
            "--token-code",
            token,
            "--duration-seconds",
            str(duration),
            "--output",
            "json",
        ]
        res = self.runner.query(cmd, merge_stderr=False)
        if not res.ok:
            raise AwsError("Failed to get session token. Please check your MFA code and try again.")
        path = acquire_temp_file(suffix=".json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(res.output)
        return path


def mfa_profiles(aws: AwsCli) -> list[str]:
    """Profiles that have `mfa_serial` configured."""
    profiles = aws.list_profiles()
    if profiles is None:
        raise AwsError("Could not retrieve AWS profiles. Make sure AWS CLI is configured.")
    if not profiles:
        raise AwsError("No AWS profiles found. Please configure at least one profile.")

    found = [p for p in profiles if aws.get("mfa_serial", p)]
    if not found:
        raise AwsError(
            "No AWS profiles found with MFA serial configured. "
            "Please add 'mfa_serial = arn:aws:iam::ACCOUNT:mfa/USERNAME' to your profiles in ~/.aws/config"
        )
    return found


def select_profile(profiles: list[str], ask: Callable[[str], str]) -> str:
    log.info("Available AWS profiles with MFA configured:")
    for i, p in enumerate(profiles, start=1):
        print(f"  {i}) {p}")
    print()

    count = len(profiles)
    while True:
        selection = ask(f"Select a profile (1-{count})").strip()
        if not selection.isdigit():
            log.warn(f"Please enter a valid number (1-{count})")
            continue
        n = int(selection)
        if n < 1 or n > count:
            log.warn(f"Please enter a number between 1 and {count}")
            continue
        selected = profiles[n - 1]
        log.info(f"Selected profile: {selected}")
        return selected


def validate_profile(aws: AwsCli, profile: str) -> None:
    profiles = aws.list_profiles() or []
    if profile not in profiles:
        listing = "\n".join(f"  {p}" for p in profiles)
        raise AwsError(f"Profile '{profile}' not found in AWS configuration. Available profiles:\n{listing}")


def validate_token(token: str) -> str:
    token = token.strip()
    if not _TOKEN_RE.match(token):
        raise AwsError("Invalid MFA token format. Expected 6 digits.")
    return token


def parse_credentials(path: str) -> SessionCredentials:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise AwsError(f"Failed to parse credentials from AWS response: {e}") from e

    creds = data.get("Credentials") or {}
    values = [creds.get(k) for k in ("AccessKeyId", "SecretAccessKey", "SessionToken")]
    if not all(values):
        raise AwsError("Failed to parse credentials from AWS response")
    return SessionCredentials(*values, expiration=str(creds.get("Expiration", "")))


def update_credentials(
    aws: AwsCli, profile: str, creds: SessionCredentials, default_region: str = AWS_DEFAULT_REGION
) -> str:
    mfa_profile = f"{profile}-mfa"
    log.info(f"Updating credentials for profile '{mfa_profile}'...")

    aws.set("aws_access_key_id", creds.access_key_id, mfa_profile)
    aws.set("aws_secret_access_key", creds.secret_access_key, mfa_profile)
    aws.set("aws_session_token", creds.session_token, mfa_profile)

    # carry region/output over from the source profile
    aws.set("region", aws.get("region", profile) or default_region, mfa_profile)
    aws.set("output", aws.get("output", profile) or AWS_DEFAULT_OUTPUT, mfa_profile)

    log.info("Credentials updated successfully!")
    log.info(f"Profile: {mfa_profile}")
    log.info(f"Expires: {creds.expiration}")
    log.warn(f"To use these credentials, set: export AWS_PROFILE={mfa_profile}")
    return mfa_profile


def refresh_mfa(
    *,
    aws: AwsCli,
    profile: str | None,
    duration: int,
    ask: Callable[[str], str],
    read_token: Callable[[str], str],
    interactive: bool,
    default_region: str = AWS_DEFAULT_REGION,
) -> str:
    """Rotate session credentials for `profile` (chosen interactively when None).

    `default_region` is written when the source profile has no region of its own.
    """
    if profile is None:
        profiles = mfa_profiles(aws)
        if not interactive:
            raise AwsError("This command requires interactive input for profile selection. Please run in a terminal.")
        profile = select_profile(profiles, ask)
    else:
        log.info(f"Using specified profile: {profile}")
        validate_profile(aws, profile)

    log.info(f"Refreshing MFA credentials for profile: {profile}")
    serial = aws.get("mfa_serial", profile)
    if not serial:
        raise AwsError(
            f"No MFA serial found for profile '{profile}'. "
            "Please configure mfa_serial in ~/.aws/config for this profile"
        )
    log.info(f"Using MFA device: {serial}")

    if not interactive:
        raise AwsError("This command requires interactive input for MFA token. Please run in a terminal.")
    token = validate_token(read_token("Enter MFA token code"))

    log.info("Requesting temporary credentials...")
    response_file = aws.get_session_token(profile, serial, token, duration)
    mfa_profile = update_credentials(aws, profile, parse_credentials(response_file), default_region)
    log.info("MFA credentials refresh completed successfully!")
    return mfa_profile
