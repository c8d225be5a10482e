"""Module holding constants used across devscripts."""

SKILLS_DIR_ENV = "CLAUDE_SKILLS_DIR"
REPOS_CACHE_DIRNAME = ".repos"
CLONE_LIST_FILENAME = "claude-skill-clone-list.txt"
UP_TO_DATE_MARKERS = ("Already up to date", "Already up-to-date", "is up to date")

PROTECTED_BRANCHES = ("main", "master", "develop")

DEVBOX_SCHEMA_URL = "https://raw.githubusercontent.com/jetify-com/devbox/0.16.0/.schema/devbox.schema.json"
DEVBOX_OUTPUT_FILE = "devbox.json"

MFA_DURATION_DEFAULT = 129600  # 36 hours (max allowed)
MFA_DURATION_MIN = 900
MFA_DURATION_MAX = 129600
AWS_DEFAULT_REGION = "eu-west-1"
AWS_DEFAULT_OUTPUT = "json"
