"""CLI entrypoint that wires subcommands into a Typer app."""

import typer

from .commands.aws_mfa import aws_mfa
from .commands.branches import clean_branches
from .commands.devbox import devbox_json
from .commands.refresh import refresh_skills

app = typer.Typer(
    add_completion=False,
    help="Personal developer workflow utilities.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


app.command("refresh-skills")(refresh_skills)
app.command("clean-branches")(clean_branches)
app.command("devbox-json")(devbox_json)
app.command("aws-mfa")(aws_mfa)
