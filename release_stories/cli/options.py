"""Standardized CLI option definitions shared by the release commands.

Options left unset fall back to the environment variables a GitHub Actions
step receives (see ``ReleaseConfig.from_env``), so the same command works
from a workflow and a terminal.
"""

import typer

OWNER_OPTION = typer.Option(
    None,
    "--owner",
    "-o",
    help="Repository owner (defaults to the owner part of GITHUB_REPOSITORY)",
)

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository name (defaults to the repo part of GITHUB_REPOSITORY)",
)

BASE_OPTION = typer.Option(
    None, "--base", "-b", help="Base branch of the release (defaults to INPUT_BASE)"
)

HEAD_OPTION = typer.Option(
    None, "--head", help="Head branch of the release (defaults to INPUT_HEAD)"
)

LABEL_OPTION = typer.Option(
    None,
    "--label",
    "-l",
    help="Label to add when the release pull request is created "
    "(defaults to INPUT_LABEL)",
)

FORCE_UPDATING_OPTION = typer.Option(
    False,
    "--force-updating",
    "-f",
    help="Rewrite the Related Stories section even if nothing changed "
    "(also enabled by INPUT_FORCE_UPDATING=true)",
)

TITLE_OPTION = typer.Option(
    None,
    "--title",
    help="Title of a newly created release pull request "
    "(defaults to INPUT_TITLE, then 'Release')",
)

TOKEN_OPTION = typer.Option(
    None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Preview the body without applying it"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
