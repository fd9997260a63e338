"""Main CLI entry point."""

import logging
import os

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..config import ReleaseConfig
from ..errors import ConfigurationError
from ..github_client.client import GitHubClient
from ..release.updater import ReleasePullUpdater, RunOutcome, RunResult
from .options import (
    BASE_OPTION,
    DRY_RUN_OPTION,
    FORCE_UPDATING_OPTION,
    HEAD_OPTION,
    LABEL_OPTION,
    OWNER_OPTION,
    REPO_OPTION,
    TITLE_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

app = typer.Typer(
    name="release-stories",
    help="Maintain a release pull request with its Related Stories",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _report_failure(message: str) -> None:
    """Print a failure and flag it to GitHub Actions when running there."""
    console.print(f"❌ [red]Error: {escape(message)}[/red]")
    if os.getenv("GITHUB_ACTIONS") == "true":
        typer.echo(f"::error::{message}")


def _print_result(result: RunResult) -> None:
    """Summarize the run outcome."""
    if result.outcome == RunOutcome.NO_COMMITS:
        console.print(
            f"✅ [green]No new commits ({result.version_marker}), "
            f"nothing to update[/green]"
        )
    elif result.outcome == RunOutcome.UP_TO_DATE:
        console.print(
            f"✅ [green]Release pull #{result.pull_number} is already up to date "
            f"({result.version_marker})[/green]"
        )
    elif result.outcome == RunOutcome.DRY_RUN:
        target = (
            f"pull request #{result.pull_number}"
            if result.pull_number is not None
            else "a new pull request"
        )
        console.print(f"📋 [blue]Body that would be written to {target}:[/blue]")
        console.print(Panel(Text(result.body or ""), expand=False))
    elif result.outcome == RunOutcome.UPDATED:
        console.print(
            f"✅ [green]Updated release pull #{result.pull_number} "
            f"({result.version_marker})[/green]"
        )
    else:
        console.print(
            f"✅ [green]Created release pull #{result.pull_number} "
            f"({result.version_marker})[/green]"
        )


def _run(config: ReleaseConfig, token: str | None) -> None:
    try:
        client = GitHubClient(token=token)
        console.print(
            f"🔍 Checking {config.full_name} {config.base}...{config.head}"
        )
        result = ReleasePullUpdater(client, config).run()
    except KeyboardInterrupt:
        console.print("\n❌ [yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        _report_failure(str(e))
        raise typer.Exit(1)

    _print_result(result)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def sync(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    base: str | None = BASE_OPTION,
    head: str | None = HEAD_OPTION,
    label: str | None = LABEL_OPTION,
    force_updating: bool = FORCE_UPDATING_OPTION,
    title: str | None = TITLE_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Create or update the release pull request from head into base.

    The Related Stories section lists the pull requests and issues referenced
    by commit messages between the two branches, plus issues that
    cross-reference them. An existing section is replaced in place and the
    rest of the body is left untouched.

    Examples:
        release-stories sync --owner myorg --repo myrepo --base main \\
            --head develop --label release

        # Inside a GitHub Actions step (GITHUB_REPOSITORY, INPUT_BASE,
        # INPUT_HEAD and GITHUB_TOKEN provided by the workflow)
        release-stories sync
    """
    _configure_logging(verbose)
    try:
        config = ReleaseConfig.from_env(
            owner=owner,
            repo=repo,
            base=base,
            head=head,
            label=label,
            title=title,
            force_updating=force_updating,
            dry_run=dry_run,
        )
    except ConfigurationError as e:
        _report_failure(str(e))
        raise typer.Exit(1)

    _run(config, token)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def preview(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    base: str | None = BASE_OPTION,
    head: str | None = HEAD_OPTION,
    force_updating: bool = FORCE_UPDATING_OPTION,
    token: str | None = TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the release pull request body without changing anything."""
    _configure_logging(verbose)
    try:
        config = ReleaseConfig.from_env(
            owner=owner,
            repo=repo,
            base=base,
            head=head,
            force_updating=force_updating,
            dry_run=True,
        )
    except ConfigurationError as e:
        _report_failure(str(e))
        raise typer.Exit(1)

    _run(config, token)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from release_stories import __version__

    console.print(f"Release Stories v{__version__}")


if __name__ == "__main__":
    app()
