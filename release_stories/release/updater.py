"""Create or refresh the release pull request for a base/head branch pair.

The run is a straight sequence of hosting API calls:

    resolve branch tips -> diff commits -> find open release pull
    -> extract references -> resolve cross-references -> render
    -> update existing pull | create pull (and label it)

Two conditions end the run early without writing anything: no commits
between the branches, and an open release pull whose section already
carries the current version marker. ``force_updating`` disables both.
"""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from ..config import ReleaseConfig
from ..github_client.client import GitHubClient
from ..github_client.models import ReleasePull
from ..stories.extractor import extract_issue_numbers
from ..stories.merger import build_new_release_body, merge_release_body
from ..stories.renderer import (
    parse_version_marker,
    render_related_stories,
    version_marker,
)
from ..stories.resolver import CrossReferenceResolver

logger = logging.getLogger(__name__)


class RunOutcome(str, Enum):
    """How a release run ended."""

    NO_COMMITS = "no_commits"
    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"
    CREATED = "created"
    DRY_RUN = "dry_run"


class RunResult(BaseModel):
    """Summary of a release run."""

    outcome: RunOutcome = Field(..., description="Terminal state of the run")
    version_marker: str = Field(..., description="base...head commit range")
    pull_number: int | None = Field(
        None, description="Release pull request touched or found"
    )
    body: str | None = Field(None, description="Body written, or that would be")
    commit_count: int = Field(0, description="Commits between base and head")


class ReleasePullUpdater:
    """Orchestrates one release run against the GitHub API."""

    def __init__(self, client: GitHubClient, config: ReleaseConfig):
        self.client = client
        self.config = config
        self.resolver = CrossReferenceResolver(client, config.owner, config.repo)

    def _is_current(self, pull: ReleasePull, marker: str) -> bool:
        return parse_version_marker(pull.body) == marker

    def render_section(self, marker: str, messages: list[str]) -> list[str]:
        """Resolve the references in ``messages`` and render the section."""
        config = self.config
        issue_numbers = extract_issue_numbers(messages)
        logger.info(
            f"Found {len(issue_numbers)} issue reference(s) in {len(messages)} "
            f"commit(s)"
        )
        pulls, issues = self.resolver.resolve_all(issue_numbers)
        return render_related_stories(
            marker, pulls, issues, config.owner, config.repo
        )

    def run(self) -> RunResult:
        """Execute the run; client failures propagate to the caller."""
        config = self.config
        owner, repo = config.owner, config.repo

        base_sha = self.client.get_branch_tip(owner, repo, config.base)
        head_sha = self.client.get_branch_tip(owner, repo, config.head)
        marker = version_marker(base_sha, head_sha)
        logger.info(f"Comparing {config.base}...{config.head} ({marker})")

        messages = self.client.list_commit_messages(owner, repo, base_sha, head_sha)
        if not messages and not config.force_updating:
            logger.info("No commits between base and head, nothing to do")
            return RunResult(outcome=RunOutcome.NO_COMMITS, version_marker=marker)

        release_pull = self.client.find_open_pull_request(
            owner, repo, config.base, config.head
        )
        if (
            release_pull is not None
            and not config.force_updating
            and self._is_current(release_pull, marker)
        ):
            logger.info(f"Release pull #{release_pull.number} is up to date")
            return RunResult(
                outcome=RunOutcome.UP_TO_DATE,
                version_marker=marker,
                pull_number=release_pull.number,
                commit_count=len(messages),
            )

        section = self.render_section(marker, messages)

        if release_pull is not None:
            body = merge_release_body(release_pull.body, section)
            pull_number: int | None = release_pull.number
        else:
            body = build_new_release_body(section)
            pull_number = None

        if config.dry_run:
            return RunResult(
                outcome=RunOutcome.DRY_RUN,
                version_marker=marker,
                pull_number=pull_number,
                body=body,
                commit_count=len(messages),
            )

        if release_pull is not None:
            self.client.update_pull_request_body(owner, repo, release_pull.number, body)
            logger.info(f"Updated release pull #{release_pull.number}")
            return RunResult(
                outcome=RunOutcome.UPDATED,
                version_marker=marker,
                pull_number=release_pull.number,
                body=body,
                commit_count=len(messages),
            )

        created = self.client.create_pull_request(
            owner, repo, config.base, config.head, config.title, body
        )
        logger.info(f"Created release pull #{created.number}")
        if config.label:
            self.client.add_labels(owner, repo, created.number, [config.label])
        return RunResult(
            outcome=RunOutcome.CREATED,
            version_marker=marker,
            pull_number=created.number,
            body=body,
            commit_count=len(messages),
        )
