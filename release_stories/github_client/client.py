"""GitHub API client using PyGitHub."""

import os
import time

from github import Github
from github.GithubException import GithubException, UnknownObjectException
from github.Issue import Issue
from github.PullRequest import PullRequest
from github.Repository import Repository
from github.TimelineEvent import TimelineEvent as GithubTimelineEvent
from rich.console import Console

from ..errors import CollaboratorError, ConfigurationError
from .models import ReleasePull, Story, TimelineEvent

console = Console()


def _error_message(error: GithubException) -> str:
    """Extract a readable message from a PyGitHub exception."""
    data = error.data
    if isinstance(data, dict) and data.get("message"):
        return f"{data['message']} (HTTP {error.status})"
    return str(error)


class GitHubClient:
    """GitHub API client exposing the calls a release run needs."""

    def __init__(self, token: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.

        Raises:
            ConfigurationError: If no token is available.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ConfigurationError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.github = Github(self.token)
        self._repositories: dict[str, Repository] = {}

    def _check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        try:
            overview = self.github.get_rate_limit()
            # newer PyGitHub releases nest the buckets under `resources`
            core = getattr(overview, "resources", overview).core

            if core.remaining < 10:
                reset_time = core.reset.timestamp()
                sleep_time = reset_time - time.time() + 1
                console.print(
                    f"Rate limit low, sleeping for {sleep_time:.1f} seconds..."
                )
                time.sleep(sleep_time)

        except Exception as e:
            # Continue if rate limit check fails - it's not critical
            console.print(f"Warning: Could not check rate limit: {e}")

    def _convert_issue(self, github_issue: Issue) -> Story:
        """Convert PyGitHub issue (or pull request seen as issue) to our model."""
        return Story(
            number=github_issue.number,
            title=github_issue.title,
            url=github_issue.html_url,
            is_pull_request=github_issue.pull_request is not None,
        )

    def _convert_timeline_event(self, event: GithubTimelineEvent) -> TimelineEvent:
        """Convert PyGitHub timeline event to our model."""
        source = None
        if event.source is not None and event.source.issue is not None:
            source = self._convert_issue(event.source.issue)
        return TimelineEvent(kind=event.event, cross_reference_source=source)

    def _convert_pull(self, github_pull: PullRequest) -> ReleasePull:
        """Convert PyGitHub pull request to our model."""
        return ReleasePull(
            number=github_pull.number,
            title=github_pull.title or "",
            body=github_pull.body or "",
            url=github_pull.html_url or "",
        )

    def get_repository(self, org: str, repo: str) -> Repository:
        """Get repository object, cached for the lifetime of the client."""
        full_name = f"{org}/{repo}"
        if full_name in self._repositories:
            return self._repositories[full_name]
        try:
            repository = self.github.get_repo(full_name)
        except UnknownObjectException:
            raise CollaboratorError(f"Repository {full_name} not found")
        except GithubException as e:
            raise CollaboratorError(
                f"Error fetching repository {full_name}: {_error_message(e)}"
            ) from e
        self._repositories[full_name] = repository
        return repository

    def get_branch_tip(self, org: str, repo: str, branch: str) -> str:
        """Get the SHA of the commit at the tip of a branch."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            return repository.get_branch(branch).commit.sha
        except UnknownObjectException:
            raise CollaboratorError(f"Branch {branch} not found in {org}/{repo}")
        except GithubException as e:
            raise CollaboratorError(
                f"Error fetching branch {branch}: {_error_message(e)}"
            ) from e

    def list_commit_messages(
        self, org: str, repo: str, base_sha: str, head_sha: str
    ) -> list[str]:
        """List messages of the commits reachable from head but not from base.

        Args:
            org: Organization name
            repo: Repository name
            base_sha: Commit the comparison starts from
            head_sha: Commit the comparison ends at

        Returns:
            Commit messages in the order GitHub reports them
        """
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            comparison = repository.compare(base_sha, head_sha)
            return [c.commit.message for c in comparison.commits]
        except GithubException as e:
            raise CollaboratorError(
                f"Error comparing {base_sha[:7]}...{head_sha[:7]}: "
                f"{_error_message(e)}"
            ) from e

    def find_open_pull_request(
        self, org: str, repo: str, base: str, head: str
    ) -> ReleasePull | None:
        """Find the first open pull request from head into base.

        Args:
            org: Organization name
            repo: Repository name
            base: Base branch name
            head: Head branch name, optionally qualified as ``owner:branch``

        Returns:
            The first matching pull request, or None
        """
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        qualified_head = head if ":" in head else f"{org}:{head}"
        try:
            for github_pull in repository.get_pulls(
                state="open", base=base, head=qualified_head
            ):
                return self._convert_pull(github_pull)
        except GithubException as e:
            raise CollaboratorError(
                f"Error listing pull requests: {_error_message(e)}"
            ) from e
        return None

    def get_issue_or_pull(self, org: str, repo: str, issue_number: int) -> Story:
        """Get an issue or pull request by number."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            return self._convert_issue(repository.get_issue(issue_number))
        except UnknownObjectException:
            raise CollaboratorError(f"Issue #{issue_number} not found in {org}/{repo}")
        except GithubException as e:
            raise CollaboratorError(
                f"Error fetching issue #{issue_number}: {_error_message(e)}"
            ) from e

    def list_timeline_events(
        self, org: str, repo: str, issue_number: int
    ) -> list[TimelineEvent]:
        """List every timeline event of an issue or pull request."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            github_issue = repository.get_issue(issue_number)
            return [
                self._convert_timeline_event(event)
                for event in github_issue.get_timeline()
            ]
        except UnknownObjectException:
            raise CollaboratorError(f"Issue #{issue_number} not found in {org}/{repo}")
        except GithubException as e:
            raise CollaboratorError(
                f"Error fetching timeline of issue #{issue_number}: "
                f"{_error_message(e)}"
            ) from e

    def update_pull_request_body(
        self, org: str, repo: str, pull_number: int, body: str
    ) -> None:
        """Replace the body of a pull request."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            repository.get_pull(pull_number).edit(body=body)
        except GithubException as e:
            raise CollaboratorError(
                f"Error updating pull request #{pull_number}: {_error_message(e)}"
            ) from e

        console.print(f"Updated body of pull request #{pull_number}")

    def create_pull_request(
        self, org: str, repo: str, base: str, head: str, title: str, body: str
    ) -> ReleasePull:
        """Open a new pull request from head into base."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            github_pull = repository.create_pull(
                base=base, head=head, title=title, body=body
            )
        except GithubException as e:
            raise CollaboratorError(
                f"Error creating pull request {head} -> {base}: {_error_message(e)}"
            ) from e

        console.print(f"Created pull request #{github_pull.number}")
        return self._convert_pull(github_pull)

    def add_labels(
        self, org: str, repo: str, issue_number: int, labels: list[str]
    ) -> None:
        """Add labels to an issue or pull request, keeping existing ones."""
        self._check_rate_limit()

        repository = self.get_repository(org, repo)
        try:
            repository.get_issue(issue_number).add_to_labels(*labels)
        except GithubException as e:
            raise CollaboratorError(
                f"Error labelling #{issue_number}: {_error_message(e)}"
            ) from e

        console.print(f"Added labels to #{issue_number}: {labels}")
