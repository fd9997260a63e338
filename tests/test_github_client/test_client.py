"""Tests for GitHub client."""

import os
from collections.abc import Generator
from unittest.mock import MagicMock, Mock, patch

import pytest
from github.GithubException import GithubException, UnknownObjectException

from release_stories.errors import CollaboratorError, ConfigurationError
from release_stories.github_client.client import GitHubClient
from release_stories.github_client.models import ReleasePull, Story


@pytest.fixture
def mock_github() -> Generator[MagicMock]:
    """Mock GitHub API client."""
    with patch("release_stories.github_client.client.Github") as mock_github_class:
        mock_github = MagicMock()
        mock_github_class.return_value = mock_github

        # Mock rate limit
        mock_rate_limit = MagicMock()
        mock_rate_limit.resources.core.remaining = 1000
        mock_github.get_rate_limit.return_value = mock_rate_limit

        yield mock_github


@pytest.fixture
def mock_repo(mock_github: MagicMock) -> MagicMock:
    """Repository returned for every get_repo call."""
    repo = MagicMock()
    mock_github.get_repo.return_value = repo
    return repo


@pytest.fixture
def github_client(mock_github: MagicMock) -> GitHubClient:
    """GitHub client with mocked dependencies."""
    with patch.dict("os.environ", {"GITHUB_TOKEN": "fake-token"}):
        return GitHubClient()


def _github_issue(number: int, url: str, is_pull: bool = False) -> Mock:
    issue = Mock()
    issue.number = number
    issue.title = f"Title {number}"
    issue.html_url = url
    issue.pull_request = Mock() if is_pull else None
    return issue


class TestGitHubClientInit:
    """Test GitHubClient construction."""

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    def test_init_with_env_token(self) -> None:
        """Test initialization with environment token."""
        with patch("release_stories.github_client.client.Github") as mock_github:
            GitHubClient()
            mock_github.assert_called_once_with("test_token")

    def test_init_with_explicit_token(self) -> None:
        """Test initialization with explicit token."""
        with patch("release_stories.github_client.client.Github") as mock_github:
            GitHubClient(token="explicit_token")
            mock_github.assert_called_once_with("explicit_token")

    @patch.dict(os.environ, {}, clear=True)
    def test_init_without_token(self) -> None:
        """Test initialization without token raises before any call."""
        with patch("release_stories.github_client.client.Github") as mock_github:
            with pytest.raises(ConfigurationError, match="GitHub token is required"):
                GitHubClient()
            mock_github.assert_not_called()

    def test_rate_limit_check_failure_ignored(self, mock_github: MagicMock) -> None:
        """Test that a failing rate limit check is not fatal."""
        mock_github.get_rate_limit.side_effect = GithubException(500, "oops", None)
        client = GitHubClient(token="test_token")

        with patch("release_stories.github_client.client.console") as mock_console:
            client._check_rate_limit()

        warning = mock_console.print.call_args.args[0]
        assert warning.startswith("Warning: Could not check rate limit:")


class TestGitHubClientReads:
    """Test read capabilities."""

    def test_get_branch_tip(
        self, github_client: GitHubClient, mock_github: MagicMock, mock_repo: MagicMock
    ) -> None:
        """Test resolving a branch to its tip commit."""
        mock_repo.get_branch.return_value.commit.sha = "abc123"

        assert github_client.get_branch_tip("acme", "widgets", "main") == "abc123"
        mock_github.get_repo.assert_called_with("acme/widgets")
        mock_repo.get_branch.assert_called_once_with("main")

    def test_get_branch_tip_not_found(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test missing branch."""
        mock_repo.get_branch.side_effect = UnknownObjectException(404, "Not Found", {})

        with pytest.raises(CollaboratorError, match="Branch release not found"):
            github_client.get_branch_tip("acme", "widgets", "release")

    def test_repository_not_found(
        self, github_client: GitHubClient, mock_github: MagicMock
    ) -> None:
        """Test missing repository."""
        mock_github.get_repo.side_effect = UnknownObjectException(
            404, "Not Found", None
        )

        with pytest.raises(CollaboratorError, match="Repository acme/nope not found"):
            github_client.get_branch_tip("acme", "nope", "main")

    def test_repository_cached(
        self, github_client: GitHubClient, mock_github: MagicMock, mock_repo: MagicMock
    ) -> None:
        """Test that the repository is fetched once per client."""
        github_client.get_branch_tip("acme", "widgets", "main")
        github_client.get_branch_tip("acme", "widgets", "develop")

        mock_github.get_repo.assert_called_once_with("acme/widgets")

    def test_list_commit_messages(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test commit messages from a comparison."""
        commits = [Mock(), Mock()]
        commits[0].commit.message = "fix #1"
        commits[1].commit.message = "chore"
        mock_repo.compare.return_value.commits = commits

        messages = github_client.list_commit_messages("acme", "widgets", "b", "h")

        assert messages == ["fix #1", "chore"]
        mock_repo.compare.assert_called_once_with("b", "h")

    def test_list_commit_messages_error(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test that API errors carry the underlying message."""
        mock_repo.compare.side_effect = GithubException(
            422, {"message": "No common ancestor"}, None
        )

        with pytest.raises(CollaboratorError, match="No common ancestor"):
            github_client.list_commit_messages("acme", "widgets", "b" * 40, "h" * 40)

    def test_find_open_pull_request(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test first open pull request is returned with normalised body."""
        pull = Mock()
        pull.number = 12
        pull.title = "Release"
        pull.body = None
        pull.html_url = "https://github.com/acme/widgets/pull/12"
        mock_repo.get_pulls.return_value = [pull, Mock()]

        result = github_client.find_open_pull_request(
            "acme", "widgets", "main", "develop"
        )

        assert result == ReleasePull(
            number=12,
            title="Release",
            body="",
            url="https://github.com/acme/widgets/pull/12",
        )
        mock_repo.get_pulls.assert_called_once_with(
            state="open", base="main", head="acme:develop"
        )

    def test_find_open_pull_request_none(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test no open pull request."""
        mock_repo.get_pulls.return_value = []

        assert (
            github_client.find_open_pull_request("acme", "widgets", "main", "fork:dev")
            is None
        )
        mock_repo.get_pulls.assert_called_once_with(
            state="open", base="main", head="fork:dev"
        )

    def test_get_issue_or_pull(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test classification of pull requests and issues."""
        mock_repo.get_issue.side_effect = [
            _github_issue(20, "https://github.com/acme/widgets/pull/20", is_pull=True),
            _github_issue(10, "https://github.com/acme/widgets/issues/10"),
        ]

        pull = github_client.get_issue_or_pull("acme", "widgets", 20)
        issue = github_client.get_issue_or_pull("acme", "widgets", 10)

        assert pull == Story(
            number=20,
            title="Title 20",
            url="https://github.com/acme/widgets/pull/20",
            is_pull_request=True,
        )
        assert issue.is_pull_request is False
        assert issue.repository_fullname == "acme/widgets"

    def test_get_issue_not_found(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test missing issue."""
        mock_repo.get_issue.side_effect = UnknownObjectException(404, "Not Found", {})

        with pytest.raises(CollaboratorError, match="Issue #123 not found"):
            github_client.get_issue_or_pull("acme", "widgets", 123)

    def test_list_timeline_events(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test conversion of timeline events and their sources."""
        cross_ref = Mock()
        cross_ref.event = "cross-referenced"
        cross_ref.source.issue = _github_issue(
            4, "https://github.com/other/thing/issues/4"
        )
        labeled = Mock()
        labeled.event = "labeled"
        labeled.source = None
        mock_repo.get_issue.return_value.get_timeline.return_value = [
            cross_ref,
            labeled,
        ]

        events = github_client.list_timeline_events("acme", "widgets", 10)

        assert [e.kind for e in events] == ["cross-referenced", "labeled"]
        assert events[0].cross_reference_source is not None
        assert events[0].cross_reference_source.repository_fullname == "other/thing"
        assert events[1].cross_reference_source is None


class TestGitHubClientWrites:
    """Test write capabilities."""

    def test_update_pull_request_body(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test body update."""
        github_client.update_pull_request_body("acme", "widgets", 5, "new body")

        mock_repo.get_pull.assert_called_once_with(5)
        mock_repo.get_pull.return_value.edit.assert_called_once_with(body="new body")

    def test_create_pull_request(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test pull request creation."""
        created = Mock()
        created.number = 77
        created.title = "Release"
        created.body = "body"
        created.html_url = "https://github.com/acme/widgets/pull/77"
        mock_repo.create_pull.return_value = created

        result = github_client.create_pull_request(
            "acme", "widgets", "main", "develop", "Release", "body"
        )

        assert result.number == 77
        mock_repo.create_pull.assert_called_once_with(
            base="main", head="develop", title="Release", body="body"
        )

    def test_create_pull_request_error(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test creation failure."""
        mock_repo.create_pull.side_effect = GithubException(
            422, {"message": "Validation Failed"}, None
        )

        with pytest.raises(CollaboratorError, match="Validation Failed"):
            github_client.create_pull_request(
                "acme", "widgets", "main", "develop", "Release", ""
            )

    def test_add_labels(
        self, github_client: GitHubClient, mock_repo: MagicMock
    ) -> None:
        """Test labels are added without replacing existing ones."""
        github_client.add_labels("acme", "widgets", 77, ["release"])

        mock_repo.get_issue.assert_called_once_with(77)
        mock_repo.get_issue.return_value.add_to_labels.assert_called_once_with(
            "release"
        )
