"""Test configuration and fixtures."""

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from release_stories.config import ReleaseConfig
from release_stories.github_client.client import GitHubClient
from release_stories.github_client.models import Story

StoryFactory = Callable[..., Story]


@pytest.fixture
def make_story() -> StoryFactory:
    """Build stories whose URL places them in a given repository."""

    def _make(
        number: int,
        repository: str = "acme/widgets",
        title: str | None = None,
        is_pull_request: bool = False,
    ) -> Story:
        kind = "pull" if is_pull_request else "issues"
        return Story(
            number=number,
            title=title or f"Story {number}",
            url=f"https://github.com/{repository}/{kind}/{number}",
            is_pull_request=is_pull_request,
        )

    return _make


@pytest.fixture
def release_config() -> ReleaseConfig:
    """Configuration targeting acme/widgets main <- develop."""
    return ReleaseConfig(owner="acme", repo="widgets", base="main", head="develop")


@pytest.fixture
def mock_client() -> MagicMock:
    """GitHub client double exposing the release run capabilities."""
    return MagicMock(spec=GitHubClient)
