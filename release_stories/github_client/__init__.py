"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import ReleasePull, Story, TimelineEvent, repository_fullname_from_url

__all__ = [
    "GitHubClient",
    "ReleasePull",
    "Story",
    "TimelineEvent",
    "repository_fullname_from_url",
]
