"""Pydantic models for the GitHub entities a release run works with.

These are immutable snapshots of GitHub's REST API v3 responses, fetched
once per run and only filtered, reordered or rendered afterwards.
API Reference: https://docs.github.com/en/rest/issues
"""

import re

from pydantic import BaseModel, ConfigDict, Field

# Canonical web URL of an issue or pull request, on github.com or an
# Enterprise host.
_HTML_URL_PATTERN = re.compile(r"^https?://[^/]+/(.+)/(?:issues|pull)/\d+$")


def repository_fullname_from_url(url: str) -> str:
    """Derive ``owner/repo`` from an issue or pull request web URL.

    URLs that do not have the expected shape are returned unchanged.
    """
    match = _HTML_URL_PATTERN.match(url)
    if not match:
        return url
    return match.group(1)


class Story(BaseModel):
    """An issue or pull request contributing to the Related Stories section.

    Maps to the subset of the GitHub REST API Issue object that is rendered.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="Issue number within its repository")
    title: str = Field(..., description="Title of the issue or pull request")
    url: str = Field(..., description="Canonical web URL (html_url)")
    is_pull_request: bool = Field(
        False, description="Whether the entity carries pull request linkage"
    )

    @property
    def repository_fullname(self) -> str:
        """Repository in ``owner/repo`` form, derived from the web URL."""
        return repository_fullname_from_url(self.url)


class TimelineEvent(BaseModel):
    """Single entry of an issue timeline.

    Maps to GitHub REST API Timeline event objects.
    API Reference: https://docs.github.com/en/rest/issues/timeline
    """

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Event name, e.g. 'cross-referenced'")
    cross_reference_source: Story | None = Field(
        None, description="Issue or pull request that referenced this one"
    )


class ReleasePull(BaseModel):
    """Open pull request tracking the release branch diff."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="Pull request number")
    title: str = Field("", description="Pull request title")
    body: str = Field("", description="Markdown body, empty when unset")
    url: str = Field("", description="Canonical web URL (html_url)")
