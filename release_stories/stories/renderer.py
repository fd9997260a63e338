"""Markdown rendering of the Related Stories section."""

import re
from collections.abc import Sequence

from ..github_client.models import Story
from .dedup import collapse_issues, dedupe_pulls

RELATED_STORIES_HEADING = "### Related Stories"

_MARKER_PATTERN = re.compile(
    r"### Related Stories <!-- ([0-9a-f]+)\.\.\.([0-9a-f]+)"
)


def version_marker(base_sha: str, head_sha: str) -> str:
    """Abbreviated ``base...head`` commit range tagging a rendered section."""
    return f"{base_sha[:7]}...{head_sha[:7]}"


def parse_version_marker(body: str) -> str | None:
    """Return the version marker of a section already present in ``body``."""
    match = _MARKER_PATTERN.search(body)
    if not match:
        return None
    return f"{match.group(1)}...{match.group(2)}"


def reference_label(story: Story, owner: str, repo: str) -> str:
    """Shortest unambiguous reference to a story from the target repository.

    Examples:
        ``#9`` for ``acme/widgets#9`` seen from ``acme/widgets``,
        ``gadgets#4`` for ``acme/gadgets#4`` and ``other/thing#2`` otherwise.
    """
    fullname = story.repository_fullname
    if fullname == f"{owner}/{repo}":
        return f"#{story.number}"
    story_owner, _, story_repo = fullname.partition("/")
    if story_owner == owner and story_repo:
        return f"{story_repo}#{story.number}"
    return f"{fullname}#{story.number}"


def render_related_stories(
    marker: str,
    pulls: Sequence[Story],
    issues: Sequence[Story],
    owner: str,
    repo: str,
) -> list[str]:
    """Render the Related Stories section as markdown lines.

    Pull requests are deduplicated by number and issues collapsed to one per
    repository before rendering. Nothing is rendered when both are empty.

    Args:
        marker: Version marker embedded in the heading
        pulls: Pull request stories of the target repository
        issues: Issue stories from any repository
        owner: Owner of the target repository
        repo: Name of the target repository

    Returns:
        Lines without trailing newlines, meant to be joined with ``\\n``
    """
    unique_pulls = dedupe_pulls(pulls)
    unique_issues = collapse_issues(issues, f"{owner}/{repo}")

    lines: list[str] = []
    if unique_pulls or unique_issues:
        lines += [f"{RELATED_STORIES_HEADING} <!-- {marker} -->", ""]

    if unique_pulls:
        lines += ["*PullRequests*", ""]
        lines += [f"- {p.title} [#{p.number}]({p.url})" for p in unique_pulls]
        lines += ["", ""]

    if unique_issues:
        lines += ["*Issues*", ""]
        lines += [
            f"- {i.title} [{reference_label(i, owner, repo)}]({i.url})"
            for i in unique_issues
        ]
        lines += ["", ""]

    return lines
