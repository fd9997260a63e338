"""Resolution of referenced issues and the issues that cross-reference them."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from ..github_client.client import GitHubClient
from ..github_client.models import Story, TimelineEvent

logger = logging.getLogger(__name__)

CROSS_REFERENCED = "cross-referenced"


class ResolvedReference(BaseModel):
    """A referenced story together with the issues pointing at it."""

    model_config = ConfigDict(frozen=True)

    story: Story = Field(..., description="The referenced issue or pull request")
    related_issues: tuple[Story, ...] = Field(
        default=(), description="Plain issues that cross-reference the story"
    )


def cross_referencing_issues(events: Iterable[TimelineEvent]) -> tuple[Story, ...]:
    """Select plain issues that cross-reference the timeline's owner.

    Pull requests mentioning the issue and every other kind of event are
    ignored.
    """
    return tuple(
        event.cross_reference_source
        for event in events
        if event.kind == CROSS_REFERENCED
        and event.cross_reference_source is not None
        and not event.cross_reference_source.is_pull_request
    )


class CrossReferenceResolver:
    """Resolves issue numbers of the target repository into stories."""

    def __init__(self, client: GitHubClient, owner: str, repo: str):
        self.client = client
        self.owner = owner
        self.repo = repo

    def resolve(self, issue_number: int) -> ResolvedReference:
        """Fetch an issue or pull request and its cross-referencing issues.

        Any failure of the client propagates unchanged.
        """
        story = self.client.get_issue_or_pull(self.owner, self.repo, issue_number)
        events = self.client.list_timeline_events(self.owner, self.repo, issue_number)
        related = cross_referencing_issues(events)
        logger.debug(
            f"Resolved #{issue_number} "
            f"({'pull request' if story.is_pull_request else 'issue'}) "
            f"with {len(related)} cross-referencing issue(s)"
        )
        return ResolvedReference(story=story, related_issues=related)

    def resolve_all(
        self, issue_numbers: Iterable[int]
    ) -> tuple[list[Story], list[Story]]:
        """Resolve numbers one after another in encounter order.

        Repeated numbers are resolved again on every occurrence.

        Returns:
            Tuple of (pull_requests, issues); related issues are appended to
            the issues right after the story they relate to.
        """
        pulls: list[Story] = []
        issues: list[Story] = []
        for issue_number in issue_numbers:
            resolved = self.resolve(issue_number)
            if resolved.story.is_pull_request:
                pulls.append(resolved.story)
            else:
                issues.append(resolved.story)
            issues.extend(resolved.related_issues)
        return pulls, issues
