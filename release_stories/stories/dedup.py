"""Deduplication and ordering of resolved stories."""

from collections.abc import Iterable

from ..github_client.models import Story


def dedupe_pulls(pulls: Iterable[Story]) -> list[Story]:
    """Sort pull requests by number and drop repeated numbers.

    The first occurrence of a number wins.
    """
    result: list[Story] = []
    for pull in sorted(pulls, key=lambda p: p.number):
        if result and result[-1].number == pull.number:
            continue
        result.append(pull)
    return result


def _issue_sort_key(issue: Story, target_fullname: str) -> tuple[bool, str, int]:
    fullname = issue.repository_fullname
    return (fullname != target_fullname, fullname, issue.number)


def collapse_issues(issues: Iterable[Story], target_fullname: str) -> list[Story]:
    """Order issues and keep a single one per repository.

    Issues of the target repository come first, then other repositories in
    lexicographic order; within a repository the lowest number is kept and
    the remaining issues of that repository are dropped.

    Args:
        issues: Issues accumulated across every resolved reference
        target_fullname: Repository the release pull request lives in

    Returns:
        At most one issue per distinct ``repository_fullname``
    """
    ordered = sorted(issues, key=lambda i: _issue_sort_key(i, target_fullname))
    result: list[Story] = []
    for issue in ordered:
        if result and result[-1].repository_fullname == issue.repository_fullname:
            continue
        result.append(issue)
    return result
