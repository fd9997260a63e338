"""Related story aggregation: extraction, resolution, ordering and rendering."""

from .dedup import collapse_issues, dedupe_pulls
from .extractor import extract_issue_number, extract_issue_numbers
from .merger import build_new_release_body, merge_release_body
from .renderer import (
    RELATED_STORIES_HEADING,
    parse_version_marker,
    reference_label,
    render_related_stories,
    version_marker,
)
from .resolver import CrossReferenceResolver, ResolvedReference

__all__ = [
    "RELATED_STORIES_HEADING",
    "CrossReferenceResolver",
    "ResolvedReference",
    "build_new_release_body",
    "collapse_issues",
    "dedupe_pulls",
    "extract_issue_number",
    "extract_issue_numbers",
    "merge_release_body",
    "parse_version_marker",
    "reference_label",
    "render_related_stories",
    "version_marker",
]
