"""Splicing of a rendered Related Stories section into a pull request body."""

from collections.abc import Sequence

from .renderer import RELATED_STORIES_HEADING


def _has_section(lines: Sequence[str]) -> bool:
    return any(line.startswith(RELATED_STORIES_HEADING) for line in lines)


def merge_release_body(existing_body: str, section: Sequence[str]) -> str:
    """Merge a rendered section into an existing pull request body.

    When the body already holds a Related Stories heading, the heading and
    every following line up to the next line starting with ``#`` are
    replaced by ``section``. Further Related Stories runs are dropped so the
    body keeps a single section. Lines outside those runs are kept verbatim.
    An empty ``section`` therefore removes the previous one entirely.

    Otherwise the section is appended after a blank line, or becomes the
    whole body when the existing body is empty.
    """
    lines = existing_body.split("\n")

    if not _has_section(lines):
        if not existing_body:
            return "\n".join(section)
        if not section:
            return existing_body
        return "\n".join([existing_body, "", *section])

    merged: list[str] = []
    in_section = False
    written = False
    for line in lines:
        if in_section:
            if not line.startswith("#"):
                continue
            in_section = False
        if line.startswith(RELATED_STORIES_HEADING):
            in_section = True
            if not written:
                merged.extend(section)
                written = True
            continue
        merged.append(line)
    return "\n".join(merged)


def build_new_release_body(section: Sequence[str]) -> str:
    """Body of a freshly created release pull request."""
    return "\n".join(section)
