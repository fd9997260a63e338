"""Extraction of issue references from commit messages."""

import re
from collections.abc import Iterable

_ISSUE_REF = re.compile(r"#(\d+)")


def extract_issue_number(message: str) -> int | None:
    """Return the number of the first ``#<digits>`` reference, if any.

    Only the first reference in a message is considered.
    """
    match = _ISSUE_REF.search(message)
    if not match:
        return None
    return int(match.group(1))


def extract_issue_numbers(messages: Iterable[str]) -> list[int]:
    """Extract one reference per message, in encounter order.

    Messages without a reference, or referencing ``#0``, contribute nothing.
    Repeated numbers are kept.
    """
    numbers = (extract_issue_number(message) for message in messages)
    return [n for n in numbers if n is not None and n > 0]
