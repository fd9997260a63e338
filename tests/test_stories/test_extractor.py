"""Tests for issue reference extraction."""

from release_stories.stories.extractor import (
    extract_issue_number,
    extract_issue_numbers,
)


class TestExtractIssueNumber:
    """Test extract_issue_number function."""

    def test_reference_in_text(self) -> None:
        """Test a reference surrounded by text."""
        assert extract_issue_number("fix #42 done") == 42

    def test_no_reference(self) -> None:
        """Test message without any reference."""
        assert extract_issue_number("no ref here") is None

    def test_first_reference_only(self) -> None:
        """Test that only the first reference is returned."""
        assert extract_issue_number("#7 and #9") == 7

    def test_merge_commit_message(self) -> None:
        """Test GitHub's merge commit format."""
        message = "Merge pull request #123 from acme/feature\n\nCloses #45"
        assert extract_issue_number(message) == 123

    def test_hash_without_digits(self) -> None:
        """Test that a bare hash is not a reference."""
        assert extract_issue_number("see # notes") is None


class TestExtractIssueNumbers:
    """Test extract_issue_numbers function."""

    def test_keeps_encounter_order_and_repeats(self) -> None:
        """Test that numbers are neither sorted nor deduplicated."""
        messages = ["fix #20", "chore: bump", "refs #10", "again #20"]
        assert extract_issue_numbers(messages) == [20, 10, 20]

    def test_filters_zero(self) -> None:
        """Test that #0 is not a usable reference."""
        assert extract_issue_numbers(["#0 placeholder", "fix #3"]) == [3]

    def test_empty_input(self) -> None:
        """Test that no messages produce no numbers."""
        assert extract_issue_numbers([]) == []
