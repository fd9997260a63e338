"""Command line interface for release-stories."""
