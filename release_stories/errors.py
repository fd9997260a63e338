"""Exception types raised by release-stories."""


class ReleaseStoriesError(Exception):
    """Base class for every failure surfaced to the caller."""


class ConfigurationError(ReleaseStoriesError, ValueError):
    """Required configuration or credential is missing or invalid."""


class CollaboratorError(ReleaseStoriesError, RuntimeError):
    """A call to the hosting API failed."""
