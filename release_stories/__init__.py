"""Release pull request maintenance with a generated Related Stories section."""

__version__ = "0.1.0"
