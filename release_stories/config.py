"""Configuration of a release pull request run."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from .errors import ConfigurationError

DEFAULT_TITLE = "Release"


def _env_value(environ: Mapping[str, str], name: str) -> str | None:
    """Return a non-empty environment value, or None."""
    value = environ.get(name)
    return value if value else None


class ReleaseConfig(BaseModel):
    """Options recognised by a release run."""

    owner: str = Field(..., description="Owner of the repository")
    repo: str = Field(..., description="Repository name")
    base: str = Field(..., description="Branch the release pull request targets")
    head: str = Field(..., description="Branch holding the release candidate")
    label: str | None = Field(
        None, description="Label applied to a newly created release pull request"
    )
    force_updating: bool = Field(
        False, description="Rewrite the section even when nothing changed"
    )
    title: str = Field(DEFAULT_TITLE, description="Title of a created pull request")
    dry_run: bool = Field(False, description="Compute the body without writing it")

    @property
    def full_name(self) -> str:
        """Repository in ``owner/repo`` form."""
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        owner: str | None = None,
        repo: str | None = None,
        base: str | None = None,
        head: str | None = None,
        label: str | None = None,
        title: str | None = None,
        force_updating: bool = False,
        dry_run: bool = False,
    ) -> "ReleaseConfig":
        """Build configuration from GitHub Actions style environment variables.

        Reads ``GITHUB_REPOSITORY`` (``owner/repo``) and the action inputs
        ``INPUT_BASE``, ``INPUT_HEAD``, ``INPUT_LABEL``,
        ``INPUT_FORCE_UPDATING`` and ``INPUT_TITLE``. Only the literal
        ``"true"`` enables force updating from the environment.

        Keyword arguments are explicit values (e.g. CLI options) and take
        precedence over the environment; ``force_updating=True`` forces an
        update regardless of ``INPUT_FORCE_UPDATING``.

        Raises:
            ConfigurationError: If a required value is missing.
        """
        env = os.environ if environ is None else environ

        repository = _env_value(env, "GITHUB_REPOSITORY") or ""
        env_owner, _, env_repo = repository.partition("/")
        owner_value = owner or env_owner
        repo_value = repo or env_repo
        base_value = base or _env_value(env, "INPUT_BASE") or ""
        head_value = head or _env_value(env, "INPUT_HEAD") or ""

        missing = []
        if not owner_value:
            missing.append("--owner/GITHUB_REPOSITORY")
        if not repo_value:
            missing.append("--repo/GITHUB_REPOSITORY")
        if not base_value:
            missing.append("--base/INPUT_BASE")
        if not head_value:
            missing.append("--head/INPUT_HEAD")
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )

        return cls(
            owner=owner_value,
            repo=repo_value,
            base=base_value,
            head=head_value,
            label=label or _env_value(env, "INPUT_LABEL"),
            force_updating=force_updating or env.get("INPUT_FORCE_UPDATING") == "true",
            title=title or _env_value(env, "INPUT_TITLE") or DEFAULT_TITLE,
            dry_run=dry_run,
        )
