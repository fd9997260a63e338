"""Release pull request orchestration."""

from .updater import ReleasePullUpdater, RunOutcome, RunResult

__all__ = ["ReleasePullUpdater", "RunOutcome", "RunResult"]
