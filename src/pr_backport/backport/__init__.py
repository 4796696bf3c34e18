"""Per-branch backport orchestration and conflict recovery."""

from .orchestrator import backport_commits, backport_to_branch
from .recovery import cherry_pick_and_confirm, resolve_conflicts_or_abort

__all__ = [
    "backport_commits",
    "backport_to_branch",
    "cherry_pick_and_confirm",
    "resolve_conflicts_or_abort",
]
