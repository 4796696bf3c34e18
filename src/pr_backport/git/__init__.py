"""Git integration: command runner, working copy operations and branch naming."""

from .branch_strategy import get_feature_branch_name
from .runner import CommandResult, GitRunner

__all__ = ["CommandResult", "GitRunner", "get_feature_branch_name"]
