"""Request-scoped context threaded through git and GitHub calls."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import Config
from .constants import DEFAULT_SOURCE_BRANCH
from .git.runner import GitRunner


@dataclass
class BackportContext:
    """Everything a single invocation needs to reach one repository.

    The access token travels inside ``config``.  Without an explicit
    ``runner`` one is built that redacts the token from every command and
    applies the configured timeout.
    """

    config: Config
    owner: str
    repo_name: str
    source_branch: str = DEFAULT_SOURCE_BRANCH
    runner: GitRunner | None = None

    def __post_init__(self) -> None:
        if self.runner is None:
            self.runner = GitRunner(
                secrets=[self.config.github_token],
                timeout_s=self.config.command_timeout_s,
            )

    @property
    def repo_path(self) -> Path:
        return self.config.repositories_dir / self.owner / self.repo_name

    @property
    def owner_path(self) -> Path:
        return self.config.repositories_dir / self.owner
