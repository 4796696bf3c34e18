"""Configuration loading for pr-backport.

This module loads environment variables from a `.env` file using
`python-dotenv` and populates a `Config` object.  Project settings (which
repository to backport in, which branches to target) come from an optional
`.backportrc.json` file and are held in `ProjectConfig`.

Required variables (unless given on the command line):
- GITHUB_TOKEN
- GITHUB_USERNAME

Optional variables with defaults:
- BACKPORT_API_HOSTNAME (default: 'api.github.com')
- BACKPORT_GIT_HOSTNAME (default: 'github.com')
- BACKPORT_HOME (default: '~/.backport')
- BACKPORT_COMMAND_TIMEOUT_S (default: 600)
- LOG_LEVEL (default: 'INFO')
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .constants import (
    COMMAND_TIMEOUT_S,
    DEFAULT_API_HOSTNAME,
    DEFAULT_BACKPORT_HOME,
    DEFAULT_GIT_HOSTNAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PR_TITLE,
    DEFAULT_SOURCE_BRANCH,
)
from .errors import ConfigError


@dataclass
class Config:
    """Configuration values loaded from the environment."""

    github_token: str
    github_username: str
    api_hostname: str = DEFAULT_API_HOSTNAME
    git_hostname: str = DEFAULT_GIT_HOSTNAME
    backport_home: Path = field(default_factory=lambda: Path(DEFAULT_BACKPORT_HOME).expanduser())
    command_timeout_s: int = COMMAND_TIMEOUT_S
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def repositories_dir(self) -> Path:
        return self.backport_home / "repositories"

    @classmethod
    def load_from_env(cls, overrides: Mapping[str, object | None] | None = None) -> Config:
        """Load configuration from environment variables.

        The `.env` file is loaded if present.  Non-empty values in
        ``overrides`` (keyed by field name, typically from command-line
        options) take precedence over the environment.  Raises
        `ConfigError` if required values are missing.
        """
        load_dotenv()
        overrides = {key: value for key, value in (overrides or {}).items() if value not in (None, "")}
        missing = []

        github_token = overrides.get("github_token") or os.getenv("GITHUB_TOKEN")
        if not github_token:
            missing.append("GITHUB_TOKEN")

        github_username = overrides.get("github_username") or os.getenv("GITHUB_USERNAME")
        if not github_username:
            missing.append("GITHUB_USERNAME")

        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

        timeout_raw = os.getenv("BACKPORT_COMMAND_TIMEOUT_S", str(COMMAND_TIMEOUT_S))
        try:
            command_timeout_s = int(timeout_raw)
        except ValueError as exc:
            raise ConfigError(f"BACKPORT_COMMAND_TIMEOUT_S must be an integer, got '{timeout_raw}'") from exc

        return cls(
            github_token=str(github_token),
            github_username=str(github_username),
            api_hostname=str(overrides.get("api_hostname") or os.getenv("BACKPORT_API_HOSTNAME", DEFAULT_API_HOSTNAME)),
            git_hostname=str(overrides.get("git_hostname") or os.getenv("BACKPORT_GIT_HOSTNAME", DEFAULT_GIT_HOSTNAME)),
            backport_home=Path(os.getenv("BACKPORT_HOME", DEFAULT_BACKPORT_HOME)).expanduser(),
            command_timeout_s=command_timeout_s,
            log_level=str(overrides.get("log_level") or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


@dataclass
class ProjectConfig:
    """Per-project settings read from `.backportrc.json`."""

    upstream: str | None = None
    branches: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    pr_title: str = DEFAULT_PR_TITLE
    pr_description: str | None = None
    all_authors: bool = False
    source_branch: str = DEFAULT_SOURCE_BRANCH

    @property
    def owner(self) -> str:
        return split_upstream(self.upstream)[0]

    @property
    def repo_name(self) -> str:
        return split_upstream(self.upstream)[1]

    @classmethod
    def load(cls, path: str | Path) -> ProjectConfig:
        """Read a project config file.  A missing file yields the defaults."""
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a JSON object")

        upstream = data.get("upstream")
        if upstream is not None:
            split_upstream(upstream)

        return cls(
            upstream=upstream,
            branches=[str(b) for b in data.get("branches", [])],
            labels=[str(label) for label in data.get("labels", [])],
            pr_title=data.get("prTitle") or DEFAULT_PR_TITLE,
            pr_description=data.get("prDescription"),
            all_authors=bool(data.get("all", False)),
            source_branch=data.get("sourceBranch") or DEFAULT_SOURCE_BRANCH,
        )


def split_upstream(upstream: str | None) -> tuple[str, str]:
    """Split an ``owner/repo`` slug, raising `ConfigError` when malformed."""
    if not upstream:
        raise ConfigError("No upstream repository configured. Use --upstream owner/repo")
    parts = upstream.split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"Invalid upstream '{upstream}'. Expected the format owner/repo")
    return parts[0], parts[1]
