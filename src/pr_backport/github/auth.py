"""Authentication helpers for the GitHub API."""

from __future__ import annotations

import httpx

from .. import __version__
from ..config import Config
from ..constants import HTTP_TIMEOUT_S


def get_github_client(config: Config, accept: str = "application/vnd.github+json") -> httpx.Client:
    """Return a configured GitHub httpx client with the Authorization header set."""
    return httpx.Client(
        headers={
            "Authorization": f"token {config.github_token}",
            "Accept": accept,
            "User-Agent": f"pr-backport/{__version__} ({config.github_username})",
        },
        timeout=HTTP_TIMEOUT_S,
    )
