"""GitHub API integration."""

from .api import (
    add_labels_to_pull_request,
    create_pull_request,
    fetch_commit_by_sha,
    fetch_commits_by_author,
    fetch_pull_request_number_by_sha,
    verify_access_token,
)
from .auth import get_github_client
from .templates import get_pull_request_body, get_pull_request_payload, get_pull_request_title

__all__ = [
    "get_github_client",
    "fetch_commit_by_sha",
    "fetch_commits_by_author",
    "fetch_pull_request_number_by_sha",
    "create_pull_request",
    "add_labels_to_pull_request",
    "verify_access_token",
    "get_pull_request_title",
    "get_pull_request_body",
    "get_pull_request_payload",
]
