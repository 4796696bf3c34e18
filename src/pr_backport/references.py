"""Human-readable labels for commits.

Long references (``#42`` or ``abc1234``) appear in status lines and pull
request bodies.  Short references (``pr-42`` or ``commit-abc1234``) are used
inside branch names and never contain ``#``.
"""

from __future__ import annotations

from .constants import SHORT_SHA_LENGTH
from .models import Commit


def short_sha(sha: str) -> str:
    return sha[:SHORT_SHA_LENGTH]


def long_reference(commit: Commit) -> str:
    if commit.pull_number:
        return f"#{commit.pull_number}"
    return short_sha(commit.sha)


def short_reference(commit: Commit) -> str:
    if commit.pull_number:
        return f"pr-{commit.pull_number}"
    return f"commit-{short_sha(commit.sha)}"
