"""Data types shared by the git, GitHub and orchestration layers."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_API_HOSTNAME, DEFAULT_PR_TITLE
from .errors import ErrorKind


@dataclass(frozen=True)
class Commit:
    """A commit to replicate onto the target branches.

    ``message`` holds only the first line of the commit message.
    ``pull_number`` is the pull request the commit was merged through, or
    ``None`` when no pull request was found for it.
    """

    sha: str
    message: str
    pull_number: int | None = None


@dataclass(frozen=True)
class BackportRequest:
    """The unit of work for one target branch."""

    owner: str
    repo_name: str
    commits: tuple[Commit, ...]
    base_branch: str
    username: str
    labels: tuple[str, ...] = ()
    pr_title: str = DEFAULT_PR_TITLE
    pr_description: str | None = None
    api_hostname: str = DEFAULT_API_HOSTNAME


@dataclass(frozen=True)
class PullRequestPayload:
    title: str
    body: str
    head: str
    base: str

    def as_dict(self) -> dict[str, str]:
        return {"title": self.title, "body": self.body, "head": self.head, "base": self.base}


@dataclass(frozen=True)
class PullRequest:
    url: str
    number: int


@dataclass
class BranchOutcome:
    """Result of backporting to a single branch.

    A branch succeeded when ``pull_request`` is set and ``error`` is empty.
    When labels could not be attached both fields are set: the pull request
    exists but the run still reports the failure.
    """

    branch: str
    pull_request: PullRequest | None = None
    error: str | None = None
    kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.pull_request is not None and self.error is None
