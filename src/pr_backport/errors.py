"""Error types raised while backporting.

Errors fall into two families.  ``HandledError`` subclasses describe
anticipated conditions (a missing commit, a rejected token, the operator
aborting a conflict resolution) and carry a message that is printed as-is;
the orchestrator records them against the current branch and moves on to
the next one.  ``UnexpectedError`` subclasses describe systemic faults and
stop the whole run.

Every error carries an ``ErrorKind`` so callers can branch on the kind
without inspecting class names.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import PullRequest


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    OPERATOR_ABORTED = "operator_aborted"
    API_ERROR = "api_error"
    INVALID_CONFIG = "invalid_config"
    UNEXPECTED = "unexpected"


class BackportError(Exception):
    """Base class for all pr-backport errors."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class HandledError(BackportError):
    """An anticipated failure with a user-facing message."""


class NotFoundError(HandledError):
    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(HandledError):
    kind = ErrorKind.UNAUTHORIZED


class OperatorAbortedError(HandledError):
    kind = ErrorKind.OPERATOR_ABORTED

    def __init__(self, message: str = "Aborted") -> None:
        super().__init__(message)


class ConfigError(HandledError):
    """Configuration is missing or malformed."""

    kind = ErrorKind.INVALID_CONFIG


class GithubApiError(HandledError):
    """The GitHub API answered with an error payload.

    The message is the response payload rendered as JSON together with the
    URL of the failing request, so the operator can see exactly what GitHub
    rejected.
    """

    def __init__(self, message: str, *, status_code: int, url: str, payload: object) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.payload = payload
        if status_code in (401, 403):
            self.kind = ErrorKind.UNAUTHORIZED
        elif status_code == 404:
            self.kind = ErrorKind.NOT_FOUND
        else:
            self.kind = ErrorKind.API_ERROR


class LabelAttachmentError(HandledError):
    """Labels could not be added to a pull request that was already created."""

    kind = ErrorKind.API_ERROR

    def __init__(self, message: str, *, pull_request: PullRequest, cause: BackportError) -> None:
        super().__init__(message)
        self.pull_request = pull_request
        self.cause = cause
        self.kind = cause.kind


class UnexpectedError(BackportError):
    """A systemic failure that should stop the run."""


class GitCommandError(UnexpectedError):
    """A git command exited with a non-zero status."""

    def __init__(self, cmd: list[str], exit_code: int, stdout: str = "", stderr: str = "") -> None:
        self.cmd = list(cmd)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        detail = (stderr or stdout).strip()
        message = f"Command '{' '.join(self.cmd)}' failed with exit code {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConflictError(GitCommandError):
    """``git cherry-pick`` stopped because of conflicting changes."""

    kind = ErrorKind.CONFLICT
