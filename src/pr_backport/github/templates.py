"""Templates for backport pull request titles and bodies."""

from __future__ import annotations

from collections.abc import Sequence

from ..constants import MAX_COMMIT_MESSAGES_LENGTH, PR_BODY_PREAMBLE
from ..git.branch_strategy import get_feature_branch_name
from ..models import Commit, PullRequestPayload
from ..references import long_reference


def get_pull_request_title(base_branch: str, commits: Sequence[Commit], pr_title: str) -> str:
    """Fill in the ``{baseBranch}`` and ``{commitMessages}`` placeholders of ``pr_title``.

    Only the first occurrence of each placeholder is replaced.  Any other
    text in braces is kept as written.
    """
    commit_messages = " | ".join(commit.message for commit in commits)[:MAX_COMMIT_MESSAGES_LENGTH]
    return pr_title.replace("{baseBranch}", base_branch, 1).replace("{commitMessages}", commit_messages, 1)


def get_pull_request_body(base_branch: str, commits: Sequence[Commit], pr_description: str | None = None) -> str:
    """Return the body listing each backported commit.

    A commit message that already ends in its own reference, such as
    ``Fix bug (#42)``, has that reference removed before it is appended
    again, so it is not shown twice.
    """
    lines = []
    for commit in commits:
        ref = long_reference(commit)
        message = commit.message.replace(f"({ref})", "", 1)
        lines.append(f" - {message} ({ref})")

    body = PR_BODY_PREAMBLE.format(base_branch=base_branch) + "\n" + "\n".join(lines)
    if pr_description:
        body += f"\n\n{pr_description}"
    return body


def get_pull_request_payload(
    base_branch: str,
    commits: Sequence[Commit],
    username: str,
    pr_title: str,
    pr_description: str | None = None,
) -> PullRequestPayload:
    """Assemble the pull request for ``commits`` backported to ``base_branch``.

    The head branch is derived with the same rule used when the feature
    branch is created, so the payload always names the branch that was
    pushed.
    """
    feature_branch = get_feature_branch_name(base_branch, commits)
    return PullRequestPayload(
        title=get_pull_request_title(base_branch, commits, pr_title),
        body=get_pull_request_body(base_branch, commits, pr_description),
        head=f"{username}:{feature_branch}",
        base=base_branch,
    )
