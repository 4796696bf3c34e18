"""Backport orchestration.

For every target branch the orchestrator runs four phases in order:

1. sync: reset the working copy and branch off the upstream base branch
2. replicate: cherry-pick each commit, letting the operator fix conflicts
3. publish: force-push the feature branch to the operator's fork
4. request: open the pull request and attach labels

Branches are processed one at a time because they share a single working
copy.  A `HandledError` ends the current branch only; anything else ends the
run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..context import BackportContext
from ..errors import HandledError, LabelAttachmentError
from ..git import repo_ops
from ..git.branch_strategy import get_feature_branch_name
from ..github import api as github_api
from ..github.templates import get_pull_request_payload
from ..models import BackportRequest, BranchOutcome, Commit, PullRequest
from ..prompts import confirm_prompt
from ..references import long_reference
from ..ui import error, log, spinner
from .recovery import cherry_pick_and_confirm

logger = logging.getLogger(__name__)


def backport_commits(
    ctx: BackportContext,
    commits: Sequence[Commit],
    branches: Sequence[str],
    username: str,
    labels: Sequence[str] = (),
    pr_title: str | None = None,
    pr_description: str | None = None,
    api_hostname: str | None = None,
    confirm: Callable[[str], bool] = confirm_prompt,
) -> list[BranchOutcome]:
    """Backport ``commits`` to each of ``branches`` and report per-branch outcomes.

    Handled failures are printed and recorded; the remaining branches are
    still attempted.  Unhandled exceptions propagate immediately.
    """
    base_request = {
        "owner": ctx.owner,
        "repo_name": ctx.repo_name,
        "commits": tuple(commits),
        "username": username,
        "labels": tuple(labels),
        "pr_description": pr_description,
        "api_hostname": api_hostname or ctx.config.api_hostname,
    }
    if pr_title:
        base_request["pr_title"] = pr_title

    outcomes: list[BranchOutcome] = []
    for branch in branches:
        request = BackportRequest(base_branch=branch, **base_request)
        try:
            pull_request = backport_to_branch(ctx, request, confirm=confirm)
        except LabelAttachmentError as exc:
            log(f"View pull request: {exc.pull_request.url}")
            error(exc.message)
            outcomes.append(BranchOutcome(branch, pull_request=exc.pull_request, error=exc.message, kind=exc.kind))
            continue
        except HandledError as exc:
            error(exc.message)
            outcomes.append(BranchOutcome(branch, error=exc.message, kind=exc.kind))
            continue
        except Exception:
            logger.error("Backport to %s failed unexpectedly; stopping", branch)
            raise

        log(f"View pull request: {pull_request.url}")
        outcomes.append(BranchOutcome(branch, pull_request=pull_request))
    return outcomes


def backport_to_branch(
    ctx: BackportContext,
    request: BackportRequest,
    confirm: Callable[[str], bool] = confirm_prompt,
) -> PullRequest:
    """Run the four backport phases for a single target branch."""
    config = ctx.config
    feature_branch = get_feature_branch_name(request.base_branch, request.commits)
    ref_values = ", ".join(long_reference(commit) for commit in request.commits)
    log(f"Backporting {ref_values} to {request.base_branch}:")

    with spinner("Pulling latest changes"):
        repo_ops.reset_and_pull_default_branch(ctx, ctx.source_branch)
        repo_ops.create_and_checkout_branch(ctx, request.base_branch, feature_branch)

    for commit in request.commits:
        cherry_pick_and_confirm(ctx, commit.sha, confirm=confirm)

    with spinner(f"Pushing branch {request.username}:{feature_branch}"):
        repo_ops.push(ctx, request.username, feature_branch)

    with spinner("Creating pull request"):
        payload = get_pull_request_payload(
            request.base_branch,
            request.commits,
            request.username,
            request.pr_title,
            request.pr_description,
        )
        pull_request = github_api.create_pull_request(
            config, request.owner, request.repo_name, payload, request.api_hostname
        )
        logger.info("Created pull request #%s for %s", pull_request.number, request.base_branch)

    if request.labels:
        try:
            with spinner("Adding labels"):
                github_api.add_labels_to_pull_request(
                    config,
                    request.owner,
                    request.repo_name,
                    pull_request.number,
                    request.labels,
                    request.api_hostname,
                )
        except HandledError as exc:
            raise LabelAttachmentError(
                f"Pull request #{pull_request.number} was created but labels could not be added: {exc.message}",
                pull_request=pull_request,
                cause=exc,
            ) from exc

    return pull_request
