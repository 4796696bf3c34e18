"""Git repository operations on the local working copy.

Each repository is cloned once into
``<backport home>/repositories/<owner>/<repo>`` and reused by later runs.
The working copy has an ``origin`` remote pointing at the upstream
repository and a remote named after the operator pointing at their fork;
feature branches are pushed to the latter.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import DEFAULT_SOURCE_BRANCH
from ..errors import ConflictError, GitCommandError

if TYPE_CHECKING:
    from ..context import BackportContext

logger = logging.getLogger(__name__)

# Output git prints when a cherry-pick stops for the operator
_CONFLICT_SIGNATURE = re.compile(
    r"^CONFLICT \(|could not apply|after resolving the conflicts|previous cherry-pick is now empty",
    re.IGNORECASE | re.MULTILINE,
)


def get_repo_owner_path(ctx: BackportContext) -> Path:
    return ctx.owner_path


def get_repo_path(ctx: BackportContext) -> Path:
    return ctx.repo_path


def get_remote_url(ctx: BackportContext, username: str) -> str:
    """Return the authenticated HTTPS URL of ``username``'s copy of the repo."""
    config = ctx.config
    return f"https://{config.github_token}@{config.git_hostname}/{username}/{ctx.repo_name}.git"


def repo_exists(ctx: BackportContext) -> bool:
    return (ctx.repo_path / ".git").is_dir()


def delete_repo(ctx: BackportContext) -> None:
    """Remove the working copy, if any."""
    shutil.rmtree(ctx.repo_path, ignore_errors=True)


def clone_repo(ctx: BackportContext) -> None:
    """Clone the upstream repository into the working copy directory."""
    ctx.owner_path.mkdir(parents=True, exist_ok=True)
    ctx.runner.run(
        ["git", "clone", get_remote_url(ctx, ctx.owner), ctx.repo_name],
        cwd=ctx.owner_path,
    )


def add_remote(ctx: BackportContext, remote_name: str) -> bool:
    """Add a remote pointing at ``remote_name``'s copy of the repository.

    Returns False when the remote already exists.
    """
    result = ctx.runner.run(
        ["git", "remote", "add", remote_name, get_remote_url(ctx, remote_name)],
        cwd=ctx.repo_path,
        check=False,
    )
    if not result.ok:
        if "already exists" in result.stderr:
            return False
        raise GitCommandError(result.argv, result.exit_code, result.stdout, result.stderr)
    return True


def setup_repo(ctx: BackportContext, username: str) -> None:
    """Make sure the working copy exists and has a remote for ``username``.

    The clone already points ``origin`` at the upstream repository.
    """
    if not repo_exists(ctx):
        logger.info("Cloning %s/%s into %s", ctx.owner, ctx.repo_name, ctx.repo_path)
        clone_repo(ctx)
    add_remote(ctx, username)


def reset_and_pull_default_branch(ctx: BackportContext, default_branch: str = DEFAULT_SOURCE_BRANCH) -> None:
    """Discard local changes and fast-forward ``default_branch`` from origin."""
    ctx.runner.run(["git", "reset", "--hard"], cwd=ctx.repo_path)
    ctx.runner.run(["git", "checkout", default_branch], cwd=ctx.repo_path)
    ctx.runner.run(["git", "pull", "origin", default_branch], cwd=ctx.repo_path)


def create_and_checkout_branch(ctx: BackportContext, base_branch: str, feature_branch: str) -> None:
    """Create ``feature_branch`` from the upstream ``base_branch`` and check it out."""
    ctx.runner.run(["git", "fetch", "origin", base_branch], cwd=ctx.repo_path)
    ctx.runner.run(
        ["git", "checkout", "-B", feature_branch, f"origin/{base_branch}", "--no-track"],
        cwd=ctx.repo_path,
    )


def cherry_pick(ctx: BackportContext, sha: str) -> None:
    """Apply ``sha`` onto the checked-out branch.

    Raises `ConflictError` when git stops for manual resolution and
    `GitCommandError` for any other failure.
    """
    result = ctx.runner.run(["git", "cherry-pick", sha], cwd=ctx.repo_path, check=False)
    if result.ok:
        return
    if is_conflict(result.argv, result.stdout, result.stderr):
        raise ConflictError(result.argv, result.exit_code, result.stdout, result.stderr)
    raise GitCommandError(result.argv, result.exit_code, result.stdout, result.stderr)


def is_conflict(argv: list[str], stdout: str, stderr: str) -> bool:
    """Return True when a failed command is a cherry-pick that stopped on a conflict."""
    if argv[:2] != ["git", "cherry-pick"]:
        return False
    return bool(_CONFLICT_SIGNATURE.search(stdout) or _CONFLICT_SIGNATURE.search(stderr))


def is_index_dirty(ctx: BackportContext) -> bool:
    """Return True when the index or working tree differs from HEAD."""
    result = ctx.runner.run(["git", "diff-index", "--quiet", "HEAD", "--"], cwd=ctx.repo_path, check=False)
    return not result.ok


def is_cherry_pick_in_progress(ctx: BackportContext) -> bool:
    """Return True while a stopped cherry-pick still waits to be committed or skipped."""
    result = ctx.runner.run(
        ["git", "rev-parse", "--quiet", "--verify", "CHERRY_PICK_HEAD"], cwd=ctx.repo_path, check=False
    )
    return result.ok


def push(ctx: BackportContext, remote_name: str, branch_name: str) -> None:
    """Force-push ``branch_name`` to the remote of the same name on ``remote_name``."""
    ctx.runner.run(
        ["git", "push", remote_name, f"{branch_name}:{branch_name}", "--force"],
        cwd=ctx.repo_path,
    )
