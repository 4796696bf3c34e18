"""Cherry-picking with operator-driven conflict recovery.

When ``git cherry-pick`` stops on a conflict the operator resolves it by hand
in the working copy and confirms.  The loop keeps asking until the index is
clean or the operator declines, in which case the current branch is
abandoned with `OperatorAbortedError`.  Failures other than conflicts are
not recoverable here and propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..context import BackportContext
from ..errors import ConflictError, OperatorAbortedError
from ..git import repo_ops
from ..prompts import confirm_prompt
from ..references import short_sha
from ..ui import log, spinner

logger = logging.getLogger(__name__)

RESOLVE_PROMPT = "Press enter when you have commited all changes"


def cherry_pick_and_confirm(
    ctx: BackportContext,
    sha: str,
    confirm: Callable[[str], bool] = confirm_prompt,
) -> None:
    """Cherry-pick ``sha``, handing conflicts to the operator until resolved."""
    try:
        with spinner(f"Cherry-picking commit {short_sha(sha)}"):
            repo_ops.cherry_pick(ctx, sha)
        return
    except ConflictError as exc:
        logger.debug("Cherry-pick of %s stopped: %s", sha, exc.stdout.strip() or exc.stderr.strip())

    log(
        f"Please resolve conflicts in: {ctx.repo_path} and when all conflicts "
        "have been resolved and staged run:"
    )
    log("\n    git cherry-pick --continue\n")
    resolve_conflicts_or_abort(ctx, confirm)


def resolve_conflicts_or_abort(ctx: BackportContext, confirm: Callable[[str], bool] = confirm_prompt) -> None:
    """Block until the operator has committed the resolution.

    A clean index is not enough while git still has the cherry-pick pending,
    as happens when the picked change is already on the branch.  There is no
    attempt limit: the operator can always decline to stop.
    """
    while True:
        if not confirm(RESOLVE_PROMPT):
            raise OperatorAbortedError()
        if not repo_ops.is_index_dirty(ctx) and not repo_ops.is_cherry_pick_in_progress(ctx):
            return
        logger.info("Working copy %s still has uncommitted changes or a pending cherry-pick", ctx.repo_path)
