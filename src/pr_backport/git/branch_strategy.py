"""Feature branch naming."""

from __future__ import annotations

from collections.abc import Sequence

from ..constants import MAX_REF_SEGMENT_LENGTH
from ..models import Commit
from ..references import short_reference


def get_feature_branch_name(base_branch: str, commits: Sequence[Commit]) -> str:
    """Return the branch that holds the backport of ``commits`` to ``base_branch``.

    The name is ``backport/<base>/<refs>`` where ``<refs>`` joins the short
    references of the commits with ``_`` and is cut to 200 characters to stay
    within ref-name limits.  The name is deterministic, so the same commits
    always map to the same branch.  Two commit lists whose joined references
    share the first 200 characters map to the same name; callers must accept
    that collision.
    """
    ref_values = "_".join(short_reference(commit) for commit in commits)[:MAX_REF_SEGMENT_LENGTH]
    return f"backport/{base_branch}/{ref_values}"
