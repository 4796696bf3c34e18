"""Fixtures that build real git repositories on disk.

``upstream`` is a bare repository with a ``master`` and a ``7.x`` branch.
The working copy at ``backport_ctx.repo_path`` is a clone of it, so
``origin`` points at the local bare repository and no network is needed.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

import pytest



@dataclass
class UpstreamRepo:
    path: Path
    fix_sha: str  # conflicts with 7.x
    feature_sha: str  # applies cleanly to 7.x


@pytest.fixture
def upstream(tmp_path, run_git) -> UpstreamRepo:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    seed = tmp_path / "seed"
    seed.mkdir()
    run_git(seed, "init")
    run_git(seed, "symbolic-ref", "HEAD", "refs/heads/master")
    (seed / "a.txt").write_text("base\n")
    run_git(seed, "add", "a.txt")
    run_git(seed, "commit", "-m", "Initial commit")

    run_git(seed, "checkout", "-b", "7.x")
    (seed / "a.txt").write_text("seven\n")
    run_git(seed, "commit", "-am", "Release tweak")

    run_git(seed, "checkout", "master")
    (seed / "a.txt").write_text("master fix\n")
    run_git(seed, "commit", "-am", "Fix bug (#42)")
    fix_sha = run_git(seed, "rev-parse", "HEAD")
    (seed / "b.txt").write_text("feature\n")
    run_git(seed, "add", "b.txt")
    run_git(seed, "commit", "-m", "Add feature")
    feature_sha = run_git(seed, "rev-parse", "HEAD")

    bare = tmp_path / "upstream.git"
    run_git(tmp_path, "init", "--bare", str(bare))
    run_git(seed, "push", str(bare), "master", "7.x")
    return UpstreamRepo(path=bare, fix_sha=fix_sha, feature_sha=feature_sha)


@pytest.fixture
def working_copy(backport_ctx, upstream, run_git) -> Path:
    backport_ctx.owner_path.mkdir(parents=True, exist_ok=True)
    run_git(backport_ctx.owner_path, "clone", "-b", "master", str(upstream.path), backport_ctx.repo_name)
    return backport_ctx.repo_path


@pytest.fixture
def fork(tmp_path, working_copy, run_git) -> Path:
    """A bare repository standing in for the operator's fork, added as remote ``alice``."""
    path = tmp_path / "fork.git"
    run_git(tmp_path, "init", "--bare", str(path))
    run_git(working_copy, "remote", "add", "alice", str(path))
    return path
