"""Integration tests for repository operations against real git repositories."""

from __future__ import annotations

import pytest

from pr_backport.backport.recovery import cherry_pick_and_confirm
from pr_backport.errors import ConflictError, GitCommandError, OperatorAbortedError
from pr_backport.git import repo_ops


def test_repo_exists(backport_ctx, working_copy):
    assert repo_ops.repo_exists(backport_ctx)

    repo_ops.delete_repo(backport_ctx)

    assert not repo_ops.repo_exists(backport_ctx)


def test_add_remote_is_idempotent(backport_ctx, working_copy, run_git):
    assert repo_ops.add_remote(backport_ctx, "bob") is True
    assert repo_ops.add_remote(backport_ctx, "bob") is False

    url = run_git(working_copy, "remote", "get-url", "bob")
    assert url == "https://test-github-token@github.com/bob/kibana.git"


def test_setup_repo_reuses_existing_clone(backport_ctx, working_copy, run_git, mocker):
    clone = mocker.patch("pr_backport.git.repo_ops.clone_repo")

    repo_ops.setup_repo(backport_ctx, "alice")
    repo_ops.setup_repo(backport_ctx, "alice")

    clone.assert_not_called()
    assert "alice" in run_git(working_copy, "remote").split()


def test_branch_from_upstream_and_cherry_pick(backport_ctx, upstream, working_copy, run_git):
    repo_ops.reset_and_pull_default_branch(backport_ctx, "master")
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/commit-abc")

    repo_ops.cherry_pick(backport_ctx, upstream.feature_sha)

    assert run_git(working_copy, "rev-parse", "--abbrev-ref", "HEAD") == "backport/7.x/commit-abc"
    assert run_git(working_copy, "log", "-1", "--format=%s") == "Add feature"
    assert (working_copy / "a.txt").read_text() == "seven\n"
    assert not repo_ops.is_index_dirty(backport_ctx)


def test_checkout_resets_existing_feature_branch(backport_ctx, upstream, working_copy, run_git):
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/commit-abc")
    repo_ops.cherry_pick(backport_ctx, upstream.feature_sha)
    repo_ops.reset_and_pull_default_branch(backport_ctx, "master")

    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/commit-abc")

    assert run_git(working_copy, "log", "-1", "--format=%s") == "Release tweak"


def test_conflict_raises_conflict_error(backport_ctx, upstream, working_copy):
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/pr-42")

    with pytest.raises(ConflictError) as excinfo:
        repo_ops.cherry_pick(backport_ctx, upstream.fix_sha)

    assert excinfo.value.exit_code != 0
    assert repo_ops.is_index_dirty(backport_ctx)


def test_unknown_commit_is_not_a_conflict(backport_ctx, working_copy):
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/pr-42")

    with pytest.raises(GitCommandError) as excinfo:
        repo_ops.cherry_pick(backport_ctx, "0123456789abcdef0123456789abcdef01234567")

    assert not isinstance(excinfo.value, ConflictError)


def test_failed_command_redacts_token(backport_ctx, working_copy):
    with pytest.raises(GitCommandError) as excinfo:
        backport_ctx.runner.run(
            ["git", "fetch", "https://test-github-token@127.0.0.1:1/nope.git"], cwd=working_copy
        )

    assert "test-github-token" not in str(excinfo.value)
    assert "test-github-token" not in " ".join(excinfo.value.cmd)


def test_push_to_fork(backport_ctx, upstream, fork, run_git):
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/commit-abc")
    repo_ops.cherry_pick(backport_ctx, upstream.feature_sha)

    repo_ops.push(backport_ctx, "alice", "backport/7.x/commit-abc")

    pushed = run_git(fork, "log", "-1", "--format=%s", "backport/7.x/commit-abc")
    assert pushed == "Add feature"


class TestConflictRecovery:
    @pytest.fixture
    def on_release_branch(self, backport_ctx, working_copy):
        repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/pr-42")
        return working_copy

    def test_operator_resolves_conflict(self, backport_ctx, upstream, on_release_branch, run_git):
        answers = []

        def confirm(message):
            answers.append(message)
            if len(answers) == 2:
                (on_release_branch / "a.txt").write_text("seven with fix\n")
                run_git(on_release_branch, "add", "a.txt")
                run_git(on_release_branch, "cherry-pick", "--continue")
            return True

        cherry_pick_and_confirm(backport_ctx, upstream.fix_sha, confirm=confirm)

        # The first confirmation came while the index was still dirty
        assert len(answers) == 2
        assert run_git(on_release_branch, "log", "-1", "--format=%s") == "Fix bug (#42)"
        assert (on_release_branch / "a.txt").read_text() == "seven with fix\n"
        assert not repo_ops.is_index_dirty(backport_ctx)

    def test_operator_declines(self, backport_ctx, upstream, on_release_branch):
        with pytest.raises(OperatorAbortedError):
            cherry_pick_and_confirm(backport_ctx, upstream.fix_sha, confirm=lambda message: False)


def test_working_copy_layout(backport_ctx, tmp_path):
    assert repo_ops.get_repo_owner_path(backport_ctx) == tmp_path / "home" / "repositories" / "elastic"
    assert repo_ops.get_repo_path(backport_ctx) == tmp_path / "home" / "repositories" / "elastic" / "kibana"


def test_cherry_pick_in_progress(backport_ctx, upstream, working_copy):
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/pr-42")
    assert not repo_ops.is_cherry_pick_in_progress(backport_ctx)

    with pytest.raises(ConflictError):
        repo_ops.cherry_pick(backport_ctx, upstream.fix_sha)

    assert repo_ops.is_cherry_pick_in_progress(backport_ctx)


def test_empty_cherry_pick_waits_for_operator(backport_ctx, upstream, working_copy, run_git):
    repo_ops.create_and_checkout_branch(backport_ctx, "7.x", "backport/7.x/commit-abc")
    repo_ops.cherry_pick(backport_ctx, upstream.feature_sha)
    answers = []

    def confirm(message):
        answers.append(message)
        if len(answers) == 2:
            run_git(working_copy, "commit", "--allow-empty", "--no-edit")
        return True

    # The change is already on the branch, so the second pick is empty and the
    # index stays clean while git waits for it to be committed or skipped.
    cherry_pick_and_confirm(backport_ctx, upstream.feature_sha, confirm=confirm)

    assert len(answers) == 2
    assert not repo_ops.is_cherry_pick_in_progress(backport_ctx)
