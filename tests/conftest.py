"""Pytest configuration and fixtures for pr-backport tests.

Environment variables are set before any pr_backport import so that
configuration defaults resolve against test values rather than the
developer's real credentials.
"""

from __future__ import annotations

import os

os.environ.setdefault("GITHUB_TOKEN", "test-github-token")
os.environ.setdefault("GITHUB_USERNAME", "alice")

import subprocess
from pathlib import Path

import pytest

from pr_backport.config import Config
from pr_backport.context import BackportContext
from pr_backport.models import Commit


def git(cwd: Path, *args: str) -> str:
    """Run a git command for test setup and return its stdout."""
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's environment and git config."""
    monkeypatch.setenv("GITHUB_TOKEN", "test-github-token")
    monkeypatch.setenv("GITHUB_USERNAME", "alice")
    monkeypatch.setenv("BACKPORT_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@test.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@test.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_EDITOR", "true")


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        github_token="test-github-token",
        github_username="alice",
        backport_home=tmp_path / "home",
        command_timeout_s=60,
    )


@pytest.fixture
def backport_ctx(config) -> BackportContext:
    return BackportContext(config=config, owner="elastic", repo_name="kibana")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit(sha="abc1234def5678abc1234def5678abc1234def56", message="Fix bug (#42)", pull_number=42)


@pytest.fixture
def plain_commit() -> Commit:
    return Commit(sha="fedcba9876543210fedcba9876543210fedcba98", message="Bump version")


@pytest.fixture
def run_git():
    """Expose the ``git`` helper to tests."""
    return git
