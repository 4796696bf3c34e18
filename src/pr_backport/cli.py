"""Command-line entry point.

Usage:
    backport                                 - pick commits and branches interactively
    backport --sha <sha> -b 7.x -b 6.8       - backport a commit to two branches
    backport --upstream owner/repo --all     - choose from recent commits of any author

Settings not given on the command line are read from `.backportrc.json` in
the current directory and from the environment (see ``config``).
"""

from __future__ import annotations

from collections.abc import Sequence

import click
from rich.markup import escape

from . import __version__
from .backport import backport_commits
from .config import Config, ProjectConfig, split_upstream
from .constants import PROJECT_CONFIG_FILE
from .context import BackportContext
from .errors import ConfigError, HandledError
from .git import repo_ops
from .github import api as github_api
from .models import BranchOutcome, Commit
from .prompts import prompt_branches, prompt_commits
from .telemetry import get_logger
from .ui import console, spinner


def resolve_commits(ctx: BackportContext, shas: Sequence[str], author: str | None) -> list[Commit]:
    """Look up the commits named on the command line, or ask the operator."""
    config = ctx.config
    if shas:
        with spinner("Loading commits"):
            return [
                github_api.fetch_commit_by_sha(
                    config, ctx.owner, ctx.repo_name, sha, config.api_hostname, base_branch=ctx.source_branch
                )
                for sha in shas
            ]

    with spinner("Loading commits"):
        commits = github_api.fetch_commits_by_author(
            config, ctx.owner, ctx.repo_name, author, config.api_hostname, base_branch=ctx.source_branch
        )
    return prompt_commits(commits)


def resolve_branches(branches: Sequence[str], project: ProjectConfig) -> list[str]:
    if branches:
        return list(branches)
    if not project.branches:
        raise ConfigError("No target branches given. Use --branch or set 'branches' in the project config")
    if len(project.branches) == 1:
        return list(project.branches)
    return prompt_branches(project.branches)


def run_backport(
    *,
    upstream: str | None,
    branches: Sequence[str],
    shas: Sequence[str],
    all_authors: bool | None,
    labels: Sequence[str],
    pr_title: str | None,
    pr_description: str | None,
    username: str | None,
    access_token: str | None,
    api_hostname: str | None,
    git_hostname: str | None,
    config_file: str,
    log_level: str | None,
) -> list[BranchOutcome]:
    """Resolve settings, prepare the working copy and backport.

    Raises `HandledError` for problems found before any branch is touched
    (bad configuration, invalid token, unknown commit).
    """
    project = ProjectConfig.load(config_file)
    config = Config.load_from_env(
        {
            "github_token": access_token,
            "github_username": username,
            "api_hostname": api_hostname,
            "git_hostname": git_hostname,
            "log_level": log_level,
        }
    )
    get_logger("pr_backport", config.log_level)

    owner, repo_name = split_upstream(upstream or project.upstream)
    ctx = BackportContext(config=config, owner=owner, repo_name=repo_name, source_branch=project.source_branch)

    with spinner("Verifying access token"):
        github_api.verify_access_token(config, owner, repo_name, config.api_hostname)

    with spinner(f"Preparing {ctx.repo_path}"):
        repo_ops.setup_repo(ctx, config.github_username)

    use_all = project.all_authors if all_authors is None else all_authors
    commits = resolve_commits(ctx, shas, None if use_all else config.github_username)
    target_branches = resolve_branches(branches, project)

    return backport_commits(
        ctx,
        commits,
        target_branches,
        username=config.github_username,
        labels=list(labels) or project.labels,
        pr_title=pr_title or project.pr_title,
        pr_description=pr_description or project.pr_description,
        api_hostname=config.api_hostname,
    )


def print_summary(outcomes: Sequence[BranchOutcome]) -> None:
    if len(outcomes) < 2:
        return
    console.print("\n[bold]Summary[/bold]")
    for outcome in outcomes:
        if outcome.ok:
            console.print(f"  [green]✔[/green] {escape(outcome.branch)}: {outcome.pull_request.url}", soft_wrap=True)
        else:
            console.print(f"  [red]✖[/red] {escape(outcome.branch)}: {escape(outcome.error or '')}", soft_wrap=True)


@click.command(name="backport")
@click.option("--upstream", help="Repository to backport in, as owner/repo.")
@click.option("--branch", "-b", "branches", multiple=True, help="Target branch (repeatable).")
@click.option("--sha", "shas", multiple=True, help="Commit to backport (repeatable).")
@click.option("--all/--mine", "all_authors", default=None, help="List commits from every author, or only your own.")
@click.option("--label", "-l", "labels", multiple=True, help="Label for the pull requests (repeatable).")
@click.option("--pr-title", help="Title template; supports {baseBranch} and {commitMessages}.")
@click.option("--pr-description", help="Text appended to the pull request body.")
@click.option("--username", help="GitHub username owning the fork (default: GITHUB_USERNAME).")
@click.option("--access-token", help="GitHub access token (default: GITHUB_TOKEN).")
@click.option("--api-hostname", help="GitHub API host, e.g. github.example.com/api/v3.")
@click.option("--git-hostname", help="Git host used for remotes, e.g. github.example.com.")
@click.option(
    "--config-file",
    default=PROJECT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Project config file.",
)
@click.option("--log-level", help="Log level (default: LOG_LEVEL or INFO).")
@click.version_option(__version__, prog_name="backport")
@click.pass_context
def main(ctx: click.Context, **options) -> None:
    """Cherry-pick commits onto release branches and open pull requests."""
    try:
        outcomes = run_backport(**options)
    except HandledError as exc:
        raise click.ClickException(exc.message) from exc

    print_summary(outcomes)
    if not all(outcome.ok for outcome in outcomes):
        ctx.exit(1)


if __name__ == "__main__":
    main()
