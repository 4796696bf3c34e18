"""Interactive prompts for the operator.

All prompts block until the operator answers.  Selections are entered as
comma-separated numbers from the printed list.
"""

from __future__ import annotations

from collections.abc import Sequence

import click
from rich.markup import escape

from .errors import NotFoundError
from .models import Commit
from .references import long_reference
from .ui import console


def confirm_prompt(message: str) -> bool:
    """Ask a yes/no question.  Pressing enter answers yes."""
    return click.confirm(message, default=True)


def _parse_selection(answer: str, count: int) -> list[int]:
    indices: list[int] = []
    for token in answer.replace(" ", "").split(","):
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= count:
            raise click.BadParameter(f"'{token}' is not a number between 1 and {count}")
        index = int(token) - 1
        if index not in indices:
            indices.append(index)
    return indices


def _choose(title: str, choices: Sequence[str], default: str | None = None) -> list[int]:
    console.print(f"[bold]{escape(title)}[/bold]")
    for number, choice in enumerate(choices, start=1):
        console.print(f"  {number}. {escape(choice)}", soft_wrap=True)
    while True:
        answer = click.prompt("Select (comma-separated)", default=default or "", show_default=bool(default))
        try:
            return _parse_selection(answer, len(choices))
        except click.BadParameter as exc:
            console.print(f"[red]{escape(exc.message)}[/red]")


def prompt_commits(commits: Sequence[Commit]) -> list[Commit]:
    """Let the operator pick which of ``commits`` to backport.

    The chosen commits are returned oldest first, so they cherry-pick in the
    order they were made.
    """
    if not commits:
        raise NotFoundError("There are no commits to choose from")
    labels = [f"{commit.message} ({long_reference(commit)})" for commit in commits]
    selected = _choose("Select commits to backport", labels, default="1")
    if not selected:
        raise NotFoundError("No commits selected")
    return [commits[i] for i in sorted(selected, reverse=True)]


def prompt_branches(branches: Sequence[str]) -> list[str]:
    """Let the operator pick target branches, keeping the configured order."""
    selected = _choose("Select branches to backport to", branches)
    if not selected:
        raise NotFoundError("No branches selected")
    return [branches[i] for i in sorted(selected)]
