"""Tests for interactive operator prompts."""

from __future__ import annotations

import click
import pytest

from pr_backport import prompts
from pr_backport.errors import NotFoundError
from pr_backport.models import Commit

COMMITS = [
    Commit(sha="3333333cccc", message="Newest", pull_number=3),
    Commit(sha="2222222bbbb", message="Middle"),
    Commit(sha="1111111aaaa", message="Oldest", pull_number=1),
]


def test_confirm_prompt_defaults_to_yes(mocker):
    confirm = mocker.patch("pr_backport.prompts.click.confirm", return_value=True)

    assert prompts.confirm_prompt("Continue?") is True
    confirm.assert_called_once_with("Continue?", default=True)


def test_parse_selection():
    assert prompts._parse_selection("1, 3,3", 3) == [0, 2]
    assert prompts._parse_selection("", 3) == []


@pytest.mark.parametrize("answer", ["0", "4", "x", "1;2"])
def test_parse_selection_rejects_invalid(answer):
    with pytest.raises(click.BadParameter):
        prompts._parse_selection(answer, 3)


def test_prompt_commits_returns_oldest_first(mocker):
    mocker.patch("pr_backport.prompts.click.prompt", return_value="1,3")

    assert prompts.prompt_commits(COMMITS) == [COMMITS[2], COMMITS[0]]


def test_prompt_commits_reprompts_on_invalid_answer(mocker):
    prompt = mocker.patch("pr_backport.prompts.click.prompt", side_effect=["9", "2"])

    assert prompts.prompt_commits(COMMITS) == [COMMITS[1]]
    assert prompt.call_count == 2


def test_prompt_commits_requires_a_selection(mocker):
    mocker.patch("pr_backport.prompts.click.prompt", return_value="")

    with pytest.raises(NotFoundError, match="No commits selected"):
        prompts.prompt_commits(COMMITS)


def test_prompt_commits_with_nothing_to_choose():
    with pytest.raises(NotFoundError):
        prompts.prompt_commits([])


def test_prompt_branches_keeps_configured_order(mocker):
    mocker.patch("pr_backport.prompts.click.prompt", return_value="3,1")

    assert prompts.prompt_branches(["7.x", "6.8", "6.7"]) == ["7.x", "6.7"]


def test_prompt_branches_requires_a_selection(mocker):
    mocker.patch("pr_backport.prompts.click.prompt", return_value=" ")

    with pytest.raises(NotFoundError, match="No branches selected"):
        prompts.prompt_branches(["7.x"])
