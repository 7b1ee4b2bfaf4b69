"""Tests for prompt filtering."""

import pytest

from worktree_ui.filters import MIN_PROMPT_LENGTH, is_skippable


@pytest.mark.parametrize("text,expected", [
    ("short", True),
    ("", True),
    ("a", True),
    ("   \n\t ", True),
    ("/commit", True),
    ("/review-pr 123", True),
    ("/REVIEW the whole pull request please", True),
    ("exit", True),
    ("quit", True),
    ("go build ./...", True),
    ("yes", True),
    ("no", True),
    ("y", True),
    ("n", True),
    ("implement the dark mode feature", False),
    ("fix the login redirect bug", False),
    ("implement dark mode for the user profile page", False),
])
def test_is_skippable(text, expected):
    assert is_skippable(text) is expected


@pytest.mark.parametrize("text,expected", [
    ("GO BUILD ./... now", True),
    ("Yes please do all of that", True),
    ("Quit the server before migrating", True),
    ("q what is happening here", True),
    ("No, revert the last change", False),
])
def test_command_tokens_are_case_insensitive(text, expected):
    assert is_skippable(text) is expected


def test_token_must_be_whole_word():
    assert is_skippable("going forward with the plan") is False
    assert is_skippable("yesterday's build broke the tests") is False
    assert is_skippable("quitting early breaks the daemon") is False
    assert is_skippable("number formatting is off in reports") is False


def test_length_is_measured_after_trimming():
    padded = "   " + "x" * (MIN_PROMPT_LENGTH - 1) + "   "
    assert is_skippable(padded) is True
    assert is_skippable("x" * MIN_PROMPT_LENGTH) is False


def test_slash_check_applies_after_trimming():
    assert is_skippable("   /commit -m 'fix the thing'") is True


def test_token_followed_by_more_spaces():
    assert is_skippable("exit      now") is True
