"""Shared fixtures for worktree-ui tests."""

import pytest

from tests.fakes import FakeCommandRunner, FakeHistoryReader


@pytest.fixture
def fake_runner():
    return FakeCommandRunner()


@pytest.fixture
def fake_reader():
    return FakeHistoryReader()
