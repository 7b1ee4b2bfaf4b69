"""Tests for assembling picker rows."""

import json
import os

from worktree_ui.errors import GitError
from worktree_ui.models import HistoryEntry, StatusInfo, Worktree
from worktree_ui.picker import describe_worktree, describe_worktrees
from tests.fakes import FakeCommandRunner, FakeHistoryReader


def _diff(path, base="main"):
    return (path, "git", "diff", f"{base}...HEAD", "--numstat")


def _history(*entries):
    return "\n".join(
        json.dumps({"display": d, "project": p, "sessionId": s, "timestamp": t})
        for d, p, s, t in entries
    ).encode()


def test_describe_worktree_with_label_and_stat():
    wt = Worktree("/wt/a", branch="feature-a")
    entries = [HistoryEntry("add user settings page to the dashboard", "/wt/a", "s1", 200)]
    runner = FakeCommandRunner(outputs={_diff("/wt/a"): "3\t1\tx.py\n5\t2\ty.py\n"})

    summary = describe_worktree(wt, entries, runner, "main")

    assert summary.prompt.found
    assert summary.prompt.session_id == "s1"
    assert summary.status == StatusInfo(8, 3)
    assert summary.error is None


def test_describe_worktree_keeps_diff_error():
    wt = Worktree("/wt/a", branch="feature-a")
    runner = FakeCommandRunner(errors={_diff("/wt/a"): GitError("bad revision 'main...HEAD'")})

    summary = describe_worktree(wt, [], runner, "main")

    assert summary.status is None
    assert summary.error == "bad revision 'main...HEAD'"
    assert summary.prompt.found is False


def test_describe_worktrees_reads_history_once_and_skips_bare():
    worktrees = [
        Worktree("/srv/app.git", bare=True),
        Worktree("/wt/a", branch="a"),
        Worktree("/wt/b", branch="b"),
    ]
    reader = FakeHistoryReader(_history(
        ("fix the payment rounding issue", "/wt/b", "sb", 10),
        ("implement dark mode for the profile", "/wt/a", "sa", 20),
    ))
    runner = FakeCommandRunner(outputs={_diff("/wt/a"): "1\t0\tf\n", _diff("/wt/b"): ""})

    summaries = describe_worktrees(worktrees, reader, runner, "main", since_creation=False)

    assert reader.calls == 1
    assert [s.worktree.path for s in summaries] == ["/wt/a", "/wt/b"]
    assert summaries[0].prompt.prompt == "implement dark mode for the profile"
    assert summaries[1].prompt.session_id == "sb"
    assert summaries[1].status == StatusInfo(0, 0)


def test_describe_worktrees_unreadable_history_gives_no_labels(capsys):
    reader = FakeHistoryReader(err=FileNotFoundError("no history"))
    runner = FakeCommandRunner(outputs={_diff("/wt/a"): "2\t2\tf\n"})

    summaries = describe_worktrees([Worktree("/wt/a")], reader, runner, "main", since_creation=False)

    assert summaries[0].prompt.found is False
    assert summaries[0].status == StatusInfo(2, 2)
    assert "could not read Claude history" in capsys.readouterr().err


def test_describe_worktrees_since_creation(tmp_path):
    wt_path = tmp_path / "wt"
    wt_path.mkdir()
    marker = wt_path / ".git"
    marker.write_text("gitdir: elsewhere\n")
    os.utime(marker, (1000, 1000))  # created at 1_000_000 ms

    reader = FakeHistoryReader(_history(
        ("prompt from an older checkout here", str(wt_path), "old", 999_999),
        ("prompt from the current checkout", str(wt_path), "new", 1_000_500),
    ))
    runner = FakeCommandRunner(outputs={_diff(str(wt_path)): ""})

    summaries = describe_worktrees([Worktree(str(wt_path))], reader, runner, "main")

    assert summaries[0].prompt.session_id == "new"


def test_describe_worktrees_missing_checkout_has_no_time_bound():
    reader = FakeHistoryReader(_history(("an early prompt for this path", "/gone/wt", "s", 1),))
    runner = FakeCommandRunner(errors={_diff("/gone/wt"): GitError("not a git repository")})

    summaries = describe_worktrees([Worktree("/gone/wt")], reader, runner, "main")

    assert summaries[0].prompt.found
    assert summaries[0].error == "not a git repository"


def test_describe_worktrees_empty_history_and_failing_git(fake_reader, fake_runner):
    summaries = describe_worktrees([Worktree("/wt/x")], fake_reader, fake_runner, "main", since_creation=False)

    assert summaries[0].prompt.found is False
    assert summaries[0].status is None
    assert "unexpected command" in summaries[0].error
    assert fake_runner.calls == [_diff("/wt/x")]
