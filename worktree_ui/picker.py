"""Assemble the label and diff stat the picker shows for each worktree."""

import sys
from typing import Iterable

from .errors import GitError
from .git import CommandRunner, get_branch_diff_stat, worktree_created_at
from .history import HistoryReader, find_first_prompt, parse_history
from .models import Worktree, WorktreeSummary


def describe_worktree(
    worktree: Worktree,
    entries: list,
    runner: CommandRunner,
    base_ref: str,
    after_timestamp: int = 0
) -> WorktreeSummary:
    """Build the summary for one worktree.

    A failed diff is kept in ``error`` instead of being reported as zero.
    """
    summary = WorktreeSummary(
        worktree=worktree,
        prompt=find_first_prompt(entries, worktree.path, after_timestamp)
    )
    try:
        summary.status = get_branch_diff_stat(runner, worktree.path, base_ref)
    except GitError as e:
        summary.error = str(e)
    return summary


def describe_worktrees(
    worktrees: Iterable[Worktree],
    history_reader: HistoryReader,
    runner: CommandRunner,
    base_ref: str,
    since_creation: bool = True
) -> list:
    """Summarize every non-bare worktree.

    The history is read once. If it cannot be read the worktrees are still
    listed, just without labels.

    Args:
        worktrees: Worktrees to describe, in display order.
        history_reader: Source of the Claude Code history log.
        runner: Runs git.
        base_ref: Branch point to measure changes against.
        since_creation: Only consider prompts typed after each worktree was
            created, so an older checkout at the same path is ignored.
    """
    try:
        entries = parse_history(history_reader.read_history())
    except OSError as e:
        print(f"Warning: could not read Claude history: {e}", file=sys.stderr)
        entries = []

    summaries = []
    for wt in worktrees:
        if wt.bare:
            continue
        after = _created_at(wt.path) if since_creation else 0
        summaries.append(describe_worktree(wt, entries, runner, base_ref, after))

    return summaries


def _created_at(path: str) -> int:
    try:
        return worktree_created_at(path)
    except OSError:
        return 0
