"""Data models for worktree labels and diff statistics."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HistoryEntry:
    """A single line from ~/.claude/history.jsonl."""
    display: str = ""
    project: str = ""
    session_id: str = ""
    timestamp: int = 0  # epoch milliseconds


@dataclass(frozen=True)
class PromptMatch:
    """Result of looking up the first meaningful prompt for a worktree.

    Callers must check ``found`` before using ``prompt`` or ``session_id``.
    """
    prompt: str = ""
    session_id: str = ""
    found: bool = False

    def __iter__(self):
        return iter((self.prompt, self.session_id, self.found))


@dataclass(frozen=True)
class ChangeEntry:
    """One file's line counts from ``git diff --numstat``."""
    additions: int
    deletions: int
    path: str = ""


@dataclass(frozen=True)
class StatusInfo:
    """Aggregated insertions/deletions for a branch."""
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class Worktree:
    """A checkout listed by ``git worktree list --porcelain``."""
    path: str
    head: str = ""
    branch: str = ""  # short name, empty when detached
    bare: bool = False
    detached: bool = False


@dataclass
class WorktreeSummary:
    """Everything the picker shows for one worktree."""
    worktree: Worktree
    prompt: PromptMatch
    status: Optional[StatusInfo] = None
    error: Optional[str] = None
