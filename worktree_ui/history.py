"""Parse the Claude Code prompt history and match it to worktrees."""

import io
import json
import os
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Protocol, Union

from .filters import is_skippable
from .models import HistoryEntry, PromptMatch


def get_claude_history_path() -> Path:
    """Get the Claude Code prompt history file.

    Honors ``CLAUDE_CONFIG_DIR`` the same way Claude Code does.
    """
    config_dir = os.environ.get("CLAUDE_CONFIG_DIR")
    if config_dir:
        return Path(config_dir).expanduser() / "history.jsonl"
    return Path.home() / ".claude" / "history.jsonl"


class HistoryReader(Protocol):
    """Anything that can produce the raw bytes of the history log."""

    def read_history(self) -> bytes:
        ...


class OSHistoryReader:
    """Reads the history log from disk."""

    def __init__(self, history_path: Optional[Path] = None):
        self.history_path = Path(history_path) if history_path else get_claude_history_path()

    def read_history(self) -> bytes:
        return self.history_path.read_bytes()


def parse_history(data: Union[bytes, BinaryIO]) -> list:
    """Parse JSONL history into HistoryEntry objects.

    Blank and malformed lines are skipped silently; the log is appended to
    by another process and may hold partial writes. Only errors raised while
    reading ``data`` itself propagate.

    Args:
        data: Raw log content, or a binary stream to read it from.

    Returns:
        List of HistoryEntry in file order.
    """
    stream = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data

    entries = []
    for line in stream:
        if not line.strip():
            continue

        try:
            entry = _entry_from_json(json.loads(line))
        except (ValueError, RecursionError):
            continue

        entries.append(entry)

    return entries


def _entry_from_json(raw) -> HistoryEntry:
    """Build a HistoryEntry from a decoded line, rejecting wrong shapes."""
    if not isinstance(raw, dict):
        raise ValueError("history line is not an object")

    fields = {}
    for key, attr in (("display", "display"), ("project", "project"), ("sessionId", "session_id")):
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"{key} is not a string")
        fields[attr] = value

    timestamp = raw.get("timestamp")
    if timestamp is not None:
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise ValueError("timestamp is not an integer")
        fields["timestamp"] = timestamp

    return HistoryEntry(**fields)


def find_first_prompt(
    entries: Optional[Iterable[HistoryEntry]],
    worktree_path: str,
    after_timestamp: int
) -> PromptMatch:
    """Find the first meaningful prompt typed in a worktree.

    The history is written chronologically, so the first match in file order
    is the earliest prompt; no sorting is done. Project paths are compared
    as exact strings.

    Args:
        entries: Parsed history entries, in file order.
        worktree_path: Filesystem path of the worktree.
        after_timestamp: Ignore entries older than this (epoch ms).

    Returns:
        PromptMatch with the prompt and session ID, or found=False.
    """
    for entry in entries or ():
        if entry.project != worktree_path:
            continue
        if entry.timestamp < after_timestamp:
            continue
        if is_skippable(entry.display):
            continue
        return PromptMatch(prompt=entry.display, session_id=entry.session_id, found=True)

    return PromptMatch()
