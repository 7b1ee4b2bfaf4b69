"""Render worktree summaries as plain text."""

from typing import Optional

from .models import PromptMatch, StatusInfo


def format_diff_stat(status: Optional[StatusInfo], error: Optional[str] = None) -> str:
    """Format a diff stat as "+8 -3".

    A failed diff renders as "?" so it is never confused with "+0 -0".
    """
    if error or status is None:
        return "?"
    return f"+{status.insertions} -{status.deletions}"


def format_label(prompt: PromptMatch, width: int = 60) -> str:
    """First line of the prompt, whitespace collapsed, truncated to width."""
    if not prompt.found:
        return ""

    lines = prompt.prompt.strip().splitlines()
    text = " ".join(lines[0].split()) if lines else ""
    if len(text) > width:
        text = text[:max(width - 3, 0)].rstrip() + "..."
    return text


def render_worktree_table(summaries: list, label_width: int = 60) -> str:
    """Render one aligned row per worktree: branch, diff stat, label, path."""
    rows = []
    for s in summaries:
        branch = s.worktree.branch or f"({s.worktree.head[:8]})"
        rows.append((
            branch,
            format_diff_stat(s.status, s.error),
            format_label(s.prompt, label_width),
            s.worktree.path
        ))

    if not rows:
        return ""

    branch_width = max(len(r[0]) for r in rows)
    stat_width = max(len(r[1]) for r in rows)
    text_width = max(len(r[2]) for r in rows)

    lines = []
    for branch, stat, label, path in rows:
        lines.append(
            f"{branch:<{branch_width}}  {stat:>{stat_width}}  {label:<{text_width}}  {path}".rstrip()
        )
    return "\n".join(lines)
