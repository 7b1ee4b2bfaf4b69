"""worktree-ui - Label git worktrees with their Claude Code sessions.

worktree-ui reads the Claude Code prompt history, finds the first real
instruction typed in each worktree, and pairs it with the number of lines
changed on the worktree's branch, so a picker can tell worktrees apart.

Basic usage:
    from worktree_ui import OSHistoryReader, parse_history, find_first_prompt

    entries = parse_history(OSHistoryReader().read_history())
    match = find_first_prompt(entries, "/home/me/repo-feature", 0)
    if match.found:
        print(match.prompt)

Diff stats:
    from worktree_ui import OSCommandRunner, get_branch_diff_stat

    status = get_branch_diff_stat(OSCommandRunner(), "/home/me/repo-feature", "main")
    print(f"+{status.insertions} -{status.deletions}")
"""

__version__ = "0.1.0"

from .models import (
    HistoryEntry,
    PromptMatch,
    ChangeEntry,
    StatusInfo,
    Worktree,
    WorktreeSummary,
)
from .errors import WorktreeUIError, GitError
from .filters import is_skippable
from .history import (
    HistoryReader,
    OSHistoryReader,
    get_claude_history_path,
    parse_history,
    find_first_prompt,
)
from .git import (
    CommandRunner,
    OSCommandRunner,
    parse_numstat,
    get_diff_numstat,
    aggregate,
    get_branch_diff_stat,
    parse_worktree_list,
    list_worktrees,
    worktree_created_at,
)
from .picker import describe_worktree, describe_worktrees
from .renderer import format_diff_stat, format_label, render_worktree_table
from .namer import slugify_prompt, suggest_branch_name
from .cli import main

__all__ = [
    # Models
    "HistoryEntry",
    "PromptMatch",
    "ChangeEntry",
    "StatusInfo",
    "Worktree",
    "WorktreeSummary",
    # Errors
    "WorktreeUIError",
    "GitError",
    # History
    "is_skippable",
    "HistoryReader",
    "OSHistoryReader",
    "get_claude_history_path",
    "parse_history",
    "find_first_prompt",
    # Git
    "CommandRunner",
    "OSCommandRunner",
    "parse_numstat",
    "get_diff_numstat",
    "aggregate",
    "get_branch_diff_stat",
    "parse_worktree_list",
    "list_worktrees",
    "worktree_created_at",
    # Picker
    "describe_worktree",
    "describe_worktrees",
    # Renderer
    "format_diff_stat",
    "format_label",
    "render_worktree_table",
    # Naming
    "slugify_prompt",
    "suggest_branch_name",
    # CLI
    "main",
]
