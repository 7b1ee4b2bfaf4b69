"""Command-line interface for worktree-ui."""

import argparse
import os
import sys
from pathlib import Path

from .errors import GitError
from .git import OSCommandRunner, get_branch_diff_stat, list_worktrees, worktree_created_at
from .history import OSHistoryReader, find_first_prompt, parse_history
from .namer import DEFAULT_MODEL, suggest_branch_name
from .picker import describe_worktrees
from .renderer import format_diff_stat, render_worktree_table


def default_base_ref() -> str:
    return os.environ.get("WORKTREE_UI_BASE_REF", "main")


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="worktree-ui",
        description="Label git worktrees with their first Claude Code prompt and diff size",
        epilog="""
Examples:
  worktree-ui list                 Worktrees with diff stat and first prompt
  worktree-ui list -b develop      Measure changes against develop
  worktree-ui prompt               First prompt typed in this worktree
  worktree-ui diffstat             +insertions -deletions since main
  worktree-ui name                 Suggest a branch name for this worktree
  worktree-ui help                 Show detailed help
""",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List worktrees with labels and diff stats"
    )
    list_parser.add_argument(
        "-r", "--repo",
        metavar="PATH",
        help="Repository path (defaults to current directory)"
    )
    _add_base_argument(list_parser)
    _add_history_argument(list_parser)
    list_parser.add_argument(
        "--all-history",
        action="store_true",
        help="Also match prompts typed before the worktree was created"
    )

    # prompt command
    prompt_parser = subparsers.add_parser(
        "prompt",
        help="Show the first meaningful prompt for a worktree"
    )
    _add_path_argument(prompt_parser)
    prompt_parser.add_argument(
        "--since",
        metavar="MS",
        type=int,
        help="Ignore prompts before this epoch-ms timestamp (default: worktree creation)"
    )
    _add_history_argument(prompt_parser)

    # diffstat command
    diffstat_parser = subparsers.add_parser(
        "diffstat",
        help="Show lines changed since the base ref"
    )
    _add_path_argument(diffstat_parser)
    _add_base_argument(diffstat_parser)

    # name command
    name_parser = subparsers.add_parser(
        "name",
        help="Suggest a branch name from the first prompt"
    )
    _add_path_argument(name_parser)
    _add_history_argument(name_parser)
    name_parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Derive the name from the prompt text without calling Claude"
    )
    name_parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help="Claude model for naming"
    )

    # help command
    subparsers.add_parser(
        "help",
        help="Show detailed help"
    )

    args = parser.parse_args(argv)

    # Handle subcommands
    if args.command == "list":
        return cmd_list(args)
    elif args.command == "prompt":
        return cmd_prompt(args)
    elif args.command == "diffstat":
        return cmd_diffstat(args)
    elif args.command == "name":
        return cmd_name(args)
    elif args.command == "help":
        return cmd_help()
    else:
        parser.print_help()
        return 0


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        help="Worktree path (defaults to current directory)"
    )


def _add_base_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-b", "--base",
        metavar="REF",
        default=default_base_ref(),
        help="Base ref to diff against (default: $WORKTREE_UI_BASE_REF or main)"
    )


def _add_history_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--history",
        metavar="FILE",
        help="Claude Code history file (default: ~/.claude/history.jsonl)"
    )


def _worktree_path(args) -> str:
    return str(Path(args.path or os.getcwd()).resolve())


def _first_prompt(args, since: int):
    """Look up the first prompt for args.path, or None if history is unreadable."""
    reader = OSHistoryReader(args.history)
    try:
        entries = parse_history(reader.read_history())
    except OSError as e:
        print(f"Error: could not read {reader.history_path}: {e}", file=sys.stderr)
        return None

    print(f"Loaded {len(entries)} history entries", file=sys.stderr)
    return find_first_prompt(entries, _worktree_path(args), since)


def _creation_time(path: str) -> int:
    try:
        return worktree_created_at(path)
    except OSError:
        return 0


def cmd_list(args) -> int:
    """List worktrees with labels and diff stats."""
    runner = OSCommandRunner()
    repo = args.repo or os.getcwd()

    try:
        worktrees = list_worktrees(runner, repo)
    except GitError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    summaries = describe_worktrees(
        worktrees,
        OSHistoryReader(args.history),
        runner,
        args.base,
        since_creation=not args.all_history
    )

    if not summaries:
        print("No worktrees found", file=sys.stderr)
        return 1

    print(render_worktree_table(summaries))
    return 0


def cmd_prompt(args) -> int:
    """Show the first meaningful prompt for a worktree."""
    since = args.since if args.since is not None else _creation_time(_worktree_path(args))
    match = _first_prompt(args, since)
    if match is None:
        return 1

    if not match.found:
        print("No prompt found for this worktree", file=sys.stderr)
        return 1

    print(f"Session: {match.session_id}", file=sys.stderr)
    print(match.prompt)
    return 0


def cmd_diffstat(args) -> int:
    """Show lines changed since the base ref."""
    try:
        status = get_branch_diff_stat(OSCommandRunner(), _worktree_path(args), args.base)
    except GitError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(format_diff_stat(None, str(e)))
        return 1

    print(format_diff_stat(status))
    return 0


def cmd_name(args) -> int:
    """Suggest a branch name from the first prompt."""
    match = _first_prompt(args, _creation_time(_worktree_path(args)))
    if match is None:
        return 1

    if not match.found:
        print("No prompt found for this worktree", file=sys.stderr)
        return 1

    name = suggest_branch_name(match.prompt, model=args.model, use_ai=not args.no_ai)
    if not name:
        print("Error: could not derive a branch name", file=sys.stderr)
        return 1

    print(name)
    return 0


def cmd_help() -> int:
    """Show detailed help."""
    help_text = """
WORKTREE-UI - Tell your worktrees apart

COMMANDS
  worktree-ui list [options]          List worktrees with diff stat and first prompt
  worktree-ui prompt [PATH] [options] First meaningful Claude Code prompt in a worktree
  worktree-ui diffstat [PATH] [-b REF] Lines inserted/deleted since the base ref
  worktree-ui name [PATH] [options]   Suggest a branch name from the first prompt
  worktree-ui help                    Show this help

LIST OPTIONS
  -r, --repo PATH      Repository (default: current directory)
  -b, --base REF       Base ref (default: $WORKTREE_UI_BASE_REF or main)
  --history FILE       Claude Code history file
  --all-history        Include prompts typed before the worktree existed

PROMPT OPTIONS
  --since MS           Ignore prompts before this epoch-ms timestamp
  --history FILE       Claude Code history file

NAME OPTIONS
  --no-ai              Slugify the prompt instead of asking Claude
  --model MODEL        Claude model (default: {model})

WHAT COUNTS AS A PROMPT
  Prompts shorter than 10 characters, slash commands (/commit) and
  command-like replies (exit, quit, q, go, yes, no, y, n) are skipped.
  The first remaining prompt typed in the worktree is its label.

DIFF STAT
  +N -M                Lines inserted/deleted on the branch since it left the base
  ?                    The diff could not be computed (bad ref, not a checkout)

ENVIRONMENT
  WORKTREE_UI_BASE_REF Default base ref
  CLAUDE_CONFIG_DIR    Claude Code config directory (default: ~/.claude)
  ANTHROPIC_API_KEY    Used by 'name' to ask Claude for a branch name
""".format(model=DEFAULT_MODEL)
    print(help_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
