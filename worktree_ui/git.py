"""Run git in worktrees and summarize what changed on their branches."""

import subprocess
from pathlib import Path
from typing import Iterable, Protocol

from .errors import GitError
from .models import ChangeEntry, StatusInfo, Worktree


class CommandRunner(Protocol):
    """Runs an external command in a directory and returns its stdout."""

    def run(self, cwd: str, name: str, *args: str) -> str:
        ...


class OSCommandRunner:
    """CommandRunner backed by subprocess."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def run(self, cwd: str, name: str, *args: str) -> str:
        command = [name, *args]
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise GitError(f"{name}: {e.strerror}", command=command) from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"{' '.join(command)}: timed out after {self.timeout}s", command=command) from e
        except UnicodeDecodeError as e:
            raise GitError(f"{' '.join(command)}: output is not valid UTF-8", command=command) from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise GitError(
                f"{' '.join(command)}: exit status {result.returncode}: {stderr}",
                command=command,
                returncode=result.returncode,
                stderr=stderr
            )
        return result.stdout


def parse_numstat(output: str) -> list:
    """Parse ``git diff --numstat`` output into ChangeEntry objects.

    Binary files are listed with ``-`` counts and contribute zero lines.
    Renames keep git's ``old => new`` path text as-is.
    """
    entries = []
    for line in output.splitlines():
        if not line.strip():
            continue

        parts = line.split("\t", 2)
        if len(parts) != 3:
            raise GitError(f"unexpected numstat line: {line!r}")

        added, deleted, path = parts
        try:
            entries.append(ChangeEntry(
                additions=_parse_count(added),
                deletions=_parse_count(deleted),
                path=path
            ))
        except ValueError as e:
            raise GitError(f"unexpected numstat line: {line!r}") from e

    return entries


def _parse_count(field: str) -> int:
    if field == "-":
        return 0
    count = int(field)
    if count < 0:
        raise ValueError(f"negative count {count}")
    return count


def get_diff_numstat(runner: CommandRunner, worktree_path: str, base_ref: str) -> list:
    """List per-file changes of the worktree's branch since it left ``base_ref``."""
    output = runner.run(worktree_path, "git", "diff", f"{base_ref}...HEAD", "--numstat")
    return parse_numstat(output)


def aggregate(entries: Iterable[ChangeEntry]) -> StatusInfo:
    """Sum additions and deletions over all entries."""
    insertions = 0
    deletions = 0
    for entry in entries:
        insertions += entry.additions
        deletions += entry.deletions
    return StatusInfo(insertions=insertions, deletions=deletions)


def get_branch_diff_stat(runner: CommandRunner, worktree_path: str, base_ref: str) -> StatusInfo:
    """Runs ``git diff <base>...HEAD --numstat`` and aggregates the line counts.

    Raises:
        GitError: The diff could not be computed. No partial summary is
            returned, so a failure is never mistaken for "no changes".
    """
    entries = get_diff_numstat(runner, worktree_path, base_ref)
    return aggregate(entries)


def parse_worktree_list(output: str) -> list:
    """Parse ``git worktree list --porcelain`` output."""
    worktrees = []
    block = {}

    def flush():
        if "worktree" in block:
            worktrees.append(Worktree(
                path=block["worktree"],
                head=block.get("HEAD", ""),
                branch=block.get("branch", "").removeprefix("refs/heads/"),
                bare="bare" in block,
                detached="detached" in block
            ))
        block.clear()

    for line in output.splitlines():
        if not line.strip():
            flush()
            continue
        key, _, value = line.partition(" ")
        block[key] = value
    flush()

    return worktrees


def list_worktrees(runner: CommandRunner, repo_path: str) -> list:
    """List all worktrees of the repository containing ``repo_path``."""
    output = runner.run(repo_path, "git", "worktree", "list", "--porcelain")
    return parse_worktree_list(output)


def worktree_created_at(worktree_path: str) -> int:
    """Approximate when a worktree was checked out, in epoch milliseconds.

    Linked worktrees get a ``.git`` file written once by ``git worktree add``;
    its mtime is the creation time. The main checkout has a ``.git``
    directory that changes constantly, so it gets 0 (no lower bound).
    """
    marker = Path(worktree_path) / ".git"
    if marker.is_dir():
        return 0
    return int(marker.stat().st_mtime * 1000)
