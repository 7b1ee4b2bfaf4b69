"""Exceptions raised by worktree-ui."""

from typing import Optional, Sequence


class WorktreeUIError(Exception):
    """Base class for worktree-ui errors."""


class GitError(WorktreeUIError):
    """A git command failed or produced output we could not read."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = ""
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
