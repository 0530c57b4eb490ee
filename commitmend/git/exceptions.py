"""Errors raised while talking to git."""

from typing import Optional

NO_STAGED_CHANGES_MESSAGE = "No staged changes found. Stage your changes first with: git add <files>"


class GitError(Exception):
    """A git command failed, git is missing, or the directory is not a repository.

    Attributes:
        command: The git arguments of the failing command, when known.
        stderr: What git wrote to stderr, when anything.
    """

    def __init__(self, message: str, command: Optional[list[str]] = None, stderr: Optional[str] = None):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class NoStagedChangesError(GitError):
    """The index has nothing to commit."""

    def __init__(self, message: str = NO_STAGED_CHANGES_MESSAGE):
        super().__init__(message, command=["diff", "--cached", "--name-only"])
