"""Staged-change queries and committing for one repository."""

import logging
from pathlib import Path
from typing import Optional

from commitmend.config import DIFF_TRUNCATION_MARKER, MAX_DIFF_CHARS
from commitmend.git.exceptions import NoStagedChangesError
from commitmend.git.runner import _run_git_command, get_repo_root

logger = logging.getLogger(__name__)


class GitCommitRepository:
    """Git operations used by the commit flow.

    Args:
        cwd: Working directory inside the repository.
        max_diff_chars: Diffs longer than this are truncated.
    """

    def __init__(self, cwd: Optional[Path] = None, max_diff_chars: int = MAX_DIFF_CHARS):
        self.cwd = cwd
        self.max_diff_chars = max_diff_chars

    def _git(self, args: list[str], input: Optional[str] = None) -> str:
        return _run_git_command(args, cwd=self.cwd, input=input)

    def get_repo_root(self) -> Path:
        return get_repo_root(cwd=self.cwd)

    def get_staged_diff(self) -> str:
        """Return the staged diff (stat + patch), truncated to max_diff_chars."""
        diff = self._git(["diff", "--cached", "--stat", "-p", "--no-color"])
        if len(diff) > self.max_diff_chars:
            logger.debug("Truncating staged diff from %d to %d characters", len(diff), self.max_diff_chars)
            diff = diff[:self.max_diff_chars] + DIFF_TRUNCATION_MARKER
        return diff

    def get_staged_files(self) -> list[str]:
        output = self._git(["diff", "--cached", "--name-only"])
        return [line for line in output.splitlines() if line.strip()]

    def has_staged_changes(self) -> bool:
        return bool(self.get_staged_files())

    def ensure_staged_changes(self) -> None:
        """Raises NoStagedChangesError if nothing is staged."""
        if not self.has_staged_changes():
            raise NoStagedChangesError()

    def commit(self, message: str) -> str:
        """Create a commit with the given message (passed on stdin).

        Returns:
            git's output.

        Raises:
            GitError: If the commit fails.
        """
        return self._git(["commit", "-F", "-"], input=message)
