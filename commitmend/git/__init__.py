"""Git access for commitmend.

- exceptions: GitError, NoStagedChangesError
- runner: _run_git_command, get_repo_root
- repository: GitCommitRepository (staged diff/files, commit)
"""

from commitmend.git.exceptions import (
    GitError,
    NoStagedChangesError,
)
from commitmend.git.runner import (
    _run_git_command,
    get_repo_root,
)
from commitmend.git.repository import GitCommitRepository


__all__ = [
    "GitError",
    "NoStagedChangesError",
    "_run_git_command",
    "get_repo_root",
    "GitCommitRepository",
]
