"""Git command runner.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
"""

import subprocess
from pathlib import Path
from typing import Optional

from commitmend.git.exceptions import GitError


def _run_git_command(args: list[str], cwd: Optional[Path] = None, input: Optional[str] = None) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run in. Defaults to the current directory.
        input: Text written to the command's stdin.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
            input=input,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}", command=args, stderr=stderr)
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Get the root directory of the current git repository.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
