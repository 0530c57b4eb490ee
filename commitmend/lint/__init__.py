"""Commit message linting with commitlint-compatible rules."""

from commitmend.lint.config import LintConfig, LintConfigError, load_lint_config
from commitmend.lint.linter import CommitLinter, ValidationResult

__all__ = [
    "CommitLinter",
    "LintConfig",
    "LintConfigError",
    "ValidationResult",
    "load_lint_config",
]
