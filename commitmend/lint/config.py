"""Commitlint rule and prompt configuration.

Handles the repository-level lint configuration:
- .commitlintrc.yaml / .commitlintrc.yml / .commitlintrc.json
- a built-in conventional rule set used when none of them exists
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILE_NAMES = (".commitlintrc.yaml", ".commitlintrc.yml", ".commitlintrc.json")


class LintConfigError(Exception):
    """Raised when the lint configuration file cannot be read."""
    pass


DEFAULT_RULES: Dict[str, list] = {
    "body-leading-blank": [1, "always"],
    "body-max-line-length": [2, "always", 100],
    "footer-leading-blank": [1, "always"],
    "footer-max-line-length": [2, "always", 100],
    "header-max-length": [2, "always", 100],
    "subject-case": [2, "never", ["sentence-case", "start-case", "pascal-case", "upper-case"]],
    "subject-empty": [2, "never"],
    "subject-full-stop": [2, "never", "."],
    "subject-max-length": [2, "always", 80],
    "subject-min-length": [2, "always", 3],
    "type-case": [2, "always", "lower-case"],
    "type-empty": [2, "never"],
    "type-enum": [
        2,
        "always",
        ["build", "chore", "ci", "docs", "feat", "fix", "perf", "refactor", "revert", "style", "test", "wip"],
    ],
}

DEFAULT_PROMPT: Dict[str, Any] = {
    "questions": {
        "type": {
            "description": "Select the type of change that you're committing:",
            "enum": {
                "build": {
                    "description": "🛠 Changes that affect the build system or external dependencies",
                    "emoji": "🛠",
                    "title": "Builds",
                },
                "chore": {
                    "description": "🔩 Other changes that don't modify src or test files",
                    "emoji": "🔩",
                    "title": "Chores",
                },
                "ci": {
                    "description": "🤖 Changes to our CI configuration files and scripts",
                    "emoji": "🤖",
                    "title": "Continuous Integrations",
                },
                "docs": {"description": "📚 Documentation only changes", "emoji": "📚", "title": "Documentation"},
                "feat": {"description": "✨ A new feature", "emoji": "✨", "title": "Features"},
                "fix": {"description": "🐛 A bug fix", "emoji": "🐛", "title": "Bug Fixes"},
                "perf": {
                    "description": "🚀 A code change that improves performance",
                    "emoji": "🚀",
                    "title": "Performance Improvements",
                },
                "refactor": {
                    "description": "📦 A code change that neither fixes a bug nor adds a feature",
                    "emoji": "📦",
                    "title": "Code Refactoring",
                },
                "revert": {"description": "🗑 Reverts a previous commit", "emoji": "🗑", "title": "Reverts"},
                "style": {
                    "description": "🎨 Changes that do not affect the meaning of the code (white-space, formatting, etc)",
                    "emoji": "🎨",
                    "title": "Styles",
                },
                "test": {
                    "description": "🚨 Adding missing tests or correcting existing tests",
                    "emoji": "🚨",
                    "title": "Tests",
                },
                "wip": {"description": "⌛️ Work in progress", "emoji": "⌛️", "title": "Progress"},
            },
        },
    },
}


@dataclass(frozen=True)
class LintConfig:
    """Rules and prompt settings for one repository."""

    rules: Dict[str, Any] = field(default_factory=dict)
    prompt: Dict[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None


def find_config_file(repo_root: Path) -> Optional[Path]:
    """Return the first lint config file present in repo_root, if any."""
    for name in CONFIG_FILE_NAMES:
        candidate = repo_root / name
        if candidate.is_file():
            return candidate
    return None


def default_lint_config() -> LintConfig:
    return LintConfig(rules=dict(DEFAULT_RULES), prompt=dict(DEFAULT_PROMPT))


def load_lint_config(repo_root: Optional[Path] = None) -> LintConfig:
    """Load lint rules and prompt settings.

    Args:
        repo_root: Directory to look in. Defaults to the current directory.

    Returns:
        The loaded LintConfig, or the built-in defaults when no file exists.

    Raises:
        LintConfigError: If the file cannot be parsed or has the wrong shape.
    """
    config_file = find_config_file(Path(repo_root or Path.cwd()))
    if config_file is None:
        return default_lint_config()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            if config_file.suffix == ".json":
                data = json.load(f) or {}
            else:
                data = yaml.safe_load(f) or {}
    except Exception as e:
        raise LintConfigError(f"Failed to load lint config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise LintConfigError(f"Lint config in {config_file} must be a mapping")

    rules = data.get("rules") or {}
    prompt = data.get("prompt") or {}
    if not isinstance(rules, dict):
        raise LintConfigError(f"'rules' in {config_file} must be a mapping")
    if not isinstance(prompt, dict):
        raise LintConfigError(f"'prompt' in {config_file} must be a mapping")

    return LintConfig(rules=rules, prompt=prompt, source=config_file)
