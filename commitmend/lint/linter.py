"""Commit message linter implementing the conventional commitlint rules.

Contains:
- ParsedCommit: the header/body/footer split of a raw message
- ValidationResult: outcome of one lint run
- CommitLinter: applies a rule map to a rendered message
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from commitmend.lint.cases import is_case
from commitmend.lint.rules import (
    ALWAYS,
    CONDITION_INDEX,
    RuleSeverity,
    is_number,
    case_value,
    rule_severity,
    rule_value,
)

logger = logging.getLogger(__name__)

LINT_HEADER_PATTERN = re.compile(r"^(\w*)(?:\((.*)\))?(!)?: (.*)$")
NOTE_PATTERN = re.compile(r"^(BREAKING CHANGE|BREAKING-CHANGE):\s")
SCOPE_DELIMITERS = re.compile(r"[/\\,]")


@dataclass(frozen=True)
class ParsedCommit:
    """A raw commit message split the way the conventional parser does."""

    raw: str
    header: str
    type: Optional[str] = None
    scope: Optional[str] = None
    subject: Optional[str] = None
    exclamation: bool = False
    body: Optional[str] = None
    footer: Optional[str] = None
    body_leading_blank: bool = True
    footer_leading_blank: bool = True


@dataclass(frozen=True)
class ValidationResult:
    """Result of linting one message. Rebuilt on every lint call."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def parse_for_lint(raw: str) -> ParsedCommit:
    """Split a raw message into header, body and footer."""
    lines = raw.replace("\r\n", "\n").rstrip("\n").split("\n")
    header = lines[0]
    rest = lines[1:]

    commit_type = scope = subject = None
    exclamation = False
    match = LINT_HEADER_PATTERN.match(header)
    if match:
        commit_type = match.group(1) or None
        scope = match.group(2) or None
        exclamation = bool(match.group(3))
        subject = match.group(4) or None

    footer_index = next(
        (i for i, line in enumerate(rest) if NOTE_PATTERN.match(line)),
        len(rest),
    )
    body_lines = rest[:footer_index]
    footer_lines = rest[footer_index:]

    body = "\n".join(body_lines).strip("\n") or None
    footer = "\n".join(footer_lines).strip("\n") or None

    body_leading_blank = not body or (bool(rest) and rest[0] == "")
    footer_leading_blank = not footer or (footer_index > 0 and rest[footer_index - 1] == "")

    return ParsedCommit(
        raw=raw,
        header=header,
        type=commit_type,
        scope=scope,
        subject=subject,
        exclamation=exclamation,
        body=body,
        footer=footer,
        body_leading_blank=body_leading_blank,
        footer_leading_blank=footer_leading_blank,
    )


# Each check returns (passed, message).
RuleCheck = Callable[[ParsedCommit, str, Any], tuple[bool, str]]


def _negate(condition: str, ok: bool) -> bool:
    return ok if condition == ALWAYS else not ok


def _must(condition: str) -> str:
    return "must" if condition == ALWAYS else "must not"


def _enum_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        allowed = [str(item) for item in value or []]
        text = getattr(commit, name)
        if not text or not allowed:
            return True, ""
        items = SCOPE_DELIMITERS.split(text) if name == "scope" else [text]
        ok = all(item.strip() in allowed for item in items)
        return (
            _negate(condition, ok),
            f"{name} {_must(condition)} be one of [{', '.join(allowed)}]",
        )

    return check


def _empty_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        empty = not getattr(commit, name)
        verb = "must" if condition == ALWAYS else "may not"
        return _negate(condition, empty), f"{name} {verb} be empty"

    return check


def _max_length_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        text = getattr(commit, name)
        if not text or not is_number(value):
            return True, ""
        message = f"{name} must not be longer than {value} characters"
        if name == "header":
            message += f", current length is {len(text)}"
        return len(text) <= value, message

    return check


def _min_length_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        text = getattr(commit, name)
        if not text or not is_number(value):
            return True, ""
        return len(text) >= value, f"{name} must not be shorter than {value} characters"

    return check


def _max_line_length_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        text = getattr(commit, name)
        if not text or not is_number(value):
            return True, ""
        ok = all(len(line) <= value for line in text.split("\n"))
        return ok, f"{name}'s lines must not be longer than {value} characters"

    return check


def _case_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        text = getattr(commit, name)
        cases = case_value([RuleSeverity.ERROR, condition, value])
        if not text or not cases:
            return True, ""
        if name == "subject" and not text[0].isalpha():
            return True, ""
        items = SCOPE_DELIMITERS.split(text) if name == "scope" else [text]
        if condition == ALWAYS:
            ok = all(any(is_case(item, case) for case in cases) for item in items)
        else:
            ok = not any(is_case(item, case) for case in cases for item in items)
        return ok, f"{name} {_must(condition)} be {', '.join(cases)}"

    return check


def _full_stop_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        text = getattr(commit, name)
        stop = value if isinstance(value, str) and value else "."
        if not text:
            return True, ""
        ends = text.rstrip().endswith(stop)
        verb = "must" if condition == ALWAYS else "may not"
        return _negate(condition, ends), f"{name} {verb} end with full stop"

    return check


def _leading_blank_check(name: str) -> RuleCheck:
    def check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
        if not getattr(commit, name):
            return True, ""
        blank = getattr(commit, f"{name}_leading_blank")
        verb = "must have" if condition == ALWAYS else "may not have"
        return _negate(condition, blank), f"{name} {verb} leading blank line"

    return check


def _exclamation_mark_check(commit: ParsedCommit, condition: str, value: Any) -> tuple[bool, str]:
    if not commit.type:
        return True, ""
    verb = "must have" if condition == ALWAYS else "must not have"
    return (
        _negate(condition, commit.exclamation),
        f"subject {verb} an exclamation mark in the subject to identify a breaking change",
    )


RULE_CHECKS: dict[str, RuleCheck] = {
    "type-enum": _enum_check("type"),
    "type-case": _case_check("type"),
    "type-empty": _empty_check("type"),
    "type-max-length": _max_length_check("type"),
    "type-min-length": _min_length_check("type"),
    "scope-enum": _enum_check("scope"),
    "scope-case": _case_check("scope"),
    "scope-empty": _empty_check("scope"),
    "scope-max-length": _max_length_check("scope"),
    "scope-min-length": _min_length_check("scope"),
    "subject-case": _case_check("subject"),
    "subject-empty": _empty_check("subject"),
    "subject-full-stop": _full_stop_check("subject"),
    "subject-max-length": _max_length_check("subject"),
    "subject-min-length": _min_length_check("subject"),
    "subject-exclamation-mark": _exclamation_mark_check,
    "header-case": _case_check("header"),
    "header-full-stop": _full_stop_check("header"),
    "header-max-length": _max_length_check("header"),
    "header-min-length": _min_length_check("header"),
    "body-leading-blank": _leading_blank_check("body"),
    "body-empty": _empty_check("body"),
    "body-max-length": _max_length_check("body"),
    "body-max-line-length": _max_line_length_check("body"),
    "body-min-length": _min_length_check("body"),
    "body-full-stop": _full_stop_check("body"),
    "body-case": _case_check("body"),
    "footer-leading-blank": _leading_blank_check("footer"),
    "footer-empty": _empty_check("footer"),
    "footer-max-length": _max_length_check("footer"),
    "footer-max-line-length": _max_line_length_check("footer"),
    "footer-min-length": _min_length_check("footer"),
}


class CommitLinter:
    """Lints rendered commit messages against a commitlint rule map.

    Rules whose name is unknown or whose shape is malformed are skipped.
    """

    def __init__(self, rules: dict[str, Any]):
        self.rules = dict(rules or {})

    def lint(self, message: str) -> ValidationResult:
        """Lint a rendered commit message.

        Args:
            message: The full commit message text.

        Returns:
            A ValidationResult with errors (severity 2) and warnings
            (severity 1) in rule order.
        """
        commit = parse_for_lint(message)
        errors: list[str] = []
        warnings: list[str] = []

        for name, rule in self.rules.items():
            check = RULE_CHECKS.get(name)
            severity = rule_severity(rule)
            if check is None or severity == RuleSeverity.DISABLED:
                continue

            ok, text = check(commit, rule[CONDITION_INDEX], rule_value(rule))
            if ok:
                continue
            if severity == RuleSeverity.ERROR:
                errors.append(text)
            else:
                warnings.append(text)

        if errors:
            logger.debug("Lint found %d error(s): %s", len(errors), errors)
        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
