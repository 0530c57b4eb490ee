"""Helpers for reading commitlint-style rule tuples.

A rule is ``[severity, condition, value?]`` where severity is 0 (disabled),
1 (warning) or 2 (error) and condition is ``"always"`` or ``"never"``.
Every helper here is total: malformed rules are treated as inactive.
"""

from enum import IntEnum
from typing import Any, Optional


class RuleSeverity(IntEnum):
    """Rule severity levels."""

    DISABLED = 0
    WARNING = 1
    ERROR = 2


ALWAYS = "always"
NEVER = "never"

SEVERITY_INDEX = 0
CONDITION_INDEX = 1
VALUE_INDEX = 2


def is_well_formed(rule: Any) -> bool:
    """Check that a rule is a list/tuple starting with a known severity."""
    if not isinstance(rule, (list, tuple)) or not rule:
        return False
    severity = rule[SEVERITY_INDEX]
    if isinstance(severity, bool) or not isinstance(severity, int):
        return False
    if severity not in (RuleSeverity.DISABLED, RuleSeverity.WARNING, RuleSeverity.ERROR):
        return False
    if severity != RuleSeverity.DISABLED:
        return len(rule) >= 2 and rule[CONDITION_INDEX] in (ALWAYS, NEVER)
    return True


def rule_severity(rule: Any) -> RuleSeverity:
    if not is_well_formed(rule):
        return RuleSeverity.DISABLED
    return RuleSeverity(rule[SEVERITY_INDEX])


def rule_is_active(rule: Any) -> bool:
    return rule_severity(rule) > RuleSeverity.DISABLED


def rule_is_applicable(rule: Any) -> bool:
    """True for active rules with the ``always`` condition."""
    return rule_is_active(rule) and rule[CONDITION_INDEX] == ALWAYS


def rule_value(rule: Any) -> Any:
    if not rule_is_active(rule) or len(rule) <= VALUE_INDEX:
        return None
    return rule[VALUE_INDEX]


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def numeric_value(rule: Any) -> Optional[int]:
    """Bound of an active length rule, or None.

    The condition is not consulted: the linter enforces length bounds
    whichever condition is written.
    """
    value = rule_value(rule)
    if is_number(value):
        return int(value)
    return None


def enum_value(rule: Any) -> Optional[list[str]]:
    """Allowed values of an active ``always`` enum rule, or None."""
    value = rule_value(rule)
    if rule_is_applicable(rule) and isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return None


def case_value(rule: Any) -> Optional[list[str]]:
    """Case names of an active case rule (string or list), or None."""
    value = rule_value(rule)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    return None
