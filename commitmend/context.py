"""Prompt context derived from commitlint rules and prompt settings.

Contains:
- PromptContext: everything a provider needs to draft a commit message
- RepairContext: the error/previous-attempt record used when fixing
- extract_context: builds a PromptContext from a rule map and prompt config

extract_context never raises for malformed rules; unusable entries are
simply left out of the context.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from commitmend.lint.rules import (
    ALWAYS,
    CONDITION_INDEX,
    case_value,
    enum_value,
    numeric_value,
    rule_is_active,
    rule_value,
)

FIX_INSTRUCTIONS = (
    "Fix the commit message to comply with the validation rules. "
    "Do not change the meaning or content, only fix the format to pass validation."
)


@dataclass(frozen=True)
class TypeDescription:
    description: str
    emoji: Optional[str] = None


@dataclass(frozen=True)
class SubjectConstraints:
    description: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    cases: Optional[list[str]] = None
    case_condition: Optional[str] = None
    full_stop: Optional[str] = None
    full_stop_condition: Optional[str] = None


@dataclass(frozen=True)
class HeaderConstraints:
    min_length: Optional[int] = None
    max_length: Optional[int] = None


@dataclass(frozen=True)
class BodyConstraints:
    description: Optional[str] = None
    max_line_length: Optional[int] = None
    leading_blank: Optional[bool] = None


@dataclass(frozen=True)
class FooterConstraints:
    max_line_length: Optional[int] = None
    leading_blank: Optional[bool] = None


@dataclass(frozen=True)
class RepairContext:
    """What the LLM needs to fix a message that failed validation."""

    validation_errors: list[str]
    previous_attempt: str
    instructions: str = FIX_INSTRUCTIONS


@dataclass(frozen=True)
class PromptContext:
    """Generation context for one generate/repair cycle.

    Attributes:
        rules: The raw rule map, rendered into prompt instructions.
        type_enum: Allowed commit types, if the rules restrict them.
        type_descriptions: Human descriptions (and emoji) per type.
        diff: The staged diff. None in a reduced repair context.
        files: Staged file paths. None in a reduced repair context.
        repair: Validation errors and previous attempt while fixing.
    """

    rules: dict[str, Any] = field(default_factory=dict)
    type_enum: Optional[list[str]] = None
    type_descriptions: Optional[dict[str, TypeDescription]] = None
    type_description: Optional[str] = None
    scope_description: Optional[str] = None
    subject: SubjectConstraints = field(default_factory=SubjectConstraints)
    header: HeaderConstraints = field(default_factory=HeaderConstraints)
    body: BodyConstraints = field(default_factory=BodyConstraints)
    footer: FooterConstraints = field(default_factory=FooterConstraints)
    diff: Optional[str] = None
    files: Optional[list[str]] = None
    repair: Optional[RepairContext] = None

    def is_fixing(self) -> bool:
        """True for a reduced repair context (repair record, no diff)."""
        return self.repair is not None and self.diff is None

    def with_changes(self, diff: Optional[str], files: Optional[list[str]]) -> "PromptContext":
        return replace(self, diff=diff, files=list(files) if files is not None else None)

    def for_repair(
        self,
        previous_attempt: str,
        validation_errors: list[str],
        instructions: str = FIX_INSTRUCTIONS,
    ) -> "PromptContext":
        """Reduced context for fixing: no diff or files, plus the repair record."""
        return replace(
            self,
            diff=None,
            files=None,
            repair=RepairContext(
                validation_errors=list(validation_errors),
                previous_attempt=previous_attempt,
                instructions=instructions,
            ),
        )


def _get_mapping(container: Any, key: str) -> dict:
    if not isinstance(container, dict):
        return {}
    value = container.get(key)
    return value if isinstance(value, dict) else {}


def _get_string(container: Any, key: str) -> Optional[str]:
    if not isinstance(container, dict):
        return None
    value = container.get(key)
    return value if isinstance(value, str) and value else None


def _condition(rule: Any) -> Optional[str]:
    return rule[CONDITION_INDEX] if rule_is_active(rule) else None


def _leading_blank(rule: Any) -> Optional[bool]:
    condition = _condition(rule)
    if condition is None:
        return None
    return condition == ALWAYS


def _type_descriptions(type_enum_config: dict) -> Optional[dict[str, TypeDescription]]:
    if not type_enum_config:
        return None
    descriptions = {}
    for name, value in type_enum_config.items():
        description = _get_string(value, "description")
        if description is None:
            continue
        descriptions[str(name)] = TypeDescription(
            description=description,
            emoji=_get_string(value, "emoji"),
        )
    return descriptions


def extract_context(rules: Any, prompt_config: Any = None) -> PromptContext:
    """Build a PromptContext from commitlint rules and prompt settings.

    Args:
        rules: Mapping of rule name to ``[severity, condition, value?]``.
        prompt_config: The ``prompt`` section of the lint configuration.

    Returns:
        A PromptContext. Disabled, absent or malformed rules leave the
        corresponding fields as None.
    """
    rules = dict(rules) if isinstance(rules, dict) else {}
    questions = _get_mapping(prompt_config, "questions")
    type_question = _get_mapping(questions, "type")

    subject_case_rule = rules.get("subject-case")
    subject_stop_rule = rules.get("subject-full-stop")
    subject_stop = rule_value(subject_stop_rule)

    subject = SubjectConstraints(
        description=_get_string(_get_mapping(questions, "subject"), "description"),
        min_length=numeric_value(rules.get("subject-min-length")),
        max_length=numeric_value(rules.get("subject-max-length")),
        cases=case_value(subject_case_rule) if rule_is_active(subject_case_rule) else None,
        case_condition=_condition(subject_case_rule),
        full_stop=subject_stop if isinstance(subject_stop, str) else None,
        full_stop_condition=_condition(subject_stop_rule),
    )

    return PromptContext(
        rules=rules,
        type_enum=enum_value(rules.get("type-enum")),
        type_descriptions=_type_descriptions(_get_mapping(type_question, "enum")),
        type_description=_get_string(type_question, "description"),
        scope_description=_get_string(_get_mapping(questions, "scope"), "description"),
        subject=subject,
        header=HeaderConstraints(
            min_length=numeric_value(rules.get("header-min-length")),
            max_length=numeric_value(rules.get("header-max-length")),
        ),
        body=BodyConstraints(
            description=_get_string(_get_mapping(questions, "body"), "description"),
            max_line_length=numeric_value(rules.get("body-max-line-length")),
            leading_blank=_leading_blank(rules.get("body-leading-blank")),
        ),
        footer=FooterConstraints(
            max_line_length=numeric_value(rules.get("footer-max-line-length")),
            leading_blank=_leading_blank(rules.get("footer-leading-blank")),
        ),
    )
