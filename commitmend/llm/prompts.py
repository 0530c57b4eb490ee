"""Prompt templates for commit message generation and repair.

Contains:
- format_lint_rules: renders active rules as MUST/SHOULD instructions
- build_system_prompt / build_user_prompt: shared by every provider
"""

import json
from typing import Any, Optional

from commitmend.context import PromptContext
from commitmend.lint.rules import (
    CONDITION_INDEX,
    NEVER,
    RuleSeverity,
    case_value,
    is_number,
    rule_severity,
    rule_value,
)

SYSTEM_PROMPT_GENERATE = (
    "You are a helpful assistant that generates conventional commit messages "
    "based on the provided context and rules."
)

SYSTEM_PROMPT_FIX = (
    "You are a helpful assistant that fixes commit messages to comply with validation rules. "
    "You should maintain the original meaning and content while fixing only the format issues."
)

JSON_FORMAT_INSTRUCTIONS = """Generate a commit message in the following JSON format:
{
  "type": "commit type",
  "scope": "optional scope",
  "subject": "commit subject",
  "body": "optional body",
  "breaking": "optional breaking change description"
}

IMPORTANT: Respond ONLY with the JSON object. Do not include markdown code blocks, explanations, or any other text. Just the raw JSON.

IMPORTANT: Follow ALL the rules listed above. The commit message MUST pass validation."""

# rule name -> (subject of the sentence, template for the number)
_LENGTH_RULES = {
    "subject-max-length": ("Subject", "be at most {} characters"),
    "subject-min-length": ("Subject", "be at least {} characters"),
    "header-max-length": ("Header (type(scope): subject)", "be at most {} characters"),
    "header-min-length": ("Header (type(scope): subject)", "be at least {} characters"),
    "type-max-length": ("Type", "be at most {} characters"),
    "type-min-length": ("Type", "be at least {} characters"),
    "scope-max-length": ("Scope", "be at most {} characters"),
    "scope-min-length": ("Scope", "be at least {} characters"),
    "body-max-line-length": ("Body lines", "be at most {} characters (wrap long lines with line breaks)"),
    "footer-max-line-length": (
        "Footer lines",
        "be at most {} characters (Note: the 'body' field is treated as footer, wrap long lines)",
    ),
}

_CASE_RULES = {"type-case": "Type", "scope-case": "Scope", "subject-case": "Subject", "header-case": "Header"}
_EMPTY_RULES = {"type-empty": "Type", "scope-empty": "Scope", "subject-empty": "Subject", "body-empty": "Body"}
_FULL_STOP_RULES = {"subject-full-stop": "Subject", "header-full-stop": "Header", "body-full-stop": "Body"}


def _format_rule(name: str, rule: Any, prefix: str) -> Optional[str]:
    condition = rule[CONDITION_INDEX]
    value = rule_value(rule)
    negated = condition == NEVER

    if name in ("type-enum", "scope-enum"):
        if not negated and isinstance(value, (list, tuple)) and value:
            return f"{name.split('-')[0].capitalize()} {prefix} be one of: {', '.join(map(str, value))}"
        return None
    if name in _LENGTH_RULES:
        if not is_number(value):
            return None
        what, template = _LENGTH_RULES[name]
        return f"{what} {prefix} {template.format(value)}"
    if name in _CASE_RULES:
        cases = case_value(rule)
        if not cases:
            return None
        verb = "not be in" if negated else "be in"
        return f"{_CASE_RULES[name]} {prefix} {verb} {' or '.join(cases)} case"
    if name in _EMPTY_RULES:
        return f"{_EMPTY_RULES[name]} {prefix} {'not be empty' if negated else 'be empty'}"
    if name in _FULL_STOP_RULES:
        stop = value if isinstance(value, str) and value else "."
        verb = "not end with" if negated else "end with"
        return f"{_FULL_STOP_RULES[name]} {prefix} {verb} '{stop}'"
    if name in ("body-leading-blank", "footer-leading-blank"):
        verb = "not be preceded by" if negated else "be preceded by"
        return f"{name.split('-')[0].capitalize()} {prefix} {verb} a blank line"
    if value is not None:
        return f"{name}: {condition} {json.dumps(value, ensure_ascii=False)}"
    return None


def format_lint_rules(rules: dict[str, Any]) -> str:
    """Render active lint rules as one instruction per line.

    Errors become MUST, warnings SHOULD. Disabled or malformed rules are
    skipped.
    """
    lines = []
    for name, rule in (rules or {}).items():
        severity = rule_severity(rule)
        if severity == RuleSeverity.DISABLED:
            continue
        prefix = "MUST" if severity == RuleSeverity.ERROR else "SHOULD"
        line = _format_rule(name, rule, prefix)
        if line:
            lines.append(line)
    return "\n".join(lines)


def build_system_prompt(context: PromptContext) -> str:
    """Build the system prompt for generation, or for fixing when repairing."""
    sections = [SYSTEM_PROMPT_FIX if context.is_fixing() else SYSTEM_PROMPT_GENERATE]

    if context.repair and context.repair.validation_errors:
        errors = "\n".join(f"- {error}" for error in context.repair.validation_errors)
        sections.append(
            "IMPORTANT: The previous commit message had validation errors that must be fixed:\n"
            f"{errors}\n\nMake sure the new commit message fixes all these errors."
        )

    formatted_rules = format_lint_rules(context.rules)
    if formatted_rules:
        sections.append(f"Commit message rules:\n{formatted_rules}")

    types = []
    if context.type_enum:
        types.append(f"Available commit types: {', '.join(context.type_enum)}")
    if context.type_descriptions:
        types.append("Type descriptions:")
        for name, desc in context.type_descriptions.items():
            emoji = f" {desc.emoji}" if desc.emoji and not desc.description.startswith(desc.emoji) else ""
            types.append(f"- {name}: {desc.description}{emoji}")
    if types:
        sections.append("\n".join(types))

    limits = []
    if context.subject.max_length:
        limits.append(f"Subject must be at most {context.subject.max_length} characters.")
    if context.subject.min_length:
        limits.append(f"Subject must be at least {context.subject.min_length} characters.")
    if limits:
        sections.append("\n".join(limits))

    body_max = context.body.max_line_length
    footer_max = context.footer.max_line_length
    if body_max or footer_max:
        body_rules = [
            "IMPORTANT: Body formatting rules:",
            "- The 'body' field in the JSON corresponds to the commit message body/footer",
        ]
        if body_max:
            body_rules.append(f"- Each line in the body must be wrapped to not exceed {body_max} characters")
        if footer_max:
            body_rules.append(f"- Footer lines must be wrapped to not exceed {footer_max} characters")
        body_rules.extend([
            "- The 'breaking' field also follows the same line length rules",
            "- Use line breaks (\\n) to wrap long lines",
            "- Empty lines between paragraphs are allowed",
        ])
        sections.append("\n".join(body_rules))

    sections.append(JSON_FORMAT_INSTRUCTIONS)
    return "\n\n".join(sections)


def build_user_prompt(context: PromptContext) -> str:
    """Build the user prompt carrying the diff, or the message to fix."""
    sections = []

    if context.is_fixing():
        sections.append("Fix the following commit message to comply with the validation rules:")
        sections.append(f"Commit message to fix:\n{context.repair.previous_attempt}")
    else:
        sections.append("Generate a commit message for the following changes:")
        if context.repair:
            sections.append(f"Previous attempt (with errors):\n{context.repair.previous_attempt}")
        if context.diff:
            sections.append(f"Diff:\n{context.diff}")
        if context.files:
            sections.append("Files changed:\n" + "\n".join(context.files))

    if context.repair and context.repair.instructions:
        sections.append(context.repair.instructions)

    if context.is_fixing():
        sections.append("Please fix the commit message to pass validation while keeping the same meaning and content.")
    else:
        sections.append("Please generate an appropriate commit message following the conventional commit format.")

    return "\n\n".join(sections)
