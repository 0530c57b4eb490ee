"""Commit message validation and the bounded repair loop.

Contains:
- CommitValidator: lints a CommitMessage and tries to fix lint errors,
  first through the LLM, then with deterministic text repairs
- ValidateCommitMessage: the validate/fix loop with a shared attempt budget
- wrap_text: greedy word wrapping used by the line-length repair
"""

import logging
import re
from typing import Optional

from commitmend.config import DEFAULT_VALIDATION_MAX_RETRIES
from commitmend.context import PromptContext
from commitmend.lint.linter import CommitLinter, ValidationResult
from commitmend.llm.configuration import LLMConfiguration
from commitmend.llm.exceptions import LLMError
from commitmend.llm.gateway import GenerationGateway
from commitmend.message import CommitBody, CommitHeader, CommitMessage, InvalidHeaderError

logger = logging.getLogger(__name__)

ELLIPSIS = "..."
NUMBER_PATTERN = re.compile(r"\d+")

UNFIXABLE_ERRORS = ("subject may not be empty", "type may not be empty")
SENTENCE_CASE_ERROR = "subject must not be sentence-case"
FULL_STOP_ERRORS = ("subject may not end with period", "subject may not end with full stop")
HEADER_LENGTH_ERROR = "header must not be longer than"
LINE_LENGTH_ERRORS = ("body's lines must not be longer than", "footer's lines must not be longer than")


def wrap_text(text: Optional[str], width: int) -> Optional[str]:
    """Wrap text so that no line is longer than width.

    Existing line breaks are kept and lines that already fit are left
    untouched. Longer lines are packed greedily word by word; a single
    word longer than width gets a line of its own.
    """
    if not text:
        return text

    wrapped = []
    for line in text.split("\n"):
        if len(line) <= width:
            wrapped.append(line)
            continue

        current = ""
        for word in line.split():
            if len(current) + len(word) + 1 <= width:
                current = f"{current} {word}" if current else word
            else:
                if current:
                    wrapped.append(current)
                current = word
        if current:
            wrapped.append(current)

    return "\n".join(wrapped)


def truncate_header(header: CommitHeader, max_length: int) -> CommitHeader:
    """Shorten the subject so the rendered header fits in max_length.

    The subject ends with an ellipsis afterwards. The header is returned
    unchanged when it already fits or when the subject is too short to
    absorb the overhang.
    """
    overhang = len(str(header)) - max_length
    if overhang <= 0:
        return header
    keep = len(header.subject) - overhang - len(ELLIPSIS)
    if keep < 1:
        return header
    return header.with_subject(header.subject[:keep] + ELLIPSIS)


def _first_number(error: str) -> Optional[int]:
    match = NUMBER_PATTERN.search(error)
    return int(match.group()) if match else None


class CommitValidator:
    """Validates commit messages and repairs lint errors.

    Args:
        linter: Anything with ``lint(text) -> ValidationResult``.
        gateway: Used for LLM-guided fixes. Without it only the
            deterministic repairs are tried.
    """

    def __init__(self, linter: CommitLinter, gateway: Optional[GenerationGateway] = None):
        self.linter = linter
        self.gateway = gateway

    def validate(self, message: CommitMessage) -> ValidationResult:
        return self.linter.lint(str(message))

    def fix(
        self,
        message: CommitMessage,
        result: ValidationResult,
        context: Optional[PromptContext] = None,
        configuration: Optional[LLMConfiguration] = None,
    ) -> Optional[CommitMessage]:
        """Try to turn an invalid message into a valid one.

        Args:
            message: The message that failed validation.
            result: Its validation result.
            context: Generation context. Together with configuration it
                enables the LLM fix.
            configuration: The run's LLM configuration.

        Returns:
            A message that passes validation, or None if it could not be
            fixed.
        """
        if not result.errors:
            return message

        if context is not None and configuration is not None and self.gateway is not None:
            fixed = self._fix_with_llm(message, result, context, configuration)
            if fixed is not None:
                return fixed

        return self._fix_textually(message, result.errors)

    def _fix_with_llm(
        self,
        message: CommitMessage,
        result: ValidationResult,
        context: PromptContext,
        configuration: LLMConfiguration,
    ) -> Optional[CommitMessage]:
        repair_context = context.for_repair(
            previous_attempt=str(message),
            validation_errors=result.errors,
        )
        try:
            candidate = self.gateway.generate_once(repair_context, configuration)
        except LLMError as e:
            logger.warning("Failed to fix commit message with LLM: %s", e)
            return None

        if self.validate(candidate).is_valid:
            logger.info("LLM fix successful")
            return candidate

        logger.info("LLM fix still has validation errors, falling back to simple fixes")
        return None

    def _fix_textually(self, message: CommitMessage, errors: list[str]) -> Optional[CommitMessage]:
        if any(unfixable in error for error in errors for unfixable in UNFIXABLE_ERRORS):
            logger.info("Commit message has an empty type or subject, cannot fix")
            return None

        header = message.header
        body = message.body
        try:
            for error in errors:
                if SENTENCE_CASE_ERROR in error:
                    header = header.with_subject(header.subject[:1].lower() + header.subject[1:])

                elif any(pattern in error for pattern in FULL_STOP_ERRORS):
                    if header.subject.endswith("."):
                        header = header.with_subject(header.subject[:-1])

                elif HEADER_LENGTH_ERROR in error:
                    limit = _first_number(error)
                    if limit is not None:
                        header = truncate_header(header, limit)

                elif any(pattern in error for pattern in LINE_LENGTH_ERRORS):
                    limit = _first_number(error)
                    if limit is not None:
                        body = CommitBody(
                            content=wrap_text(body.content, limit),
                            breaking_change=wrap_text(body.breaking_change, limit),
                        )
        except InvalidHeaderError as e:
            logger.info("Simple fix produced an invalid header: %s", e)
            return None

        fixed = CommitMessage(header=header, body=body)
        fixed_result = self.validate(fixed)
        if fixed_result.is_valid:
            logger.info("Simple fixes successful")
            return fixed

        logger.info("Simple fixes failed to resolve all validation errors: %s", fixed_result.errors)
        return None


class ValidateCommitMessage:
    """The validate/fix loop.

    validate is called at most max_retries times and fix at most
    max_retries - 1 times. A failed fix still uses up one attempt, and
    the next round re-validates the unchanged message.
    """

    def __init__(self, validator: CommitValidator):
        self.validator = validator

    def execute(
        self,
        message: CommitMessage,
        attempt_fix: bool = True,
        max_retries: int = DEFAULT_VALIDATION_MAX_RETRIES,
        context: Optional[PromptContext] = None,
        configuration: Optional[LLMConfiguration] = None,
    ) -> Optional[CommitMessage]:
        """Validate a message and repair it within the attempt budget.

        Args:
            message: The candidate message.
            attempt_fix: When False, return None on the first failure.
            max_retries: Total attempt budget.
            context: Generation context for LLM fixes.
            configuration: LLM configuration for LLM fixes.

        Returns:
            A valid CommitMessage, or None when the budget is spent.
        """
        current = message
        attempts = 0

        while attempts < max_retries:
            result = self.validator.validate(current)
            if result.is_valid:
                if attempts:
                    logger.info("Commit message valid after %d fix attempt(s)", attempts)
                return current

            if not attempt_fix:
                return None

            attempts += 1
            if attempts >= max_retries:
                logger.warning(
                    "Commit message still invalid after %d attempt(s): %s",
                    attempts,
                    "; ".join(result.errors),
                )
                return None

            logger.debug("Fix attempt %d/%d for errors: %s", attempts, max_retries - 1, result.errors)
            fixed = self.validator.fix(current, result, context, configuration)
            if fixed is not None:
                current = fixed

        return None
