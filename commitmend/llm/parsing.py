"""Parsing of LLM responses into CommitMessage objects.

Contains:
- CommitResponseJSON: pydantic schema of the JSON answer
- strip_code_fences: drop a markdown fence around the answer
- parse_json_response: extract a JSON object from raw model output
- parse_commit_response: JSON first, plain-text header as fallback
"""

import json
import logging
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from commitmend.llm.exceptions import MalformedResponseError
from commitmend.message import (
    BREAKING_CHANGE_PREFIX,
    HEADER_PATTERN,
    CommitMessage,
    InvalidHeaderError,
)

logger = logging.getLogger(__name__)


class CommitResponseJSON(BaseModel):
    """The JSON shape providers are asked to answer with."""

    type: str
    subject: str
    scope: Optional[str] = None
    body: Optional[Union[str, list[str]]] = None
    breaking: Optional[Union[str, bool]] = None

    @field_validator("type", "subject")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("body")
    @classmethod
    def join_body_lines(cls, v):
        if isinstance(v, list):
            return "\n".join(str(line) for line in v)
        return v

    @field_validator("breaking")
    @classmethod
    def normalize_breaking(cls, v):
        # Some models answer true/false instead of a description.
        if isinstance(v, bool) or v is None:
            return None
        v = v.strip()
        if v.startswith(BREAKING_CHANGE_PREFIX):
            v = v[len(BREAKING_CHANGE_PREFIX):].strip()
        return v or None

    def to_commit_message(self) -> CommitMessage:
        return CommitMessage.from_parts(
            commit_type=self.type,
            subject=self.subject,
            scope=self.scope,
            content=self.body,
            breaking_change=self.breaking,
        )


def strip_code_fences(raw_response: str) -> str:
    """Remove a surrounding markdown code fence, if the model added one."""
    cleaned = raw_response.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()
    return cleaned


def parse_json_response(raw_response: str) -> dict:
    """Parse the LLM response as a JSON object.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        MalformedResponseError: If parsing fails.
    """
    cleaned = strip_code_fences(raw_response)

    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Failed to parse LLM response as JSON.\n"
            f"Error: {e}\n"
            f"Raw response:\n{raw_response}"
        )
    if not isinstance(parsed, dict):
        raise MalformedResponseError(f"LLM response is not a JSON object: {raw_response}")
    return parsed


def parse_plaintext_response(raw_response: str) -> CommitMessage:
    """Parse a ``type(scope): subject`` answer with optional body lines.

    A line starting with ``BREAKING CHANGE:`` becomes the breaking change,
    other non-blank lines form the body.

    Raises:
        MalformedResponseError: If the first line is not a commit header.
    """
    lines = strip_code_fences(raw_response).split("\n")
    match = HEADER_PATTERN.match(lines[0].strip())
    if not match:
        raise MalformedResponseError(
            f"Invalid commit message format. Could not parse: {lines[0]!r}"
        )
    commit_type, scope, subject = match.groups()

    body_lines = []
    breaking_change = None
    for line in lines[1:]:
        if line.startswith(BREAKING_CHANGE_PREFIX):
            breaking_change = line[len(BREAKING_CHANGE_PREFIX):]
        elif line.strip():
            body_lines.append(line)

    return CommitMessage.from_parts(
        commit_type=commit_type,
        subject=subject,
        scope=scope,
        content="\n".join(body_lines) or None,
        breaking_change=breaking_change,
    )


def parse_commit_response(raw_response: str) -> CommitMessage:
    """Turn raw LLM output into a CommitMessage.

    Args:
        raw_response: The text returned by the provider.

    Returns:
        The parsed CommitMessage.

    Raises:
        MalformedResponseError: If the output is neither valid JSON with
            type and subject nor a plain-text commit header.
    """
    if not raw_response or not raw_response.strip():
        raise MalformedResponseError("LLM returned an empty response")

    try:
        return CommitResponseJSON(**parse_json_response(raw_response)).to_commit_message()
    except (MalformedResponseError, ValueError, TypeError, InvalidHeaderError) as e:
        logger.debug("JSON parse failed, trying plain text: %s", e)

    try:
        return parse_plaintext_response(raw_response)
    except InvalidHeaderError as e:
        raise MalformedResponseError(f"Invalid commit message: {e}")
