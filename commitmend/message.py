"""Commit message value model.

Contains:
- CommitHeader: type, subject and optional scope of the first line
- CommitBody: free-text content plus an optional breaking-change note
- CommitMessage: header + body, rendered the way git expects it
- parse_commit_message: inverse of str(CommitMessage)

All three are frozen dataclasses; use with_header/with_body to derive
modified copies.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Optional

BREAKING_CHANGE_PREFIX = "BREAKING CHANGE:"

HEADER_PATTERN = re.compile(r"^(\w[\w-]*)(?:\(([^)]+)\))?!?: (.+)$")
BLANK_LINES = re.compile(r"\n\s*\n")


class InvalidHeaderError(ValueError):
    """Raised when a commit header is built without a type or subject."""

    pass


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class CommitHeader:
    """First line of a conventional commit: ``type(scope): subject``."""

    type: str
    subject: str
    scope: Optional[str] = None

    def __post_init__(self):
        if not self.type or not self.type.strip():
            raise InvalidHeaderError("Commit type cannot be empty")
        if not self.subject or not self.subject.strip():
            raise InvalidHeaderError("Commit subject cannot be empty")

        object.__setattr__(self, "type", self.type.strip())
        object.__setattr__(self, "subject", self.subject.strip())
        object.__setattr__(self, "scope", _clean(self.scope))

    def with_subject(self, subject: str) -> "CommitHeader":
        """Return a copy with a different subject (re-validated)."""
        return replace(self, subject=subject)

    def __str__(self) -> str:
        if self.scope:
            return f"{self.type}({self.scope}): {self.subject}"
        return f"{self.type}: {self.subject}"


@dataclass(frozen=True)
class CommitBody:
    """Body of a commit message.

    Attributes:
        content: Free-text description, may span several lines.
        breaking_change: Description of a breaking change, rendered as a
            ``BREAKING CHANGE:`` block before the content. Blank lines
            inside it are collapsed so the block stays one paragraph.
    """

    content: Optional[str] = None
    breaking_change: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "content", _clean(self.content))
        breaking_change = _clean(self.breaking_change)
        if breaking_change:
            breaking_change = BLANK_LINES.sub("\n", breaking_change)
        object.__setattr__(self, "breaking_change", breaking_change)

    def has_breaking_change(self) -> bool:
        return self.breaking_change is not None

    def is_empty(self) -> bool:
        return self.content is None and self.breaking_change is None

    def __str__(self) -> str:
        parts = []
        if self.breaking_change:
            parts.append(f"{BREAKING_CHANGE_PREFIX} {self.breaking_change}")
        if self.content:
            parts.append(self.content)
        return "\n\n".join(parts)


@dataclass(frozen=True)
class CommitMessage:
    """A complete commit message: header, blank line, body."""

    header: CommitHeader
    body: CommitBody = field(default_factory=CommitBody)

    @classmethod
    def from_parts(
        cls,
        commit_type: str,
        subject: str,
        scope: Optional[str] = None,
        content: Optional[str] = None,
        breaking_change: Optional[str] = None,
    ) -> "CommitMessage":
        """Build a message from plain strings.

        Raises:
            InvalidHeaderError: If type or subject is empty.
        """
        return cls(
            header=CommitHeader(type=commit_type, subject=subject, scope=scope),
            body=CommitBody(content=content, breaking_change=breaking_change),
        )

    @property
    def breaking_change(self) -> Optional[str]:
        return self.body.breaking_change

    def has_breaking_change(self) -> bool:
        return self.body.has_breaking_change()

    def with_header(self, header: CommitHeader) -> "CommitMessage":
        return replace(self, header=header)

    def with_body(self, body: CommitBody) -> "CommitMessage":
        return replace(self, body=body)

    def __str__(self) -> str:
        parts = [str(self.header)]
        if not self.body.is_empty():
            parts.append(str(self.body))
        return "\n\n".join(parts)


def parse_header(line: str) -> CommitHeader:
    """Parse a ``type(scope): subject`` line.

    Raises:
        InvalidHeaderError: If the line is not a conventional header.
    """
    match = HEADER_PATTERN.match(line.strip())
    if not match:
        raise InvalidHeaderError(f"Not a conventional commit header: {line!r}")
    commit_type, scope, subject = match.groups()
    return CommitHeader(type=commit_type, subject=subject, scope=scope)


def parse_commit_message(text: str) -> CommitMessage:
    """Parse a rendered commit message back into a CommitMessage.

    The body layout matches CommitBody.__str__: an optional leading
    ``BREAKING CHANGE:`` paragraph followed by the free-text content.

    Args:
        text: The rendered commit message.

    Returns:
        The parsed CommitMessage.

    Raises:
        InvalidHeaderError: If the first line is not a conventional header.
    """
    text = text.strip()
    header_line, _, rest = text.partition("\n")
    header = parse_header(header_line)

    rest = rest.strip("\n")
    breaking_change = None
    content = rest

    if rest.startswith(BREAKING_CHANGE_PREFIX):
        breaking_block, _, content = rest.partition("\n\n")
        breaking_change = breaking_block[len(BREAKING_CHANGE_PREFIX):]

    return CommitMessage(
        header=header,
        body=CommitBody(content=content or None, breaking_change=breaking_change),
    )
