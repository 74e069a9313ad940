"""Immutable crontab tokens. Every analysis consumes these, never raw lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from crontabls.models.errors import TermError
from crontabls.models.terms import FieldKind, FieldValue

TermResult = FieldValue | tuple[TermError, ...]


@dataclass(frozen=True)
class CommentToken:
    """A full ``#`` comment line."""

    line: int
    content: str


@dataclass(frozen=True)
class TermToken:
    """One of the five time fields of an entry.

    ``result`` is either the classified value or a non-empty tuple of
    errors, never both.
    """

    line: int
    char: int
    kind: FieldKind
    result: TermResult
    content: str

    @property
    def is_valid(self) -> bool:
        return not isinstance(self.result, tuple)

    @property
    def errors(self) -> tuple[TermError, ...]:
        return self.result if isinstance(self.result, tuple) else ()


@dataclass(frozen=True)
class CommandToken:
    """Everything after the fifth field, rejoined with single spaces."""

    line: int
    char: int
    content: str


Token = CommentToken | TermToken | CommandToken


def char_range(token: Token) -> tuple[int, int]:
    """Half-open ``(start, end)`` character span of *token* on its line."""
    match token:
        case CommentToken(content=content):
            return 0, len(content)
        case TermToken(char=char, content=content) | CommandToken(char=char, content=content):
            return char, char + len(content)
        case _:
            assert_never(token)


def token_length(token: Token) -> int:
    start, end = char_range(token)
    return end - start
