"""Semantic token delta encoding for editor highlighting.

Each token becomes ``[deltaLine, deltaStartChar, length, tokenType, tokenModifiers]``
where ``deltaStartChar`` is relative to the previous token on the same line,
or absolute when the token starts a new line. See the LSP 3.17
``textDocument/semanticTokens`` section.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import assert_never

from crontabls.models.tokens import CommandToken, CommentToken, TermToken, Token

VARIABLE = "variable"
FUNCTION = "function"
COMMENT = "comment"

TOKEN_LEGEND: tuple[str, ...] = (VARIABLE, FUNCTION, COMMENT)
TOKEN_MODIFIERS: tuple[str, ...] = ()

_QUINTUPLE = 5


class UnsupportedTokenTypeError(ValueError):
    """Raised when a token type is not part of :data:`TOKEN_LEGEND`."""

    def __init__(self, token_type: str) -> None:
        self.token_type = token_type
        super().__init__(f"semantic token {token_type} is not supported")


def token_type_index(token_type: str) -> int:
    try:
        return TOKEN_LEGEND.index(token_type)
    except ValueError:
        raise UnsupportedTokenTypeError(token_type) from None


@dataclass(frozen=True)
class SemanticToken:
    """One delta-encoded token."""

    delta_line: int
    delta_start_char: int
    length: int
    token_type: str

    def to_ints(self) -> list[int]:
        # modifiers are never used
        return [
            self.delta_line,
            self.delta_start_char,
            self.length,
            token_type_index(self.token_type),
            0,
        ]


def _classify(token: Token) -> tuple[int, int, int, str]:
    """Return ``(line, start_char, length, token_type)`` for *token*."""
    match token:
        case CommentToken(line=line, content=content):
            return line, 0, len(content), COMMENT
        case TermToken(line=line, char=char, content=content):
            return line, char, len(content), VARIABLE
        case CommandToken(line=line, char=char, content=content):
            return line, char, len(content), FUNCTION
        case _:
            assert_never(token)


def encode_semantic_tokens(
    tokens: Iterable[Token],
    column: Callable[[int, int], int] | None = None,
) -> list[SemanticToken]:
    """Delta-encode *tokens*, which must be ordered by line then character.

    *column* maps a (line, code point offset) pair to the unit the client
    counts in, e.g. UTF-16 code units; offsets are used as is when omitted.
    """
    last_line = 0
    last_char = 0
    encoded: list[SemanticToken] = []

    for token in tokens:
        line, char, length, token_type = _classify(token)
        if column is not None:
            char, end = column(line, char), column(line, char + length)
            length = end - char
        delta_line = line - last_line
        delta_char = char - last_char if delta_line == 0 else char
        last_line = line
        last_char = char
        encoded.append(SemanticToken(delta_line, delta_char, length, token_type))

    return encoded


def flatten_semantic_tokens(tokens: Iterable[SemanticToken]) -> list[int]:
    """Concatenate the integer quintuples of *tokens* (the LSP ``data`` array)."""
    data: list[int] = []
    for token in tokens:
        data.extend(token.to_ints())
    return data


def decode_semantic_tokens(data: Sequence[int]) -> list[tuple[int, int, int, str]]:
    """Rebuild absolute ``(line, start_char, length, token_type)`` from *data*."""
    if len(data) % _QUINTUPLE:
        raise ValueError(f"semantic token data length {len(data)} is not a multiple of 5")

    decoded: list[tuple[int, int, int, str]] = []
    line = 0
    char = 0
    for offset in range(0, len(data), _QUINTUPLE):
        delta_line, delta_char, length, type_index, _modifiers = data[offset : offset + _QUINTUPLE]
        if delta_line:
            line += delta_line
            char = delta_char
        else:
            char += delta_char
        decoded.append((line, char, length, TOKEN_LEGEND[type_index]))
    return decoded
