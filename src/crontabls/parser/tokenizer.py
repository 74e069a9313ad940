"""Crontab tokenizer with exact line/character tracking for every token."""

from __future__ import annotations

import re

from crontabls.models.terms import FIELD_COUNT, FieldKind
from crontabls.models.tokens import CommandToken, CommentToken, TermToken, Token
from crontabls.parser.grammar import classify

# LSP line terminators; str.splitlines() would also split on \v, \f, U+2028...
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(content: str) -> list[str]:
    """Split *content* into lines the way the tokenizer numbers them."""
    return _LINE_BREAK_RE.split(content)


class CrontabTokenizer:
    """Splits crontab text into comment, term and command tokens.

    Stateless: each :meth:`tokenize` call starts from line 0, so one instance
    can be shared freely.
    """

    def tokenize(self, content: str) -> tuple[Token, ...]:
        tokens: list[Token] = []
        for line_index, line in enumerate(split_lines(content)):
            if not line:
                continue
            if line.startswith("#"):
                tokens.append(CommentToken(line_index, line))
            else:
                tokens.extend(self._tokenize_entry(line_index, line))
        return tuple(tokens)

    @staticmethod
    def _split_entry(line: str) -> list[str]:
        """Split on single spaces, dropping trailing empty pieces."""
        pieces = line.split(" ")
        while pieces and not pieces[-1]:
            pieces.pop()
        return pieces

    def _tokenize_entry(self, line_index: int, line: str) -> list[Token]:
        pieces = self._split_entry(line)
        terms = pieces[:FIELD_COUNT]
        command = " ".join(pieces[FIELD_COUNT:])

        tokens: list[Token] = []
        char_index = 0
        for position, term in enumerate(terms):
            kind = FieldKind.at(position)
            tokens.append(TermToken(line_index, char_index, kind, classify(term, kind), term))
            # advance past the term and the space after it
            char_index += len(term) + 1

        tokens.append(CommandToken(line_index, char_index, command))
        return tokens


_default_tokenizer = CrontabTokenizer()


def tokenize(content: str) -> tuple[Token, ...]:
    """Tokenize *content* with a shared :class:`CrontabTokenizer`."""
    return _default_tokenizer.tokenize(content)
