"""In-memory open-document cache, the service layer shared by the LSP and REST API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import assert_never

from crontabls.models.errors import CronDiagnostic
from crontabls.models.tokens import CommandToken, CommentToken, TermToken, Token, char_range
from crontabls.parser.tokenizer import CrontabTokenizer, split_lines
from crontabls.parser.validator import CrontabValidator
from crontabls.service.semantic_tokens import encode_semantic_tokens, flatten_semantic_tokens

logger = logging.getLogger("crontabls.store")

# Length of a string in the units a client counts positions in.
Measure = Callable[[str], int]

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class DocumentNotFoundError(KeyError):
    """Raised when a document is queried before it was opened (or after close)."""


@dataclass
class HoverInfo:
    """Hover text for a token plus the span it covers."""

    line: int
    start_char: int
    end_char: int
    text: str


@dataclass
class DocumentSummary:
    """Short summary for listing open documents."""

    document_id: str
    lines: int
    tokens: int
    errors: int


# ---------------------------------------------------------------------------
# Hover text
# ---------------------------------------------------------------------------


def hover_text(line_tokens: list[Token], hovered: Token) -> str | None:
    """Describe *hovered*; *line_tokens* are all tokens on the same line."""
    match hovered:
        case CommentToken():
            return None
        case TermToken(kind=kind, result=result):
            if isinstance(result, tuple):
                # the diagnostic already explains a failed term
                return None
            return f"{kind} term: {result.describe()}"
        case CommandToken(content=content):
            schedule = " ".join(t.content for t in line_tokens if isinstance(t, TermToken))
            return f"`{content}` will be executed on schedule: {schedule}"
        case _:
            assert_never(hovered)


# ---------------------------------------------------------------------------
# DocumentStore
# ---------------------------------------------------------------------------


class DocumentStore:
    """Latest token stream for every open document, keyed by document id.

    ``open`` and ``change`` always retokenize the full text and replace the
    entry.  No locking: the transport delivers events for one document in
    order.
    """

    def __init__(self, validator: CrontabValidator | None = None) -> None:
        self._documents: dict[str, tuple[Token, ...]] = {}
        self._lines: dict[str, list[str]] = {}

        # Stateless helpers, safe to share.
        self._tokenizer = CrontabTokenizer()
        self._validator = validator or CrontabValidator()

    # -- lifecycle -----------------------------------------------------------

    def open(self, document_id: str, text: str) -> list[CronDiagnostic]:
        """Tokenize and cache *text*; return its diagnostics."""
        logger.info("open %s (length=%d)", document_id, len(text))
        return self._process(document_id, text)

    def change(self, document_id: str, text: str) -> list[CronDiagnostic]:
        """Replace the cached tokens with those of *text*; return its diagnostics."""
        logger.info("change %s (length=%d)", document_id, len(text))
        return self._process(document_id, text)

    def close(self, document_id: str) -> None:
        """Evict a document.  Closing an unknown id is a no-op."""
        logger.info("close %s", document_id)
        self._documents.pop(document_id, None)
        self._lines.pop(document_id, None)

    def _process(self, document_id: str, text: str) -> list[CronDiagnostic]:
        tokens = self._tokenizer.tokenize(text)
        logger.debug("tokens for %s: %s", document_id, tokens)
        self._documents[document_id] = tokens
        self._lines[document_id] = split_lines(text)
        return self._validator.validate(tokens)

    # -- queries -------------------------------------------------------------

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    def tokens(self, document_id: str) -> tuple[Token, ...]:
        """Cached tokens.  Raises ``DocumentNotFoundError`` if not open."""
        try:
            return self._documents[document_id]
        except KeyError:
            raise _not_open(document_id) from None

    def line_tokens(self, document_id: str, line: int) -> list[Token]:
        return [t for t in self.tokens(document_id) if t.line == line]

    def line_text(self, document_id: str, line: int) -> str:
        """Raw text of *line*; empty past the last line."""
        lines = self._lines.get(document_id)
        if lines is None:
            raise _not_open(document_id)
        return lines[line] if 0 <= line < len(lines) else ""

    # -- position units ------------------------------------------------------

    def column_to_units(
        self, document_id: str, line: int, char: int, measure: Measure = len
    ) -> int:
        """Convert a code point offset on *line* to *measure* units."""
        text = self.line_text(document_id, line)
        return measure(text[:char]) + max(0, char - len(text))

    def column_from_units(
        self, document_id: str, line: int, units: int, measure: Measure = len
    ) -> int:
        """Convert an offset in *measure* units on *line* to a code point offset.

        An offset inside a multi-unit character maps to the character after it.
        """
        text = self.line_text(document_id, line)
        consumed = 0
        for index, char in enumerate(text):
            if consumed >= units:
                return index
            consumed += measure(char)
        return len(text) + max(0, units - consumed)

    # -- analysis ------------------------------------------------------------

    def token_at(self, document_id: str, line: int, char: int) -> Token | None:
        """First token on *line* whose half-open span contains *char*."""
        for token in self.line_tokens(document_id, line):
            start, end = char_range(token)
            if start <= char < end:
                return token
        return None

    def hover(
        self, document_id: str, line: int, char: int, measure: Measure = len
    ) -> HoverInfo | None:
        """Hover for the position *line*/*char*, both sides in *measure* units."""
        hovered = self.token_at(
            document_id, line, self.column_from_units(document_id, line, char, measure)
        )
        if hovered is None:
            return None
        text = hover_text(self.line_tokens(document_id, line), hovered)
        if text is None:
            return None
        start, end = char_range(hovered)
        return HoverInfo(
            line=line,
            start_char=self.column_to_units(document_id, line, start, measure),
            end_char=self.column_to_units(document_id, line, end, measure),
            text=text,
        )

    def diagnostics(self, document_id: str) -> list[CronDiagnostic]:
        return self._validator.validate(self.tokens(document_id))

    def semantic_tokens(self, document_id: str, measure: Measure = len) -> list[int]:
        """Flattened delta-encoded semantic tokens for the document."""
        tokens = self.tokens(document_id)

        def column(line: int, char: int) -> int:
            return self.column_to_units(document_id, line, char, measure)

        return flatten_semantic_tokens(encode_semantic_tokens(tokens, column))

    def list_documents(self) -> list[DocumentSummary]:
        return [
            DocumentSummary(
                document_id=document_id,
                lines=_line_count(self._lines.get(document_id, [])),
                tokens=len(tokens),
                errors=sum(len(t.errors) for t in tokens if isinstance(t, TermToken)),
            )
            for document_id, tokens in self._documents.items()
        ]


def _not_open(document_id: str) -> DocumentNotFoundError:
    logger.warning("lookup for unopened document %s", document_id)
    return DocumentNotFoundError(f"Document '{document_id}' is not open")


def _line_count(lines: list[str]) -> int:
    # a trailing line break ends the last line rather than starting a new one
    if lines and not lines[-1]:
        return len(lines) - 1
    return len(lines)
