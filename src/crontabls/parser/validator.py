"""Diagnostic mapping: term validation errors → document-absolute diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from crontabls.models.errors import CronDiagnostic, Severity
from crontabls.models.tokens import CommandToken, CommentToken, TermToken, Token

DEFAULT_DIAGNOSTIC_SOURCE = "Crontab Language Server"


class CrontabValidator:
    """Turns the term errors carried by a token stream into diagnostics.

    The result is always the complete set for the document; callers replace
    whatever they published before.
    """

    def __init__(self, source: str = DEFAULT_DIAGNOSTIC_SOURCE) -> None:
        self._source = source

    @property
    def source(self) -> str:
        return self._source

    def validate(self, tokens: Iterable[Token]) -> list[CronDiagnostic]:
        diagnostics: list[CronDiagnostic] = []
        for token in tokens:
            match token:
                case TermToken():
                    diagnostics.extend(self._term_diagnostics(token))
                case CommentToken() | CommandToken():
                    pass
                case _:
                    assert_never(token)
        return diagnostics

    def _term_diagnostics(self, token: TermToken) -> list[CronDiagnostic]:
        return [
            CronDiagnostic(
                line=token.line,
                start_char=token.char + error.start_char,
                end_char=token.char + error.end_char,
                severity=Severity.ERROR,
                message=error.message,
                source=self._source,
            )
            for error in token.errors
        ]
