"""Structured error models with crontab source position tracking."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel


@dataclass(frozen=True)
class TermError:
    """A validation failure inside one field term.

    Offsets are relative to the start of the term text; ``end_char`` is
    exclusive.
    """

    start_char: int
    end_char: int
    message: str


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


class CronDiagnostic(BaseModel):
    """A positioned problem in a crontab document (absolute line/character)."""

    line: int
    start_char: int
    end_char: int
    severity: Severity = Severity.ERROR
    message: str
    source: str
