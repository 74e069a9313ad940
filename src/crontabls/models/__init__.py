"""Domain models for the crontab language server."""

from crontabls.models.errors import CronDiagnostic, Severity, TermError
from crontabls.models.terms import (
    FieldKind,
    FieldValue,
    Single,
    StepInterval,
    ValueList,
    ValueRange,
    Wildcard,
)
from crontabls.models.tokens import CommandToken, CommentToken, TermResult, TermToken, Token

__all__ = [
    "CommandToken",
    "CommentToken",
    "CronDiagnostic",
    "FieldKind",
    "FieldValue",
    "Severity",
    "Single",
    "StepInterval",
    "TermError",
    "TermResult",
    "TermToken",
    "Token",
    "ValueList",
    "ValueRange",
    "Wildcard",
]
