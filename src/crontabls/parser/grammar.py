"""Term grammar: classify one crontab field against its kind.

Patterns are tried in a fixed order and only the first match is evaluated:
wildcard, single number, comma list, range, step interval, fallback.
"""

from __future__ import annotations

import re

from crontabls.models.errors import TermError
from crontabls.models.terms import (
    FieldKind,
    Single,
    StepInterval,
    ValueList,
    ValueRange,
    Wildcard,
)
from crontabls.models.tokens import TermResult

_DIGITS_RE = re.compile(r"[0-9]+")
_RANGE_RE = re.compile(r"([0-9]+)-([0-9]+)")
_STEP_RE = re.compile(r"\*/([0-9]+)")

# Width assumed for one list value plus its comma when locating a bad piece.
# Only exact for single-digit values; kept so diagnostics stay stable.
_LIST_SLOT_WIDTH = 2

# Longest significant digit string converted to int; longer numbers are
# reported as out of range (or as an oversized step).
_MAX_DIGITS = 9
_MAX_STEP = 10**_MAX_DIGITS - 1


def _bounds(kind: FieldKind) -> str:
    return f"between {kind.min_value} and {kind.max_value}"


def _to_int(digits: str) -> int | None:
    """Parse ASCII *digits*; ``None`` when the value has more than ``_MAX_DIGITS`` digits."""
    significant = digits.lstrip("0")
    if len(significant) > _MAX_DIGITS:
        return None
    return int(significant) if significant else 0


def _in_range(kind: FieldKind, value: int | None) -> bool:
    return value is not None and kind.contains(value)


def classify(text: str, kind: FieldKind) -> TermResult:
    """Classify raw field *text* as a value of *kind*.

    Returns the field value, or a non-empty tuple of :class:`TermError`
    whose offsets are relative to the start of *text*.
    """
    if text == "*":
        return Wildcard()

    if _DIGITS_RE.fullmatch(text):
        return _classify_single(text, kind)

    if "," in text:
        return _classify_list(text, kind)

    match = _RANGE_RE.fullmatch(text)
    if match:
        return _classify_range(text, kind, match)

    match = _STEP_RE.fullmatch(text)
    if match:
        return _classify_step(text, kind, match)

    return (TermError(0, len(text), f"bad {kind} term: '{text}'"),)


def _classify_single(text: str, kind: FieldKind) -> TermResult:
    value = _to_int(text)
    if value is not None and kind.contains(value):
        return Single(value)
    return (TermError(0, len(text), f"{kind} term value must be {_bounds(kind)}"),)


def _classify_list(text: str, kind: FieldKind) -> TermResult:
    values: list[int] = []
    errors: list[TermError] = []

    for index, piece in enumerate(text.split(",")):
        start = index * _LIST_SLOT_WIDTH
        end = start + len(piece)
        if not _DIGITS_RE.fullmatch(piece):
            errors.append(TermError(start, end, f"bad {kind} list value: '{piece}'"))
            continue
        value = _to_int(piece)
        if value is None or not kind.contains(value):
            errors.append(TermError(start, end, f"{kind} term values must be {_bounds(kind)}"))
            continue
        values.append(value)

    if errors:
        return tuple(errors)
    return ValueList(tuple(values))


def _classify_range(text: str, kind: FieldKind, match: re.Match[str]) -> TermResult:
    start = _to_int(match.group(1))
    end = _to_int(match.group(2))
    separator = match.start(2) - 1

    errors: list[TermError] = []
    if not _in_range(kind, start):
        errors.append(
            TermError(0, separator, f"{kind} term start range value must be {_bounds(kind)}")
        )
    if not _in_range(kind, end):
        errors.append(
            TermError(
                separator + 1,
                len(text),
                f"{kind} term end range value must be {_bounds(kind)}",
            )
        )

    if errors:
        return tuple(errors)
    return ValueRange(start, end)  # type: ignore[arg-type]


def _classify_step(text: str, kind: FieldKind, match: re.Match[str]) -> TermResult:
    step = _to_int(match.group(1))
    if step is None:
        return (
            TermError(
                match.start(1),
                len(text),
                f"{kind} term step interval cannot exceed {_MAX_STEP}",
            ),
        )
    if step == 0:
        return (TermError(match.start(1), len(text), f"{kind} term step interval cannot be 0"),)
    return StepInterval(step)
