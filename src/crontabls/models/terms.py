"""Crontab time-field kinds and the values a field term can classify to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FieldKind(StrEnum):
    """One of the five time fields of a crontab entry, in entry order."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day of month"
    MONTH = "month"
    DAY_OF_WEEK = "day of week"

    @property
    def min_value(self) -> int:
        return _BOUNDS[self][0]

    @property
    def max_value(self) -> int:
        return _BOUNDS[self][1]

    @property
    def position(self) -> int:
        """Position of this field within an entry (0-4)."""
        return _ORDER.index(self)

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    @classmethod
    def at(cls, index: int) -> FieldKind:
        """Return the kind for the field at *index*; raises ``IndexError`` past 4."""
        return _ORDER[index]


_ORDER: tuple[FieldKind, ...] = (
    FieldKind.MINUTE,
    FieldKind.HOUR,
    FieldKind.DAY_OF_MONTH,
    FieldKind.MONTH,
    FieldKind.DAY_OF_WEEK,
)

_BOUNDS: dict[FieldKind, tuple[int, int]] = {
    FieldKind.MINUTE: (0, 59),
    FieldKind.HOUR: (0, 23),
    FieldKind.DAY_OF_MONTH: (1, 31),
    FieldKind.MONTH: (1, 12),
    FieldKind.DAY_OF_WEEK: (0, 6),
}

FIELD_COUNT = len(_ORDER)


@dataclass(frozen=True)
class Wildcard:
    """``*``: matches every value of the field."""

    def describe(self) -> str:
        return "any"


@dataclass(frozen=True)
class Single:
    """A single number, e.g. ``5``."""

    value: int

    def describe(self) -> str:
        return f"at {self.value}"


@dataclass(frozen=True)
class ValueList:
    """A comma-separated list, e.g. ``1,15,30``."""

    values: tuple[int, ...]

    def describe(self) -> str:
        return f"at any of {' '.join(str(v) for v in self.values)}"


@dataclass(frozen=True)
class ValueRange:
    """An inclusive range, e.g. ``1-5``."""

    start: int
    end: int

    def describe(self) -> str:
        return f"from {self.start} to {self.end} (inclusive)"


@dataclass(frozen=True)
class StepInterval:
    """A step over the whole field, e.g. ``*/15``."""

    step: int

    def describe(self) -> str:
        return f"every {self.step}"


FieldValue = Wildcard | Single | ValueList | ValueRange | StepInterval
