"""Tests for the field term grammar."""

from __future__ import annotations

import pytest

from crontabls.models.errors import TermError
from crontabls.models.terms import (
    FieldKind,
    Single,
    StepInterval,
    ValueList,
    ValueRange,
    Wildcard,
)
from crontabls.parser.grammar import classify

ALL_KINDS = list(FieldKind)


class TestFieldKind:
    def test_display_names(self) -> None:
        assert str(FieldKind.MINUTE) == "minute"
        assert str(FieldKind.DAY_OF_MONTH) == "day of month"
        assert str(FieldKind.DAY_OF_WEEK) == "day of week"

    @pytest.mark.parametrize(
        ("kind", "bounds"),
        [
            (FieldKind.MINUTE, (0, 59)),
            (FieldKind.HOUR, (0, 23)),
            (FieldKind.DAY_OF_MONTH, (1, 31)),
            (FieldKind.MONTH, (1, 12)),
            (FieldKind.DAY_OF_WEEK, (0, 6)),
        ],
    )
    def test_bounds(self, kind: FieldKind, bounds: tuple[int, int]) -> None:
        assert (kind.min_value, kind.max_value) == bounds

    def test_positions(self) -> None:
        assert [FieldKind.at(i) for i in range(5)] == ALL_KINDS
        assert [k.position for k in ALL_KINDS] == [0, 1, 2, 3, 4]

    def test_position_past_last_field_raises(self) -> None:
        with pytest.raises(IndexError):
            FieldKind.at(5)


class TestSingle:
    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_every_in_range_value(self, kind: FieldKind) -> None:
        for n in range(kind.min_value, kind.max_value + 1):
            assert classify(str(n), kind) == Single(n)

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_out_of_range_values(self, kind: FieldKind) -> None:
        candidates = [kind.max_value + 1, kind.max_value + 100]
        if kind.min_value > 0:
            candidates.append(kind.min_value - 1)
        for n in candidates:
            text = str(n)
            result = classify(text, kind)
            assert isinstance(result, tuple)
            assert len(result) == 1
            assert (result[0].start_char, result[0].end_char) == (0, len(text))

    def test_out_of_range_message(self) -> None:
        assert classify("60", FieldKind.MINUTE) == (
            TermError(0, 2, "minute term value must be between 0 and 59"),
        )

    def test_leading_zero_accepted(self) -> None:
        assert classify("05", FieldKind.HOUR) == Single(5)


class TestWildcardAndStep:
    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_wildcard(self, kind: FieldKind) -> None:
        assert classify("*", kind) == Wildcard()

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_step(self, kind: FieldKind) -> None:
        assert classify("*/5", kind) == StepInterval(5)

    @pytest.mark.parametrize("kind", ALL_KINDS)
    def test_zero_step_errors(self, kind: FieldKind) -> None:
        result = classify("*/0", kind)
        assert result == (TermError(2, 3, f"{kind} term step interval cannot be 0"),)

    def test_zero_step_spans_all_digits(self) -> None:
        result = classify("*/00", FieldKind.MINUTE)
        assert isinstance(result, tuple)
        assert (result[0].start_char, result[0].end_char) == (2, 4)

    def test_step_has_no_upper_bound(self) -> None:
        assert classify("*/90", FieldKind.MINUTE) == StepInterval(90)


class TestList:
    def test_valid_list_keeps_order(self) -> None:
        assert classify("5,1,3", FieldKind.MINUTE) == ValueList((5, 1, 3))

    def test_every_bad_piece_reported(self) -> None:
        result = classify("1,9,8", FieldKind.DAY_OF_WEEK)
        assert result == (
            TermError(2, 3, "day of week term values must be between 0 and 6"),
            TermError(4, 5, "day of week term values must be between 0 and 6"),
        )

    def test_offset_assumes_two_char_slots(self) -> None:
        # "10,99": the second piece really starts at 3, but is reported at 2
        result = classify("10,99", FieldKind.HOUR)
        assert result == (TermError(2, 4, "hour term values must be between 0 and 23"),)

    def test_non_numeric_piece(self) -> None:
        result = classify("1,x", FieldKind.MINUTE)
        assert result == (TermError(2, 3, "bad minute list value: 'x'"),)

    def test_empty_piece(self) -> None:
        result = classify("1,,2", FieldKind.MINUTE)
        assert result == (TermError(2, 2, "bad minute list value: ''"),)


class TestRange:
    def test_valid_range(self) -> None:
        assert classify("1-5", FieldKind.DAY_OF_WEEK) == ValueRange(1, 5)

    def test_start_out_of_range(self) -> None:
        result = classify("0-5", FieldKind.MONTH)
        assert result == (TermError(0, 1, "month term start range value must be between 1 and 12"),)

    def test_end_out_of_range(self) -> None:
        result = classify("1-13", FieldKind.MONTH)
        assert result == (TermError(2, 4, "month term end range value must be between 1 and 12"),)

    def test_both_ends_out_of_range(self) -> None:
        result = classify("32-40", FieldKind.DAY_OF_MONTH)
        assert isinstance(result, tuple)
        assert [(e.start_char, e.end_char) for e in result] == [(0, 2), (3, 5)]
        assert "start range" in result[0].message
        assert "end range" in result[1].message


class TestMalformed:
    @pytest.mark.parametrize("text", ["", "abc", "1-", "-1", "*/", "*/x", "1/2", "**", "1-2-3"])
    def test_malformed(self, text: str) -> None:
        result = classify(text, FieldKind.MINUTE)
        assert result == (TermError(0, len(text), f"bad minute term: '{text}'"),)

    def test_non_ascii_digits_rejected(self) -> None:
        result = classify("٣", FieldKind.MINUTE)
        assert isinstance(result, tuple)


class TestDescriptions:
    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (Wildcard(), "any"),
            (Single(5), "at 5"),
            (ValueList((1, 2, 3)), "at any of 1 2 3"),
            (ValueRange(1, 5), "from 1 to 5 (inclusive)"),
            (StepInterval(15), "every 15"),
        ],
    )
    def test_describe(self, value: object, text: str) -> None:
        assert value.describe() == text  # type: ignore[attr-defined]


class TestOversizedNumbers:
    HUGE = "1" * 5000

    def test_single(self) -> None:
        result = classify(self.HUGE, FieldKind.MINUTE)
        assert result == (
            TermError(0, 5000, "minute term value must be between 0 and 59"),
        )

    def test_leading_zeros_are_not_significant(self) -> None:
        assert classify("0" * 5000 + "7", FieldKind.MINUTE) == Single(7)
        assert classify("0" * 5000, FieldKind.MINUTE) == Single(0)

    def test_list_piece(self) -> None:
        result = classify(f"1,{self.HUGE}", FieldKind.HOUR)
        assert result == (
            TermError(2, 5002, "hour term values must be between 0 and 23"),
        )

    def test_range_end(self) -> None:
        result = classify(f"1-{self.HUGE}", FieldKind.MONTH)
        assert result == (
            TermError(2, 5002, "month term end range value must be between 1 and 12"),
        )

    def test_step(self) -> None:
        result = classify(f"*/{self.HUGE}", FieldKind.MINUTE)
        assert result == (
            TermError(2, 5002, "minute term step interval cannot exceed 999999999"),
        )

    def test_largest_step_accepted(self) -> None:
        assert classify("*/999999999", FieldKind.MINUTE) == StepInterval(999999999)
