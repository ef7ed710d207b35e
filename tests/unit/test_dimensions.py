"""Tests for dimension literal matching, conversion and formatting."""

from __future__ import annotations

import pytest

from texprep.dimensions import (
    DimensionMatch,
    DimensionValue,
    Unit,
    dimen2em,
    format_em,
    match_dimen,
    parse_dimen,
    require_dimen,
)
from texprep.errors import ErrorKind, MalformedDimension


class TestMatchDimen:
    """Tests for match_dimen."""

    @pytest.mark.parametrize(
        ("text", "numeral", "unit"),
        [
            ("1em", "1", "em"),
            ("2.5pt", "2.5", "pt"),
            ("-3mm", "-3", "mm"),
            ("+.5in", "+.5", "in"),
            ("3,5cm", "3.5", "cm"),
            ("4.mu", "4.", "mu"),
            ("12 px", "12", "px"),
            ("1pc", "1", "pc"),
            ("7ex", "7", "ex"),
        ],
        ids=[
            "em",
            "decimal-point",
            "negative",
            "leading-point",
            "decimal-comma",
            "trailing-point",
            "space-before-unit",
            "pica",
            "ex",
        ],
    )
    def test_valid_literal(self, text: str, numeral: str, unit: str) -> None:
        """Valid literals yield the normalised numeral, unit and full length."""
        assert match_dimen(text) == DimensionMatch(numeral, unit, len(text))

    def test_surrounding_whitespace_is_consumed(self) -> None:
        """Leading and trailing whitespace count towards the matched length."""
        assert match_dimen("  2pt  ") == DimensionMatch("2", "pt", 7)

    def test_trailing_content_rejected_by_default(self) -> None:
        """Without allow_trailing the whole text must be a literal."""
        assert match_dimen("2pt plus 1fil") is None

    def test_trailing_content_allowed(self) -> None:
        """With allow_trailing one following space is consumed, the rest left."""
        match = match_dimen("2pt plus 1fil", allow_trailing=True)
        assert match == DimensionMatch("2", "pt", 4)
        assert "2pt plus 1fil"[match.length :] == "plus 1fil"

    def test_trailing_without_space(self) -> None:
        """Trailing content may follow the unit directly."""
        assert match_dimen("1emx", allow_trailing=True) == DimensionMatch("1", "em", 3)

    @pytest.mark.parametrize(
        "text",
        ["", "em", "pt2", "3xyz", "1.2.3em", "--1em", "1 e m"],
        ids=["empty", "no-numeral", "unit-first", "bad-unit", "two-points",
             "double-sign", "split-unit"],
    )
    def test_no_match_returns_none(self, text: str) -> None:
        """Non-literals are an absent result, not an exception."""
        assert match_dimen(text) is None

    def test_only_first_comma_normalised(self) -> None:
        """A decimal comma becomes a point."""
        match = match_dimen(",25em")
        assert match is not None
        assert match.numeral == ".25"


class TestDimen2Em:
    """Tests for dimen2em conversion ratios."""

    def test_points(self) -> None:
        assert dimen2em("2pt") == 0.2

    def test_inches(self) -> None:
        assert dimen2em("1in") == 7.2

    def test_unknown_unit_is_zero(self) -> None:
        """An unrecognised unit converts to 0 rather than raising."""
        assert dimen2em("3xyz") == 0

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1em", 1.0),
            ("1ex", 0.43),
            ("1pc", 1.2),
            ("72px", 7.2),
            ("2.54cm", 7.2),
            ("25.4mm", 7.2),
            ("18mu", 1.0),
            ("-1em", -1.0),
        ],
    )
    def test_ratios(self, text: str, expected: float) -> None:
        assert dimen2em(text) == pytest.approx(expected)

    def test_custom_inch_ratio(self) -> None:
        """The per-inch constants can be overridden."""
        assert dimen2em("1in", em_per_inch=6.0) == 6.0
        assert dimen2em("10px", em_per_inch=6.0, px_per_inch=60.0) == pytest.approx(1.0)


class TestFormatEm:
    """Tests for format_em."""

    @pytest.mark.parametrize(
        ("magnitude", "expected"),
        [
            (0.00059, "0em"),
            (-0.00059, "0em"),
            (0.0, "0em"),
            (1.0, "1em"),
            (1.25, "1.25em"),
            (10.0, "10em"),
            (0.5, "0.5em"),
            (-2.5, "-2.5em"),
            (1.23456, "1.235em"),
            (0.0006, "0.001em"),
        ],
    )
    def test_format(self, magnitude: float, expected: str) -> None:
        assert format_em(magnitude) == expected


class TestDimensionValue:
    """Tests for the parsed DimensionValue form."""

    def test_parse(self) -> None:
        assert parse_dimen("1,5 cm") == DimensionValue(1.5, Unit.CM)

    def test_parse_failure(self) -> None:
        assert parse_dimen("wide") is None

    def test_to_em(self) -> None:
        assert DimensionValue(3, Unit.PT).to_em() == pytest.approx(0.3)

    def test_str(self) -> None:
        assert str(DimensionValue(1.5, Unit.EM)) == "1.5em"

    def test_require_dimen_returns_value(self) -> None:
        assert require_dimen("2mu", "mkern") == DimensionValue(2.0, Unit.MU)

    def test_require_dimen_raises(self) -> None:
        """The strict variant raises a non-fatal MalformedDimension."""
        with pytest.raises(MalformedDimension) as exc_info:
            require_dimen("wide", "hskip")
        assert exc_info.value.key == "MissingDimOrUnits"
        assert exc_info.value.kind is ErrorKind.MALFORMED_DIMENSION
        assert not exc_info.value.kind.is_fatal
        assert str(exc_info.value) == "Missing dimension or its units for hskip"
