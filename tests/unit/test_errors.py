"""Tests for the error hierarchy."""

from __future__ import annotations

import pytest

from texprep.errors import (
    ErroneousNesting,
    ErrorKind,
    IllegalMacroParameter,
    MacroBufferOverflow,
    MalformedDimension,
    MalformedNotation,
    TexError,
    UnterminatedNotationIsland,
)


class TestTexError:
    @pytest.mark.parametrize(
        ("error_class", "key"),
        [
            (MalformedDimension, "MissingDimOrUnits"),
            (IllegalMacroParameter, "IllegalMacroParam"),
            (MacroBufferOverflow, "MaxBufferSize"),
            (UnterminatedNotationIsland, "MathNotTerminated"),
            (MalformedNotation, "MalformedNotation"),
            (ErroneousNesting, "ErroneousNestingEq"),
        ],
    )
    def test_defaults(self, error_class: type[TexError], key: str) -> None:
        """Each error carries its symbolic kind and template key."""
        error = error_class()
        assert isinstance(error, TexError)
        assert error.kind is ErrorKind(error_class.__name__)
        assert error.key == key
        assert str(error) == error.template

    def test_only_dimension_errors_are_non_fatal(self) -> None:
        fatal = {kind for kind in ErrorKind if kind.is_fatal}
        assert fatal == set(ErrorKind) - {ErrorKind.MALFORMED_DIMENSION}

    def test_template_placeholders(self) -> None:
        error = MalformedNotation(
            "x", "3", key="Custom", template="Bad %1 at %2 (%3)"
        )
        assert str(error) == "Bad x at 3 (%3)"
        assert error.params == ("x", "3")

    def test_key_override(self) -> None:
        error = MalformedNotation(
            key="MissingCloseBrace", template="Missing close brace"
        )
        assert error.key == "MissingCloseBrace"
        assert error.kind is ErrorKind.MALFORMED_NOTATION
