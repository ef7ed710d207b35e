"""Typed errors raised by the preprocessing layer.

Every error carries a symbolic ``kind``, a template ``key`` and a default
English ``template`` with ``%1``-style placeholders.  Callers that localise
messages look the key up in their own catalogue; ``str(error)`` falls back
to the template filled with ``params``.
"""

from __future__ import annotations

import re
from enum import Enum


class ErrorKind(Enum):
    """Symbolic error kinds."""

    MALFORMED_DIMENSION = "MalformedDimension"
    ILLEGAL_MACRO_PARAMETER = "IllegalMacroParameter"
    MACRO_BUFFER_OVERFLOW = "MacroBufferOverflow"
    UNTERMINATED_NOTATION_ISLAND = "UnterminatedNotationIsland"
    MALFORMED_NOTATION = "MalformedNotation"
    ERRONEOUS_NESTING = "ErroneousNesting"

    @property
    def is_fatal(self) -> bool:
        """Whether this kind aborts the current top-level parse."""
        return self is not ErrorKind.MALFORMED_DIMENSION


_PLACEHOLDER_PATTERN = re.compile(r"%(\d)")


class TexError(Exception):
    """Base class for all preprocessing errors."""

    kind: ErrorKind = ErrorKind.MALFORMED_NOTATION
    default_key: str = "TexError"
    default_template: str = "TeX error"

    def __init__(
        self,
        *params: str,
        key: str | None = None,
        template: str | None = None,
    ) -> None:
        self.key = key or self.default_key
        self.template = template or self.default_template
        self.params = tuple(params)
        super().__init__(self.key, *self.params)

    def __str__(self) -> str:
        def fill(match: re.Match) -> str:
            index = int(match.group(1)) - 1
            if 0 <= index < len(self.params):
                return self.params[index]
            return match.group(0)

        return _PLACEHOLDER_PATTERN.sub(fill, self.template)


class MalformedDimension(TexError):
    """A dimension argument was required but could not be parsed."""

    kind = ErrorKind.MALFORMED_DIMENSION
    default_key = "MissingDimOrUnits"
    default_template = "Missing dimension or its units for %1"


class IllegalMacroParameter(TexError):
    """A macro body referenced a parameter that does not exist."""

    kind = ErrorKind.ILLEGAL_MACRO_PARAMETER
    default_key = "IllegalMacroParam"
    default_template = "Illegal macro parameter reference"


class MacroBufferOverflow(TexError):
    """Macro expansion grew past the buffer limit."""

    kind = ErrorKind.MACRO_BUFFER_OVERFLOW
    default_key = "MaxBufferSize"
    default_template = (
        "Internal buffer size exceeded; is there a recursive macro call?"
    )


class UnterminatedNotationIsland(TexError):
    """Input ended while a ``$``, ``\\(`` or ``\\ref{`` island was open."""

    kind = ErrorKind.UNTERMINATED_NOTATION_ISLAND
    default_key = "MathNotTerminated"
    default_template = "Math not terminated in text box"


class MalformedNotation(TexError):
    """The notation parser rejected an island."""

    kind = ErrorKind.MALFORMED_NOTATION
    default_key = "MalformedNotation"
    default_template = "Malformed notation"


class ErroneousNesting(TexError):
    """An equation structure was opened inside another one."""

    kind = ErrorKind.ERRONEOUS_NESTING
    default_key = "ErroneousNestingEq"
    default_template = "Erroneous nesting of equation structures"
