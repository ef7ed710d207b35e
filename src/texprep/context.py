"""Explicit parse context threaded through parser and scanner calls."""

from __future__ import annotations

import dataclasses

from texprep.errors import ErroneousNesting


@dataclasses.dataclass(frozen=True, slots=True)
class ParseContext:
    """Immutable per-call parse state.

    Attributes:
        font: Math variant applied to text produced in this context
            (e.g. ``"bold"``), or None for the ambient font.
        in_equation: True once an equation structure has been opened.
    """

    font: str | None = None
    in_equation: bool = False

    def with_font(self, font: str | None) -> ParseContext:
        """Return a copy using *font* for produced text."""
        return dataclasses.replace(self, font=font)


def check_eqn_env(context: ParseContext) -> ParseContext:
    """Enter an equation structure.

    The scanner and notation parser only pass the context along; environment
    handlers call this and thread the returned context into nested parses.

    Returns:
        A copy of *context* marked as inside an equation.

    Raises:
        ErroneousNesting: If *context* is already inside an equation.
    """
    if context.in_equation:
        raise ErroneousNesting()
    return dataclasses.replace(context, in_equation=True)
