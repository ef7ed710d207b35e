"""Dimension literals: matching, conversion to ems, and formatting.

A dimension literal is a signed decimal followed by one of the recognised
TeX units, e.g. ``"1.5em"``, ``"-2 pt"`` or ``"3,5mm"`` (a decimal comma is
normalised to a point).  Failure to match is an expected outcome and is
reported as ``None``; only ``require_dimen`` turns it into an error.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from texprep.errors import MalformedDimension

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

EM_PER_INCH = 7.2
PX_PER_INCH = 72.0

# Magnitudes below this collapse to zero when formatted (float noise).
_ZERO_THRESHOLD = 0.0006


class Unit(Enum):
    """Recognised dimension units."""

    EM = "em"
    EX = "ex"
    PT = "pt"
    PC = "pc"
    PX = "px"
    IN = "in"
    CM = "cm"
    MM = "mm"
    MU = "mu"


def unit_ratios(
    em_per_inch: float = EM_PER_INCH,
    px_per_inch: float = PX_PER_INCH,
) -> dict[Unit, Callable[[float], float]]:
    """Build the unit -> em conversion table."""
    return {
        Unit.EM: lambda m: m,
        Unit.EX: lambda m: m * 0.43,
        Unit.PT: lambda m: m / 10,  # 10pt to an em
        Unit.PC: lambda m: m * 1.2,  # 12pt to a pica
        Unit.PX: lambda m: m * em_per_inch / px_per_inch,
        Unit.IN: lambda m: m * em_per_inch,
        Unit.CM: lambda m: m * em_per_inch / 2.54,
        Unit.MM: lambda m: m * em_per_inch / 25.4,
        Unit.MU: lambda m: m / 18,
    }


_DEFAULT_RATIOS = unit_ratios()

_NUMERAL = r"([-+]?(?:[.,][0-9]+|[0-9]+(?:[.,][0-9]*)?))"
_UNIT = r"(pt|em|ex|mu|px|mm|cm|in|pc)"
_DIMEN_END = re.compile(r"\s*" + _NUMERAL + r"\s*" + _UNIT + r"\s*\Z")
_DIMEN_REST = re.compile(r"\s*" + _NUMERAL + r"\s*" + _UNIT + r" ?")


class DimensionMatch(NamedTuple):
    """Result of ``match_dimen``.

    Attributes:
        numeral: The number with any decimal comma replaced by a point.
        unit: The unit name as written.
        length: Number of characters consumed from the start of the input.
    """

    numeral: str
    unit: str
    length: int


@dataclasses.dataclass(frozen=True, slots=True)
class DimensionValue:
    """A parsed dimension."""

    magnitude: float
    unit: Unit

    def to_em(
        self,
        em_per_inch: float = EM_PER_INCH,
        px_per_inch: float = PX_PER_INCH,
    ) -> float:
        """Convert to ems."""
        ratios = (
            _DEFAULT_RATIOS
            if (em_per_inch, px_per_inch) == (EM_PER_INCH, PX_PER_INCH)
            else unit_ratios(em_per_inch, px_per_inch)
        )
        return ratios[self.unit](self.magnitude)

    def __str__(self) -> str:
        return f"{self.magnitude:g}{self.unit.value}"


def match_dimen(text: str, allow_trailing: bool = False) -> DimensionMatch | None:
    """Match a dimension literal at the start of *text*.

    Args:
        text: Candidate literal.
        allow_trailing: If True, only a prefix must match (one following
            space is consumed); otherwise the whole text must be a literal,
            surrounding whitespace aside.

    Returns:
        The match, or None when *text* is not a dimension.
    """
    pattern = _DIMEN_REST if allow_trailing else _DIMEN_END
    match = pattern.match(text)
    if match is None:
        return None
    return DimensionMatch(
        numeral=match.group(1).replace(",", ".", 1),
        unit=match.group(2),
        length=match.end(),
    )


def parse_dimen(text: str) -> DimensionValue | None:
    """Parse a complete dimension literal into a ``DimensionValue``."""
    match = match_dimen(text)
    if match is None:
        return None
    return DimensionValue(float(match.numeral), Unit(match.unit))


def require_dimen(text: str, name: str) -> DimensionValue:
    """Parse a dimension argument that the caller cannot do without.

    Args:
        text: The argument text.
        name: Name of the command the argument belongs to, for the message.

    Raises:
        MalformedDimension: If *text* is not a dimension literal.
    """
    value = parse_dimen(text)
    if value is None:
        raise MalformedDimension(name)
    return value


def dimen2em(
    text: str,
    *,
    em_per_inch: float = EM_PER_INCH,
    px_per_inch: float = PX_PER_INCH,
) -> float:
    """Convert a dimension literal to ems.

    An unrecognised literal converts to 0 rather than raising.
    """
    match = match_dimen(text)
    numeral, unit = (match.numeral, match.unit) if match else (None, None)
    magnitude = float(numeral or "1")
    if unit is None:
        logger.debug("No dimension in %r, converting to 0", text)
        return 0
    return DimensionValue(magnitude, Unit(unit)).to_em(em_per_inch, px_per_inch)


def format_em(magnitude: float) -> str:
    """Render *magnitude* as an ``em`` length with at most three decimals.

    Example:
        >>> format_em(1.25)
        '1.25em'
        >>> format_em(0.00059)
        '0em'
    """
    if abs(magnitude) < _ZERO_THRESHOLD:
        return "0em"
    return re.sub(r"\.?0+\Z", "", f"{magnitude:.3f}") + "em"
