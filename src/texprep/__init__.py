"""texprep - text-mode preprocessing for a TeX notation translator.

Turns author-supplied markup strings into normalised tokens and trees:
dimension literals, macro argument substitution, and mixed text/notation
scanning.
"""

__version__ = "0.1.0"

from texprep.arguments import array_alignment, trim_spaces
from texprep.context import ParseContext, check_eqn_env
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
from texprep.macros import MacroCall, concatenate, substitute_args
from texprep.scanner import (
    NotationSegment,
    ScanMode,
    TextSegment,
    build_mixed_content,
    scan_mixed_content,
    split_mixed_content,
)

__all__ = [
    "DimensionMatch",
    "DimensionValue",
    "ErroneousNesting",
    "ErrorKind",
    "IllegalMacroParameter",
    "MacroBufferOverflow",
    "MacroCall",
    "MalformedDimension",
    "MalformedNotation",
    "NotationSegment",
    "ParseContext",
    "ScanMode",
    "TexError",
    "TextSegment",
    "Unit",
    "UnterminatedNotationIsland",
    "array_alignment",
    "build_mixed_content",
    "check_eqn_env",
    "concatenate",
    "dimen2em",
    "format_em",
    "match_dimen",
    "parse_dimen",
    "require_dimen",
    "scan_mixed_content",
    "split_mixed_content",
    "substitute_args",
    "trim_spaces",
]
