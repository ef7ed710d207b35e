r"""Macro argument substitution.

Expands ``#1``..``#9`` placeholders in a macro body against positional
arguments.  ``##`` stands for a literal ``#`` and a backslash always takes
the following character with it, so ``\#1`` is never a placeholder.

Concatenation keeps control words intact: ``\alpha`` followed by an
argument starting with a letter gets a separating space so that re-scanning
the expansion does not read ``\alphax``.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import TYPE_CHECKING

from lark import Lark

from texprep.errors import IllegalMacroParameter, MacroBufferOverflow

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

MAX_BUFFER = 5 * 1024
MAX_ARGS = 9

# Placeholder and literal-hash terminals outrank BAD_PARAM, which catches
# "#" followed by anything else (or by nothing at the end of the body).
_MACRO_BODY_GRAMMAR = r"""
    ESCAPE: /\\[\s\S]?/
    LITERAL_HASH.2: "##"
    PARAM.2: /#[1-9]/
    BAD_PARAM: /#[\s\S]?/
    TEXT: /[^\\#]+/
"""

# Compile once at module load
_body_lexer = Lark(_MACRO_BODY_GRAMMAR, parser=None, lexer="basic")

# A control word at the very end, not itself escaped by a preceding backslash
_TRAILING_CONTROL_WORD = re.compile(r"(?:^|[^\\])(?:\\\\)*\\[a-zA-Z]+\Z")
_LEADING_LETTER = re.compile(r"[a-zA-Z]")


def concatenate(left: str, right: str, *, max_buffer: int = MAX_BUFFER) -> str:
    """Join two expansion pieces, separating a trailing control word.

    Raises:
        MacroBufferOverflow: If the result is longer than *max_buffer*.
    """
    if _LEADING_LETTER.match(right) and _TRAILING_CONTROL_WORD.search(left):
        left += " "
    if len(left) + len(right) > max_buffer:
        logger.warning(
            "Macro expansion exceeded %d characters (%d + %d)",
            max_buffer,
            len(left),
            len(right),
        )
        raise MacroBufferOverflow()
    return left + right


def substitute_args(
    args: Sequence[str],
    body: str,
    *,
    max_buffer: int = MAX_BUFFER,
) -> str:
    """Replace the placeholders in *body* with *args*.

    Args:
        args: Positional arguments; ``#1`` refers to ``args[0]``.
        body: Macro body.
        max_buffer: Upper bound on the length of the expansion.

    Returns:
        The expanded body.

    Raises:
        IllegalMacroParameter: On ``#`` not followed by ``#`` or by a digit
            naming an existing argument.
        MacroBufferOverflow: If the expansion grows past *max_buffer*.

    Example:
        >>> substitute_args(["X", "Y"], "#1-#2-##")
        'X-Y-#'
    """
    expanded = ""
    literal = ""
    if body:
        for token in _body_lexer.lex(body):
            if token.type == "PARAM":
                index = int(token.value[1])
                if index > len(args):
                    raise IllegalMacroParameter(token.value)
                expanded = concatenate(
                    concatenate(expanded, literal, max_buffer=max_buffer),
                    args[index - 1],
                    max_buffer=max_buffer,
                )
                literal = ""
            elif token.type == "LITERAL_HASH":
                literal += "#"
            elif token.type == "BAD_PARAM":
                raise IllegalMacroParameter(token.value)
            else:
                literal += token.value
    result = concatenate(expanded, literal, max_buffer=max_buffer)
    logger.debug("Expanded %r with %d argument(s) -> %r", body, len(args), result)
    return result


@dataclasses.dataclass(frozen=True, slots=True)
class MacroCall:
    """A macro body together with the arguments it is being expanded with."""

    body: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.args) > MAX_ARGS:
            msg = f"a macro takes at most {MAX_ARGS} arguments, got {len(self.args)}"
            raise ValueError(msg)

    def expand(self, *, max_buffer: int = MAX_BUFFER) -> str:
        """Expand the body against the arguments."""
        return substitute_args(self.args, self.body, max_buffer=max_buffer)
