r"""Default notation parser: TeX tokens and brace groups via lark.

This is not a TeX grammar.  It recognises the lexical structure of an
island (control words, control symbols, specials, character runs and brace
groups) and produces a tree through a ``TreeBuilder``.  Command semantics
belong to the downstream translator.

Text-mode macros such as ``\text{...}`` switch back to mixed content: their
argument is scanned again by ``build_mixed_content``, so ``$x \text{if $y$}$``
nests correctly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedEOF, UnexpectedInput, UnexpectedToken

from texprep.context import ParseContext
from texprep.errors import MalformedNotation
from texprep.scanner import build_mixed_content
from texprep.tree import NodeFactory

if TYPE_CHECKING:
    from collections.abc import Sequence

    from texprep.protocol import TreeBuilder

logger = logging.getLogger(__name__)

# Text-mode macros and the math variant their content is set in
TEXT_MACROS: dict[str, str | None] = {
    "text": None,
    "mbox": None,
    "hbox": None,
    "textrm": "normal",
    "textbf": "bold",
    "textit": "italic",
    "texttt": "monospace",
    "textsf": "sans-serif",
}

_NOTATION_GRAMMAR = r"""
    start: _item*
    group: LBRACE _item* RBRACE
    _item: group
         | CONTROL_WORD
         | CONTROL_SYMBOL
         | SPECIAL
         | CHARS

    LBRACE: "{"
    RBRACE: "}"
    CONTROL_WORD: /\\[a-zA-Z]+/
    CONTROL_SYMBOL: /\\[^a-zA-Z]/
    SPECIAL: /[_^&~#']/
    CHARS: /[^\\{}_^&~#'%\s]+/
    COMMENT: /%[^\n]*/

    WHITESPACE: /\s+/
    %ignore WHITESPACE
    %ignore COMMENT
"""

# Compile once at module load
_notation_parser = Lark(_NOTATION_GRAMMAR, parser="lalr")


def _malformed(exc: UnexpectedInput, text: str) -> MalformedNotation:
    """Translate a lark error into a ``MalformedNotation``."""
    if isinstance(exc, UnexpectedEOF) or (
        isinstance(exc, UnexpectedToken) and exc.token.type == "$END"
    ):
        return MalformedNotation(
            key="MissingCloseBrace", template="Missing close brace"
        )
    if isinstance(exc, UnexpectedToken) and exc.token.type == "RBRACE":
        return MalformedNotation(
            key="ExtraCloseBrace",
            template="Extra close brace or missing open brace",
        )
    position = getattr(exc, "pos_in_stream", None)
    return MalformedNotation(
        str(position if position is not None else len(text)),
        key="UnexpectedInput",
        template="Unexpected input at position %1",
    )


class LarkNotationParser:
    """``NotationParser`` backed by a lark LALR grammar."""

    def __init__(self, builder: TreeBuilder | None = None) -> None:
        self.builder = builder or NodeFactory()

    def parse_substring(self, text: str, context: ParseContext) -> Any:
        """Parse *text* into a ``math`` group.

        Raises:
            MalformedNotation: On unbalanced braces or a dangling backslash.
        """
        try:
            tree = _notation_parser.parse(text)
        except UnexpectedInput as exc:
            logger.debug("Rejected notation %r: %s", text, exc)
            raise _malformed(exc, text) from exc
        children = self._convert(tree.children, text, context)
        return self.builder.make_group("math", children, {})

    def _convert(
        self,
        items: Sequence[Tree | Token],
        source: str,
        context: ParseContext,
    ) -> list[Any]:
        nodes: list[Any] = []
        text_macro: str | None = None
        for item in items:
            if text_macro is not None:
                if isinstance(item, Tree):
                    nodes.append(self._text_box(text_macro, item, source, context))
                    text_macro = None
                    continue
                nodes.append(self._macro(text_macro))
                text_macro = None
            if isinstance(item, Tree):
                inner = item.children[1:-1]
                nodes.append(
                    self.builder.make_group(
                        "group", self._convert(inner, source, context), {}
                    )
                )
            elif item.type == "CONTROL_WORD" and item.value[1:] in TEXT_MACROS:
                text_macro = item.value[1:]
            elif item.type in ("CONTROL_WORD", "CONTROL_SYMBOL"):
                nodes.append(self._macro(item.value[1:]))
            elif item.type == "SPECIAL":
                nodes.append(
                    self.builder.make_group("special", [], {"char": item.value})
                )
            else:
                nodes.append(self.builder.make_text_leaf(item.value, {"role": "chars"}))
        if text_macro is not None:
            nodes.append(self._macro(text_macro))
        return nodes

    def _macro(self, name: str) -> Any:
        return self.builder.make_group("macro", [], {"name": name})

    def _text_box(
        self,
        name: str,
        group: Tree,
        source: str,
        context: ParseContext,
    ) -> Any:
        """Re-scan a text macro's argument as mixed content."""
        lbrace, rbrace = group.children[0], group.children[-1]
        body = source[lbrace.end_pos : rbrace.start_pos]
        font = TEXT_MACROS[name]
        inner_context = context.with_font(font) if font else context
        children = build_mixed_content(body, self, self.builder, context=inner_context)
        return self.builder.make_group("textbox", children, {"name": name})
