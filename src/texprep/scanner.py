r"""Mixed text/notation scanner.

Splits a text-mode string such as ``"area $\pi r^2$ of \eqref{eq:c}"``
into plain-text segments and notation islands.  Three island syntaxes are
recognised:

- ``$...$``            closed by the next ``$`` outside braces,
- ``\(...\)``          closed by ``\)`` outside braces,
- ``\ref{...}`` and ``\eqref{...}``, closed by the matching ``}``.

The scan is a single pass of an explicit state machine: one handler per
``ScanMode``, dispatched through ``_HANDLERS``.  Islands are handed to a
``NotationParser``; ``build_mixed_content`` then turns the segments into
nodes through a ``TreeBuilder``.

Outside islands, ``\$``, ``\{``, ``\}`` and ``\\`` are literal escapes: the
backslash is dropped and the character kept as text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

from texprep.context import ParseContext
from texprep.errors import UnterminatedNotationIsland

if TYPE_CHECKING:
    from collections.abc import Callable

    from texprep.protocol import NotationParser, TreeBuilder

logger = logging.getLogger(__name__)

NBSP = "\u00a0"

ATOM_KIND = "TeXAtom"
ROW_KIND = "mrow"
STYLE_KIND = "mstyle"

_TRIGGER_CHARS = frozenset("${}\\")
_LITERAL_ESCAPES = frozenset("${}\\")
_REF_OPENING = re.compile(r"(?:eq)?ref\s*\{")
_LEADING_WHITESPACE = re.compile(r"^\s+")
_TRAILING_WHITESPACE = re.compile(r"\s+\Z")


class ScanMode(Enum):
    """Scanner states.  Island values are the closing delimiter."""

    PLAIN = ""
    DOLLAR_MATH = "$"
    PAREN_MATH = ")"
    REF_BRACE_MATH = "}"


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Plain text between islands, escapes already resolved."""

    text: str


@dataclass(frozen=True, slots=True)
class NotationSegment:
    """A parsed notation island.

    Attributes:
        source: The island text handed to the parser.
        tree: The parser's result.
        mode: Which delimiter syntax produced the island.
    """

    source: str
    tree: Any
    mode: ScanMode


Segment: TypeAlias = TextSegment | NotationSegment


@dataclass(slots=True)
class ScanState:
    """Mutable state of one scan.

    Attributes:
        mode: Current scanner mode.
        brace_depth: Open braces inside the current island.
        segment_start: Index where the pending segment's raw text starts.
    """

    mode: ScanMode = ScanMode.PLAIN
    brace_depth: int = 0
    segment_start: int = 0


@dataclass(slots=True)
class _Splitter:
    """Runs the state machine over one string."""

    text: str
    state: ScanState = field(default_factory=ScanState)
    pos: int = 0
    pieces: list[tuple[ScanMode, str]] = field(default_factory=list)
    # Plain text already cut loose from the input by literal escapes
    pending: list[str] = field(default_factory=list)

    def run(self) -> list[tuple[ScanMode, str]]:
        while self.pos < len(self.text):
            char = self.text[self.pos]
            self.pos += 1
            _HANDLERS[self.state.mode](self, char)
        if self.state.mode is not ScanMode.PLAIN:
            raise UnterminatedNotationIsland()
        self._flush_text(len(self.text))
        return self.pieces

    def _flush_text(self, end: int) -> None:
        self.pending.append(self.text[self.state.segment_start : end])
        content = "".join(self.pending)
        self.pending.clear()
        if content:
            self.pieces.append((ScanMode.PLAIN, content))

    def _open(self, mode: ScanMode, text_end: int, island_start: int) -> None:
        self._flush_text(text_end)
        self.state.mode = mode
        self.state.segment_start = island_start

    def _close(self, island_end: int) -> None:
        source = self.text[self.state.segment_start : island_end]
        logger.debug("Island %s closed: %r", self.state.mode.name, source)
        self.pieces.append((self.state.mode, source))
        self.state.mode = ScanMode.PLAIN
        self.state.segment_start = self.pos

    def _next_char(self) -> str:
        """Consume the character after a backslash ("" at end of input)."""
        char = self.text[self.pos : self.pos + 1]
        self.pos += 1
        return char

    def plain(self, char: str) -> None:
        if char == "$":
            self._open(ScanMode.DOLLAR_MATH, self.pos - 1, self.pos)
        elif char == "\\":
            backslash = self.pos - 1
            ref = _REF_OPENING.match(self.text, self.pos)
            if ref is not None:
                self._open(ScanMode.REF_BRACE_MATH, backslash, backslash)
                self.pos = ref.end()
                return
            escaped = self._next_char()
            if escaped == "(":
                self._open(ScanMode.PAREN_MATH, backslash, self.pos)
            elif escaped in _LITERAL_ESCAPES:
                self.pending.append(self.text[self.state.segment_start : backslash])
                self.state.segment_start = backslash + 1

    def island(self, char: str) -> None:
        state = self.state
        if char == "$":
            if state.mode is ScanMode.DOLLAR_MATH and state.brace_depth == 0:
                self._close(self.pos - 1)
        elif char == "{":
            state.brace_depth += 1
        elif char == "}":
            if state.mode is ScanMode.REF_BRACE_MATH and state.brace_depth == 0:
                self._close(self.pos)
            elif state.brace_depth:
                state.brace_depth -= 1
        elif char == "\\":
            escaped = self._next_char()
            if (
                escaped == ")"
                and state.mode is ScanMode.PAREN_MATH
                and state.brace_depth == 0
            ):
                self._close(self.pos - 2)


_HANDLERS: dict[ScanMode, Callable[[_Splitter, str], None]] = {
    ScanMode.PLAIN: _Splitter.plain,
    ScanMode.DOLLAR_MATH: _Splitter.island,
    ScanMode.PAREN_MATH: _Splitter.island,
    ScanMode.REF_BRACE_MATH: _Splitter.island,
}


def has_notation_triggers(text: str) -> bool:
    """Whether *text* contains any character the scanner reacts to."""
    return not _TRIGGER_CHARS.isdisjoint(text)


def split_mixed_content(text: str) -> list[tuple[ScanMode, str]]:
    """Split *text* into raw ``(mode, source)`` pieces without parsing.

    Plain pieces have mode ``ScanMode.PLAIN`` and escapes resolved; island
    pieces carry the source to hand to the notation parser.

    Raises:
        UnterminatedNotationIsland: If the text ends inside an island.

    Example:
        >>> [(mode.name, piece) for mode, piece in split_mixed_content("a $b$ c")]
        [('PLAIN', 'a '), ('DOLLAR_MATH', 'b'), ('PLAIN', ' c')]
    """
    if not has_notation_triggers(text):
        logger.debug("No notation triggers in %r", text)
        return [(ScanMode.PLAIN, text)] if text else []
    return _Splitter(text).run()


def scan_mixed_content(
    text: str,
    parser: NotationParser,
    context: ParseContext | None = None,
) -> tuple[Segment, ...]:
    """Split *text* into text segments and parsed notation segments.

    Args:
        text: Text-mode content, e.g. the argument of ``\\text{}``.
        parser: Parses each island.
        context: Passed to the parser; defaults to an empty context.

    Returns:
        Segments in input order.

    Raises:
        UnterminatedNotationIsland: If the text ends inside an island.
        MalformedNotation: Propagated from the parser.
    """
    context = context or ParseContext()
    segments: list[Segment] = []
    for mode, source in split_mixed_content(text):
        if mode is ScanMode.PLAIN:
            segments.append(TextSegment(source))
        else:
            tree = parser.parse_substring(source, context)
            segments.append(NotationSegment(source, tree, mode))
    return tuple(segments)


def normalise_edge_spaces(text: str) -> str:
    """Collapse leading and trailing whitespace runs to one no-break space."""
    text = _LEADING_WHITESPACE.sub(NBSP, text)
    return _TRAILING_WHITESPACE.sub(NBSP, text)


def build_mixed_content(
    text: str,
    parser: NotationParser,
    builder: TreeBuilder,
    level: int | str | None = None,
    context: ParseContext | None = None,
) -> list[Any]:
    """Scan *text* and materialise the segments as nodes.

    Text segments become text leaves, islands become ``TeXAtom`` groups.
    With a *level* the nodes are wrapped in an ``mstyle`` group fixing the
    script level; otherwise several nodes are wrapped in one ``mrow``.

    Returns:
        A list of nodes, at most one element unless no wrapping applied.
    """
    context = context or ParseContext()
    attributes = {"mathvariant": context.font} if context.font else {}
    nodes: list[Any] = []
    for segment in scan_mixed_content(text, parser, context):
        if isinstance(segment, TextSegment):
            content = normalise_edge_spaces(segment.text)
            nodes.append(builder.make_text_leaf(content, attributes))
        else:
            atom_attributes = (
                attributes if segment.mode is ScanMode.REF_BRACE_MATH else {}
            )
            nodes.append(builder.make_group(ATOM_KIND, [segment.tree], atom_attributes))

    if level is not None:
        return [
            builder.make_group(
                STYLE_KIND, nodes, {"displaystyle": False, "scriptlevel": level}
            )
        ]
    if len(nodes) > 1:
        return [builder.make_group(ROW_KIND, nodes, {})]
    return nodes
