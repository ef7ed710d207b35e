"""Protocols for the scanner's collaborators.

The scanner never builds nodes or parses notation itself.  Any parser and
tree builder satisfying these protocols can be plugged in; ``texprep.notation``
and ``texprep.tree`` provide the defaults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from texprep.context import ParseContext


class TreeBuilder(Protocol):
    """Materialises markup nodes."""

    def make_text_leaf(self, content: str, attributes: Mapping[str, Any]) -> Any:
        """Create a text leaf.

        Args:
            content: Text of the leaf, already whitespace-normalised.
            attributes: Presentation attributes (e.g. ``mathvariant``).

        Returns:
            The leaf node.
        """
        ...

    def make_group(
        self,
        kind: str,
        children: Sequence[Any],
        attributes: Mapping[str, Any],
    ) -> Any:
        """Create a branch node of the given kind around *children*."""
        ...


class NotationParser(Protocol):
    """Parses a notation island into a tree."""

    def parse_substring(self, text: str, context: ParseContext) -> Any:
        """Parse *text* as notation.

        Raises:
            MalformedNotation: If *text* is not valid notation.
        """
        ...
