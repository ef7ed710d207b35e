"""Default markup tree: a plain node dataclass and the builder producing it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

TEXT_KIND = "text"


@dataclass(slots=True)
class MarkupNode:
    """A node of the preprocessed markup tree.

    Attributes:
        kind: Node kind, e.g. ``"text"``, ``"mrow"`` or ``"macro"``.
        children: Child nodes, empty for leaves.
        attributes: Presentation and bookkeeping attributes.
        text: Text content for leaves, None for branches.
    """

    kind: str
    children: list[MarkupNode] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)
    text: str | None = None

    @property
    def is_leaf(self) -> bool:
        return self.text is not None

    def walk(self) -> Iterator[MarkupNode]:
        """Yield this node and all descendants, depth-first, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_sexpr(self) -> str:
        """Render as a compact S-expression, for debugging and tests.

        Example:
            >>> MarkupNode("mrow", [MarkupNode("text", text="a")]).to_sexpr()
            "(mrow (text 'a'))"
        """
        parts = [self.kind]
        parts.extend(f"{key}={value!r}" for key, value in self.attributes.items())
        if self.text is not None:
            parts.append(repr(self.text))
        parts.extend(child.to_sexpr() for child in self.children)
        return f"({' '.join(parts)})"


class NodeFactory:
    """``TreeBuilder`` producing ``MarkupNode`` instances."""

    def make_text_leaf(
        self, content: str, attributes: Mapping[str, Any]
    ) -> MarkupNode:
        return MarkupNode(TEXT_KIND, attributes=dict(attributes), text=content)

    def make_group(
        self,
        kind: str,
        children: Sequence[MarkupNode],
        attributes: Mapping[str, Any],
    ) -> MarkupNode:
        return MarkupNode(kind, children=list(children), attributes=dict(attributes))
