"""Shared pytest fixtures for texprep tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from texprep.context import ParseContext
from texprep.errors import MalformedNotation
from texprep.notation import LarkNotationParser
from texprep.tree import MarkupNode, NodeFactory


@dataclass
class RecordingParser:
    """Notation parser stub: records each island and returns a marker node.

    Islands equal to ``reject`` raise ``MalformedNotation``.
    """

    calls: list[tuple[str, ParseContext]] = field(default_factory=list)
    reject: str | None = None

    def parse_substring(self, text: str, context: ParseContext) -> MarkupNode:
        self.calls.append((text, context))
        if text == self.reject:
            raise MalformedNotation(key="Rejected", template="rejected %1")
        return MarkupNode("parsed", text=text)


@pytest.fixture
def builder() -> NodeFactory:
    return NodeFactory()


@pytest.fixture
def recording_parser() -> RecordingParser:
    return RecordingParser()


@pytest.fixture
def lark_parser(builder: NodeFactory) -> LarkNotationParser:
    return LarkNotationParser(builder)
