"""Tests for argument string helpers."""

from __future__ import annotations

import pytest

from texprep.arguments import array_alignment, trim_spaces


class TestTrimSpaces:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("  abc  ", "abc"),
            ("\tabc\n", "abc"),
            ("", ""),
            ("   ", ""),
            ("a\\ ", "a\\ "),
            ("a\\   ", "a\\ "),
            ("a\\", "a\\"),
        ],
        ids=[
            "spaces",
            "tabs-newlines",
            "empty",
            "blank",
            "control-space",
            "control-space-extra",
            "trailing-backslash",
        ],
    )
    def test_trim(self, text: str, expected: str) -> None:
        assert trim_spaces(text) == expected

    def test_non_string_passthrough(self) -> None:
        assert trim_spaces(None) is None
        assert trim_spaces(3) == 3


class TestArrayAlignment:
    @pytest.mark.parametrize(
        ("align", "expected"),
        [
            ("t", "baseline 1"),
            (" b ", "baseline -1"),
            ("c", "center"),
            ("axis", "axis"),
            ("", None),
            (None, None),
        ],
    )
    def test_alignment(self, align: str | None, expected: str | None) -> None:
        assert array_alignment(align) == expected


def test_helpers_exported_from_package() -> None:
    import texprep

    assert texprep.trim_spaces is trim_spaces
    assert texprep.array_alignment is array_alignment
    assert {"trim_spaces", "array_alignment"} <= set(texprep.__all__)
