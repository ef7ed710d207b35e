"""Small normalisers for macro and environment argument strings."""

from __future__ import annotations

import re
from typing import Any

_EDGE_WHITESPACE = re.compile(r"^\s+|\s+\Z")

_ARRAY_ALIGNMENTS = {
    "t": "baseline 1",
    "b": "baseline -1",
    "c": "center",
}


def trim_spaces(text: Any) -> Any:
    r"""Strip surrounding whitespace, keeping a control space intact.

    ``"\\ "`` is a control space: if stripping would leave a trailing
    backslash that was followed by a space, one space is put back.
    Non-string values are returned unchanged.
    """
    if not isinstance(text, str):
        return text
    trimmed = _EDGE_WHITESPACE.sub("", text)
    if trimmed.endswith("\\") and text.endswith(" "):
        trimmed += " "
    return trimmed


def array_alignment(align: str | None) -> str | None:
    """Map an array's ``[t]``/``[b]``/``[c]`` option to a vertical alignment.

    Returns:
        The alignment value, the trimmed option itself when it is not one
        of the short forms, or None for an empty option (keep the current
        alignment).
    """
    align = trim_spaces(align or "")
    if not align:
        return None
    return _ARRAY_ALIGNMENTS.get(align, align)
