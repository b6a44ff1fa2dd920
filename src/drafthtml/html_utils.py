"""Inspection helpers for rendered fragments.

Rendering never escapes text, so these only hold for source text that
contains no markup characters of its own.

- ``visible_text`` — the text a browser would show, tags removed.
- ``is_well_nested`` — every end tag closes the innermost open element.
"""
from __future__ import annotations

from bs4 import BeautifulSoup


def visible_text(fragment: str) -> str:
    """Extract the text of *fragment* with no separators between elements."""
    if not fragment:
        return ""
    soup = BeautifulSoup(fragment, "html.parser")
    return soup.get_text()


def is_well_nested(fragment: str) -> bool:
    """True when re-serializing the parsed tree reproduces *fragment*.

    The parser silently closes or reorders mis-nested tags, so any repair
    shows up as a difference from the input.
    """
    soup = BeautifulSoup(fragment, "html.parser")
    return soup.decode(formatter=None) == fragment
