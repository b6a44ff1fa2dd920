"""Render a full raw content state (``blocks`` + ``entityMap``) to HTML.

Each block's text is rendered with ``Assembler.apply_ranges`` and wrapped in
the tag for its block type.  Consecutive list items share a ``<ul>`` /
``<ol>`` wrapper, and a deeper ``depth`` opens a nested list inside the
preceding item::

    one (depth 0), sub (depth 1), two (depth 0)
    -> <ul><li>one<ul><li>sub</li></ul></li><li>two</li></ul>
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from drafthtml.assembler import Assembler
from drafthtml.chunk_transform import ChunkTransformer
from drafthtml.errors import UnknownBlockTypeError
from drafthtml.range_types import (
    EntityRange,
    StyleRange,
    parse_entity_map,
    parse_entity_ranges,
    parse_style_ranges,
)
from drafthtml.tag_resolver import TagResolver

log = logging.getLogger(__name__)

# block type -> (element, list wrapper or None)
BLOCK_TAGS: Mapping[str, tuple[str, str | None]] = MappingProxyType({
    "unstyled": ("p", None),
    "paragraph": ("p", None),
    "header-one": ("h1", None),
    "header-two": ("h2", None),
    "header-three": ("h3", None),
    "header-four": ("h4", None),
    "header-five": ("h5", None),
    "header-six": ("h6", None),
    "blockquote": ("blockquote", None),
    "code-block": ("pre", None),
    "atomic": ("figure", None),
    "unordered-list-item": ("li", "ul"),
    "ordered-list-item": ("li", "ol"),
})


@dataclass(frozen=True, slots=True)
class RawBlock:
    """One content block: a line of text with its own ranges."""

    text: str
    type: str = "unstyled"
    depth: int = 0
    inline_style_ranges: tuple[StyleRange, ...] = ()
    entity_ranges: tuple[EntityRange, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> RawBlock:
        return cls(
            text=str(raw.get("text") or ""),
            type=str(raw.get("type") or "unstyled"),
            depth=max(0, int(raw.get("depth") or 0)),
            inline_style_ranges=tuple(parse_style_ranges(raw.get("inlineStyleRanges") or [])),
            entity_ranges=tuple(parse_entity_ranges(raw.get("entityRanges") or [])),
        )


def parse_blocks(raw: Mapping[str, Any]) -> list[RawBlock]:
    return [RawBlock.from_raw(block) for block in raw.get("blocks") or []]


def block_tags(block_type: str) -> tuple[str, str | None]:
    try:
        return BLOCK_TAGS[block_type]
    except KeyError:
        raise UnknownBlockTypeError(block_type) from None


def _close_lists(parts: list[str], open_lists: list[str], keep: int) -> None:
    """Close open list levels until only *keep* remain."""
    while len(open_lists) > keep:
        parts.append(f"</li></{open_lists.pop()}>")


def render_content(
    raw: Mapping[str, Any],
    *,
    resolver: TagResolver,
    transformer: ChunkTransformer | None = None,
    context: Any = None,
) -> str:
    """Render every block of *raw* and join the results.

    A list item's depth is capped at one level below the enclosing list, so
    a jump in depth never opens a list with no parent item.

    Raises:
        UnknownBlockTypeError: a block type has no entry in ``BLOCK_TAGS``.
        ConversionError: any failure from ``Assembler.apply_ranges``.
    """
    entity_map = parse_entity_map(raw.get("entityMap"))
    blocks = parse_blocks(raw)
    assembler = Assembler(resolver, transformer)

    parts: list[str] = []
    # list wrapper per nesting level; each level has an unclosed <li>
    open_lists: list[str] = []
    for block in blocks:
        tag, list_tag = block_tags(block.type)
        inner = assembler.apply_ranges(
            block.text,
            block.inline_style_ranges,
            block.entity_ranges,
            entity_map,
            context,
        )
        if list_tag is None:
            _close_lists(parts, open_lists, 0)
            parts.append(f"<{tag}>{inner}</{tag}>")
            continue

        depth = min(block.depth, len(open_lists))
        _close_lists(parts, open_lists, depth + 1)
        if len(open_lists) == depth + 1:
            if open_lists[-1] == list_tag:
                parts.append("</li>")
            else:
                _close_lists(parts, open_lists, depth)
        if len(open_lists) == depth:
            parts.append(f"<{list_tag}>")
            open_lists.append(list_tag)
        parts.append(f"<{tag}>{inner}")
    _close_lists(parts, open_lists, 0)

    log.debug("rendered %d block(s)", len(blocks))
    return "".join(parts)


def content_text(raw: Mapping[str, Any]) -> str:
    """Plain text of all blocks concatenated, matching ``visible_text`` output."""
    return "".join(block.text for block in parse_blocks(raw))
