"""Stock rule tables for the common Draft.js styles and the LINK entity.

Applications with their own styles or entity types build a ``TagResolver``
directly; these tables cover the editor's built-in inline styles.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from drafthtml.chunk_transform import ChunkRule, ChunkTransformer
from drafthtml.range_types import Entity
from drafthtml.tag_resolver import EntityRule, StyleRule, TagResolver

STYLE_CSS: Mapping[str, str] = MappingProxyType({
    "BOLD": "font-weight: bold;",
    "ITALIC": "font-style: italic;",
    "UNDERLINE": "text-decoration: underline;",
    "STRIKETHROUGH": "text-decoration: line-through;",
    "CODE": "font-family: monospace;",
})


def make_style_rules(css_by_style: Mapping[str, str]) -> dict[str, StyleRule]:
    """Lift a plain ``{style: css}`` mapping into context-free style rules."""
    return {style: (lambda _style, _ctx, css=css: css) for style, css in css_by_style.items()}


def link_rule(entity: Entity, context: Any) -> tuple[str, str] | None:
    """``<a href>`` for LINK entities that carry a url; no match otherwise."""
    url = entity.data.get("url")
    if not url:
        return None
    return (f'<a href="{url}">', "</a>")


ENTITY_RULES: Mapping[str, EntityRule] = MappingProxyType({
    "LINK": link_rule,
})


def default_resolver(
    *,
    extra_styles: Mapping[str, str] | None = None,
    extra_entities: Mapping[str, EntityRule] | None = None,
) -> TagResolver:
    """Resolver over the stock tables, optionally extended by the caller."""
    styles = {**STYLE_CSS, **(extra_styles or {})}
    entities = {**ENTITY_RULES, **(extra_entities or {})}
    return TagResolver(make_style_rules(styles), entities)


def default_transformer(rules: Mapping[str, ChunkRule] | None = None) -> ChunkTransformer:
    return ChunkTransformer(rules)
