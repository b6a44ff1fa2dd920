"""Resolve style names and entities to markup through dispatch tables.

Both tables are supplied by the embedding application.  A style or entity
that is actually encountered but has no matching rule is a configuration
defect, so resolution raises instead of guessing a default.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, TypeAlias

from drafthtml.errors import UnresolvedEntityError, UnresolvedStyleError
from drafthtml.range_types import Entity, EntityMap, EntityRange

StyleRule: TypeAlias = Callable[[str, Any], str]
EntityRule: TypeAlias = Callable[[Entity, Any], tuple[str, str] | None]


class TagResolver:
    """Maps style names to CSS fragments and entities to tag pairs.

    Args:
        style_rules: style name -> rule returning a CSS declaration.
        entity_rules: entity type -> rule returning ``(opening, closing)``,
            or ``None`` when the entity's shape does not fit the rule.
    """

    __slots__ = ("_entity_rules", "_style_rules")

    def __init__(
        self,
        style_rules: Mapping[str, StyleRule],
        entity_rules: Mapping[str, EntityRule],
    ) -> None:
        self._style_rules = MappingProxyType(dict(style_rules))
        self._entity_rules = MappingProxyType(dict(entity_rules))

    def resolve_style(self, style: str, context: Any) -> str:
        rule = self._style_rules.get(style)
        if rule is None:
            raise UnresolvedStyleError(style)
        return rule(style, context)

    def resolve_entity(self, entity: Entity, context: Any, *, key: str = "") -> tuple[str, str]:
        rule = self._entity_rules.get(entity.type)
        tags = rule(entity, context) if rule is not None else None
        if tags is None:
            raise UnresolvedEntityError(key, entity.type)
        return tags

    def style_span(self, styles: Iterable[str], context: Any) -> tuple[str, str]:
        """Wrap all active styles in one ``<span style>``; empty when none."""
        css = " ".join(self.resolve_style(style, context) for style in styles)
        if not css:
            return ("", "")
        return (f'<span style="{css}">', "</span>")

    def entity_tags(
        self,
        entity_range: EntityRange,
        entity_map: EntityMap,
        context: Any,
    ) -> tuple[str, str]:
        """Look up the range's entity and resolve its tag pair."""
        entity = entity_map.get(entity_range.key)
        if entity is None:
            raise UnresolvedEntityError(entity_range.key)
        return self.resolve_entity(entity, context, key=entity_range.key)
