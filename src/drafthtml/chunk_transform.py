"""Optional per-entity content rewriting.

A chunk rule receives the content of one segment covered by an entity and
the segment's position inside that entity, so a multi-segment entity can be
rewritten slice by slice.  Unlike tag resolution, a missing rule is not an
error: the content is left as it was.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeAlias

from drafthtml.range_types import ChunkSpan

log = logging.getLogger(__name__)

ChunkRule: TypeAlias = Callable[[str, ChunkSpan, Any], str | None]


class ChunkTransformer:
    """Dispatch table of content rewrites keyed by entity type."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Mapping[str, ChunkRule] | None = None) -> None:
        self._rules = MappingProxyType(dict(rules or {}))

    @classmethod
    def empty(cls) -> ChunkTransformer:
        return cls()

    def __bool__(self) -> bool:
        return bool(self._rules)

    def lookup(
        self,
        entity_type: str,
        content: str,
        span: ChunkSpan,
        context: Any,
    ) -> str | None:
        """Apply the matching rule, or return ``None`` when no rule applies.

        ``None`` means "no rule"; a rule that matched and returned the same
        text yields that text.
        """
        rule = self._rules.get(entity_type)
        if rule is None:
            return None
        return rule(content, span, context)

    def transform(
        self,
        entity_type: str,
        content: str,
        span: ChunkSpan,
        context: Any,
    ) -> str:
        """Like ``lookup`` but falls back to *content* unchanged."""
        result = self.lookup(entity_type, content, span, context)
        if result is None:
            log.debug(
                "no chunk rule for %s at %d..%d/%d",
                entity_type, span.start, span.finish, span.entity_length,
            )
            return content
        return result
