"""Splice style and entity markup into a block's text.

The fold walks consolidated segments left to right.  Segment bounds are
always in the coordinates of the original text, while the buffer being
sliced has already grown by every tag and content rewrite spliced in so far.
``drift`` carries that growth forward so each segment is cut at the right
place::

    text    "ab cd"      BOLD [0, 2)   LINK [0, 5)
    [0, 2)  '<a href="http://x"><span style="font-weight: bold;">ab</span> cd'
    [2, 5)  drift = 59, slice [61, 64) -> ' cd' + '</a>'

Nesting rules for a single segment:
    - entity openings for ranges starting here, first-declared outermost;
    - entity closings for ranges finishing here, in reverse declaration order;
    - style span always nested inside the entity tags.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from drafthtml.chunk_transform import ChunkTransformer
from drafthtml.consolidate import consolidate_ranges
from drafthtml.errors import UnresolvedEntityError
from drafthtml.range_types import (
    ChunkSpan,
    EntityMap,
    EntityRange,
    Segment,
    StyleRange,
    parse_entity_map,
    parse_entity_ranges,
    parse_style_ranges,
    validate_ranges,
)
from drafthtml.tag_resolver import TagResolver

log = logging.getLogger(__name__)


class Assembler:
    """Binds the tag resolver and optional chunk transformer for conversions."""

    __slots__ = ("resolver", "transformer")

    def __init__(
        self,
        resolver: TagResolver,
        transformer: ChunkTransformer | None = None,
    ) -> None:
        self.resolver = resolver
        self.transformer = transformer if transformer is not None else ChunkTransformer.empty()

    def apply_ranges(
        self,
        text: str,
        inline_style_ranges: Iterable[StyleRange | Mapping[str, Any]],
        entity_ranges: Iterable[EntityRange | Mapping[str, Any]],
        entity_map: Mapping[Any, Any] | None,
        context: Any = None,
    ) -> str:
        """Return *text* with every range rendered as nested HTML.

        Zero-length entity ranges still split segments but emit no tags, since
        their opening and closing would fall on different segments.

        Raises:
            MalformedRangeError: a range is negative or runs past the text.
            UnresolvedStyleError: an active style has no rule.
            UnresolvedEntityError: an entity is missing or has no rule.
        """
        styles = parse_style_ranges(inline_style_ranges)
        entity_rngs = parse_entity_ranges(entity_ranges)
        entities = parse_entity_map(entity_map)
        validate_ranges(text, [*styles, *entity_rngs])

        segments = consolidate_ranges([*styles, *entity_rngs])
        log.debug("applying %d segment(s) to %d chars", len(segments), len(text))

        buffer = text
        drift = 0
        for segment in segments:
            style_open, style_close = self.resolver.style_span(
                (rng.style for rng in styles if segment.within(rng)), context,
            )
            opening_tags = self._entity_openings(segment, entity_rngs, entities, context) + style_open
            closing_tags = style_close + self._entity_closings(segment, entity_rngs, entities, context)

            start = segment.start + drift
            finish = segment.finish + drift
            before, content, after = buffer[:start], buffer[start:finish], buffer[finish:]

            processed = self._transform_content(segment, content, entity_rngs, entities, context)

            buffer = "".join((before, opening_tags, processed, closing_tags, after))
            drift += len(opening_tags) + len(closing_tags) + len(processed) - len(content)

        return buffer

    # ------------------------------------------------------------------
    # Per-segment helpers
    # ------------------------------------------------------------------

    def _entity_openings(
        self,
        segment: Segment,
        entity_rngs: list[EntityRange],
        entities: EntityMap,
        context: Any,
    ) -> str:
        return "".join(
            self.resolver.entity_tags(rng, entities, context)[0]
            for rng in entity_rngs
            if rng.length and rng.offset == segment.start
        )

    def _entity_closings(
        self,
        segment: Segment,
        entity_rngs: list[EntityRange],
        entities: EntityMap,
        context: Any,
    ) -> str:
        return "".join(
            self.resolver.entity_tags(rng, entities, context)[1]
            for rng in reversed(entity_rngs)
            if rng.length and rng.finish == segment.finish
        )

    def _transform_content(
        self,
        segment: Segment,
        content: str,
        entity_rngs: list[EntityRange],
        entities: EntityMap,
        context: Any,
    ) -> str:
        if not self.transformer:
            return content
        for rng in entity_rngs:
            if not segment.within(rng):
                continue
            entity = entities.get(rng.key)
            if entity is None:
                raise UnresolvedEntityError(rng.key)
            span = ChunkSpan(
                start=segment.start - rng.offset,
                finish=segment.finish - rng.offset,
                entity_length=rng.length,
            )
            content = self.transformer.transform(entity.type, content, span, context)
        return content


def apply_ranges(
    text: str,
    inline_style_ranges: Iterable[StyleRange | Mapping[str, Any]],
    entity_ranges: Iterable[EntityRange | Mapping[str, Any]],
    entity_map: Mapping[Any, Any] | None,
    context: Any = None,
    *,
    resolver: TagResolver,
    transformer: ChunkTransformer | None = None,
) -> str:
    """Render *text* with its style and entity ranges as an HTML fragment.

    Convenience wrapper around ``Assembler(resolver, transformer).apply_ranges``.
    """
    return Assembler(resolver, transformer).apply_ranges(
        text, inline_style_ranges, entity_ranges, entity_map, context,
    )
