"""Value types for style ranges, entity ranges and the entity map.

All offsets are half-open ``[offset, offset + length)`` spans measured in
``str`` code points over a block's plain text.  Raw editor JSON uses
camelCase keys; the ``from_raw`` constructors accept that shape directly.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from drafthtml.errors import MalformedRangeError


def _raw_int(raw: Mapping[str, Any], name: str) -> int:
    value = raw.get(name)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedRangeError(f"range {name} must be an integer, got {value!r}")
    return value


def _check_bounds(offset: int, length: int) -> None:
    if offset < 0:
        raise MalformedRangeError(f"offset must be >= 0, got {offset}")
    if length < 0:
        raise MalformedRangeError(f"length must be >= 0, got {length}")


@dataclass(frozen=True, slots=True)
class StyleRange:
    """An inline style applied to ``[offset, finish)``."""

    offset: int
    length: int
    style: str

    def __post_init__(self) -> None:
        _check_bounds(self.offset, self.length)

    @property
    def finish(self) -> int:
        return self.offset + self.length

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> StyleRange:
        return cls(
            offset=_raw_int(raw, "offset"),
            length=_raw_int(raw, "length"),
            style=str(raw.get("style") or ""),
        )


@dataclass(frozen=True, slots=True)
class EntityRange:
    """A reference from ``[offset, finish)`` to an entry in the entity map."""

    offset: int
    length: int
    key: str

    def __post_init__(self) -> None:
        _check_bounds(self.offset, self.length)

    @property
    def finish(self) -> int:
        return self.offset + self.length

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> EntityRange:
        key = raw.get("key")
        if key is None:
            raise MalformedRangeError("entity range has no key")
        return cls(
            offset=_raw_int(raw, "offset"),
            length=_raw_int(raw, "length"),
            key=str(key),
        )


Range: TypeAlias = StyleRange | EntityRange


@dataclass(frozen=True, slots=True)
class Entity:
    """Entity-map entry: a typed annotation such as a hyperlink."""

    type: str
    mutability: str = "MUTABLE"
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Entity:
        return cls(
            type=str(raw.get("type") or ""),
            mutability=str(raw.get("mutability") or ""),
            data=dict(raw.get("data") or {}),
        )


EntityMap: TypeAlias = dict[str, Entity]


@dataclass(frozen=True, slots=True)
class Segment:
    """Disjoint sub-span produced by consolidation; the unit of tag resolution."""

    start: int
    finish: int

    def __post_init__(self) -> None:
        if self.finish <= self.start:
            raise MalformedRangeError(
                f"segment finish must be > start, got {self.finish} <= {self.start}",
            )

    def within(self, rng: Range) -> bool:
        """Containment test: the segment lies fully inside *rng*."""
        return self.start >= rng.offset and self.finish <= rng.finish


@dataclass(frozen=True, slots=True)
class ChunkSpan:
    """Position of a segment relative to the start of its enclosing entity."""

    start: int
    finish: int
    entity_length: int


def parse_entity_map(raw: Mapping[Any, Any] | None) -> EntityMap:
    """Parse a raw ``entityMap`` object.  Keys are normalized to strings."""
    if not raw:
        return {}
    entity_map: EntityMap = {}
    for key, value in raw.items():
        entity_map[str(key)] = value if isinstance(value, Entity) else Entity.from_raw(value)
    return entity_map


def parse_style_ranges(
    ranges: Iterable[StyleRange | Mapping[str, Any]],
) -> list[StyleRange]:
    return [r if isinstance(r, StyleRange) else StyleRange.from_raw(r) for r in ranges]


def parse_entity_ranges(
    ranges: Iterable[EntityRange | Mapping[str, Any]],
) -> list[EntityRange]:
    return [r if isinstance(r, EntityRange) else EntityRange.from_raw(r) for r in ranges]


def validate_ranges(text: str, ranges: Iterable[Range]) -> None:
    """Fail closed when any range reaches past the end of *text*.

    Raises:
        MalformedRangeError: naming the first offending range.
    """
    text_len = len(text)
    for rng in ranges:
        if rng.finish > text_len:
            raise MalformedRangeError(
                f"range [{rng.offset}, {rng.finish}) exceeds text length {text_len}",
            )
