"""Error types raised by range conversion.

Every fatal condition derives from ``ConversionError`` so callers can catch
the whole family at once.  Unmatched content transforms are not errors: they
fall back to the original content inside ``chunk_transform``.
"""
from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conditions that abort an ``apply_ranges`` call."""


class MalformedRangeError(ConversionError):
    """Raised when a range is negative, non-integer, or exceeds the text."""


class UnresolvedStyleError(ConversionError):
    """Raised when no style rule maps an active style name to CSS."""

    def __init__(self, style: str) -> None:
        self.style = style
        super().__init__(f"no style rule for {style!r}")


class UnresolvedEntityError(ConversionError):
    """Raised when an entity cannot be turned into an opening/closing tag pair."""

    def __init__(self, key: str, entity_type: str | None = None) -> None:
        self.key = key
        self.entity_type = entity_type
        if entity_type is None:
            message = f"entity key {key!r} is missing from the entity map"
        else:
            message = f"no entity rule matches entity {key!r} of type {entity_type!r}"
        super().__init__(message)


class UnknownBlockTypeError(ConversionError):
    """Raised when a content block has a type with no wrapper tag."""

    def __init__(self, block_type: str) -> None:
        self.block_type = block_type
        super().__init__(f"unknown block type {block_type!r}")
