"""Break overlapping ranges into ordered, mutually exclusive segments.

Every range boundary becomes a cut point, so pairing each sorted point with
its successor partitions the covered span without any explicit overlap
handling::

    ITALIC [0, 4)   BOLD [4, 8)   entity [2, 5)
    points   -> [0, 2, 4, 5, 8]
    segments -> [0, 2) [2, 4) [4, 5) [5, 8)
"""
from __future__ import annotations

from collections.abc import Iterable

from drafthtml.range_types import Range, Segment


def breakpoints(ranges: Iterable[Range]) -> list[int]:
    """Sorted, de-duplicated union of every range's offset and finish."""
    points: set[int] = set()
    for rng in ranges:
        points.add(rng.offset)
        points.add(rng.finish)
    return sorted(points)


def consolidate_ranges(ranges: Iterable[Range]) -> list[Segment]:
    """Return the disjoint segments between consecutive breakpoints.

    No ranges, or a single breakpoint (only zero-length ranges at one
    offset), yields an empty list.
    """
    points = breakpoints(ranges)
    return [Segment(start, finish) for start, finish in zip(points, points[1:])]
