"""Deterministic outward spiral over the integer plane.

The spiral yields ``(0, 0)`` first, then each ring of Chebyshev radius
``r`` (``8 * r`` cells) starting at the ``(-r, -r)`` corner and walking
along +x, +y, -x and -y. Searches that need "the nearest cell that..." walk
this order so that results are stable across runs.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from thorpe.types import TilePos
from thorpe.util.coordinates import chebyshev


def _ring_size(layer: int) -> int:
    return max(layer * 8 + 4 * min(layer, 1) - 4, 1)


def _clamp(value: int, upper: int) -> int:
    return min(max(value, 0), upper)


def spiral_2d() -> Iterator[TilePos]:
    """Yield offsets in spiral order, forever."""
    layer = 0
    i = 0
    while True:
        size = _ring_size(layer)
        if i >= size:
            layer += 1
            i = 0
            size = _ring_size(layer)

        quarter = size // 4
        side = layer * 2
        x = -layer + _clamp(i, side) - _clamp(i - quarter * 2, side)
        y = -layer + _clamp(i - quarter, side) - _clamp(i - quarter * 3, side)
        i += 1
        yield (x, y)


def spiral_within(radius: int) -> Iterator[TilePos]:
    """Yield spiral offsets whose Chebyshev distance is below ``radius``."""
    return itertools.takewhile(lambda pos: chebyshev(pos) < radius, spiral_2d())
