"""Axis-aligned bounds and small vector helpers."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from thorpe.types import BlockPos, TileCoord, TilePos, Vec2f


@dataclass(frozen=True)
class Aabr:
    """Axis-aligned bounding rectangle.

    Collision tests treat both corners as inclusive, so two rectangles that
    share an edge collide. ``cells()`` iterates the half-open range
    ``[min, max)`` which is how district footprints are stored.
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_center(cls, x: int, y: int, half_w: int, half_h: int) -> Aabr:
        return cls(x - half_w, y - half_h, x + half_w, y + half_h)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    def center(self) -> tuple[int, int]:
        return ((self.min_x + self.max_x) // 2, (self.min_y + self.max_y) // 2)

    def collides_with(self, other: Aabr) -> bool:
        return (
            self.max_x >= other.min_x
            and self.min_x <= other.max_x
            and self.max_y >= other.min_y
            and self.min_y <= other.max_y
        )

    def contains_point(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def cells(self) -> Iterator[tuple[int, int]]:
        for x in range(self.min_x, self.max_x):
            for y in range(self.min_y, self.max_y):
                yield (x, y)

    def __repr__(self) -> str:
        return (
            f"Aabr(min=({self.min_x}, {self.min_y}), max=({self.max_x}, {self.max_y}))"
        )


@dataclass(frozen=True)
class Aabb:
    """Axis-aligned bounding box, inclusive on both corners."""

    min_x: int
    min_y: int
    min_z: int
    max_x: int
    max_y: int
    max_z: int

    def to_aabr(self) -> Aabr:
        return Aabr(self.min_x, self.min_y, self.max_x, self.max_y)


# =============================================================================
# CONVERSIONS
# =============================================================================


def to_tile(e: int, area_size: int) -> TileCoord:
    """Map one block coordinate to the tile coordinate containing it."""
    return e // area_size


def block_to_tile(pos: BlockPos, area_size: int) -> TilePos:
    return (pos[0] // area_size, pos[1] // area_size)


def tile_center(tile: TilePos, area_size: int) -> BlockPos:
    """Block position at the middle of a tile."""
    return (tile[0] * area_size + area_size // 2, tile[1] * area_size + area_size // 2)


def chebyshev(pos: tuple[int, int]) -> int:
    return max(abs(pos[0]), abs(pos[1]))


def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def distance_squared(a: tuple[int, int], b: tuple[int, int]) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def project_onto_segment(
    point: Vec2f, start: Vec2f, end: Vec2f
) -> Vec2f:
    """Closest point to ``point`` on the segment ``start``-``end``."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    len_sq = dx * dx + dy * dy
    if len_sq == 0.0:
        return start
    t = ((point[0] - start[0]) * dx + (point[1] - start[1]) * dy) / len_sq
    t = min(max(t, 0.0), 1.0)
    return (start[0] + dx * t, start[1] + dy * t)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
