"""Voxel buildings placed by settlements.

A building is a parametric description (footprint, storeys, roof) anchored
at an origin in settlement-relative block space. Nothing is stored per
voxel: ``sample`` answers "what block is at this position?" on demand,
returning None wherever the building leaves the terrain untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from thorpe.types import BlockPos3
from thorpe.util.coordinates import Aabb, Aabr
from thorpe.util.rng import RNG
from thorpe.world.block import Block, BlockKind

if TYPE_CHECKING:
    from thorpe.index import Index

# Blocks per storey, floor included
LEVEL_HEIGHT = 4

# Depth of the foundation below the ground floor
FOUNDATION_DEPTH = 3


@dataclass(frozen=True)
class Building:
    """Footprint shared by every building kind.

    Attributes:
        origin: Center of the ground floor, settlement-relative.
        half_x: Distance from the center to the outer wall along x.
        half_y: Distance from the center to the outer wall along y.
        levels: Number of storeys.
    """

    origin: BlockPos3
    half_x: int
    half_y: int
    levels: int

    @property
    def wall_height(self) -> int:
        return self.levels * LEVEL_HEIGHT

    @property
    def overhang(self) -> int:
        return 0

    @property
    def top_height(self) -> int:
        """Height of the highest block above the ground floor."""
        return self.wall_height

    def bounds_2d(self) -> Aabr:
        """Inclusive footprint, overhangs included."""
        x, y, _ = self.origin
        return Aabr.from_center(
            x, y, self.half_x + self.overhang, self.half_y + self.overhang
        )

    def bounds(self) -> Aabb:
        aabr = self.bounds_2d()
        z = self.origin[2]
        return Aabb(
            aabr.min_x,
            aabr.min_y,
            z - FOUNDATION_DEPTH,
            aabr.max_x,
            aabr.max_y,
            z + self.top_height,
        )

    def _local(self, rpos: BlockPos3) -> BlockPos3:
        ox, oy, oz = self.origin
        return (rpos[0] - ox, rpos[1] - oy, rpos[2] - oz)

    def _in_footprint(self, dx: int, dy: int) -> bool:
        return abs(dx) <= self.half_x and abs(dy) <= self.half_y

    def _is_edge(self, dx: int, dy: int) -> bool:
        return abs(dx) == self.half_x or abs(dy) == self.half_y

    def _is_corner(self, dx: int, dy: int) -> bool:
        return abs(dx) == self.half_x and abs(dy) == self.half_y

    def _is_door(self, dx: int, dy: int, dz: int) -> bool:
        # Doors face -y, in the middle of the front wall
        return dy == -self.half_y and abs(dx) <= 1 and 1 <= dz <= 2


@dataclass(frozen=True)
class House(Building):
    """Timber-framed house with a pitched roof.

    Attributes:
        ridge_along_x: Whether the roof ridge runs along x (slopes face
            +y and -y) or along y.
    """

    ridge_along_x: bool = True

    @classmethod
    def generate(cls, rng: RNG, origin: BlockPos3) -> House:
        return cls(
            origin=origin,
            half_x=rng.randint(3, 5),
            half_y=rng.randint(3, 5),
            levels=rng.randint(1, 2),
            ridge_along_x=rng.random() < 0.5,
        )

    @property
    def overhang(self) -> int:
        return 1

    @property
    def _roof_span(self) -> int:
        return (self.half_y if self.ridge_along_x else self.half_x) + self.overhang

    @property
    def top_height(self) -> int:
        return self.wall_height + self._roof_span

    def sample(self, index: Index, rpos: BlockPos3) -> Block | None:
        colors = index.settlement_colors.building
        dx, dy, dz = self._local(rpos)

        if dz < -FOUNDATION_DEPTH or dz > self.top_height:
            return None

        if dz < 0:
            if self._in_footprint(dx, dy):
                return Block.new(BlockKind.ROCK, colors.foundation)
            return None

        if dz < self.wall_height:
            if not self._in_footprint(dx, dy):
                return None
            if self._is_corner(dx, dy):
                return Block.new(BlockKind.WOOD, colors.support)
            level_z = dz % LEVEL_HEIGHT
            if level_z == 0:
                return Block.new(BlockKind.WOOD, colors.floor)
            if self._is_edge(dx, dy):
                if dz < LEVEL_HEIGHT and self._is_door(dx, dy, dz):
                    return Block.air()
                if level_z == 2 and (dx + dy) % 3 == 0:
                    return Block.air()  # Window
                return Block.new(BlockKind.EARTH, colors.wall)
            return Block.air()

        # Roof: one step in per block of height, from the eaves to the ridge
        across, along = (dy, dx) if self.ridge_along_x else (dx, dy)
        half_along = self.half_x if self.ridge_along_x else self.half_y
        rz = dz - self.wall_height
        if abs(along) > half_along + self.overhang:
            return None
        surface = self._roof_span - abs(across)
        if rz == surface:
            return Block.new(BlockKind.WOOD, colors.roof)
        half_across = self._roof_span - self.overhang
        if rz < surface and abs(along) <= half_along and abs(across) <= half_across:
            if abs(along) == half_along or abs(across) == half_across:
                return Block.new(BlockKind.EARTH, colors.wall)  # Gable
            return Block.air()
        return None


@dataclass(frozen=True)
class Keep(Building):
    """Stone keep with a flat, crenellated roof."""

    @classmethod
    def generate(cls, rng: RNG, origin: BlockPos3) -> Keep:
        half = rng.randint(4, 6)
        return cls(origin=origin, half_x=half, half_y=half, levels=rng.randint(3, 4))

    @property
    def top_height(self) -> int:
        return self.wall_height + 1

    def sample(self, index: Index, rpos: BlockPos3) -> Block | None:
        colors = index.settlement_colors.building
        dx, dy, dz = self._local(rpos)

        if dz < -FOUNDATION_DEPTH or dz > self.top_height:
            return None
        if not self._in_footprint(dx, dy):
            return None

        if dz < 0:
            return Block.new(BlockKind.ROCK, colors.foundation)

        if dz < self.wall_height:
            level_z = dz % LEVEL_HEIGHT
            if level_z == 0:
                return Block.new(BlockKind.WOOD, colors.floor)
            if self._is_edge(dx, dy):
                if dz < LEVEL_HEIGHT and self._is_door(dx, dy, dz):
                    return Block.air()
                if level_z == 2 and not self._is_corner(dx, dy) and (dx + dy) % 4 == 0:
                    return Block.air()  # Arrow slit
                return Block.new(BlockKind.ROCK, colors.keep_stone)
            return Block.air()

        if dz == self.wall_height:
            return Block.new(BlockKind.ROCK, colors.keep_roof)

        # Parapet
        if self._is_edge(dx, dy) and (dx + dy) % 2 == 0:
            return Block.new(BlockKind.ROCK, colors.keep_stone)
        return None
