"""Voxel block values."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum, auto

from thorpe.types import Rgb


class BlockKind(IntEnum):
    """Material of a block. AIR is zero so zeroed arrays read as air."""

    AIR = 0
    WATER = auto()
    EARTH = auto()
    ROCK = auto()
    WOOD = auto()
    LEAVES = auto()

    @property
    def is_fluid(self) -> bool:
        return self in (BlockKind.AIR, BlockKind.WATER)


class SpriteKind(IntEnum):
    """Decoration rendered inside a (fluid) block."""

    EMPTY = 0
    CORN = auto()
    WHEAT_YELLOW = auto()
    WHEAT_GREEN = auto()
    CABBAGE = auto()
    PUMPKIN = auto()
    FLAX = auto()
    CARROT = auto()
    TOMATO = auto()
    RADISH = auto()
    TURNIP = auto()
    SUNFLOWER = auto()
    SCARECROW = auto()
    SHORT_GRASS = auto()
    MEDIUM_GRASS = auto()
    STREET_LAMP = auto()


@dataclass(frozen=True)
class Block:
    """A single voxel. Fluid blocks carry a sprite instead of a colour."""

    kind: BlockKind
    color: Rgb = (0, 0, 0)
    sprite: SpriteKind = SpriteKind.EMPTY

    @classmethod
    def air(cls, sprite: SpriteKind = SpriteKind.EMPTY) -> Block:
        return cls(BlockKind.AIR, (0, 0, 0), sprite)

    @classmethod
    def new(cls, kind: BlockKind, color: Rgb) -> Block:
        return cls(kind, color)

    @property
    def is_fluid(self) -> bool:
        return self.kind.is_fluid

    @property
    def is_solid(self) -> bool:
        return not self.kind.is_fluid

    def with_sprite(self, sprite: SpriteKind) -> Block:
        return replace(self, sprite=sprite)
