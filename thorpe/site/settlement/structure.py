"""Placement records for buildings inside a settlement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from thorpe.types import BlockPos3
from thorpe.util.coordinates import Aabb, Aabr
from thorpe.world.block import Block

from .building import House, Keep

if TYPE_CHECKING:
    from thorpe.index import Index


@dataclass(frozen=True)
class Structure:
    """A placed building. Structures are painted in placement order."""

    building: House | Keep

    @property
    def is_keep(self) -> bool:
        return isinstance(self.building, Keep)

    def bounds_2d(self) -> Aabr:
        return self.building.bounds_2d()

    def bounds(self) -> Aabb:
        return self.building.bounds()

    def sample(self, index: Index, rpos: BlockPos3) -> Block | None:
        return self.building.sample(index, rpos)
