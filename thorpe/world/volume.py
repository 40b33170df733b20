"""Dense chunk volume backed by numpy arrays.

A ``ChunkVolume`` covers ``size_x * size_y`` columns and the z range
``[min_z, max_z)``. Positions passed to ``get``/``set`` are relative to
the chunk's lower corner in x/y and absolute in z, which is how terrain
painting addresses it.
"""

from __future__ import annotations

import numpy as np

from thorpe.types import BlockPos3

from .block import Block, BlockKind, SpriteKind


class ChunkVolume:
    """Mutable block storage for one terrain chunk.

    Attributes:
        kinds: ``uint8`` array of BlockKind values. Shape: (size_x, size_y, depth).
        colors: ``uint8`` RGB array. Shape: (size_x, size_y, depth, 3).
        sprites: ``uint8`` array of SpriteKind values. Same shape as ``kinds``.
    """

    def __init__(self, size_x: int, size_y: int, min_z: int, max_z: int) -> None:
        if size_x <= 0 or size_y <= 0 or max_z <= min_z:
            raise ValueError(
                f"Empty volume: size=({size_x}, {size_y}), z=[{min_z}, {max_z})"
            )
        self.size_x = size_x
        self.size_y = size_y
        self.min_z = min_z
        self.max_z = max_z

        shape = (size_x, size_y, max_z - min_z)
        self.kinds = np.zeros(shape, dtype=np.uint8)
        self.colors = np.zeros((*shape, 3), dtype=np.uint8)
        self.sprites = np.zeros(shape, dtype=np.uint8)

    @classmethod
    def filled(
        cls,
        size_x: int,
        size_y: int,
        min_z: int,
        max_z: int,
        surface_z: int,
        block: Block,
    ) -> ChunkVolume:
        """Create a volume solid with ``block`` below ``surface_z`` and air above."""
        vol = cls(size_x, size_y, min_z, max_z)
        top = max(0, min(surface_z - min_z, max_z - min_z))
        vol.kinds[:, :, :top] = block.kind
        vol.colors[:, :, :top] = block.color
        return vol

    @property
    def size_xy(self) -> tuple[int, int]:
        return (self.size_x, self.size_y)

    def _index(self, pos: BlockPos3) -> tuple[int, int, int] | None:
        x, y, z = pos
        in_xy = 0 <= x < self.size_x and 0 <= y < self.size_y
        if in_xy and self.min_z <= z < self.max_z:
            return (x, y, z - self.min_z)
        return None

    def get(self, pos: BlockPos3) -> Block | None:
        """Return the block at ``pos``, or None if it lies outside the volume."""
        idx = self._index(pos)
        if idx is None:
            return None
        r, g, b = (int(c) for c in self.colors[idx])
        return Block(
            BlockKind(int(self.kinds[idx])),
            (r, g, b),
            SpriteKind(int(self.sprites[idx])),
        )

    def set(self, pos: BlockPos3, block: Block) -> bool:
        """Write ``block`` at ``pos``. Returns False if ``pos`` is out of range."""
        idx = self._index(pos)
        if idx is None:
            return False
        self.kinds[idx] = block.kind
        self.colors[idx] = block.color
        self.sprites[idx] = block.sprite
        return True
