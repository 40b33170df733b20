"""Jittered-grid spatial partition.

The plane is divided into square cells of side ``freq``. Every cell owns
one center point, displaced from the middle of the cell by a hashed jitter
of at most ``spread`` blocks per axis. Assigning each point to its nearest
center yields organic, Voronoi-like cells while only ever needing to look
at the 3x3 block of cells around the query point.
"""

from __future__ import annotations

from typing import NamedTuple

from thorpe.types import BlockPos, TilePos

from .random_field import RandomField


class Cell(NamedTuple):
    """One partition cell: its grid index, jittered center, and a hashed seed."""

    index: TilePos
    center: BlockPos
    seed: int


class StructureGen2d:
    """Maps points to nearby jittered cell centers.

    Attributes:
        freq: Cell side length in blocks.
        spread: Maximum jitter of a center along each axis. Must stay below
            ``freq / 2`` for a center to remain inside its own cell.
    """

    def __init__(self, seed: int, freq: int, spread: int) -> None:
        if freq <= 0:
            raise ValueError("Partition frequency must be a positive integer.")
        if spread < 0 or spread * 2 >= freq:
            raise ValueError(
                f"Spread {spread} must be non-negative and below half of {freq}."
            )
        self.freq = freq
        self.spread = spread
        self._x_field = RandomField(seed)
        self._y_field = RandomField(seed + 1)
        self._seed_field = RandomField(seed + 2)

    def index_of(self, pos: BlockPos) -> TilePos:
        """Grid index of the cell containing ``pos``."""
        return (pos[0] // self.freq, pos[1] // self.freq)

    def cell(self, index: TilePos) -> Cell:
        """Resolve the jittered center of the cell at ``index``."""
        cx = index[0] * self.freq + self.freq // 2
        cy = index[1] * self.freq + self.freq // 2
        key = (cx, cy, 0)

        if self.spread == 0:
            center = (cx, cy)
        else:
            spread_mul = self.spread * 2
            center = (
                cx + self._x_field.get(key) % spread_mul - self.spread,
                cy + self._y_field.get(key) % spread_mul - self.spread,
            )
        return Cell(index, center, self._seed_field.get(key))

    def get(self, pos: BlockPos) -> list[Cell]:
        """Return the 3x3 block of cells around ``pos``.

        Cells are ordered x-major: entry ``i * 3 + j`` is the cell at offset
        ``(i - 1, j - 1)`` from ``pos``'s own cell, so entry 4 is always the
        cell containing ``pos``.
        """
        ix, iy = self.index_of(pos)
        return [
            self.cell((ix + i - 1, iy + j - 1)) for i in range(3) for j in range(3)
        ]
