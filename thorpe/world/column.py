"""Per-column terrain samples handed to site painting."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable
from dataclasses import dataclass

from thorpe.types import BlockPos, Vec2f


@dataclass(frozen=True)
class NearestPath:
    """Closest point of a world (inter-site) path to a query position.

    Attributes:
        dist: Distance in blocks from the query position to ``nearest``.
        nearest: Closest point on the path's centerline.
        width: Half-width of the path; positions with ``dist < width`` are on it.
    """

    dist: float
    nearest: Vec2f
    width: float


@dataclass(frozen=True)
class ColumnSample:
    """Terrain data for one world column.

    Attributes:
        alt: Surface altitude including rivers carved into it.
        riverless_alt: Surface altitude before rivers are carved.
        water_dist: Distance in blocks to the nearest river or lake, if any
            is close enough to matter.
        path: Nearest world path, if any.
    """

    alt: float
    riverless_alt: float
    water_dist: float | None = None
    path: NearestPath | None = None

    @property
    def is_on_path(self) -> bool:
        return self.path is not None and self.path.dist < self.path.width


# Column lookup relative to a chunk's lower corner. Returns None for
# columns that are not loaded (outside the world, or outside the sampler's
# window).
ColumnSampler: TypeAlias = Callable[[BlockPos], ColumnSample | None]
