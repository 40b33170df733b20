"""Sparse tile grid and plot arena of a settlement.

Land is stored per tile-space cell (one cell = ``AREA_SIZE`` x ``AREA_SIZE``
blocks). Each present ``Tile`` points at a ``Plot`` in an append-only arena
and carries up to four directional way markers plus an optional tower.
Block-level queries go through a jittered partition, so plot boundaries
come out organic even though only one record per coarse cell is stored.

Cells with no tile are "undesignated". Generation stages search for them
(``find_tile_near``) and claim them, and samplers report them as having no
plot at all, which is distinct from a ``Hazard`` plot.
"""

from __future__ import annotations

from typing import TypeAlias

import math
from collections import deque
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from thorpe import config
from thorpe.types import BlockPos, DistrictId, FarmId, PlotId, TilePos, Vec2f
from thorpe.util.arena import Store
from thorpe.util.coordinates import (
    distance,
    distance_squared,
    project_onto_segment,
)
from thorpe.util.partition import StructureGen2d
from thorpe.util.pathfinding import CARDINALS, astar, grid_neighbors
from thorpe.util.rng import RNG, next_u32
from thorpe.util.spiral import spiral_within

# =============================================================================
# Plots
# =============================================================================


class Crop(Enum):
    CORN = "corn"
    WHEAT = "wheat"
    CABBAGE = "cabbage"
    PUMPKIN = "pumpkin"
    FLAX = "flax"
    CARROT = "carrot"
    TOMATO = "tomato"
    RADISH = "radish"
    TURNIP = "turnip"
    SUNFLOWER = "sunflower"


@dataclass(frozen=True)
class Hazard:
    """Unbuildable or dangerous ground."""


@dataclass(frozen=True)
class Dirt:
    pass


@dataclass(frozen=True)
class Grass:
    pass


@dataclass(frozen=True)
class Water:
    pass


@dataclass(frozen=True)
class Town:
    """Ground claimed by the town. ``district`` indexes the town's districts."""

    district: DistrictId | None = None


@dataclass(frozen=True)
class Field:
    """A crop field belonging to a farm.

    Attributes:
        farm: Id of the owning farm in the settlement's farm arena.
        seed: Per-field 32-bit seed for furrow direction and colour.
        crop: What grows here.
    """

    farm: FarmId
    seed: int
    crop: Crop


Plot: TypeAlias = Hazard | Dirt | Grass | Water | Town | Field

# Predicate over the plot at a tile; None means no tile is present there.
PlotPredicate: TypeAlias = Callable[[Plot | None], bool]


# =============================================================================
# Tiles
# =============================================================================


class WayKind(Enum):
    PATH = "path"
    WALL = "wall"

    @property
    def width(self) -> float:
        """Half-width in blocks around the way's centerline."""
        return _WAY_WIDTHS[self]


_WAY_WIDTHS = {WayKind.PATH: 4.0, WayKind.WALL: 3.0}


class Tower(Enum):
    WALL = "wall"

    @property
    def radius(self) -> float:
        return 6.0


def cardinal_index(delta: tuple[int, int]) -> int | None:
    """Slot of the cardinal direction of an axis-aligned step.

    Slots follow ``CARDINALS``: 0 = +y, 1 = +x, 2 = -y, 3 = -x. Diagonal and
    zero deltas have no slot.
    """
    dx, dy = delta
    if dx != 0 and dy != 0:
        return None
    if dy > 0:
        return 0
    if dx > 0:
        return 1
    if dy < 0:
        return 2
    if dx < 0:
        return 3
    return None


@dataclass
class Tile:
    """Designation record for one tile-space cell.

    Attributes:
        plot: Id of the plot in the land's arena.
        ways: One optional way marker per ``CARDINALS`` slot.
        tower: Optional tower standing at the cell center.
    """

    plot: PlotId
    ways: list[WayKind | None] = field(default_factory=lambda: [None] * 4)
    tower: Tower | None = None

    def contains(self, kind: WayKind) -> bool:
        return kind in self.ways


@dataclass
class Sample:
    """What the land looks like at one block position.

    Attributes:
        plot: Plot of the closest cell, or None if that cell is undesignated.
        way: Nearest way within its width as ``(kind, dist, projected point)``.
        tower: Tower covering the position and its center, if any.
        edge_dist: Distance to the second-closest cell center minus distance
            to the closest one. Zero on a cell boundary.
        second_closest: Tile coordinate of the second-closest cell.
    """

    plot: Plot | None = None
    way: tuple[WayKind, float, Vec2f] | None = None
    tower: tuple[Tower, BlockPos] | None = None
    edge_dist: float = 0.0
    second_closest: TilePos = (0, 0)


# =============================================================================
# Land
# =============================================================================


class Land:
    """Tile map, plot arena and partition sampler of one settlement.

    Positions passed to ``get_at_block`` are blocks relative to the
    settlement origin; every other method works in tile space.
    """

    def __init__(self, rng: RNG) -> None:
        self.tiles: dict[TilePos, Tile] = {}
        self.plots: Store[Plot] = Store()
        self.sampler = StructureGen2d(
            next_u32(rng), config.AREA_SIZE, config.PARTITION_SPREAD
        )
        self.hazard: PlotId = self.plots.insert(Hazard())

    # ------------------------------------------------------------------
    # Block sampling
    # ------------------------------------------------------------------

    def get_at_block(self, pos: BlockPos) -> Sample:
        """Resolve plot, way, tower and edge distance at a block position."""
        sample = Sample()

        neighbors = self.sampler.get(pos)
        closest = min(neighbors, key=lambda c: distance_squared(c.center, pos))
        second = min(
            (c for c in neighbors if c.center != closest.center),
            key=lambda c: distance_squared(c.center, pos),
        )
        sample.second_closest = second.index
        sample.edge_dist = distance(second.center, pos) - distance(closest.center, pos)

        home = self.tiles.get(closest.index)
        if home is not None:
            if home.tower is not None and distance_squared(
                closest.center, pos
            ) < home.tower.radius**2:
                sample.tower = (home.tower, closest.center)

            point = (float(pos[0]), float(pos[1]))
            start = (float(closest.center[0]), float(closest.center[1]))
            for slot, (dx, dy) in enumerate(CARDINALS):
                way = home.ways[slot]
                if way is None:
                    continue
                other = self.sampler.cell(
                    (closest.index[0] + dx, closest.index[1] + dy)
                ).center
                proj = project_onto_segment(
                    point, start, (float(other[0]), float(other[1]))
                )
                dist = math.hypot(proj[0] - point[0], proj[1] - point[1])
                if dist < way.width and (sample.way is None or dist < sample.way[1]):
                    sample.way = (way, dist, proj)

        sample.plot = self.plot_at(closest.index)
        return sample

    # ------------------------------------------------------------------
    # Tile access
    # ------------------------------------------------------------------

    def tile_at(self, pos: TilePos) -> Tile | None:
        return self.tiles.get(pos)

    def plot(self, plot_id: PlotId) -> Plot:
        return self.plots.get(plot_id)

    def plot_at(self, pos: TilePos) -> Plot | None:
        tile = self.tiles.get(pos)
        if tile is None:
            return None
        return self.plots.get(tile.plot)

    def new_plot(self, plot: Plot) -> PlotId:
        return self.plots.insert(plot)

    def set(self, pos: TilePos, plot: PlotId) -> None:
        """Designate ``pos`` as ``plot``, dropping any ways or tower it had."""
        if not self.plots.contains(plot):
            raise KeyError(f"Unknown plot id {plot}")
        self.tiles[pos] = Tile(plot)

    def set_tower(self, pos: TilePos, tower: Tower | None) -> bool:
        """Put a tower on an existing tile. Returns False if there is no tile."""
        tile = self.tiles.get(pos)
        if tile is None:
            return False
        tile.tower = tower
        return True

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def find_tile_near(
        self,
        origin: TilePos,
        match_fn: PlotPredicate,
        max_radius: int = config.MAX_TILE_SEARCH_RADIUS,
    ) -> TilePos | None:
        """First tile in spiral order around ``origin`` whose plot matches.

        Gives up after the ring of Chebyshev radius ``max_radius - 1``.
        """
        for dx, dy in spiral_within(max_radius):
            pos = (origin[0] + dx, origin[1] + dy)
            if match_fn(self.plot_at(pos)):
                return pos
        return None

    def find_tile_dir(
        self,
        origin: TilePos,
        direction: tuple[int, int],
        match_fn: PlotPredicate,
        max_steps: int = config.MAX_TILE_SEARCH_RADIUS,
    ) -> TilePos | None:
        """First tile along ``direction`` from ``origin`` whose plot matches."""
        for i in range(max_steps):
            pos = (origin[0] + direction[0] * i, origin[1] + direction[1] * i)
            if match_fn(self.plot_at(pos)):
                return pos
        return None

    def find_path(
        self,
        origin: TilePos,
        dest: TilePos,
        path_cost_fn: Callable[[Tile | None, Tile | None], float],
        max_iters: int = config.PATHFINDER_BUDGET,
    ) -> list[TilePos] | None:
        """Cheapest 4-connected tile path from ``origin`` to ``dest``.

        Returns:
            Tile positions from origin to dest inclusive, or None if the
            search budget runs out first.
        """

        def heuristic(pos: TilePos) -> float:
            return math.hypot(pos[0] - dest[0], pos[1] - dest[1])

        def transition(a: TilePos, b: TilePos) -> float:
            return path_cost_fn(self.tiles.get(a), self.tiles.get(b))

        return astar(
            origin,
            heuristic,
            grid_neighbors,
            transition,
            lambda pos: pos == dest,
            max_iters,
        )

    def grow_region(
        self, start: TilePos, max_size: int, match_fn: PlotPredicate
    ) -> set[TilePos]:
        """Breadth-first region growth from ``start``.

        Neighbors are queued once, and only if their plot matches. Growth
        stops when visited plus queued tiles reach ``max_size`` or nothing
        is left to visit. Queued-but-unvisited tiles are part of the result,
        so the returned region holds ``min(max_size, reachable)`` tiles and
        is 4-connected through ``start``.
        """
        open_set: deque[TilePos] = deque([start])
        seen: set[TilePos] = {start}

        while open_set and len(seen) < max_size:
            pos = open_set.popleft()
            for neighbor in grid_neighbors(pos):
                if len(seen) >= max_size:
                    break
                if neighbor not in seen and match_fn(self.plot_at(neighbor)):
                    seen.add(neighbor)
                    open_set.append(neighbor)

        return seen

    # ------------------------------------------------------------------
    # Ways
    # ------------------------------------------------------------------

    def write_path(
        self,
        tiles: Sequence[TilePos],
        kind: WayKind,
        permit_fn: Callable[[Plot], bool],
        overwrite: bool,
    ) -> None:
        """Mark way ``kind`` along consecutive tile pairs.

        For each pair the first tile gets a hazard placeholder if it has no
        tile yet. Each end of the pair is then marked on the side facing the
        other, provided its own plot passes ``permit_fn``; existing markers
        are only replaced when ``overwrite`` is set. Both sides are checked
        independently, so a way may end up marked on one side only.
        """
        for a, b in _windows(tiles):
            slot = cardinal_index((b[0] - a[0], b[1] - a[1]))
            if slot is None:
                continue
            if a not in self.tiles:
                self.set(a, self.hazard)

            for pos, side in ((b, (slot + 2) % 4), (a, slot)):
                tile = self.tiles.get(pos)
                if tile is None or not permit_fn(self.plots.get(tile.plot)):
                    continue
                if overwrite or tile.ways[side] is None:
                    tile.ways[side] = kind


def _windows(seq: Sequence[TilePos]) -> Iterable[tuple[TilePos, TilePos]]:
    return zip(seq, seq[1:], strict=False)
