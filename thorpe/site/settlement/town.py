"""Town layout: a square of tiles around a base tile, split into districts."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from thorpe import config
from thorpe.types import BlockPos, TilePos
from thorpe.util.arena import Store
from thorpe.util.coordinates import Aabr
from thorpe.util.rng import RNG

from .context import GenCtx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class District:
    """A rectangular lot of town tiles sharing one ground altitude.

    Attributes:
        aabr: Tile-space footprint, half-open (``cells()`` covers it exactly).
        alt: Ground altitude in blocks, the ceiled world altitude at the
            district's center (0 when generated without a world).
    """

    aabr: Aabr
    alt: int


class Town:
    def __init__(
        self, base_tile: TilePos, radius: int, districts: Store[District]
    ) -> None:
        self.base_tile = base_tile
        self.radius = radius
        self.districts = districts

    @property
    def bounds(self) -> Aabr:
        """Tile-space area covered by the town, half-open."""
        x, y = self.base_tile
        r = self.radius
        return Aabr(x - r, y - r, x + r + 1, y + r + 1)

    @classmethod
    def generate(cls, origin: BlockPos, base_tile: TilePos, ctx: GenCtx) -> Town:
        """Lay out a town centered on ``base_tile``.

        Args:
            origin: World position of the settlement origin, used to sample
                district altitudes.
            base_tile: Tile the town grows around.
            ctx: Generation context; consumes ``ctx.rng``.
        """
        radius = ctx.rng.randint(config.TOWN_MIN_RADIUS, config.TOWN_MAX_RADIUS)
        town = cls(base_tile, radius, Store())

        lots: list[Aabr] = []
        _bsp_subdivide(town.bounds, lots, ctx.rng, depth=0, max_depth=8)
        for lot in lots:
            town.districts.insert(District(lot, _district_alt(origin, lot, ctx)))

        logger.debug(
            "Town at %s: radius %d, %d districts",
            base_tile,
            radius,
            len(town.districts),
        )
        return town


def _district_alt(origin: BlockPos, lot: Aabr, ctx: GenCtx) -> int:
    if ctx.sim is None:
        return 0
    wpos = (
        origin[0] + (lot.min_x + lot.max_x) * config.AREA_SIZE // 2,
        origin[1] + (lot.min_y + lot.max_y) * config.AREA_SIZE // 2,
    )
    alt = ctx.sim.get_alt_approx(wpos)
    return math.ceil(alt) if alt is not None else 0


def _bsp_subdivide(
    rect: Aabr,
    lots: list[Aabr],
    rng: RNG,
    depth: int,
    max_depth: int,
) -> None:
    """Binary space partition subdivision of a tile rectangle into lots."""
    min_dim = config.DISTRICT_MIN_SIZE
    max_dim = config.DISTRICT_MAX_SIZE

    # Stop if small enough or max depth reached
    if (rect.width <= max_dim and rect.height <= max_dim) or depth >= max_depth:
        if rect.width >= min_dim and rect.height >= min_dim:
            lots.append(rect)
        return

    can_split_h = rect.height >= 2 * min_dim
    can_split_v = rect.width >= 2 * min_dim

    if not can_split_h and not can_split_v:
        if rect.width >= min_dim and rect.height >= min_dim:
            lots.append(rect)
        return

    if can_split_h and can_split_v:
        split_h = rect.height > rect.width or (
            rect.height == rect.width and rng.random() < 0.5
        )
    else:
        split_h = can_split_h

    if split_h:
        split = min_dim + rng.randint(0, rect.height - 2 * min_dim)
        top = Aabr(rect.min_x, rect.min_y, rect.max_x, rect.min_y + split)
        bottom = Aabr(rect.min_x, rect.min_y + split, rect.max_x, rect.max_y)
        _bsp_subdivide(top, lots, rng, depth + 1, max_depth)
        _bsp_subdivide(bottom, lots, rng, depth + 1, max_depth)
    else:
        split = min_dim + rng.randint(0, rect.width - 2 * min_dim)
        left = Aabr(rect.min_x, rect.min_y, rect.min_x + split, rect.max_y)
        right = Aabr(rect.min_x + split, rect.min_y, rect.max_x, rect.max_y)
        _bsp_subdivide(left, lots, rng, depth + 1, max_depth)
        _bsp_subdivide(right, lots, rng, depth + 1, max_depth)
