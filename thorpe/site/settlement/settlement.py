"""Settlement generation and painting.

Generation runs once, as a fixed sequence of stages that share a single
random source:

1. designate_from_world - mark tiles the world cannot host as hazards
2. place_farms          - claim farms near the origin and grow their fields
3. place_town           - lay out the town over fields or dirt
4. place_walls          - ring the town with a wall and towers
5. place_paths          - dig paths from fields to the town
6. place_buildings      - scatter houses (and one keep) over the town

Every stage is greedy and bounded: searches have a fixed radius, the
pathfinder a fixed node budget, and placement a fixed number of retries.
A stage that cannot find room simply does less.

After generation the settlement is read-only. ``apply_to`` paints terrain
columns into a chunk volume, ``apply_supplement`` adds entities to a chunk,
and ``get_color`` gives a top-down map colour.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from thorpe import config
from thorpe.types import BlockPos, FarmId, PlotId, Rgb, TilePos
from thorpe.util.arena import Store
from thorpe.util.coordinates import Aabr, block_to_tile, lerp, tile_center, to_tile
from thorpe.util.live_vars import (
    MetricSpec,
    live_variable_registry,
    record_time_live_variable,
)
from thorpe.util.pathfinding import CARDINALS
from thorpe.util.random_field import RandomField
from thorpe.util.rng import RNG, next_u32
from thorpe.util.spiral import spiral_2d, spiral_within
from thorpe.world.block import Block, BlockKind, SpriteKind
from thorpe.world.column import ColumnSample, ColumnSampler, NearestPath
from thorpe.world.entity import (
    TRAINING_DUMMY,
    Alignment,
    BirdMediumBody,
    BirdMediumSpecies,
    Body,
    ChunkSupplement,
    EntityInfo,
    HumanoidBody,
    QuadrupedSmallBody,
    QuadrupedSmallSpecies,
)
from thorpe.world.sim import WorldOracle
from thorpe.world.volume import ChunkVolume

from ..namegen import NameGen
from ..spawn_rules import SpawnRules
from .building import House, Keep
from .context import GenCtx
from .land import (
    Crop,
    Dirt,
    Field,
    Grass,
    Hazard,
    Land,
    Plot,
    Sample,
    Tile,
    Tower,
    Water,
    WayKind,
)
from .land import Town as TownPlot
from .structure import Structure
from .town import District, Town

if TYPE_CHECKING:
    from thorpe.index import Index

logger = logging.getLogger(__name__)

# Sub-points sampled per tile when checking whether the world can host it,
# in units of half a tile.
_HAZARD_PROBES = ((0, 0), (1, 0), (0, 1), (1, 1))

_FURROW_DIRS = ((1, 0), (0, 1), (1, 1), (-1, 1))

_NPC_TOOLS = (
    "common.items.npc_weapons.tool.broom",
    "common.items.npc_weapons.tool.hoe",
    "common.items.npc_weapons.tool.pickaxe",
    "common.items.npc_weapons.tool.pitchfork",
    "common.items.npc_weapons.tool.rake",
    "common.items.npc_weapons.tool.shovel-0",
    "common.items.npc_weapons.tool.shovel-1",
)

SETTLEMENT_METRICS = [
    MetricSpec("time.settlement.designate_ms", "Hazard designation time"),
    MetricSpec("time.settlement.farms_ms", "Farm and field placement time"),
    MetricSpec("time.settlement.town_ms", "Town layout time"),
    MetricSpec("time.settlement.walls_ms", "Town wall placement time"),
    MetricSpec("time.settlement.paths_ms", "Path placement time"),
    MetricSpec("time.settlement.buildings_ms", "Building placement time"),
]


def register_settlement_metrics() -> None:
    """Register generation timing metrics. Safe to call repeatedly."""
    live_variable_registry.register_metrics(SETTLEMENT_METRICS)


@dataclass(frozen=True)
class Farm:
    base_tile: TilePos


class Settlement:
    """A generated settlement.

    Attributes:
        name: Generated place name.
        seed: Seed of the per-position chance fields used for NPC spawning.
        origin: World block position that tile (0, 0) is anchored at.
        land: Tile map, plot arena and partition sampler.
        farms: Farm arena; fields refer to their farm by id.
        structures: Placed buildings, in placement order.
        town: The town, once town placement succeeded.
        noise: Dithering field for painting.
    """

    def __init__(
        self, name: str, seed: int, origin: BlockPos, land: Land, noise: RandomField
    ) -> None:
        self.name = name
        self.seed = seed
        self.origin = origin
        self.land = land
        self.farms: Store[Farm] = Store()
        self.structures: list[Structure] = []
        self.town: Town | None = None
        self.noise = noise

    @classmethod
    def generate(
        cls, wpos: BlockPos, sim: WorldOracle | None, rng: RNG
    ) -> Settlement:
        """Generate a settlement anchored at world position ``wpos``.

        The result depends only on ``wpos``, the world, and the state of
        ``rng``. Without a world no hazards are designated and every
        altitude falls back to zero.
        """
        register_settlement_metrics()
        ctx = GenCtx(sim, rng)

        this = cls(
            name=NameGen.location(rng).generate(),
            seed=next_u32(rng),
            origin=wpos,
            land=Land(rng),
            noise=RandomField(next_u32(rng)),
        )

        with record_time_live_variable("time.settlement.designate_ms"):
            if sim is not None:
                this.designate_from_world(sim, rng)
        with record_time_live_variable("time.settlement.farms_ms"):
            this.place_farms(ctx)
        with record_time_live_variable("time.settlement.town_ms"):
            this.place_town(ctx)
        with record_time_live_variable("time.settlement.walls_ms"):
            this.place_walls()
        with record_time_live_variable("time.settlement.paths_ms"):
            this.place_paths(ctx.rng)
        with record_time_live_variable("time.settlement.buildings_ms"):
            this.place_buildings(ctx)

        logger.debug(
            "Generated settlement %r at %s: %d tiles, %d plots, %d farms, "
            "%d structures, town=%s",
            this.name,
            wpos,
            len(this.land.tiles),
            len(this.land.plots),
            len(this.farms),
            len(this.structures),
            this.town.base_tile if this.town is not None else None,
        )
        return this

    # ------------------------------------------------------------------
    # Generation stages
    # ------------------------------------------------------------------

    def designate_from_world(self, sim: WorldOracle, rng: RNG) -> None:
        """Mark tiles the world cannot host, plus a random few, as hazards.

        The random roll is only made for tiles the world can host.
        """
        tile_radius = int(self.radius()) // config.AREA_SIZE
        hazard = self.land.hazard
        half = config.AREA_SIZE // 2
        count = 0

        for tile in spiral_within(tile_radius):
            wx = self.origin[0] + tile[0] * config.AREA_SIZE
            wy = self.origin[1] + tile[1] * config.AREA_SIZE

            if (
                any(
                    not sim.can_host_settlement(
                        (
                            (wx + ox * half) // config.CHUNK_SIZE,
                            (wy + oy * half) // config.CHUNK_SIZE,
                        )
                    )
                    for ox, oy in _HAZARD_PROBES
                )
                or rng.randrange(config.HAZARD_CHANCE) == 0
            ):
                self.land.set(tile, hazard)
                count += 1

        logger.debug("Designated %d hazard tiles", count)

    def place_river(self, rng: RNG) -> None:
        """Carve a ring-shaped river through the land.

        Not part of normal generation. Useful for exercising path costs and
        painting against water plots.
        """
        dir_x, dir_y = rng.random() - 0.5, rng.random() - 0.5
        length = math.hypot(dir_x, dir_y) or 1.0
        dir_x, dir_y = dir_x / length, dir_y / length
        radius = 500.0 + rng.random() ** 2 * 1000.0
        river = self.land.new_plot(Water())
        offs = (rng.randint(-3, 3), rng.randint(-3, 3))

        def ring_tile(theta: float) -> TilePos:
            x = math.floor(dir_x * radius + math.sin(theta) * radius)
            y = math.floor(dir_y * radius + math.cos(theta) * radius)
            return (
                to_tile(x, config.AREA_SIZE) + offs[0],
                to_tile(y, config.AREA_SIZE) + offs[1],
            )

        for step in range(100):
            x = step / 100.0
            pos0 = ring_tile(x * math.pi * 2.0)
            pos1 = ring_tile((x + 0.01) * math.pi * 2.0)

            if pos0[0] ** 2 + pos0[1] ** 2 > 15**2:
                continue

            path = self.land.find_path(pos0, pos1, lambda _a, _b: 1.0)
            if path is not None:
                for pos in path:
                    self.land.set(pos, river)

    def place_farms(self, ctx: GenCtx) -> None:
        fields = 0
        for _ in range(config.FARM_COUNT):
            base_tile = self.land.find_tile_near((0, 0), lambda plot: plot is None)
            if base_tile is None:
                continue

            farm = self.farms.insert(Farm(base_tile))
            for _ in range(config.FIELDS_PER_FARM):
                if self.place_field(farm, base_tile, ctx.rng) is not None:
                    fields += 1

        logger.debug("Placed %d farms with %d fields", len(self.farms), fields)

    def place_field(self, farm: FarmId, origin: TilePos, rng: RNG) -> PlotId | None:
        """Grow one field for ``farm`` on free land near ``origin``.

        Returns:
            The new field's plot id, or None if no free tile was found.
        """
        center = self.land.find_tile_near(origin, lambda plot: plot is None)
        if center is None:
            return None

        field = self.land.new_plot(
            Field(farm=farm, seed=next_u32(rng), crop=rng.choice(list(Crop)))
        )
        size = rng.randrange(config.MIN_FIELD_SIZE, config.MAX_FIELD_SIZE)
        for pos in self.land.grow_region(center, size, lambda plot: plot is None):
            self.land.set(pos, field)
        return field

    def place_town(self, ctx: GenCtx) -> None:
        """Lay out the town on the first field or dirt tile found near the origin.

        District footprints are copied into the land as town plots, leaving
        hazard tiles untouched.
        """
        origin = (ctx.rng.randint(-2, 2), ctx.rng.randint(-2, 2))
        base_tile = self.land.find_tile_near(
            origin, lambda plot: isinstance(plot, (Field, Dirt))
        )
        if base_tile is None:
            logger.debug("No room for a town near %s", origin)
            return

        town = Town.generate(self.origin, base_tile, ctx)
        for district_id, district in town.districts.items():
            district_plot = self.land.new_plot(TownPlot(district=district_id))
            for pos in district.aabr.cells():
                if not isinstance(self.land.plot_at(pos), Hazard):
                    self.land.set(pos, district_plot)
        self.town = town

    def place_walls(self) -> None:
        """Surround the town with a wall.

        One spoke is found in each cardinal direction from the town's base
        tile; consecutive spokes are joined with cheapest paths that avoid
        the town. Every buildable tile on the ring gets a tower.
        """
        if self.town is None:
            return

        origin = self.town.base_tile
        spokes = [
            spoke
            for direction in CARDINALS
            if (
                spoke := self.land.find_tile_dir(
                    origin,
                    direction,
                    lambda plot: not isinstance(plot, (Water, TownPlot)),
                )
            )
            is not None
        ]

        def wall_cost(_from: Tile | None, to: Tile | None) -> float:
            plot = self.land.plot(to.plot) if to is not None else None
            match plot:
                case Hazard():
                    return 200.0
                case Water():
                    return 40.0
                case TownPlot():
                    return 10000.0
                case _:
                    return 10.0

        wall_path: list[TilePos] = []
        for i, spoke in enumerate(spokes):
            path = self.land.find_path(spoke, spokes[(i + 1) % len(spokes)], wall_cost)
            if path is not None:
                wall_path.extend(path)

        def buildable(plot: Plot) -> bool:
            return not isinstance(plot, Water)

        grass = self.land.new_plot(Grass())
        for pos in wall_path:
            if self.land.tile_at(pos) is None:
                self.land.set(pos, grass)
            plot = self.land.plot_at(pos)
            if plot is not None and buildable(plot):
                self.land.set_tower(pos, Tower.WALL)

        if wall_path:
            wall_path.append(wall_path[0])
        self.land.write_path(wall_path, WayKind.WALL, buildable, True)
        logger.debug("Town wall: %d spokes, %d tiles", len(spokes), len(wall_path))

    def place_paths(self, rng: RNG) -> None:
        """Dig paths from fields in random directions towards the town."""
        if self.town is None:
            return
        town_tile = self.town.base_tile
        reach = config.SETTLEMENT_TILE_RADIUS // 2

        def path_cost(a: Tile | None, b: Tile | None) -> float:
            if b is not None:
                match self.land.plot(b.plot):
                    case Dirt():
                        return 0.0
                    case Water():
                        return 20.0
                    case Hazard():
                        return 50.0
                if a is not None:
                    if a.contains(WayKind.WALL):
                        return 1000.0 if b.contains(WayKind.WALL) else 10.0
                    return 1.0
            return 1000.0

        written = 0
        dir_x, dir_y = 0.0, 0.0
        for _ in range(config.PATH_COUNT):
            dir_x = (rng.random() - 0.5) * 2.0 - dir_x
            dir_y = (rng.random() - 0.5) * 2.0 - dir_y
            length = math.hypot(dir_x, dir_y)
            if length > 0.0:
                dir_x, dir_y = dir_x / length, dir_y / length
            else:
                dir_x, dir_y = 0.0, 0.0

            start = self.land.find_tile_near(
                (int(dir_x * reach), int(dir_y * reach)),
                lambda plot: isinstance(plot, Field),
            )
            if start is None:
                continue

            path = self.land.find_path(start, town_tile, path_cost)
            if path is not None:
                self.land.write_path(path, WayKind.PATH, lambda _plot: True, False)
                written += 1

        logger.debug("Placed %d paths", written)

    def place_buildings(self, ctx: GenCtx) -> None:
        """Scatter buildings over the town, first-fit with bounded retries.

        The first building attempted on the town's base tile is a keep.
        Candidates off town land, on path tiles, too close to a world path,
        or overlapping an earlier structure are rejected.
        """
        if self.town is None:
            return

        town_center = self.town.base_tile
        jitter = config.AREA_SIZE // 4
        tiles = itertools.islice(spiral_2d(), config.BUILDING_SPIRAL_SIDE**2)

        for offs in tiles:
            tile = (town_center[0] + offs[0], town_center[1] + offs[1])
            center_x, center_y = tile_center(tile, config.AREA_SIZE)
            count = ctx.rng.randint(
                config.MIN_BUILDINGS_PER_TILE, config.MAX_BUILDINGS_PER_TILE
            )
            for i in range(count):
                for _ in range(config.BUILDING_ATTEMPTS):
                    house_x = center_x + ctx.rng.randrange(-jitter, jitter)
                    house_y = center_y + ctx.rng.randrange(-jitter, jitter)
                    tile_pos = block_to_tile((house_x, house_y), config.AREA_SIZE)

                    land_tile = self.land.tile_at(tile_pos)
                    if land_tile is None or land_tile.contains(WayKind.PATH):
                        continue
                    if ctx.sim is not None:
                        world_path = ctx.sim.get_nearest_path(
                            (self.origin[0] + house_x, self.origin[1] + house_y)
                        )
                        if (
                            world_path is not None
                            and world_path.dist < config.PATH_CLEARANCE
                        ):
                            continue

                    plot = self.land.plot(land_tile.plot)
                    if not isinstance(plot, TownPlot):
                        continue
                    alt = self._building_alt(plot, (house_x, house_y), ctx)

                    origin3 = (house_x, house_y, alt)
                    if tile == town_center and i == 0:
                        building: House | Keep = Keep.generate(ctx.rng, origin3)
                    else:
                        building = House.generate(ctx.rng, origin3)
                    structure = Structure(building)

                    bounds = structure.bounds_2d()
                    if any(
                        s.bounds_2d().collides_with(bounds) for s in self.structures
                    ):
                        continue

                    self.structures.append(structure)
                    break

        logger.debug("Placed %d structures", len(self.structures))

    def _building_alt(self, plot: TownPlot, rpos: BlockPos, ctx: GenCtx) -> int:
        district = self._district(plot)
        if district is not None:
            return district.alt
        if ctx.sim is None:
            return 0
        wpos = (self.origin[0] + rpos[0], self.origin[1] + rpos[1])
        alt = ctx.sim.get_alt_approx(wpos)
        return math.ceil(alt) if alt is not None else 0

    def _district(self, plot: Plot | None) -> District | None:
        if not isinstance(plot, TownPlot) or plot.district is None or self.town is None:
            return None
        return self.town.districts.get(plot.district)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def radius(self) -> float:
        return config.SETTLEMENT_RADIUS

    def spawn_rules(self, wpos: BlockPos) -> SpawnRules:
        """Trees may only grow on hazards and undesignated land."""
        plot = self.land.get_at_block(
            (wpos[0] - self.origin[0], wpos[1] - self.origin[1])
        ).plot
        return SpawnRules(trees=plot is None or isinstance(plot, Hazard))

    def get_color(self, index: Index, pos: BlockPos) -> Rgb | None:
        """Top-down map colour at settlement-relative ``pos``, if any."""
        colors = index.settlement_colors
        plot = self.land.get_at_block(pos).plot

        match plot:
            case Dirt():
                return colors.plot_dirt
            case Grass():
                return colors.plot_grass
            case Water():
                return colors.plot_water
            case TownPlot():
                return self._dither(colors.plot_town, pos, 16)
            case Field(seed=seed):
                fx, fy = _FURROW_DIRS[seed % len(_FURROW_DIRS)]
                furrow = (pos[0] * fx + pos[1] * fy) % 6 < 3
                b0, b1, b2 = seed & 0xFF, (seed >> 8) & 0xFF, (seed >> 16) & 0xFF
                return (
                    100 if furrow else 32 + b0 % 64,
                    64 + b1 % 128,
                    16 + b2 % 32,
                )
        return None

    def _dither(self, color: Rgb, pos: BlockPos, spread: int) -> Rgb:
        r, g, b = (
            max(min(e + self.noise.get((pos[0], pos[1], i * 5)) % spread, 255) - 8, 0)
            for i, e in enumerate(color)
        )
        return (r, g, b)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def apply_to(
        self,
        index: Index,
        wpos2d: BlockPos,
        get_column: ColumnSampler,
        vol: ChunkVolume,
    ) -> None:
        """Paint the settlement into the chunk whose lower corner is ``wpos2d``.

        Columns are painted first (ground, crops, lamps, walls, towers),
        then every structure overlapping the chunk is written on top.
        """
        size_x, size_y = vol.size_xy

        for y in range(size_y):
            for x in range(size_x):
                col_sample = get_column((x, y))
                if col_sample is None:
                    continue
                self._paint_column(index, (x, y), wpos2d, col_sample, vol)

        # Structures paint last and overwrite terrain
        chunk = Aabr(
            wpos2d[0] - self.origin[0],
            wpos2d[1] - self.origin[1],
            wpos2d[0] - self.origin[0] + size_x + 1,
            wpos2d[1] - self.origin[1] + size_y + 1,
        )
        for structure in self.structures:
            if not structure.bounds_2d().collides_with(chunk):
                continue

            bounds = structure.bounds()
            x_lo, x_hi = max(bounds.min_x, chunk.min_x), min(bounds.max_x, chunk.max_x)
            y_lo, y_hi = max(bounds.min_y, chunk.min_y), min(bounds.max_y, chunk.max_y)
            for x in range(x_lo, x_hi + 1):
                for y in range(y_lo, y_hi + 1):
                    coffs = (
                        self.origin[0] + x - wpos2d[0],
                        self.origin[1] + y - wpos2d[1],
                    )
                    col = get_column(coffs)
                    if col is None:
                        continue

                    min_z = min(bounds.min_z, math.floor(col.alt) - 1)
                    for z in range(min_z, bounds.max_z + 1):
                        block = structure.sample(index, (x, y, z))
                        if block is not None:
                            vol.set((coffs[0], coffs[1], z), block)

    def _paint_column(
        self,
        index: Index,
        offs: BlockPos,
        chunk_wpos: BlockPos,
        col_sample: ColumnSample,
        vol: ChunkVolume,
    ) -> None:
        colors = index.settlement_colors
        wx, wy = chunk_wpos[0] + offs[0], chunk_wpos[1] + offs[1]
        rpos = (wx - self.origin[0], wy - self.origin[1])

        land_surface_z = math.floor(col_sample.riverless_alt)
        sample = self.land.get_at_block(rpos)
        surface_z = self._surface_z(sample, land_surface_z)

        def roll(seed: int, n: int) -> int:
            return self.noise.get((wx, wy, seed * 5)) % n

        def noisy_color(color: Rgb, factor: int) -> Rgb:
            nz = self.noise.get((wx, wy, surface_z))
            r, g, b = (min(max(e + nz % (factor * 2) - factor, 0), 255) for e in color)
            return (r, g, b)

        surface_sprite: SpriteKind | None = None
        color: Rgb | None = None

        match sample.plot:
            case Dirt():
                color = colors.plot_dirt
            case Grass():
                color = colors.plot_grass
            case Water():
                color = colors.plot_water
            case TownPlot():
                if col_sample.path is not None and self._is_street_lamp(
                    (wx, wy), col_sample.path, roll
                ):
                    surface_sprite = SpriteKind.STREET_LAMP
                color = self._dither(colors.plot_town_path, (wx, wy), 16)
            case Field(seed=seed, crop=crop):
                fx, fy = _FURROW_DIRS[seed % len(_FURROW_DIRS)]
                in_furrow = (wx * fx + wy * fy) % 5 < 2

                base = seed % 4096
                dirt_shift = self.noise.get((base, base, base)) % 32
                mound_shift = self.noise.get((base + 1, base + 1, base + 1)) % 32
                if in_furrow:
                    r, g, b = (min(e + dirt_shift, 255) for e in colors.plot_field_dirt)
                    if roll(0, 5) == 0:
                        surface_sprite = _crop_sprite(crop, roll)
                        if surface_sprite is None and roll(9, 400) == 0:
                            surface_sprite = SpriteKind.SCARECROW
                else:
                    r, g, b = (
                        min(e + roll(0, 8) + mound_shift, 255)
                        for e in colors.plot_field_mound
                    )
                    if roll(0, 20) == 0:
                        surface_sprite = SpriteKind.SHORT_GRASS
                    elif roll(1, 30) == 0:
                        surface_sprite = SpriteKind.MEDIUM_GRASS
                color = (r, g, b)

        near_water = col_sample.water_dist is not None and col_sample.water_dist <= 2.0
        if color is not None and not near_water and not col_sample.is_on_path:
            diff = abs(surface_z - land_surface_z)
            ground = noisy_color(color, 4)
            for z in range(-8 - diff, 4 + diff):
                pos = (offs[0], offs[1], surface_z + z)
                block = vol.get(pos)
                if block is None:
                    continue

                if z == 0 and surface_sprite is not None:
                    vol.set(
                        pos,
                        block.with_sprite(surface_sprite)
                        if block.is_fluid
                        else Block.air(surface_sprite),
                    )
                elif z >= 0:
                    if block.kind != BlockKind.WATER:
                        vol.set(pos, Block.air())
                else:
                    vol.set(pos, Block.new(BlockKind.EARTH, ground))

        # Walls
        if sample.way is not None and sample.way[0] is WayKind.WALL:
            _, dist, _ = sample.way
            t = (RandomField(0).get((wx, wy, 0)) % 256) / 256.0
            r, g, b = (
                int(lerp(lo, hi, t)) % 256
                for lo, hi in zip(colors.wall_low, colors.wall_high, strict=True)
            )
            if col_sample.water_dist is not None:
                # Water gate
                gate = min(max(col_sample.water_dist, 0.0) * 0.45, math.pi)
                z_offset = int((math.cos(gate) + 1.0) * 4.0)
            else:
                z_offset = 0

            for z in range(z_offset, 12):
                if dist / WayKind.WALL.width < min((1.0 - z / 12.0) * 2.0, 1.0):
                    vol.set(
                        (offs[0], offs[1], surface_z + z),
                        Block.new(BlockKind.WOOD, (r, g, b)),
                    )

        # Towers
        if sample.tower is not None and sample.tower[0] is Tower.WALL:
            for z in range(-2, 16):
                vol.set(
                    (offs[0], offs[1], surface_z + z),
                    Block.new(BlockKind.ROCK, colors.tower_color),
                )

    def _surface_z(self, sample: Sample, land_surface_z: int) -> int:
        """Ground height, blended towards district altitude inside the town.

        Near a boundary with another district the height is eased towards
        the midpoint of both altitudes over ``edge_dist``.
        """
        district = self._district(sample.plot)
        if district is None:
            return land_surface_z

        other_district = self._district(self.land.plot_at(sample.second_closest))
        other = float(
            other_district.alt if other_district is not None else land_surface_z
        )
        alt = float(district.alt)
        if alt == other:
            return district.alt

        t = min(1.25 * sample.edge_dist / abs(alt - other), 1.0)
        return int(lerp((other + alt) / 2.0, alt, t))

    def _is_street_lamp(
        self,
        wpos: BlockPos,
        path: NearestPath,
        roll: Callable[[int, int], int],
    ) -> bool:
        # Direction along the path, perpendicular to the way to its centerline
        nx, ny = path.nearest[0] - wpos[0], path.nearest[1] - wpos[1]
        length = math.hypot(nx, ny)
        if length > 0.0:
            dir_x, dir_y = -ny / length, nx / length
            if abs(dir_x) > abs(dir_y):
                is_lamp = _spaced(math.fmod(wpos[0], 30.0), abs(dir_y))
            else:
                is_lamp = _spaced(math.fmod(wpos[1] + 10.0, 30.0), abs(dir_x))
        else:
            is_lamp = False

        return (6.0 < path.dist < 7.0 and is_lamp) or (
            roll(0, 2000) == 0 and path.dist > 20.0
        )

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def apply_supplement(
        self,
        dynamic_rng: RNG,
        wpos2d: BlockPos,
        get_column: ColumnSampler,
        supplement: ChunkSupplement,
    ) -> None:
        """Spawn townsfolk, animals and training dummies on town plots.

        Whether an entity spawns at a column is decided by hashed chance
        fields and is reproducible. Its body and equipment come from
        ``dynamic_rng`` and are not.
        """
        presence = RandomField(self.seed)
        dummies = RandomField(self.seed + 1)

        for y in range(config.CHUNK_SIZE):
            for x in range(config.CHUNK_SIZE):
                col_sample = get_column((x, y))
                if col_sample is None:
                    continue

                wx, wy = wpos2d[0] + x, wpos2d[1] + y
                rpos = (wx - self.origin[0], wy - self.origin[1])
                sample = self.land.get_at_block(rpos)
                if not isinstance(sample.plot, TownPlot):
                    continue
                if not presence.chance((wx, wy, 0), config.NPC_SPAWN_CHANCE):
                    continue

                is_dummy = dummies.chance((wx, wy, 0), config.TRAINING_DUMMY_CHANCE)
                entity_z = col_sample.alt + config.ENTITY_SPAWN_HEIGHT
                entity_pos = (float(wx), float(wy), entity_z)
                supplement.add_entity(_spawn_entity(dynamic_rng, entity_pos, is_dummy))


def _spawn_entity(
    rng: RNG, pos: tuple[float, float, float], is_dummy: bool
) -> EntityInfo:
    body: Body
    roll = rng.randrange(5)
    if is_dummy:
        body = TRAINING_DUMMY
    elif roll == 0:
        species = rng.choice(list(QuadrupedSmallSpecies))
        body = QuadrupedSmallBody.random_with(rng, species)
    elif roll == 1:
        bird = rng.choice(list(BirdMediumSpecies))
        body = BirdMediumBody.random_with(rng, bird)
    else:
        body = HumanoidBody.random(rng)

    entity = EntityInfo(
        pos=pos,
        body=body,
        has_agency=not is_dummy,
        name="Training Dummy" if is_dummy else None,
    )
    if is_dummy:
        entity.alignment = Alignment.PASSIVE
    elif entity.is_humanoid:
        entity.alignment = Alignment.NPC
    else:
        entity.alignment = Alignment.TAME

    if entity.is_humanoid and rng.random() < 0.5:
        entity.main_tool = rng.choice(_NPC_TOOLS)
    return entity


def _spaced(offset: float, scale: float) -> bool:
    if scale == 0.0:
        return False
    return offset / scale <= 1.0


def _crop_sprite(crop: Crop, roll: Callable[[int, int], int]) -> SpriteKind | None:
    match crop:
        case Crop.CORN:
            return SpriteKind.CORN
        case Crop.WHEAT:
            if roll(1, 2) == 0:
                return SpriteKind.WHEAT_YELLOW
            return SpriteKind.WHEAT_GREEN
        case Crop.SUNFLOWER:
            return SpriteKind.SUNFLOWER

    halves = {
        Crop.CABBAGE: (2, SpriteKind.CABBAGE),
        Crop.PUMPKIN: (3, SpriteKind.PUMPKIN),
        Crop.FLAX: (4, SpriteKind.FLAX),
        Crop.CARROT: (5, SpriteKind.CARROT),
        Crop.TOMATO: (6, SpriteKind.TOMATO),
        Crop.RADISH: (7, SpriteKind.RADISH),
        Crop.TURNIP: (8, SpriteKind.TURNIP),
    }
    seed, sprite = halves[crop]
    return sprite if roll(seed, 2) == 0 else None
