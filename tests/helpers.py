from __future__ import annotations

from random import Random

from thorpe import config
from thorpe.site.settlement import Settlement
from thorpe.types import BlockPos
from thorpe.world.block import Block, BlockKind
from thorpe.world.column import NearestPath
from thorpe.world.sim import HeightmapWorld
from thorpe.world.volume import ChunkVolume

# World side in chunks; large enough to hold a settlement at its center
WORLD_CHUNKS = 64
WORLD_CENTER: BlockPos = (
    WORLD_CHUNKS * config.CHUNK_SIZE // 2,
    WORLD_CHUNKS * config.CHUNK_SIZE // 2,
)
FLAT_ALT = 64.0

FILL_BLOCK = Block.new(BlockKind.ROCK, (1, 2, 3))


class RejectingWorld:
    """A world that refuses to host a settlement anywhere."""

    def can_host_settlement(self, chunk_pos: tuple[int, int]) -> bool:
        return False

    def get_alt_approx(self, wpos: BlockPos) -> float | None:
        return FLAT_ALT

    def get_gradient_approx(self, chunk_pos: tuple[int, int]) -> float | None:
        return 0.0

    def get_nearest_path(self, wpos: BlockPos) -> NearestPath | None:
        return None


def flat_world() -> HeightmapWorld:
    return HeightmapWorld.flat(WORLD_CHUNKS, WORLD_CHUNKS, FLAT_ALT)


def make_settlement(seed: int = 7, world: HeightmapWorld | None = None) -> Settlement:
    """Generate a settlement at the center of a flat world."""
    return Settlement.generate(WORLD_CENTER, world or flat_world(), Random(seed))


def chunk_origin(wpos: BlockPos) -> BlockPos:
    """Lower corner of the terrain chunk containing ``wpos``."""
    return (
        wpos[0] // config.CHUNK_SIZE * config.CHUNK_SIZE,
        wpos[1] // config.CHUNK_SIZE * config.CHUNK_SIZE,
    )


def make_chunk_volume() -> ChunkVolume:
    """A chunk that is solid below the flat world's surface."""
    return ChunkVolume.filled(
        config.CHUNK_SIZE, config.CHUNK_SIZE, 0, 128, int(FLAT_ALT), FILL_BLOCK
    )
