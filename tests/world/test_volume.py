"""Tests for ChunkVolume storage."""

from __future__ import annotations

import pytest

from thorpe.world.block import Block, BlockKind, SpriteKind
from thorpe.world.volume import ChunkVolume

ROCK = Block.new(BlockKind.ROCK, (10, 20, 30))


class TestChunkVolume:
    """Tests for ChunkVolume."""

    def test_new_volume_is_air(self) -> None:
        """Zeroed storage reads back as air everywhere."""
        vol = ChunkVolume(4, 4, -8, 8)
        assert vol.get((0, 0, -8)) == Block.air()
        assert vol.get((3, 3, 7)) == Block.air()

    def test_out_of_range_get_and_set(self) -> None:
        """Positions outside the volume read None and reject writes."""
        vol = ChunkVolume(4, 4, 0, 8)
        for pos in [(-1, 0, 0), (4, 0, 0), (0, 4, 0), (0, 0, -1), (0, 0, 8)]:
            assert vol.get(pos) is None
            assert vol.set(pos, ROCK) is False

    def test_set_round_trips_sprite_and_color(self) -> None:
        vol = ChunkVolume(4, 4, 0, 8)
        lamp = Block.air(SpriteKind.STREET_LAMP)
        assert vol.set((1, 2, 3), ROCK)
        assert vol.set((1, 2, 4), lamp)
        assert vol.get((1, 2, 3)) == ROCK
        assert vol.get((1, 2, 4)) == lamp

    def test_filled_volume(self) -> None:
        """filled() is solid strictly below surface_z."""
        vol = ChunkVolume.filled(2, 2, 0, 16, 5, ROCK)
        assert vol.get((0, 0, 4)) == ROCK
        assert vol.get((0, 0, 5)) == Block.air()
        assert vol.get((1, 1, 0)) == ROCK

    def test_empty_dimensions_rejected(self) -> None:
        with pytest.raises(ValueError):
            ChunkVolume(0, 4, 0, 8)
        with pytest.raises(ValueError):
            ChunkVolume(4, 4, 8, 8)
