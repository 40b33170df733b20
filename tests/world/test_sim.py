"""Tests for the heightmap world oracle."""

from __future__ import annotations

import numpy as np
import pytest

from thorpe import config
from thorpe.world.sim import HeightmapWorld


class TestHeightmapWorld:
    """Tests for HeightmapWorld queries."""

    def test_flat_world_queries(self) -> None:
        """A flat world hosts everywhere and has no water or paths."""
        world = HeightmapWorld.flat(8, 8, alt=50.0)
        assert world.can_host_settlement((3, 3))
        assert world.get_alt_approx((100, 100)) == pytest.approx(50.0)
        assert world.get_gradient_approx((0, 0)) == pytest.approx(0.0)
        assert world.get_nearest_path((10, 10)) is None
        assert world.get_water_dist((10, 10)) is None

    def test_out_of_bounds(self) -> None:
        """Queries outside the world report nothing."""
        world = HeightmapWorld.flat(4, 4)
        size = 4 * config.CHUNK_SIZE
        assert not world.can_host_settlement((-1, 0))
        assert not world.can_host_settlement((4, 0))
        assert world.get_gradient_approx((0, 4)) is None
        assert world.get_alt_approx((-100, 0)) is None
        assert world.get_alt_approx((size + 100, 0)) is None
        assert world.column((size + 100, 0)) is None

    def test_water_blocks_hosting(self) -> None:
        """River and lake chunks cannot host and report water distance."""
        river = np.zeros((8, 8), dtype=bool)
        river[2, 2] = True
        world = HeightmapWorld(np.full((8, 8), 64.0), river=river)

        assert not world.can_host_settlement((2, 2))
        assert world.can_host_settlement((5, 5))
        assert world.get_water_dist((80, 80)) == pytest.approx(0.0)
        far = world.get_water_dist((7 * 32, 2 * 32 + 16))
        assert far is not None and far > 0.0

    def test_steep_chunks_cannot_host(self) -> None:
        """Chunks steeper than the slope limit are rejected."""
        altitude = np.zeros((8, 8), dtype=np.float32)
        altitude[4:, :] = 1000.0
        world = HeightmapWorld(altitude)
        assert not world.can_host_settlement((4, 4))
        assert world.can_host_settlement((0, 0))

    def test_alt_interpolates_between_chunk_centers(self) -> None:
        altitude = np.array([[0.0, 0.0], [100.0, 100.0]], dtype=np.float32)
        world = HeightmapWorld(altitude)
        half = config.CHUNK_SIZE // 2
        assert world.get_alt_approx((half, half)) == pytest.approx(0.0)
        assert world.get_alt_approx((half + config.CHUNK_SIZE, half)) == pytest.approx(
            100.0
        )
        assert world.get_alt_approx((config.CHUNK_SIZE, half)) == pytest.approx(50.0)

    def test_nearest_path(self) -> None:
        """The nearest path point is projected onto the closest segment."""
        paths = [([(0.0, 0.0), (100.0, 0.0)], 3.0)]
        world = HeightmapWorld(np.full((8, 8), 64.0), paths=paths)

        nearest = world.get_nearest_path((50, 2))
        assert nearest is not None
        assert nearest.nearest == pytest.approx((50.0, 0.0))
        assert nearest.dist == pytest.approx(2.0)

        column = world.column((50, 2))
        assert column is not None and column.is_on_path
        column = world.column((50, 10))
        assert column is not None and not column.is_on_path

    def test_column_sampler_offsets_from_chunk(self) -> None:
        world = HeightmapWorld.flat(4, 4, alt=20.0)
        sample = world.column_sampler((32, 32))
        column = sample((5, 5))
        assert column is not None
        assert column.alt == pytest.approx(20.0)
        assert sample((500, 0)) is None

    def test_generate_is_deterministic(self) -> None:
        """Same seed, same terrain; the lowest chunks become lakes."""
        a = HeightmapWorld.generate(16, 16, seed=3)
        b = HeightmapWorld.generate(16, 16, seed=3)
        assert np.array_equal(a.altitude, b.altitude)
        assert a.lake.any()
        assert a.size_chunks == (16, 16)

    def test_rejects_non_2d_altitude(self) -> None:
        with pytest.raises(ValueError):
            HeightmapWorld(np.zeros(4))
