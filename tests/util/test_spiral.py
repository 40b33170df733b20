"""Tests for spiral iteration order."""

from __future__ import annotations

import itertools

from thorpe.util.spiral import spiral_2d, spiral_within


class TestSpiral2d:
    """Tests for the infinite spiral."""

    def test_first_ring_order(self) -> None:
        """Center first, then ring 1 from (-1, -1) walking +x, +y, -x, -y."""
        first = list(itertools.islice(spiral_2d(), 9))
        assert first == [
            (0, 0),
            (-1, -1),
            (0, -1),
            (1, -1),
            (1, 0),
            (1, 1),
            (0, 1),
            (-1, 1),
            (-1, 0),
        ]

    def test_rings_are_complete_and_unique(self) -> None:
        """The first (2r+1)^2 offsets cover the square of radius r exactly once."""
        for radius in range(5):
            side = 2 * radius + 1
            offsets = list(itertools.islice(spiral_2d(), side * side))
            assert len(set(offsets)) == side * side
            assert all(max(abs(x), abs(y)) <= radius for x, y in offsets)

    def test_chebyshev_distance_never_decreases(self) -> None:
        """Rings are emitted in order of increasing radius."""
        offsets = itertools.islice(spiral_2d(), 15 * 15)
        dists = [max(abs(x), abs(y)) for x, y in offsets]
        assert dists == sorted(dists)

    def test_ring_starts_at_corner(self) -> None:
        """Every ring begins at its (-r, -r) corner."""
        offsets = list(itertools.islice(spiral_2d(), 7 * 7))
        for radius in range(1, 4):
            assert offsets[(2 * radius - 1) ** 2] == (-radius, -radius)


class TestSpiralWithin:
    """Tests for the truncated spiral."""

    def test_counts(self) -> None:
        """Radius r yields the (2r-1)^2 offsets strictly inside it."""
        assert list(spiral_within(0)) == []
        assert list(spiral_within(1)) == [(0, 0)]
        assert len(list(spiral_within(3))) == 25
        assert len(list(spiral_within(12))) == 23 * 23
