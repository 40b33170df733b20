"""Tests for the stateless position hash."""

from __future__ import annotations

from thorpe.util.random_field import RandomField


class TestRandomField:
    """Tests for RandomField."""

    def test_deterministic(self) -> None:
        """The same seed and position always hash the same."""
        assert RandomField(3).get((1, 2, 3)) == RandomField(3).get((1, 2, 3))

    def test_seed_changes_output(self) -> None:
        """Different seeds give different fields."""
        positions = [(x, y, 0) for x in range(8) for y in range(8)]
        a = [RandomField(1).get(p) for p in positions]
        b = [RandomField(2).get(p) for p in positions]
        assert a != b

    def test_values_are_u32(self) -> None:
        """Outputs, including for negative positions, fit in 32 bits."""
        field = RandomField(0xDEADBEEF)
        for pos in [(-1, -1, -1), (0, 0, 0), (2**31, -(2**31), 7)]:
            assert 0 <= field.get(pos) < 2**32

    def test_chance_bounds(self) -> None:
        """Chance 0 never fires and chance 1 always does."""
        field = RandomField(9)
        positions = [(x, y, 0) for x in range(20) for y in range(20)]
        assert not any(field.chance(p, 0.0) for p in positions)
        assert all(field.chance(p, 1.0) for p in positions)

    def test_chance_rate(self) -> None:
        """A 50% chance fires for roughly half of all positions."""
        field = RandomField(77)
        hits = sum(field.chance((x, y, 0), 0.5) for x in range(64) for y in range(64))
        assert 0.4 < hits / (64 * 64) < 0.6
