"""Tests for the bounded A* search."""

from __future__ import annotations

import pytest

from thorpe.util.coordinates import distance
from thorpe.util.pathfinding import CARDINALS, astar, grid_neighbors


def _grid_search(start, goal, blocked=frozenset(), max_iters=1000):
    return astar(
        start,
        heuristic=lambda p: distance(p, goal),
        neighbors=lambda p: [n for n in grid_neighbors(p) if n not in blocked],
        transition=lambda a, b: 1.0,
        satisfied=lambda p: p == goal,
        max_iters=max_iters,
    )


class TestAstar:
    """Tests for astar on a 4-connected grid."""

    def test_straight_line(self) -> None:
        """An open grid yields a shortest path including both endpoints."""
        path = _grid_search((0, 0), (5, 0))
        assert path is not None
        assert path[0] == (0, 0)
        assert path[-1] == (5, 0)
        assert len(path) == 6

    def test_start_satisfies_goal(self) -> None:
        """A satisfied start is a one-node path."""
        assert _grid_search((3, 3), (3, 3)) == [(3, 3)]

    def test_steps_are_adjacent(self) -> None:
        """Every consecutive pair differs by one cardinal step."""
        path = _grid_search((0, 0), (4, -3))
        assert path is not None
        for a, b in zip(path, path[1:], strict=False):
            assert (b[0] - a[0], b[1] - a[1]) in CARDINALS

    def test_routes_around_wall(self) -> None:
        """Blocked nodes are never part of the path."""
        wall = frozenset((2, y) for y in range(-3, 4))
        path = _grid_search((0, 0), (4, 0), blocked=wall)
        assert path is not None
        assert not wall.intersection(path)
        assert len(path) > 5

    def test_budget_exhausted_returns_none(self) -> None:
        """A goal beyond the expansion budget is reported as unreachable."""
        assert _grid_search((0, 0), (300, 0), max_iters=250) is None

    def test_unreachable_returns_none(self) -> None:
        """An enclosed start exhausts its graph and gives up."""
        box = frozenset(
            [(x, y) for x in (-1, 1) for y in (-1, 0, 1)] + [(0, -1), (0, 1)]
        )
        assert _grid_search((0, 0), (5, 5), blocked=box) is None

    def test_prefers_cheaper_route(self) -> None:
        """Transition costs steer the search around expensive nodes."""
        expensive = {(1, 0), (2, 0), (3, 0)}
        path = astar(
            (0, 0),
            heuristic=lambda p: distance(p, (4, 0)),
            neighbors=grid_neighbors,
            transition=lambda a, b: 100.0 if b in expensive else 1.0,
            satisfied=lambda p: p == (4, 0),
            max_iters=1000,
        )
        assert path is not None
        assert not expensive.intersection(path)

    def test_deterministic(self) -> None:
        """Repeated searches return the same path."""
        assert _grid_search((0, 0), (6, 6)) == _grid_search((0, 0), (6, 6))

    def test_rejects_non_positive_budget(self) -> None:
        """A zero budget is a programming error."""
        with pytest.raises(ValueError):
            _grid_search((0, 0), (1, 0), max_iters=0)


def test_grid_neighbors_order() -> None:
    assert grid_neighbors((2, 3)) == [(2, 4), (3, 3), (2, 2), (1, 3)]
