"""Bounded best-first (A*) search over arbitrary graphs.

Settlement generation runs every path query with a small fixed node
budget. Paths longer than that horizon are reported as not found rather
than searched for exhaustively; generation cost stays bounded regardless
of how the land is laid out.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

N = TypeVar("N", bound=Hashable)

# Cardinal steps on a 4-connected grid: +y, +x, -y, -x
CARDINALS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def astar(
    start: N,
    heuristic: Callable[[N], float],
    neighbors: Callable[[N], Iterable[N]],
    transition: Callable[[N, N], float],
    satisfied: Callable[[N], bool],
    max_iters: int,
) -> list[N] | None:
    """Search from ``start`` for a node satisfying ``satisfied``.

    The open set is a heap of ``(estimated total cost, discovery order,
    node)``, so equal estimates are expanded in the order the nodes were
    discovered. With a deterministic heuristic and neighbor order the
    result is fully deterministic.

    Admissibility of ``heuristic`` is the caller's concern: with an
    inadmissible heuristic the returned path is simply the cheapest one
    discovered.

    Args:
        start: The node to search from.
        heuristic: Estimated remaining cost from a node to the goal.
        neighbors: Nodes reachable in one step from a node.
        transition: Cost of stepping between two adjacent nodes.
        satisfied: Goal predicate.
        max_iters: Maximum number of nodes to expand.

    Returns:
        The nodes from ``start`` to the goal, both inclusive, or None if the
        budget ran out or the reachable graph was exhausted first.
    """
    if max_iters <= 0:
        raise ValueError("Search budget must be a positive integer.")

    counter = itertools.count()
    open_heap: list[tuple[float, int, N]] = [(heuristic(start), next(counter), start)]
    came_from: dict[N, N] = {}
    cost: dict[N, float] = {start: 0.0}
    closed: set[N] = set()

    expanded = 0
    while open_heap and expanded < max_iters:
        _, _, node = heapq.heappop(open_heap)
        if node in closed:
            continue  # Stale entry superseded by a cheaper discovery
        closed.add(node)
        expanded += 1

        if satisfied(node):
            return _reconstruct(came_from, node)

        node_cost = cost[node]
        for neighbor in neighbors(node):
            if neighbor in closed:
                continue
            new_cost = node_cost + transition(node, neighbor)
            if new_cost < cost.get(neighbor, float("inf")):
                cost[neighbor] = new_cost
                came_from[neighbor] = node
                heapq.heappush(
                    open_heap, (new_cost + heuristic(neighbor), next(counter), neighbor)
                )

    return None


def _reconstruct(came_from: dict[N, N], node: N) -> list[N]:
    path = [node]
    while node in came_from:
        node = came_from[node]
        path.append(node)
    path.reverse()
    return path


def grid_neighbors(pos: tuple[int, int]) -> list[tuple[int, int]]:
    """4-connected neighbors of ``pos`` in ``CARDINALS`` order."""
    return [(pos[0] + dx, pos[1] + dy) for dx, dy in CARDINALS]
