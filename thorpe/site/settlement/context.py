"""Shared state threaded through settlement generation stages."""

from __future__ import annotations

from dataclasses import dataclass

from thorpe.util.rng import RNG
from thorpe.world.sim import WorldOracle


@dataclass
class GenCtx:
    """World access and randomness for one generation run.

    Attributes:
        sim: World oracle, or None when generating without a world (every
            world-dependent decision then falls back to its default).
        rng: The single random source consumed, in order, by every stage.
    """

    sim: WorldOracle | None
    rng: RNG
