"""Stateless integer hash noise.

``RandomField`` maps an integer 3D position to a well mixed unsigned 32-bit
value under a seed. It is the source of all per-position randomness during
painting (colour dithering, sprite rolls, NPC presence), which keeps those
decisions reproducible regardless of the order chunks are processed in.
"""

from __future__ import annotations

from thorpe.types import BlockPos3

_MASK = 0xFFFF_FFFF
_MUL = 0x27D4_EB2D
_CHANCE_RESOLUTION = 1 << 16


class RandomField:
    """Seeded 32-bit position hash."""

    def __init__(self, seed: int) -> None:
        self.seed = seed & _MASK

    def get(self, pos: BlockPos3) -> int:
        x, y, z = (e & _MASK for e in pos)

        a = self.seed
        a = (a ^ 61) ^ (a >> 16)
        a = (a + (a << 3)) & _MASK
        a ^= x
        a ^= a >> 4
        a = (a * _MUL) & _MASK
        a ^= a >> 15
        a ^= y
        a = (a ^ 61) ^ (a >> 16)
        a = (a + (a << 3)) & _MASK
        a ^= a >> 4
        a ^= z
        a = (a * _MUL) & _MASK
        a ^= a >> 15
        return a

    def chance(self, pos: BlockPos3, chance: float) -> bool:
        """Return True for roughly ``chance`` of all positions."""
        return (self.get(pos) % _CHANCE_RESOLUTION) / _CHANCE_RESOLUTION < chance
