"""Deterministic random number generation with isolated streams.

Each consumer (settlement generation, entity supplementation, world
synthesis, ...) gets its own independent random stream derived from a
master seed. This ensures that:

1. A settlement is fully reproducible from the same master seed
2. Changes to one consumer's random draws don't shift any other's
3. The dynamic stream used for entity bodies can be reseeded or left
   unseeded without touching generation

Usage:
    from thorpe.util import rng
    rng.init(config.RANDOM_SEED)

    settlement = Settlement.generate(wpos, sim, rng.get("site.settlement"))
    settlement.apply_supplement(rng.get("site.supplement"), ...)

Domain naming convention (hierarchical):
    - "site.settlement", "site.supplement"
    - "world.heightmap", "world.rivers"
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from thorpe.types import RandomSeed

T = TypeVar("T")

_U32_MASK = 0xFFFF_FFFF


def derive_seed(master_seed: RandomSeed, domain: str) -> int:
    """Derive a 32-bit seed for ``domain`` from ``master_seed``.

    Uses crc32 rather than hash(), which is salted per interpreter session
    via PYTHONHASHSEED and would break cross-process determinism.
    """
    return zlib.crc32(f"{master_seed}:{domain}".encode())


def next_u32(source: RNG) -> int:
    """Draw an unsigned 32-bit integer, the seed width used by fields and plots."""
    return source.getrandbits(32) & _U32_MASK


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    Callers may cache a stream; after ``reset()`` the same proxy transparently
    draws from the freshly seeded generator.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng().random()

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        """Return randomly selected element from range(start, stop, step)."""
        return self._rng().randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)

    def shuffle(self, x: list) -> None:
        """Shuffle list x in place."""
        self._rng().shuffle(x)

    def uniform(self, a: float, b: float) -> float:
        """Return random float N such that a <= N <= b."""
        return self._rng().uniform(a, b)

    def getrandbits(self, k: int) -> int:
        """Return an integer with k random bits."""
        return self._rng().getrandbits(k)


# Functions that consume randomness accept either a plain Random or a stream.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out isolated RNG streams, one per named domain.

    A ``None`` master seed gives every domain an entropy-seeded generator,
    which is what the dynamic entity stream uses when reproducibility of
    bodies and equipment is not wanted.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get the (cacheable) stream for ``domain``."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                self._streams[domain] = Random(derive_seed(self._master_seed, domain))
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every domain. Existing proxies stay valid."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize (or reseed) the global provider.

    Reseeding rather than replacing keeps module-level cached streams working.
    """
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get a stream from the global provider, auto-initializing it unseeded."""
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reseed the global provider.

    Raises:
        RuntimeError: If ``init()`` (or ``get()``) has not been called yet.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
