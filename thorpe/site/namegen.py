"""Syllable-based place names."""

from __future__ import annotations

from thorpe.util.rng import RNG

_ONSETS = (
    "b", "br", "c", "cr", "d", "dr", "f", "fr", "g", "h", "k", "l", "m", "n",
    "p", "ph", "r", "s", "sh", "st", "t", "th", "tr", "w", "wr",
)  # fmt: skip
_VOWELS = ("a", "e", "i", "o", "u", "ai", "ea", "ee", "oa", "ou", "ay")
_CODAS = ("", "l", "n", "r", "s", "th", "ck", "m", "nd", "rd")
_SUFFIXES = (
    "ford", "ton", "by", "thorpe", "wick", "stead", "ham", "well", "bury",
    "dale", "mere", "field", "hollow", "brook", "gate",
)  # fmt: skip


class NameGen:
    """Builds a name from a random number of syllables plus a suffix."""

    def __init__(self, rng: RNG, min_syllables: int, max_syllables: int) -> None:
        self._rng = rng
        self._min = min_syllables
        self._max = max_syllables

    @classmethod
    def location(cls, rng: RNG) -> NameGen:
        return cls(rng, 1, 2)

    def generate(self) -> str:
        parts = []
        for _ in range(self._rng.randint(self._min, self._max)):
            parts.append(self._rng.choice(_ONSETS))
            parts.append(self._rng.choice(_VOWELS))
            parts.append(self._rng.choice(_CODAS))
        parts.append(self._rng.choice(_SUFFIXES))
        return "".join(parts).capitalize()
