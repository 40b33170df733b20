from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpawnRules:
    """What world decoration a site allows at a position."""

    trees: bool = True
