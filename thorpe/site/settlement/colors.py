"""Colour tables used when painting settlements.

Values are plain RGB tuples with defaults tuned for the standard palette.
``from_dict`` accepts a (possibly partial) mapping, e.g. loaded from a
manifest, and falls back to the defaults for missing keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Self

from thorpe.types import Rgb


def _rgb(value: Any) -> Rgb:
    r, g, b = value
    return (int(r), int(g), int(b))


class _FromDict:
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        known = {f.name: f for f in fields(cls)}  # type: ignore[arg-type]
        unknown = set(data) - set(known)
        if unknown:
            raise ValueError(f"Unknown colour keys: {sorted(unknown)}")
        return cls(**{key: _rgb(value) for key, value in data.items()})


@dataclass(frozen=True)
class BuildingColors(_FromDict):
    foundation: Rgb = (140, 125, 110)
    floor: Rgb = (100, 75, 50)
    roof: Rgb = (120, 45, 35)
    wall: Rgb = (200, 180, 150)
    support: Rgb = (65, 40, 25)
    keep_stone: Rgb = (130, 130, 130)
    keep_roof: Rgb = (70, 70, 80)


@dataclass(frozen=True)
class SettlementColors:
    building: BuildingColors = field(default_factory=BuildingColors)

    plot_town_path: Rgb = (80, 40, 20)

    plot_field_dirt: Rgb = (55, 20, 5)
    plot_field_mound: Rgb = (40, 60, 10)

    wall_low: Rgb = (130, 100, 0)
    wall_high: Rgb = (90, 70, 50)

    tower_color: Rgb = (50, 50, 50)

    plot_dirt: Rgb = (90, 70, 50)
    plot_grass: Rgb = (100, 200, 0)
    plot_water: Rgb = (30, 90, 200)
    plot_town: Rgb = (80, 40, 20)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SettlementColors:
        data = dict(data)
        building = BuildingColors.from_dict(data.pop("building", {}))
        known = {f.name for f in fields(cls)} - {"building"}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown colour keys: {sorted(unknown)}")
        return cls(building=building, **{k: _rgb(v) for k, v in data.items()})
