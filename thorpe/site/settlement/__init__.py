from .building import House, Keep
from .colors import BuildingColors, SettlementColors
from .context import GenCtx
from .land import (
    Crop,
    Dirt,
    Field,
    Grass,
    Hazard,
    Land,
    Plot,
    Sample,
    Tile,
    Tower,
    Town,
    Water,
    WayKind,
)
from .settlement import Farm, Settlement, register_settlement_metrics
from .structure import Structure
from .town import District
from .town import Town as TownLayout

__all__ = [
    "BuildingColors",
    "Crop",
    "Dirt",
    "District",
    "Farm",
    "Field",
    "GenCtx",
    "Grass",
    "Hazard",
    "House",
    "Keep",
    "Land",
    "Plot",
    "Sample",
    "Settlement",
    "SettlementColors",
    "Structure",
    "Tile",
    "Tower",
    "Town",
    "TownLayout",
    "Water",
    "WayKind",
    "register_settlement_metrics",
]
