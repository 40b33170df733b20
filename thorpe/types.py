from __future__ import annotations

from typing import TypeAlias

# =============================================================================
# TILE-SPACE COORDINATES (coarse cells, one per AREA_SIZE x AREA_SIZE blocks)
# =============================================================================

TileCoord: TypeAlias = int
TilePos: TypeAlias = tuple[TileCoord, TileCoord]  # Example: (2, -1) = third cell east

# =============================================================================
# BLOCK-SPACE COORDINATES (world voxels, always integers)
# =============================================================================

BlockCoord: TypeAlias = int

# Either absolute world positions or positions relative to a settlement origin.
# Functions document which one they expect.
BlockPos: TypeAlias = tuple[BlockCoord, BlockCoord]
BlockPos3: TypeAlias = tuple[BlockCoord, BlockCoord, BlockCoord]

# Continuous positions used for projections and entity placement
Vec2f: TypeAlias = tuple[float, float]
Vec3f: TypeAlias = tuple[float, float, float]

# =============================================================================
# ARENA IDENTIFIERS
# =============================================================================

# Plain indices into append-only stores. Nothing is ever removed, so an id
# stays valid for the lifetime of the store that issued it.
PlotId: TypeAlias = int
FarmId: TypeAlias = int
DistrictId: TypeAlias = int

# =============================================================================
# MISC
# =============================================================================

Rgb: TypeAlias = tuple[int, int, int]

RandomSeed: TypeAlias = int | str | None
