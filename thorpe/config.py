"""
Configuration constants.

Centralizes the tunables used by settlement generation. Organized by
functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# Master seed used by scripts when none is given on the command line.
RANDOM_SEED = "thorpe"

# =============================================================================
# WORLD GEOMETRY
# =============================================================================

# Blocks per terrain chunk side
CHUNK_SIZE = 32

# Blocks per settlement tile side. Every tile-space cell covers an
# AREA_SIZE x AREA_SIZE square of world blocks.
AREA_SIZE = 32

# Maximum jitter of a partition cell center away from its grid center
PARTITION_SPREAD = AREA_SIZE * 2 // 5

# =============================================================================
# SETTLEMENT LAYOUT
# =============================================================================

# Radius of influence of a settlement, in blocks
SETTLEMENT_RADIUS = 400.0

# Settlement radius expressed in tiles. Cells with a Chebyshev distance
# below this from the origin are designated from world data.
SETTLEMENT_TILE_RADIUS = int(SETTLEMENT_RADIUS) // AREA_SIZE

# Nearest-tile searches give up past this Chebyshev radius.
MAX_TILE_SEARCH_RADIUS = SETTLEMENT_TILE_RADIUS

# One in HAZARD_CHANCE otherwise-habitable tiles is still marked hazardous
HAZARD_CHANCE = 16

# Steepest chunk gradient a settlement tile may sit on
MAX_SETTLEMENT_SLOPE = 0.75

# =============================================================================
# FARMS
# =============================================================================

FARM_COUNT = 6
FIELDS_PER_FARM = 5

# Field size range in tiles (max exclusive)
MIN_FIELD_SIZE = 5
MAX_FIELD_SIZE = 24

# =============================================================================
# TOWN
# =============================================================================

# Town radius range in tiles around the base tile (inclusive)
TOWN_MIN_RADIUS = 3
TOWN_MAX_RADIUS = 5

# District side length range in tiles, used by the BSP split
DISTRICT_MIN_SIZE = 2
DISTRICT_MAX_SIZE = 4

# =============================================================================
# PATHS AND WALLS
# =============================================================================

# Node budget for every A* query. Paths beyond this horizon are not found.
PATHFINDER_BUDGET = 250

# Number of paths dug from fields towards the town
PATH_COUNT = 6

# =============================================================================
# BUILDINGS
# =============================================================================

# Side of the spiral of tiles around the town center that gets buildings
BUILDING_SPIRAL_SIDE = 16

# Buildings attempted per tile (inclusive range)
MIN_BUILDINGS_PER_TILE = 2
MAX_BUILDINGS_PER_TILE = 4

# Random offsets tried per building before giving up on it
BUILDING_ATTEMPTS = 25

# Buildings are not placed within this many blocks of a world path
PATH_CLEARANCE = 28.0

# =============================================================================
# ENTITIES
# =============================================================================

# Per-column chance of an NPC spawning on a town plot
NPC_SPAWN_CHANCE = 1.0 / (50.0 * 40.0)

# Chance that a spawned NPC is a training dummy
TRAINING_DUMMY_CHANCE = 1.0 / 15.0

# Height above the column altitude at which entities are spawned
ENTITY_SPAWN_HEIGHT = 3.0
