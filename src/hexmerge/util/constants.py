"""Game constants — grid shape, tile progression, spawn odds.

Every value here is also a default for a field of ``GameConfig`` or
``EngineRules``; the YAML config may override them at runtime.
"""

# -- Grid ----------------------------------------------------------------

GRID_SIZE: int = 7
"""Width of the hex grid in cells (across the middle row)."""

GRID_RADIUS: int = GRID_SIZE // 2
"""Axial radius of the hexagonal grid."""

# -- Progression ---------------------------------------------------------

TILE_VALUES: tuple[int, ...] = (
    2, 6, 18, 54, 162, 486, 1458, 4374, 13122, 39366, 118098, 354294, 1062882,
)
"""Allowed tile values; each merge steps to the next entry."""

WINNING_TILE: int = TILE_VALUES[-1]
"""Terminal progression value; reaching it wins and it never merges."""

MERGE_SCORE_FACTOR: int = 3
"""Score for a merge is the consumed value times this factor."""

# -- Spawning ------------------------------------------------------------

INITIAL_TILES: int = 5
"""Tiles placed on an empty board by a fresh game."""

LOW_SPAWN_VALUE: int = 2
HIGH_SPAWN_VALUE: int = 6

HIGH_SPAWN_CHANCE: float = 0.1
"""Probability that a spawned tile is HIGH_SPAWN_VALUE."""

# -- Rendering -----------------------------------------------------------

HEX_SIZE: float = 50.0
"""Default hex size in pixels for hex_to_pixel."""
