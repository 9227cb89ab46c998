"""Data models package.

This package contains the tile and layout catalogs, board data models,
and API schemas.
"""
from .tiles import (
    TileCategory,
    TileType,
    ALL_TILE_TYPES,
    STANDARD_TILES,
    BONUS_TILES,
    get_tile_type,
    tiles_match,
    get_category_color,
)
from .layouts import (
    LayoutPosition,
    Layout,
    LAYOUTS,
    DEFAULT_LAYOUT_ID,
    get_layout,
    validate_layout,
    layout_bounds,
)
from .board import (
    TileIdGenerator,
    TileInstance,
    GameBoard,
    GameState,
    GenerationResult,
)

__all__ = [
    # Tile catalog
    "TileCategory",
    "TileType",
    "ALL_TILE_TYPES",
    "STANDARD_TILES",
    "BONUS_TILES",
    "get_tile_type",
    "tiles_match",
    "get_category_color",
    # Layout catalog
    "LayoutPosition",
    "Layout",
    "LAYOUTS",
    "DEFAULT_LAYOUT_ID",
    "get_layout",
    "validate_layout",
    "layout_bounds",
    # Board models
    "TileIdGenerator",
    "TileInstance",
    "GameBoard",
    "GameState",
    "GenerationResult",
]
