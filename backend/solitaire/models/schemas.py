"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union


class PositionSchema(BaseModel):
    """A layout grid position."""
    x: float
    y: float
    z: float


class LayoutSummary(BaseModel):
    """Layout entry for selection menus."""
    id: str = Field(..., description="Layout ID")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Short description")
    tile_count: int = Field(..., description="Number of positions")


class LayoutListResponse(BaseModel):
    """Response schema for the layout list."""
    layouts: List[LayoutSummary] = Field(default=[], description="Available layouts")


class LayoutDetailResponse(LayoutSummary):
    """Response schema for a single layout."""
    positions: List[PositionSchema] = Field(default=[], description="Grid positions")
    bounds: Dict[str, float] = Field(default={}, description="Layout extents")


class TileTypeSchema(BaseModel):
    """A tile design from the catalog."""
    id: str
    category: str
    value: Union[int, str]
    symbol: str
    name: str
    match_group: Optional[str] = None


class TileCatalogResponse(BaseModel):
    """Response schema for the tile catalog."""
    tile_types: List[TileTypeSchema] = Field(default=[], description="All tile types")
    category_colors: Dict[str, str] = Field(default={}, description="Display color per category")


class TileSchema(BaseModel):
    """A tile placed on a board."""
    id: str
    type_id: str
    x: float
    y: float
    z: float
    is_removed: bool = False


class BoardSchema(BaseModel):
    """A board: tiles and the layout they sit on."""
    layout_id: str
    tiles: List[TileSchema] = Field(default=[])


class GenerateBoardRequest(BaseModel):
    """Request schema for board generation."""
    layout_id: Optional[str] = Field(default=None, description="Layout to fill (default layout if omitted)")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible boards")


class GenerateBoardResponse(BaseModel):
    """Response schema for board generation."""
    board: BoardSchema
    solvable: bool = Field(..., description="False when the random fallback produced the board")
    attempts: int = Field(..., description="Construction attempts used")
    solution: List[List[str]] = Field(default=[], description="Tile id pairs in a clearing order")
    generation_time_ms: int = Field(default=0, description="Generation time in milliseconds")


class CreateGameRequest(BaseModel):
    """Request schema for starting a game."""
    layout_id: Optional[str] = Field(default=None, description="Layout to play")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible boards")


class SelectTileRequest(BaseModel):
    """Request schema for clicking a tile."""
    tile_id: str = Field(..., description="Clicked tile ID")


class ShuffleRequest(BaseModel):
    """Request schema for shuffling a game."""
    seed: Optional[int] = Field(default=None, description="Random seed for a reproducible shuffle")


class GameStateResponse(BaseModel):
    """Response schema for a game."""
    game_id: str
    board: BoardSchema
    selected_tile_id: Optional[str] = None
    history_size: int = 0
    tiles_remaining: int
    matches_made: int = 0
    start_time: float
    elapsed_seconds: float = 0.0
    is_complete: bool = False
    is_stuck: bool = False
    hint_pair: Optional[List[str]] = None
    solvable: bool = True


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(default=None, description="Detailed error information")
