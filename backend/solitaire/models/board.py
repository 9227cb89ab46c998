"""Board and game state data models."""
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .layouts import Layout, LayoutPosition

TileSnapshot = Tuple["TileInstance", ...]
IdPair = Tuple[str, str]


class TileIdGenerator:
    """Issues tile ids (tile-1, tile-2, ...) for one board construction."""

    def __init__(self, prefix: str = "tile", start: int = 0):
        self.prefix = prefix
        self._counter = start

    def next_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"


@dataclass(frozen=True)
class TileInstance:
    """A tile placed on the board. Changed only by replacement."""
    id: str
    type_id: str
    x: float
    y: float
    z: float
    is_removed: bool = False

    @property
    def position(self) -> LayoutPosition:
        return LayoutPosition(self.x, self.y, self.z)

    def removed(self) -> "TileInstance":
        """Return a removed copy of this tile."""
        return replace(self, is_removed=True)

    def with_type(self, type_id: str) -> "TileInstance":
        return replace(self, type_id=type_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type_id": self.type_id,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "is_removed": self.is_removed,
        }


@dataclass(frozen=True)
class GameBoard:
    """Tiles of one game together with the layout they were placed on."""
    tiles: TileSnapshot
    layout: Layout

    @property
    def active_tiles(self) -> List[TileInstance]:
        return [t for t in self.tiles if not t.is_removed]

    def get_tile(self, tile_id: str) -> Optional[TileInstance]:
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def with_tiles(self, tiles: TileSnapshot) -> "GameBoard":
        return replace(self, tiles=tuple(tiles))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "layout_id": self.layout.id,
            "tiles": [t.to_dict() for t in self.tiles],
        }


@dataclass
class GenerationResult:
    """
    Result of a board generation or shuffle.

    solvable is False when every constructive attempt failed and the
    unconstrained fallback produced the board. solution lists the tile id
    pairs in a removal order that clears the board; it is empty for
    fallback boards.
    """
    board: GameBoard
    solvable: bool
    attempts: int
    solution: List[IdPair] = field(default_factory=list)
    generation_time_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "board": self.board.to_dict(),
            "solvable": self.solvable,
            "attempts": self.attempts,
            "solution": [list(pair) for pair in self.solution],
            "generation_time_ms": self.generation_time_ms,
        }


@dataclass(frozen=True)
class GameState:
    """
    State of one game. Operations return a new GameState.

    solvable_history runs parallel to history: the solvable flag of each
    stored snapshot, restored together with it on undo.
    """
    board: GameBoard
    selected_tile_id: Optional[str] = None
    history: Tuple[TileSnapshot, ...] = ()
    solvable_history: Tuple[bool, ...] = ()
    tiles_remaining: int = 0
    matches_made: int = 0
    start_time: float = field(default_factory=time.time)
    is_complete: bool = False
    is_stuck: bool = False
    hint_pair: Optional[IdPair] = None
    solvable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "board": self.board.to_dict(),
            "selected_tile_id": self.selected_tile_id,
            "history_size": len(self.history),
            "tiles_remaining": self.tiles_remaining,
            "matches_made": self.matches_made,
            "start_time": self.start_time,
            "is_complete": self.is_complete,
            "is_stuck": self.is_stuck,
            "hint_pair": list(self.hint_pair) if self.hint_pair else None,
            "solvable": self.solvable,
        }
