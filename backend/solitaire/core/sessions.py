"""In-memory registry of running games."""
import uuid
from typing import Dict, Optional

import structlog

from ..models.board import GameState

logger = structlog.get_logger()


class GameRegistry:
    """
    Holds game states by id for the lifetime of the process.

    When max_games is set, creating a game beyond the limit evicts the
    oldest games first.
    """

    def __init__(self, max_games: Optional[int] = None):
        self.max_games = max_games
        self._games: Dict[str, GameState] = {}

    def create(self, state: GameState) -> str:
        """Register a new game and return its id."""
        if self.max_games is not None:
            while len(self._games) >= self.max_games:
                # Dicts keep insertion order, so the first key is the oldest game
                oldest = next(iter(self._games))
                del self._games[oldest]
                logger.info("game evicted", game_id=oldest, max_games=self.max_games)

        game_id = uuid.uuid4().hex
        self._games[game_id] = state
        return game_id

    def get(self, game_id: str) -> Optional[GameState]:
        return self._games.get(game_id)

    def replace(self, game_id: str, state: GameState) -> Optional[GameState]:
        """Store a new state for an existing game. Returns None for unknown ids."""
        if game_id not in self._games:
            return None
        self._games[game_id] = state
        return state

    def delete(self, game_id: str) -> bool:
        return self._games.pop(game_id, None) is not None

    def __len__(self) -> int:
        return len(self._games)


# Singleton instance
_registry = None


def get_registry() -> GameRegistry:
    """Get or create registry singleton instance."""
    global _registry
    if _registry is None:
        from ..config import get_settings
        _registry = GameRegistry(max_games=get_settings().max_games)
    return _registry
