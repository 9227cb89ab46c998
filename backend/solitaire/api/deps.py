"""API dependencies."""
from ..core.generator import get_generator, BoardGenerator
from ..core.sessions import get_registry, GameRegistry


def get_board_generator() -> BoardGenerator:
    """Dependency for board generator."""
    return get_generator()


def get_game_registry() -> GameRegistry:
    """Dependency for game registry."""
    return get_registry()
