"""Core game logic package.

This package contains the free tile predicate, match finder, board
generator, board mutations and game state operations.
"""
from .accessibility import is_free_tile, free_tiles, is_position_available
from .matcher import find_all_matches, check_win, check_stuck, get_hint
from .generator import BoardGenerator, generate_board, get_generator
from .mutator import remove_tile_pair, shuffle_board, undo_move
from .game import (
    create_game_state,
    select_tile,
    shuffle_game,
    undo_game,
    hint_game,
    elapsed_seconds,
)
from .sessions import GameRegistry, get_registry

__all__ = [
    "is_free_tile",
    "free_tiles",
    "is_position_available",
    "find_all_matches",
    "check_win",
    "check_stuck",
    "get_hint",
    "BoardGenerator",
    "generate_board",
    "get_generator",
    "remove_tile_pair",
    "shuffle_board",
    "undo_move",
    "create_game_state",
    "select_tile",
    "shuffle_game",
    "undo_game",
    "hint_game",
    "elapsed_seconds",
    "GameRegistry",
    "get_registry",
]
