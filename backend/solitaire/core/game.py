"""Game state lifecycle: selection, matching, shuffle, undo and hints.

Each operation takes a GameState and returns a new one.
"""
import random
import time
from dataclasses import replace
from typing import Optional

import structlog

from ..models.board import GameState, TileSnapshot
from ..models.tiles import type_ids_match
from .accessibility import is_free_tile
from .generator import BoardGenerator, get_generator
from .matcher import check_stuck, check_win, get_hint
from .mutator import (
    SHUFFLE_MAX_ATTEMPTS,
    count_remaining,
    remove_tile_pair,
    shuffle_board,
    undo_move,
)

logger = structlog.get_logger()


def create_game_state(
    layout_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
    generator: Optional[BoardGenerator] = None,
) -> GameState:
    """
    Start a new game on a freshly generated board.

    Args:
        layout_id: Layout to play; unknown ids use the default layout.
        rng: Random source for generation.
        generator: Board generator; the shared one if omitted.

    Returns:
        New GameState.
    """
    result = (generator or get_generator()).generate(layout_id, rng=rng)
    tiles = result.board.tiles
    logger.info(
        "game created",
        layout_id=result.board.layout.id,
        tiles=len(tiles),
        solvable=result.solvable,
    )
    return GameState(
        board=result.board,
        tiles_remaining=count_remaining(tiles),
        is_complete=check_win(tiles),
        is_stuck=check_stuck(tiles),
        solvable=result.solvable,
    )


def _with_tiles(state: GameState, tiles: TileSnapshot, **changes) -> GameState:
    """Replace the board tiles and refresh counters and terminal flags."""
    return replace(
        state,
        board=state.board.with_tiles(tiles),
        tiles_remaining=count_remaining(tiles),
        is_complete=check_win(tiles),
        is_stuck=check_stuck(tiles),
        selected_tile_id=None,
        hint_pair=None,
        **changes,
    )


def select_tile(state: GameState, tile_id: str) -> GameState:
    """
    Handle a click on a tile.

    Clicks on unknown, removed or blocked tiles are ignored. Clicking the
    selected tile deselects it. Clicking a tile that matches the selected
    one removes the pair; any other free tile becomes the new selection.
    """
    if state.is_complete:
        return state

    tiles = state.board.tiles
    tile = state.board.get_tile(tile_id)
    if tile is None or not is_free_tile(tile, tiles):
        return state

    if state.selected_tile_id is None:
        return replace(state, selected_tile_id=tile_id)
    if state.selected_tile_id == tile_id:
        return replace(state, selected_tile_id=None)

    selected = state.board.get_tile(state.selected_tile_id)
    if selected is None or selected.is_removed or not type_ids_match(selected.type_id, tile.type_id):
        return replace(state, selected_tile_id=tile_id)

    new_state = _with_tiles(
        state,
        remove_tile_pair(tiles, selected.id, tile.id),
        history=state.history + (tiles,),
        solvable_history=state.solvable_history + (state.solvable,),
        matches_made=state.matches_made + 1,
    )
    if new_state.is_complete:
        logger.info("game complete", layout_id=state.board.layout.id, matches=new_state.matches_made)
    elif new_state.is_stuck:
        logger.info("game stuck", layout_id=state.board.layout.id, remaining=new_state.tiles_remaining)
    return new_state


def shuffle_game(
    state: GameState,
    rng: Optional[random.Random] = None,
    max_attempts: int = SHUFFLE_MAX_ATTEMPTS,
) -> GameState:
    """Shuffle the remaining tiles. The shuffle can be undone."""
    if state.is_complete:
        return state

    result = shuffle_board(state.board, rng=rng, max_attempts=max_attempts)
    return _with_tiles(
        state,
        result.board.tiles,
        history=state.history + (state.board.tiles,),
        solvable_history=state.solvable_history + (state.solvable,),
        solvable=result.solvable,
    )


def undo_game(state: GameState) -> GameState:
    """Restore the board from before the last move or shuffle."""
    if not state.history:
        return state

    previous = state.history[-1]
    tiles = undo_move(state.board.tiles, previous)
    solvable = state.solvable_history[-1] if state.solvable_history else state.solvable

    # A shuffle leaves the remaining count unchanged; only undone matches count
    matches_made = state.matches_made
    if count_remaining(tiles) > state.tiles_remaining:
        matches_made = max(0, matches_made - 1)

    return _with_tiles(
        state,
        tiles,
        history=state.history[:-1],
        solvable_history=state.solvable_history[:-1],
        solvable=solvable,
        matches_made=matches_made,
    )


def hint_game(state: GameState) -> GameState:
    """Store the first available match as the hint pair."""
    return replace(state, hint_pair=get_hint(state.board.tiles))


def elapsed_seconds(state: GameState, now: Optional[float] = None) -> float:
    """Seconds since the game started."""
    return (now if now is not None else time.time()) - state.start_time
