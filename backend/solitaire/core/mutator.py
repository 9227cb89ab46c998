"""Board mutations: pair removal, shuffle and undo.

Every operation returns new tiles or a new board; inputs are never modified.
"""
import random
import time
from typing import Dict, List, Optional, Sequence

import structlog

from ..models.board import GameBoard, GenerationResult, IdPair, TileInstance, TileSnapshot
from ..models.tiles import TileType, get_tile_type
from .generator import PlacementGrid, assign_pair_types, construct_placement, pair_types

logger = structlog.get_logger()

SHUFFLE_MAX_ATTEMPTS = 20


def remove_tile_pair(tiles: Sequence[TileInstance], tile1_id: str, tile2_id: str) -> TileSnapshot:
    """
    Mark two tiles as removed.

    Unknown or already removed ids are ignored, so calling this twice with
    the same ids gives the same result as calling it once.

    Args:
        tiles: Current tiles.
        tile1_id: First tile id.
        tile2_id: Second tile id.

    Returns:
        New tile tuple.
    """
    targets = {tile1_id, tile2_id}
    return tuple(
        t.removed() if t.id in targets and not t.is_removed else t
        for t in tiles
    )


def shuffle_board(
    board: GameBoard,
    rng: Optional[random.Random] = None,
    max_attempts: int = SHUFFLE_MAX_ATTEMPTS,
) -> GenerationResult:
    """
    Reassign the types of the remaining tiles across their positions.

    Tiles keep their ids and positions; removed tiles are untouched. The
    same reverse construction as board generation is used, with every pair
    forced at least a row or a layer apart so a shuffle never lines up an
    obvious adjacent match. After max_attempts failures the types are
    permuted at random, which gives no solvability guarantee.

    Args:
        board: Board to shuffle.
        rng: Random source.
        max_attempts: Constructive attempts before falling back.

    Returns:
        GenerationResult with the shuffled board.
    """
    start_time = time.time()
    rng = rng or random.Random()

    active = board.active_tiles
    types = [get_tile_type(t.type_id) for t in active]
    known_types: List[TileType] = [t for t in types if t is not None]

    if not active:
        return GenerationResult(board=board, solvable=True, attempts=0)

    attempts = 0
    if len(known_types) == len(active):
        grid = PlacementGrid([t.position for t in active])

        for attempt in range(1, max_attempts + 1):
            attempts = attempt
            type_pairs, leftovers = pair_types(known_types, rng)
            if leftovers:
                break
            placement = construct_placement(grid, len(type_pairs), rng, strict_separation=True)
            if placement is None:
                continue

            assignment = assign_pair_types(placement, type_pairs, rng)
            shuffled = dict(zip((t.id for t in active), assignment))
            solution: List[IdPair] = [(active[i].id, active[j].id) for i, j in reversed(placement)]
            return GenerationResult(
                board=board.with_tiles(_retype(board.tiles, shuffled)),
                solvable=True,
                attempts=attempt,
                solution=solution,
                generation_time_ms=int((time.time() - start_time) * 1000),
            )

    logger.warning(
        "solvable shuffle failed, using random permutation",
        layout_id=board.layout.id,
        remaining=len(active),
        attempts=attempts,
    )
    type_ids = [t.type_id for t in active]
    rng.shuffle(type_ids)
    shuffled = dict(zip((t.id for t in active), type_ids))
    return GenerationResult(
        board=board.with_tiles(_retype(board.tiles, shuffled)),
        solvable=False,
        attempts=attempts,
        generation_time_ms=int((time.time() - start_time) * 1000),
    )


def _retype(tiles: Sequence[TileInstance], type_by_id: Dict[str, str]) -> TileSnapshot:
    return tuple(
        t.with_type(type_by_id[t.id]) if t.id in type_by_id else t
        for t in tiles
    )


def undo_move(current: Sequence[TileInstance], previous: TileSnapshot) -> TileSnapshot:
    """Restore the previous snapshot. The caller owns the history stack."""
    return previous


def count_remaining(tiles: Sequence[TileInstance]) -> int:
    return sum(1 for t in tiles if not t.is_removed)