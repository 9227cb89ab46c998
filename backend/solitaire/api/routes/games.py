"""Game session API routes."""
import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ...config import get_settings
from ...models.board import GameState
from ...models.layouts import get_layout
from ...models.schemas import (
    CreateGameRequest,
    GameStateResponse,
    SelectTileRequest,
    ShuffleRequest,
)
from ...core.game import (
    create_game_state,
    elapsed_seconds,
    hint_game,
    select_tile,
    shuffle_game,
    undo_game,
)
from ...core.generator import BoardGenerator
from ...core.sessions import GameRegistry
from ..deps import get_board_generator, get_game_registry

router = APIRouter(prefix="/api/games", tags=["games"])


def _response(game_id: str, state: GameState) -> GameStateResponse:
    return GameStateResponse(
        game_id=game_id,
        elapsed_seconds=elapsed_seconds(state),
        **state.to_dict(),
    )


def _require_game(registry: GameRegistry, game_id: str) -> GameState:
    state = registry.get(game_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")
    return state


@router.post("", response_model=GameStateResponse, status_code=201)
async def create_game(
    request: CreateGameRequest,
    generator: BoardGenerator = Depends(get_board_generator),
    registry: GameRegistry = Depends(get_game_registry),
) -> GameStateResponse:
    """
    Start a new game.

    Args:
        request: CreateGameRequest with layout and optional seed.
        generator: BoardGenerator dependency.
        registry: GameRegistry dependency.

    Returns:
        GameStateResponse for the new game.
    """
    layout_id = request.layout_id or get_settings().default_layout
    if get_layout(layout_id) is None:
        raise HTTPException(status_code=400, detail=f"Unknown layout: {layout_id}")

    state = create_game_state(layout_id, rng=random.Random(request.seed), generator=generator)
    game_id = registry.create(state)
    return _response(game_id, state)


@router.get("/{game_id}", response_model=GameStateResponse)
async def get_game(
    game_id: str,
    registry: GameRegistry = Depends(get_game_registry),
) -> GameStateResponse:
    """Get the current state of a game."""
    return _response(game_id, _require_game(registry, game_id))


@router.delete("/{game_id}", status_code=204)
async def delete_game(
    game_id: str,
    registry: GameRegistry = Depends(get_game_registry),
) -> None:
    """Discard a game."""
    if not registry.delete(game_id):
        raise HTTPException(status_code=404, detail=f"Game not found: {game_id}")


@router.post("/{game_id}/select", response_model=GameStateResponse)
async def select(
    game_id: str,
    request: SelectTileRequest,
    registry: GameRegistry = Depends(get_game_registry),
) -> GameStateResponse:
    """Click a tile: select, deselect, or match with the selected tile."""
    state = select_tile(_require_game(registry, game_id), request.tile_id)
    registry.replace(game_id, state)
    return _response(game_id, state)


@router.post("/{game_id}/shuffle", response_model=GameStateResponse)
async def shuffle(
    game_id: str,
    request: Optional[ShuffleRequest] = None,
    registry: GameRegistry = Depends(get_game_registry),
) -> GameStateResponse:
    """Shuffle the remaining tiles."""
    state = shuffle_game(
        _require_game(registry, game_id),
        rng=random.Random(request.seed if request else None),
        max_attempts=get_settings().shuffle_max_attempts,
    )
    registry.replace(game_id, state)
    return _response(game_id, state)


@router.post("/{game_id}/undo", response_model=GameStateResponse)
async def undo(
    game_id: str,
    registry: GameRegistry = Depends(get_game_registry),
) -> GameStateResponse:
    """Undo the last match or shuffle."""
    state = undo_game(_require_game(registry, game_id))
    registry.replace(game_id, state)
    return _response(game_id, state)


@router.post("/{game_id}/hint", response_model=GameStateResponse)
async def hint(
    game_id: str,
    registry: GameRegistry = Depends(get_game_registry),
) -> GameStateResponse:
    """Highlight an available match."""
    state = hint_game(_require_game(registry, game_id))
    registry.replace(game_id, state)
    return _response(game_id, state)
