"""Board generation API routes."""
import random

from fastapi import APIRouter, Depends, HTTPException

from ...models.schemas import GenerateBoardRequest, GenerateBoardResponse
from ...models.layouts import get_layout
from ...core.generator import BoardGenerator
from ..deps import get_board_generator

router = APIRouter(prefix="/api", tags=["boards"])


@router.post("/boards/generate", response_model=GenerateBoardResponse)
async def generate_board(
    request: GenerateBoardRequest,
    generator: BoardGenerator = Depends(get_board_generator),
) -> GenerateBoardResponse:
    """
    Generate a board without starting a game.

    Args:
        request: GenerateBoardRequest with layout and optional seed.
        generator: BoardGenerator dependency.

    Returns:
        GenerateBoardResponse with the board, solvable flag and solution.
    """
    if request.layout_id is not None and get_layout(request.layout_id) is None:
        raise HTTPException(status_code=400, detail=f"Unknown layout: {request.layout_id}")

    result = generator.generate(request.layout_id, rng=random.Random(request.seed))
    return GenerateBoardResponse(**result.to_dict())
