"""Layout and tile catalog API routes."""
from fastapi import APIRouter, HTTPException

from ...models.schemas import (
    LayoutDetailResponse,
    LayoutListResponse,
    LayoutSummary,
    TileCatalogResponse,
)
from ...models.layouts import LAYOUTS, get_layout, layout_bounds
from ...models.tiles import ALL_TILE_TYPES, TileCategory, get_category_color

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/layouts", response_model=LayoutListResponse)
async def list_layouts() -> LayoutListResponse:
    """List available layouts for the layout selection menu."""
    return LayoutListResponse(
        layouts=[LayoutSummary(**layout.to_dict(include_positions=False)) for layout in LAYOUTS]
    )


@router.get("/layouts/{layout_id}", response_model=LayoutDetailResponse)
async def get_layout_detail(layout_id: str) -> LayoutDetailResponse:
    """
    Get a layout with all of its positions.

    Args:
        layout_id: Layout identifier.

    Returns:
        LayoutDetailResponse with positions and extents.
    """
    layout = get_layout(layout_id)
    if layout is None:
        raise HTTPException(status_code=404, detail=f"Layout not found: {layout_id}")
    return LayoutDetailResponse(**layout.to_dict(), bounds=layout_bounds(layout))


@router.get("/tiles", response_model=TileCatalogResponse)
async def get_tile_catalog() -> TileCatalogResponse:
    """Tile types and category display colors."""
    return TileCatalogResponse(
        tile_types=[t.to_dict() for t in ALL_TILE_TYPES],
        category_colors={c.value: get_category_color(c) for c in TileCategory},
    )
