"""Free tile detection.

A tile is free when nothing lies on top of it and at least one of its
left or right sides is open at its own layer.
"""
from typing import Iterable, List, Sequence

from ..models.board import TileInstance
from ..models.layouts import LayoutPosition

# Coordinates are integers or half-integers; these tolerances treat two
# positions closer than a tile's width as overlapping or adjacent.
OVERLAP_TOLERANCE = 0.9
SIDE_TOLERANCE = 1.1


def is_above(other: LayoutPosition, pos: LayoutPosition) -> bool:
    """Whether other sits on a higher layer overlapping pos."""
    return (
        other.z > pos.z
        and abs(other.x - pos.x) < OVERLAP_TOLERANCE
        and abs(other.y - pos.y) < OVERLAP_TOLERANCE
    )


def is_left_of(other: LayoutPosition, pos: LayoutPosition) -> bool:
    """Whether other touches pos on its left at the same layer."""
    return (
        other.z == pos.z
        and abs(other.y - pos.y) < OVERLAP_TOLERANCE
        and other.x < pos.x
        and pos.x - other.x < SIDE_TOLERANCE
    )


def is_right_of(other: LayoutPosition, pos: LayoutPosition) -> bool:
    """Whether other touches pos on its right at the same layer."""
    return (
        other.z == pos.z
        and abs(other.y - pos.y) < OVERLAP_TOLERANCE
        and other.x > pos.x
        and other.x - pos.x < SIDE_TOLERANCE
    )


def _is_open(pos: LayoutPosition, others: Iterable[LayoutPosition]) -> bool:
    blocked_left = False
    blocked_right = False
    for other in others:
        if is_above(other, pos):
            return False
        if is_left_of(other, pos):
            blocked_left = True
        elif is_right_of(other, pos):
            blocked_right = True
    return not (blocked_left and blocked_right)


def is_free_tile(tile: TileInstance, all_tiles: Iterable[TileInstance]) -> bool:
    """
    Check whether a tile can be selected.

    Args:
        tile: Tile to check.
        all_tiles: Every tile on the board; removed tiles are ignored.

    Returns:
        True if the tile is not removed, not covered from above, and open
        on its left or right side.
    """
    if tile.is_removed:
        return False
    pos = tile.position
    others = (t.position for t in all_tiles if not t.is_removed and t.id != tile.id)
    return _is_open(pos, others)


def free_tiles(tiles: Sequence[TileInstance]) -> List[TileInstance]:
    """Free subset of tiles, in input order."""
    active = [t for t in tiles if not t.is_removed]
    return [t for t in active if is_free_tile(t, active)]


def is_position_available(
    pos: LayoutPosition, occupied: Iterable[LayoutPosition]
) -> bool:
    """
    Placement rule used by reverse construction.

    Same rule as is_free_tile, evaluated against the positions filled so far.
    A position that is placeable here is free in the forward game at the
    moment it is removed, since the forward game removes tiles in reverse
    placement order.
    """
    return _is_open(pos, (o for o in occupied if o != pos))
