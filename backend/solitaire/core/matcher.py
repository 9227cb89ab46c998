"""Match finding and terminal-state checks."""
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.board import IdPair, TileInstance
from ..models.tiles import TileType, get_tile_type, tiles_match
from .accessibility import free_tiles

TilePair = Tuple[TileInstance, TileInstance]


def find_all_matches(tiles: Sequence[TileInstance]) -> List[TilePair]:
    """
    Find every valid matching pair on the board.

    Free tiles are computed once up front, so pair enumeration is O(F^2)
    in the number of free tiles F rather than O(N^2) over the whole board
    with a free check per pair.

    Args:
        tiles: All tiles on the board, removed ones included.

    Returns:
        Matching pairs in discovery order (outer index, then inner index).
    """
    free = free_tiles(tiles)
    types: Dict[str, Optional[TileType]] = {}
    for tile in free:
        if tile.type_id not in types:
            types[tile.type_id] = get_tile_type(tile.type_id)

    matches: List[TilePair] = []
    for i, tile1 in enumerate(free):
        type1 = types[tile1.type_id]
        if type1 is None:
            continue
        for tile2 in free[i + 1:]:
            type2 = types[tile2.type_id]
            if type2 is not None and tiles_match(type1, type2):
                matches.append((tile1, tile2))

    return matches


def check_win(tiles: Sequence[TileInstance]) -> bool:
    """True when every tile has been removed."""
    return all(t.is_removed for t in tiles)


def check_stuck(tiles: Sequence[TileInstance]) -> bool:
    """True when the game is not won and no match is available."""
    if check_win(tiles):
        return False
    return len(find_all_matches(tiles)) == 0


def get_hint(tiles: Sequence[TileInstance]) -> Optional[IdPair]:
    """Ids of the first available match, or None."""
    matches = find_all_matches(tiles)
    if not matches:
        return None
    tile1, tile2 = matches[0]
    return tile1.id, tile2.id
