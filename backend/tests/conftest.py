"""Shared test helpers."""
from typing import List, Sequence, Tuple

import pytest

from solitaire.core.matcher import check_win, find_all_matches
from solitaire.core.mutator import remove_tile_pair
from solitaire.models.board import TileInstance


def replay_solution(
    tiles: Sequence[TileInstance], solution: List[Tuple[str, str]]
) -> Tuple[TileInstance, ...]:
    """Remove pairs in order, asserting each one is an available match."""
    current = tuple(tiles)
    for tile1_id, tile2_id in solution:
        available = {frozenset((a.id, b.id)) for a, b in find_all_matches(current)}
        assert frozenset((tile1_id, tile2_id)) in available
        current = remove_tile_pair(current, tile1_id, tile2_id)
    return current


@pytest.fixture
def replay():
    """Replay a solution and return the final tiles."""
    def _replay(tiles, solution):
        final = replay_solution(tiles, solution)
        assert check_win(final)
        return final
    return _replay
