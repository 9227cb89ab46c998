"""Tests for board mutations."""
import random
from collections import Counter

import pytest

from solitaire.core import mutator as mutator_module
from solitaire.core.generator import BoardGenerator
from solitaire.core.mutator import count_remaining, remove_tile_pair, shuffle_board, undo_move


@pytest.fixture(scope="module")
def generated():
    """A solvable pyramid board with its solution."""
    return BoardGenerator().generate("pyramid", rng=random.Random(21))


@pytest.fixture
def partly_cleared(generated):
    """The pyramid board after the first ten solution pairs."""
    tiles = generated.board.tiles
    for tile1_id, tile2_id in generated.solution[:10]:
        tiles = remove_tile_pair(tiles, tile1_id, tile2_id)
    return generated.board.with_tiles(tiles)


def active_types(tiles):
    return Counter(t.type_id for t in tiles if not t.is_removed)


class TestRemoveTilePair:
    """Test cases for remove_tile_pair."""

    def test_marks_both_removed(self, generated):
        tiles = generated.board.tiles
        tile1_id, tile2_id = generated.solution[0]

        result = remove_tile_pair(tiles, tile1_id, tile2_id)

        removed = {t.id for t in result if t.is_removed}
        assert removed == {tile1_id, tile2_id}
        assert count_remaining(result) == len(tiles) - 2

    def test_does_not_modify_input(self, generated):
        tiles = generated.board.tiles
        remove_tile_pair(tiles, *generated.solution[0])
        assert not any(t.is_removed for t in tiles)

    def test_is_idempotent(self, generated):
        pair = generated.solution[0]
        once = remove_tile_pair(generated.board.tiles, *pair)
        assert remove_tile_pair(once, *pair) == once

    def test_unknown_ids_are_ignored(self, generated):
        tiles = generated.board.tiles
        assert remove_tile_pair(tiles, "nope-1", "nope-2") == tiles


class TestShuffleBoard:
    """Test cases for shuffle_board."""

    def test_preserves_ids_positions_and_types(self, partly_cleared):
        result = shuffle_board(partly_cleared, rng=random.Random(1))
        before = partly_cleared.tiles
        after = result.board.tiles

        assert [t.id for t in after] == [t.id for t in before]
        assert [t.position for t in after] == [t.position for t in before]
        assert [t.is_removed for t in after] == [t.is_removed for t in before]
        assert active_types(after) == active_types(before)

    def test_removed_tiles_untouched(self, partly_cleared):
        result = shuffle_board(partly_cleared, rng=random.Random(2))
        before = {t.id: t for t in partly_cleared.tiles if t.is_removed}
        after = {t.id: t for t in result.board.tiles if t.is_removed}
        assert after == before

    def test_solvable_shuffle_is_separated_and_clears(self, partly_cleared, replay):
        results = [shuffle_board(partly_cleared, rng=random.Random(seed)) for seed in range(5)]
        solvable = [r for r in results if r.solvable]
        assert solvable

        for result in solvable:
            assert len(result.solution) == count_remaining(partly_cleared.tiles) // 2
            for tile1_id, tile2_id in result.solution:
                a = result.board.get_tile(tile1_id)
                b = result.board.get_tile(tile2_id)
                assert abs(a.y - b.y) >= 1 or abs(a.z - b.z) >= 1
            replay(result.board.tiles, result.solution)

    def test_same_seed_same_shuffle(self, partly_cleared):
        first = shuffle_board(partly_cleared, rng=random.Random(7))
        second = shuffle_board(partly_cleared, rng=random.Random(7))
        assert first.board.tiles == second.board.tiles

    def test_fallback_permutes_types(self, partly_cleared, monkeypatch):
        monkeypatch.setattr(mutator_module, "construct_placement", lambda *args, **kwargs: None)

        result = shuffle_board(partly_cleared, rng=random.Random(3), max_attempts=4)

        assert not result.solvable
        assert result.attempts == 4
        assert result.solution == []
        assert active_types(result.board.tiles) == active_types(partly_cleared.tiles)

    def test_unpairable_types_fall_back(self, generated):
        # A lone season and a lone flower cannot be paired with anything
        tiles = [t.with_type("wind-east") for t in generated.board.tiles]
        tiles[0] = tiles[0].with_type("season-spring")
        tiles[1] = tiles[1].with_type("flower-plum")
        board = generated.board.with_tiles(tuple(tiles))

        result = shuffle_board(board, rng=random.Random(0))

        assert not result.solvable
        assert result.solution == []
        assert active_types(result.board.tiles) == active_types(board.tiles)

    def test_empty_board(self, generated):
        tiles = tuple(t.removed() for t in generated.board.tiles)
        board = generated.board.with_tiles(tiles)

        result = shuffle_board(board, rng=random.Random(0))

        assert result.solvable
        assert result.attempts == 0
        assert result.board.tiles == tiles


class TestUndoMove:
    """Test cases for undo_move."""

    def test_restores_previous_snapshot(self, generated):
        previous = generated.board.tiles
        current = remove_tile_pair(previous, *generated.solution[0])
        assert undo_move(current, previous) == previous
