"""Tests for the solvable board generator."""
import random
from collections import Counter

import pytest

from solitaire.core import generator as generator_module
from solitaire.core.accessibility import is_free_tile, is_position_available
from solitaire.core.generator import (
    BoardGenerator,
    PlacementGrid,
    assign_pair_types,
    build_type_pool,
    construct_placement,
    generate_board,
    pair_types,
    spread_same_row_types,
)
from solitaire.core.matcher import check_stuck, find_all_matches
from solitaire.core.mutator import remove_tile_pair
from solitaire.models.board import TileIdGenerator, TileInstance
from solitaire.models.layouts import LAYOUTS, LayoutPosition, get_layout
from solitaire.models.tiles import BONUS_TILES, STANDARD_TILES, get_tile_type, match_key


@pytest.fixture
def generator():
    """Create a generator instance."""
    return BoardGenerator()


class TestTypePool:
    """Test cases for build_type_pool and pair_types."""

    def test_full_deck(self):
        pool = build_type_pool(144, random.Random(1))
        counts = Counter(t.id for t in pool)
        assert len(pool) == 144
        assert all(counts[t.id] == 4 for t in STANDARD_TILES)
        assert all(counts[t.id] == 1 for t in BONUS_TILES)

    @pytest.mark.parametrize("size", [4, 6, 116, 142])
    def test_small_boards_use_standard_groups(self, size):
        pool = build_type_pool(size, random.Random(size))
        counts = Counter(t.id for t in pool)
        assert len(pool) == size
        assert all(t.match_group is None for t in pool)
        assert all(c % 2 == 0 for c in counts.values())

    def test_pairs_match(self):
        pool = build_type_pool(144, random.Random(2))
        pairs, leftovers = pair_types(pool, random.Random(2))
        assert leftovers == []
        assert len(pairs) == 72
        assert all(match_key(a) == match_key(b) for a, b in pairs)

    def test_unpairable_leftovers(self):
        spring = get_tile_type("season-spring")
        east = get_tile_type("wind-east")
        pairs, leftovers = pair_types([spring, east, east], random.Random(0))
        assert pairs == [(east, east)]
        assert leftovers == [spring]


class TestPlacementGrid:
    """Test cases for the precomputed neighborhood index."""

    def test_agrees_with_free_tile_rule(self):
        positions = list(get_layout("turtle").positions)
        grid = PlacementGrid(positions)
        tiles = [
            TileInstance(id=str(i), type_id="circles-1", x=p.x, y=p.y, z=p.z)
            for i, p in enumerate(positions)
        ]
        occupied = set(range(len(positions)))
        for i, tile in enumerate(tiles):
            assert grid.is_placeable(i, occupied) == is_free_tile(tile, tiles)
            assert grid.is_placeable(i, occupied) == is_position_available(positions[i], positions)

    def test_extra_counts_as_filled(self):
        grid = PlacementGrid([LayoutPosition(0, 0, 0), LayoutPosition(1, 0, 0), LayoutPosition(2, 0, 0)])
        assert grid.is_placeable(1, {0})
        assert not grid.is_placeable(1, {0}, extra=2)

    def test_unsafe_to_wall_in_a_gap(self):
        grid = PlacementGrid([LayoutPosition(x, 0, 0) for x in range(4)])
        # Filling 3 while 0 is filled would leave 1 and 2 enclosed
        assert not grid.is_safe(3, {0})
        assert grid.is_safe(1, {0})

    def test_unsafe_before_support(self):
        grid = PlacementGrid([LayoutPosition(0, 0, 0), LayoutPosition(0, 0, 1)])
        assert not grid.is_safe(1, set())
        assert grid.is_safe(1, {0})

    def test_separation(self):
        grid = PlacementGrid([LayoutPosition(0, 0, 0), LayoutPosition(5, 0, 0), LayoutPosition(0, 1, 0), LayoutPosition(3, 0, 1)])
        assert not grid.is_separated(0, 1)
        assert grid.is_separated(0, 2)
        assert grid.is_separated(0, 3)


class TestConstructPlacement:
    """Test cases for reverse construction."""

    def test_covers_every_position_once(self):
        grid = PlacementGrid(get_layout("pyramid").positions)
        placement = construct_placement(grid, 72, random.Random(4))
        assert placement is not None
        flat = [i for pair in placement for i in pair]
        assert sorted(flat) == list(range(144))

    def test_strict_separation(self):
        grid = PlacementGrid(get_layout("pyramid").positions)
        rng = random.Random(11)
        placement = None
        for _ in range(20):
            placement = construct_placement(grid, 72, rng, strict_separation=True)
            if placement is not None:
                break
        assert placement is not None
        assert all(grid.is_separated(i, j) for i, j in placement)

    def test_stuck_returns_none(self):
        # Two stacked positions can never be placed together
        grid = PlacementGrid([LayoutPosition(0, 0, 0), LayoutPosition(0, 0, 1)])
        assert construct_placement(grid, 1, random.Random(0)) is None

    def test_assign_pair_types(self):
        east = get_tile_type("wind-east")
        red = get_tile_type("dragon-red")
        assignment = assign_pair_types([(0, 3), (1, 2)], [(east, east), (red, red)], random.Random(0))
        assert assignment == ["wind-east", "dragon-red", "dragon-red", "wind-east"]


class TestSpreadSameRowTypes:
    """Test cases for same-row refinement."""

    def test_swaps_whole_pairs(self):
        positions = [LayoutPosition(x, y, 0) for y in (0, 2, 4, 6) for x in (0, 3)]
        placement = [(0, 4), (1, 6), (2, 5), (3, 7)]
        assignment = ["A", "A", "B", "B", "A", "B", "A", "B"]

        swaps = spread_same_row_types(positions, placement, assignment)

        assert swaps == 1
        rows = {}
        for i, pos in enumerate(positions):
            rows.setdefault(pos.y, []).append(assignment[i])
        assert all(len(set(types)) == len(types) for types in rows.values())
        assert all(assignment[i] == assignment[j] for i, j in placement)

    def test_nothing_to_fix(self):
        positions = [LayoutPosition(x, y, 0) for y in (0, 2) for x in (0, 3)]
        assignment = ["A", "B", "B", "A"]
        assert spread_same_row_types(positions, [(0, 3), (1, 2)], assignment) == 0
        assert assignment == ["A", "B", "B", "A"]


class TestBoardGenerator:
    """Test cases for BoardGenerator."""

    @pytest.mark.parametrize("layout", LAYOUTS, ids=lambda layout: layout.id)
    def test_generates_solvable_board(self, generator, layout, replay):
        result = generator.generate(layout.id, rng=random.Random(42))

        assert result.solvable
        assert result.attempts >= 1
        tiles = result.board.tiles
        assert len(tiles) == layout.tile_count
        assert len({t.id for t in tiles}) == len(tiles)
        assert [t.position for t in tiles] == list(layout.positions)
        assert not any(t.is_removed for t in tiles)
        assert len(result.solution) == layout.tile_count // 2
        replay(tiles, result.solution)

    def test_full_deck_multiset(self, generator):
        result = generator.generate("turtle", rng=random.Random(3))
        counts = Counter(t.type_id for t in result.board.tiles)
        assert all(counts[t.id] == 4 for t in STANDARD_TILES)
        assert all(counts[t.id] == 1 for t in BONUS_TILES)

    def test_same_seed_same_board(self, generator):
        first = generator.generate("dragon", rng=random.Random(99))
        second = generator.generate("dragon", rng=random.Random(99))
        assert first.board.tiles == second.board.tiles
        assert first.solution == second.solution

    def test_unknown_layout_uses_default(self, generator):
        result = generator.generate("spiral", rng=random.Random(1))
        assert result.board.layout.id == "turtle"

    def test_id_generator(self, generator):
        result = generator.generate("pyramid", rng=random.Random(1), id_generator=TileIdGenerator(prefix="g2"))
        ids = [t.id for t in result.board.tiles]
        assert ids[0] == "g2-1"
        assert ids[-1] == "g2-144"

    def test_fallback_when_construction_fails(self, generator, monkeypatch):
        monkeypatch.setattr(generator_module, "construct_placement", lambda *args, **kwargs: None)
        limited = BoardGenerator(max_attempts=3)

        result = limited.generate("pyramid", rng=random.Random(5))

        assert not result.solvable
        assert result.attempts == 3
        assert result.solution == []
        assert len(result.board.tiles) == 144
        counts = Counter(t.type_id for t in result.board.tiles)
        assert all(counts[t.id] == 4 for t in STANDARD_TILES)

    def test_generate_board_helper(self):
        board = generate_board("bridge", rng=random.Random(8))
        assert board.layout.id == "bridge"
        assert len(board.tiles) == 116


class TestSolvability:
    """
    What the construction guarantees.

    A generated board can always be cleared by removing the recorded
    solution in order. Taking the first available match at every step is
    not guaranteed to clear it: reverse construction fixes one clearing
    order, and greedy play can pair tiles that the solution keeps apart.
    """

    def test_first_match_play_can_get_stuck(self, replay):
        # Each stack hides the tile its top needs
        tiles = (
            TileInstance(id="lone-1", type_id="circles-1", x=0, y=0, z=0),
            TileInstance(id="lone-2", type_id="circles-1", x=3, y=0, z=0),
            TileInstance(id="top-y", type_id="circles-1", x=9, y=0, z=1),
            TileInstance(id="top-x", type_id="bamboo-1", x=6, y=0, z=1),
            TileInstance(id="base-x", type_id="circles-1", x=6, y=0, z=0),
            TileInstance(id="base-y", type_id="bamboo-1", x=9, y=0, z=0),
        )

        first, second = find_all_matches(tiles)[0]
        assert (first.id, second.id) == ("lone-1", "lone-2")
        assert check_stuck(remove_tile_pair(tiles, first.id, second.id))

        replay(tiles, [("lone-1", "top-y"), ("top-x", "base-y"), ("lone-2", "base-x")])

    @pytest.mark.parametrize("layout_id", ["turtle", "dragon"])
    def test_recorded_solution_clears_board(self, generator, layout_id, replay):
        for seed in range(3):
            result = generator.generate(layout_id, rng=random.Random(seed))
            assert result.solvable
            replay(result.board.tiles, result.solution)
