"""Solvable board generator using reverse construction."""
import random
import time
from collections import Counter, defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

import structlog

from ..models.board import GameBoard, GenerationResult, IdPair, TileIdGenerator, TileInstance
from ..models.layouts import LAYOUTS, Layout, LayoutPosition, get_layout
from ..models.tiles import BONUS_TILES, STANDARD_TILES, TileType, match_key
from .accessibility import is_above, is_left_of, is_right_of

logger = structlog.get_logger()

TypePair = Tuple[TileType, TileType]
IndexPair = Tuple[int, int]

FULL_DECK_SIZE = 144


class PlacementGrid:
    """
    Neighborhood index over a fixed set of positions.

    Positions are referred to by index. The above/left/right relations are
    the ones used by the free tile check, precomputed once per board.
    """

    def __init__(self, positions: Sequence[LayoutPosition]):
        self.positions = list(positions)
        count = len(self.positions)
        self.above: List[List[int]] = [[] for _ in range(count)]
        self.below: List[List[int]] = [[] for _ in range(count)]
        self.left: List[List[int]] = [[] for _ in range(count)]
        self.right: List[List[int]] = [[] for _ in range(count)]

        for i, pos in enumerate(self.positions):
            for j, other in enumerate(self.positions):
                if i == j:
                    continue
                if is_above(other, pos):
                    self.above[i].append(j)
                    self.below[j].append(i)
                elif is_left_of(other, pos):
                    self.left[i].append(j)
                elif is_right_of(other, pos):
                    self.right[i].append(j)

    def __len__(self) -> int:
        return len(self.positions)

    def is_placeable(self, i: int, occupied: Set[int], extra: Optional[int] = None) -> bool:
        """Mirrored free check: open from above and on at least one side."""
        def filled(j: int) -> bool:
            return j in occupied or j == extra

        if any(filled(j) for j in self.above[i]):
            return False
        return not (any(filled(j) for j in self.left[i]) and any(filled(j) for j in self.right[i]))

    def is_safe(self, i: int, occupied: Set[int], extra: Optional[int] = None) -> bool:
        """
        Whether filling i keeps every other empty position fillable.

        Positions below i must already be filled, and i must not wall in a
        run of empty cells between itself and another filled cell on the
        same row, since the last cell of such a run can never be placed.
        """
        def filled(j: int) -> bool:
            return j in occupied or j == extra or j == i

        if not all(filled(j) for j in self.below[i]):
            return False
        for side in (self.left, self.right):
            stack = [j for j in side[i] if not filled(j)]
            seen = set(stack)
            while stack:
                k = stack.pop()
                for m in side[k]:
                    if filled(m):
                        return False
                    if m not in seen:
                        seen.add(m)
                        stack.append(m)
        return True

    def is_separated(self, i: int, j: int) -> bool:
        """At least one full row or one full layer apart."""
        a, b = self.positions[i], self.positions[j]
        return abs(a.y - b.y) >= 1 or abs(a.z - b.z) >= 1


def build_type_pool(position_count: int, rng: random.Random) -> List[TileType]:
    """
    Tile types for a board with the given number of positions.

    A full 144 board gets the standard deck: 34 types four times each plus
    the 8 bonus tiles. Smaller boards draw standard types at random in
    groups of four, with a final group of two when needed.
    """
    pool: List[TileType] = []

    if position_count == FULL_DECK_SIZE:
        for tile_type in STANDARD_TILES:
            pool.extend([tile_type] * 4)
        pool.extend(BONUS_TILES)
        return pool

    available = list(STANDARD_TILES)
    while len(pool) < position_count:
        tile_type = available.pop(rng.randrange(len(available)))
        count = 4 if position_count - len(pool) >= 4 else 2
        pool.extend([tile_type] * count)
        if not available:
            available = list(STANDARD_TILES)
    return pool


def pair_types(
    types: Sequence[TileType], rng: random.Random
) -> Tuple[List[TypePair], List[TileType]]:
    """
    Group tile types into matching pairs, in random order.

    Returns:
        Tuple of (pairs, leftovers). Leftovers are types whose match group
        has an odd count and cannot be paired.
    """
    groups: Dict[str, List[TileType]] = defaultdict(list)
    for tile_type in types:
        groups[match_key(tile_type)].append(tile_type)

    pairs: List[TypePair] = []
    leftovers: List[TileType] = []
    for group in groups.values():
        while len(group) >= 2:
            pairs.append((group.pop(), group.pop()))
        leftovers.extend(group)

    rng.shuffle(pairs)
    return pairs, leftovers


def construct_placement(
    grid: PlacementGrid,
    pair_count: int,
    rng: random.Random,
    strict_separation: bool = False,
) -> Optional[List[IndexPair]]:
    """
    Reverse-simulate play: fill the empty board two positions at a time.

    Each chosen position is placeable against everything filled so far plus
    its partner, so removing the pairs in reverse order is always legal in
    the forward game.

    Args:
        grid: Positions to fill.
        pair_count: Number of pairs to place.
        rng: Random source.
        strict_separation: Require every pair to be a row or layer apart.
            Otherwise separated partners are only preferred.

    Returns:
        Index pairs in placement order, or None if the attempt got stuck.
    """
    occupied: Set[int] = set()
    remaining = list(range(len(grid)))
    placement: List[IndexPair] = []

    for _ in range(pair_count):
        placeable = [i for i in remaining if grid.is_placeable(i, occupied)]
        if len(placeable) < 2:
            return None
        rng.shuffle(placeable)

        # Safe positions first, the rest only as a last resort
        safe = [i for i in placeable if grid.is_safe(i, occupied)]
        safe_set = set(safe)
        unsafe = [i for i in placeable if i not in safe_set]
        chosen: Optional[IndexPair] = None

        for first in safe + unsafe:
            partners = [
                j for j in placeable
                if j != first
                and grid.is_placeable(j, occupied, extra=first)
                and grid.is_placeable(first, occupied, extra=j)
            ]
            if strict_separation:
                partners = [j for j in partners if grid.is_separated(first, j)]
            if not partners:
                continue

            pool = [j for j in partners if grid.is_safe(j, occupied, extra=first)] or partners
            separated = [j for j in pool if grid.is_separated(first, j)]
            chosen = (first, rng.choice(separated or pool))
            break

        if chosen is None:
            return None

        placement.append(chosen)
        occupied.update(chosen)
        remaining = [i for i in remaining if i not in occupied]

    return placement


def assign_pair_types(
    placement: Sequence[IndexPair], type_pairs: Sequence[TypePair], rng: random.Random
) -> List[str]:
    """Type id per position index, one matching type pair per placed pair."""
    assignment = [""] * (2 * len(placement))
    for (i, j), (type1, type2) in zip(placement, type_pairs):
        if rng.random() < 0.5:
            type1, type2 = type2, type1
        assignment[i] = type1.id
        assignment[j] = type2.id
    return assignment


def _row_key(pos: LayoutPosition) -> float:
    return round(pos.y, 1)


def _duplicates(type_ids: Sequence[str]) -> int:
    return sum(count - 1 for count in Counter(type_ids).values() if count > 1)


def spread_same_row_types(
    positions: Sequence[LayoutPosition],
    placement: Sequence[IndexPair],
    assignment: List[str],
    max_passes: int = 3,
) -> int:
    """
    Break up rows holding two tiles of the same type.

    A duplicate tile is fixed by exchanging the types of its whole placed
    pair with those of another pair owning a same-layer tile of a different
    type in a different row. Swapping whole pairs leaves the placement
    order, and so the solution, valid. A swap is kept only if no touched
    row gets more duplicates and the touched rows improve overall.

    Args:
        positions: Board positions by index.
        placement: Placed index pairs.
        assignment: Type id per position index; modified in place.
        max_passes: Upper bound on full sweeps.

    Returns:
        Number of swaps made.
    """
    partner: Dict[int, int] = {}
    for i, j in placement:
        partner[i] = j
        partner[j] = i

    rows: Dict[float, List[int]] = defaultdict(list)
    for i, pos in enumerate(positions):
        rows[_row_key(pos)].append(i)

    def row_dups(key: float) -> int:
        return _duplicates([assignment[i] for i in rows[key]])

    def swap(a: int, b: int) -> None:
        pa, pb = partner[a], partner[b]
        assignment[a], assignment[b] = assignment[b], assignment[a]
        assignment[pa], assignment[pb] = assignment[pb], assignment[pa]

    def try_swap(a: int, b: int) -> bool:
        touched = {_row_key(positions[k]) for k in (a, b, partner[a], partner[b])}
        before = {key: row_dups(key) for key in touched}
        swap(a, b)
        after = {key: row_dups(key) for key in touched}
        if all(after[k] <= before[k] for k in touched) and sum(after.values()) < sum(before.values()):
            return True
        swap(a, b)
        return False

    # Top layers first, then row by row
    order = sorted(range(len(positions)), key=lambda k: (-positions[k].z, positions[k].y, positions[k].x))
    swaps = 0

    for _ in range(max_passes):
        improved = False
        for i in order:
            key = _row_key(positions[i])
            if not any(j != i and assignment[j] == assignment[i] for j in rows[key]):
                continue
            for j in order:
                if (
                    positions[j].z != positions[i].z
                    or _row_key(positions[j]) == key
                    or assignment[j] == assignment[i]
                    or j == partner[i]
                ):
                    continue
                if try_swap(i, j):
                    swaps += 1
                    improved = True
                    break
        if not improved:
            break

    return swaps


class BoardGenerator:
    """Generates boards that can always be cleared."""

    MAX_ATTEMPTS = 50
    MAX_REFINE_PASSES = 3

    def __init__(self, max_attempts: Optional[int] = None):
        self.max_attempts = max_attempts or self.MAX_ATTEMPTS

    def generate(
        self,
        layout_id: Optional[str] = None,
        rng: Optional[random.Random] = None,
        id_generator: Optional[TileIdGenerator] = None,
    ) -> GenerationResult:
        """
        Generate a board for a layout.

        Never raises. Unknown layout ids use the first catalog layout. If
        every constructive attempt fails, the board is filled with an
        unconstrained random assignment and the result is marked as not
        solvable.

        Args:
            layout_id: Layout to fill.
            rng: Random source; a fresh one is used if omitted.
            id_generator: Tile id source; a fresh one is used if omitted.

        Returns:
            GenerationResult with the board, solvable flag and solution.
        """
        start_time = time.time()
        rng = rng or random.Random()
        id_generator = id_generator or TileIdGenerator()

        layout = self._resolve_layout(layout_id)
        positions = list(layout.positions)
        tile_ids = [id_generator.next_id() for _ in positions]
        pool = build_type_pool(len(positions), rng)
        grid = PlacementGrid(positions)

        for attempt in range(1, self.max_attempts + 1):
            type_pairs, _ = pair_types(pool, rng)
            placement = construct_placement(grid, len(type_pairs), rng)
            if placement is None:
                continue

            assignment = assign_pair_types(placement, type_pairs, rng)
            swaps = spread_same_row_types(positions, placement, assignment, self.MAX_REFINE_PASSES)
            tiles = self._build_tiles(tile_ids, positions, assignment)
            solution: List[IdPair] = [(tile_ids[i], tile_ids[j]) for i, j in reversed(placement)]

            logger.debug(
                "board generated",
                layout_id=layout.id,
                attempts=attempt,
                row_swaps=swaps,
            )
            return GenerationResult(
                board=GameBoard(tiles=tiles, layout=layout),
                solvable=True,
                attempts=attempt,
                solution=solution,
                generation_time_ms=int((time.time() - start_time) * 1000),
            )

        logger.warning(
            "solvable generation failed, using random assignment",
            layout_id=layout.id,
            attempts=self.max_attempts,
        )
        shuffled = list(pool)
        rng.shuffle(shuffled)
        tiles = self._build_tiles(tile_ids, positions, [t.id for t in shuffled])
        return GenerationResult(
            board=GameBoard(tiles=tiles, layout=layout),
            solvable=False,
            attempts=self.max_attempts,
            generation_time_ms=int((time.time() - start_time) * 1000),
        )

    def _resolve_layout(self, layout_id: Optional[str]) -> Layout:
        layout = get_layout(layout_id) if layout_id else None
        if layout is None:
            if layout_id:
                logger.info("unknown layout, using default", layout_id=layout_id)
            layout = LAYOUTS[0]
        return layout

    @staticmethod
    def _build_tiles(
        tile_ids: Sequence[str], positions: Sequence[LayoutPosition], type_ids: Sequence[str]
    ) -> Tuple[TileInstance, ...]:
        return tuple(
            TileInstance(id=tile_id, type_id=type_id, x=pos.x, y=pos.y, z=pos.z)
            for tile_id, pos, type_id in zip(tile_ids, positions, type_ids)
        )


def generate_board(
    layout_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
    id_generator: Optional[TileIdGenerator] = None,
) -> GameBoard:
    """Generate a board for a layout. Always returns a board."""
    return get_generator().generate(layout_id, rng=rng, id_generator=id_generator).board


# Singleton instance
_generator = None


def get_generator() -> BoardGenerator:
    """Get or create generator singleton instance."""
    global _generator
    if _generator is None:
        from ..config import get_settings
        _generator = BoardGenerator(max_attempts=get_settings().generation_max_attempts)
    return _generator
