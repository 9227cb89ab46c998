"""Layout catalog: static board shapes as 3-D grid positions."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

MAX_POSITIONS = 144
MIN_POSITIONS = 4


@dataclass(frozen=True)
class LayoutPosition:
    """A grid cell. Half-integer coordinates center a tile between cells."""
    x: float
    y: float
    z: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class Layout:
    """A named, immutable board shape."""
    id: str
    name: str
    description: str
    positions: Tuple[LayoutPosition, ...]

    @property
    def tile_count(self) -> int:
        return len(self.positions)

    def to_dict(self, include_positions: bool = True) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tile_count": self.tile_count,
        }
        if include_positions:
            data["positions"] = [p.to_dict() for p in self.positions]
        return data


def _row(y: float, start_x: float, count: int, z: float = 0) -> List[LayoutPosition]:
    return [LayoutPosition(start_x + i, y, z) for i in range(count)]


def _rect(x0: float, y0: float, width: int, height: int, z: float) -> List[LayoutPosition]:
    return [
        LayoutPosition(x0 + dx, y0 + dy, z)
        for dy in range(height)
        for dx in range(width)
    ]


def generate_turtle_positions() -> Tuple[LayoutPosition, ...]:
    """Classic turtle: wide shell with wings, narrowing layers and a cap."""
    positions: List[LayoutPosition] = []

    # Layer 0: shell rows of varying width
    for y, (start_x, count) in enumerate([(1, 12), (3, 8), (2, 10), (1, 12), (1, 12), (2, 10), (3, 8), (1, 12)]):
        positions += _row(y, start_x, count)

    # Head and tail sit between rows 3 and 4
    positions.append(LayoutPosition(0, 3.5, 0))
    positions.append(LayoutPosition(13, 3.5, 0))
    positions.append(LayoutPosition(14, 3.5, 0))

    positions += _rect(4, 1, 6, 6, 1)
    positions += _rect(5, 2, 4, 4, 2)
    positions += _rect(6, 3, 2, 2, 3)

    # Cap
    positions.append(LayoutPosition(6.5, 3.5, 4))

    return tuple(positions)


def generate_pyramid_positions() -> Tuple[LayoutPosition, ...]:
    """Three stepped rectangular layers."""
    positions: List[LayoutPosition] = []
    positions += _rect(0, 0, 10, 8, 0)
    positions += _rect(1, 1, 8, 6, 1)
    positions += _rect(3, 2, 4, 4, 2)
    return tuple(positions)


def generate_dragon_positions() -> Tuple[LayoutPosition, ...]:
    """S-shaped serpentine body with a raised spine."""
    positions: List[LayoutPosition] = []

    positions += _rect(0, 0, 16, 3, 0)
    positions += _rect(13, 3, 3, 3, 0)
    positions += _rect(0, 6, 16, 3, 0)

    positions += _row(1, 2, 12, z=1)
    positions += _row(7, 2, 12, z=1)
    positions.append(LayoutPosition(14, 4, 1))

    for x in range(4, 11):
        positions.append(LayoutPosition(x, 1, 2))
        positions.append(LayoutPosition(x, 7, 2))

    return tuple(positions)


def generate_fortress_positions() -> Tuple[LayoutPosition, ...]:
    """Rectangular base with corner towers and a central keep."""
    positions: List[LayoutPosition] = []
    towers = [(0, 0), (0, 7), (10, 0), (10, 7)]

    positions += _rect(0, 0, 12, 8, 0)

    for tx, ty in towers:
        positions += _row(ty, tx, 2, z=1)
    positions += _rect(3, 2, 6, 4, 1)

    positions += _rect(4, 3, 4, 2, 2)
    for tx, ty in towers:
        positions.append(LayoutPosition(tx + 0.5, ty, 2))

    positions += _rect(5, 3, 2, 2, 3)

    return tuple(positions)


def generate_bridge_positions() -> Tuple[LayoutPosition, ...]:
    """Long road deck on pillars, with railings and a center tower."""
    positions: List[LayoutPosition] = []

    positions += _rect(0, 2, 18, 4, 0)

    for px in [1, 5, 9, 13, 17]:
        for y in [0, 1, 6, 7]:
            positions.append(LayoutPosition(px, y, 0))

    for x in range(1, 17, 2):
        positions.append(LayoutPosition(x, 2, 1))
        positions.append(LayoutPosition(x, 5, 1))

    for z in [1, 2]:
        positions += _rect(8, 3, 2, 2, z)

    return tuple(positions)


def validate_layout(layout: Layout) -> Tuple[bool, Optional[str]]:
    """
    Validate a layout.

    Args:
        layout: Layout to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    count = layout.tile_count
    if count < MIN_POSITIONS or count > MAX_POSITIONS:
        return False, f"'{layout.id}' has {count} positions (expected {MIN_POSITIONS}-{MAX_POSITIONS})"
    if count % 2 != 0:
        return False, f"'{layout.id}' has an odd number of positions ({count})"
    coords = {(p.x, p.y, p.z) for p in layout.positions}
    if len(coords) != count:
        return False, f"'{layout.id}' has duplicate positions"
    return True, None


def layout_bounds(layout: Layout) -> Dict[str, float]:
    """Extents of a layout, for sizing the board in the presentation layer."""
    xs = [p.x for p in layout.positions]
    ys = [p.y for p in layout.positions]
    zs = [p.z for p in layout.positions]
    return {
        "min_x": min(xs),
        "max_x": max(xs),
        "min_y": min(ys),
        "max_y": max(ys),
        "max_z": max(zs),
    }


def _build_catalog() -> List[Layout]:
    layouts = [
        Layout("turtle", "Turtle", "The classic Mahjong Solitaire layout", generate_turtle_positions()),
        Layout("pyramid", "Pyramid", "A simple stepped pyramid", generate_pyramid_positions()),
        Layout("dragon", "Dragon", "A serpentine dragon shape", generate_dragon_positions()),
        Layout("fortress", "Fortress", "A castle with towers", generate_fortress_positions()),
        Layout("bridge", "Bridge", "A horizontal bridge with arches", generate_bridge_positions()),
    ]
    for layout in layouts:
        is_valid, error = validate_layout(layout)
        if not is_valid:
            raise ValueError(f"Invalid layout: {error}")
    return layouts


LAYOUTS: List[Layout] = _build_catalog()

LAYOUTS_BY_ID: Dict[str, Layout] = {layout.id: layout for layout in LAYOUTS}

DEFAULT_LAYOUT_ID = LAYOUTS[0].id


def get_layout(layout_id: str) -> Optional[Layout]:
    """Look up a layout by id. Returns None for unknown ids."""
    return LAYOUTS_BY_ID.get(layout_id)
