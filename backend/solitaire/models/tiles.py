"""Tile catalog: the 42 tile types of a standard Mahjong Solitaire deck."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class TileCategory(str, Enum):
    """Tile category enumeration."""
    CIRCLES = "circles"
    BAMBOO = "bamboo"
    CHARACTERS = "characters"
    WINDS = "winds"
    DRAGONS = "dragons"
    SEASONS = "seasons"
    FLOWERS = "flowers"


@dataclass(frozen=True)
class TileType:
    """A tile design. Bonus tiles carry a match_group shared by the whole group."""
    id: str
    category: TileCategory
    value: Union[int, str]
    symbol: str
    name: str
    match_group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "category": self.category.value,
            "value": self.value,
            "symbol": self.symbol,
            "name": self.name,
            "match_group": self.match_group,
        }


CIRCLE_SYMBOLS = ["①", "②", "③", "④", "⑤", "⑥", "⑦", "⑧", "⑨"]
BAMBOO_SYMBOLS = ["🀐", "🀑", "🀒", "🀓", "🀔", "🀕", "🀖", "🀗", "🀘"]
CHARACTER_SYMBOLS = ["一", "二", "三", "四", "五", "六", "七", "八", "九"]

CIRCLES = [
    TileType(
        id=f"circles-{n}",
        category=TileCategory.CIRCLES,
        value=n,
        symbol=CIRCLE_SYMBOLS[n - 1],
        name=f"{n} Circle{'s' if n > 1 else ''}",
    )
    for n in range(1, 10)
]

BAMBOO = [
    TileType(
        id=f"bamboo-{n}",
        category=TileCategory.BAMBOO,
        value=n,
        symbol=BAMBOO_SYMBOLS[n - 1],
        name=f"{n} Bamboo",
    )
    for n in range(1, 10)
]

CHARACTERS = [
    TileType(
        id=f"characters-{n}",
        category=TileCategory.CHARACTERS,
        value=n,
        symbol=CHARACTER_SYMBOLS[n - 1],
        name=f"{n} Character",
    )
    for n in range(1, 10)
]

WINDS = [
    TileType("wind-east", TileCategory.WINDS, "E", "東", "East Wind"),
    TileType("wind-south", TileCategory.WINDS, "S", "南", "South Wind"),
    TileType("wind-west", TileCategory.WINDS, "W", "西", "West Wind"),
    TileType("wind-north", TileCategory.WINDS, "N", "北", "North Wind"),
]

DRAGONS = [
    TileType("dragon-red", TileCategory.DRAGONS, "R", "中", "Red Dragon"),
    TileType("dragon-green", TileCategory.DRAGONS, "G", "發", "Green Dragon"),
    TileType("dragon-white", TileCategory.DRAGONS, "W", "白", "White Dragon"),
]

# Any season matches any season, any flower matches any flower
SEASONS = [
    TileType("season-spring", TileCategory.SEASONS, 1, "春", "Spring", "seasons"),
    TileType("season-summer", TileCategory.SEASONS, 2, "夏", "Summer", "seasons"),
    TileType("season-autumn", TileCategory.SEASONS, 3, "秋", "Autumn", "seasons"),
    TileType("season-winter", TileCategory.SEASONS, 4, "冬", "Winter", "seasons"),
]

FLOWERS = [
    TileType("flower-plum", TileCategory.FLOWERS, 1, "梅", "Plum", "flowers"),
    TileType("flower-orchid", TileCategory.FLOWERS, 2, "蘭", "Orchid", "flowers"),
    TileType("flower-chrysanthemum", TileCategory.FLOWERS, 3, "菊", "Chrysanthemum", "flowers"),
    TileType("flower-bamboo", TileCategory.FLOWERS, 4, "竹", "Bamboo", "flowers"),
]

# 34 standard designs, used 4 times each in a full deck (136 tiles)
STANDARD_TILES: List[TileType] = CIRCLES + BAMBOO + CHARACTERS + WINDS + DRAGONS

# 8 bonus tiles, used once each
BONUS_TILES: List[TileType] = SEASONS + FLOWERS

ALL_TILE_TYPES: List[TileType] = STANDARD_TILES + BONUS_TILES

TILE_TYPES_BY_ID: Dict[str, TileType] = {t.id: t for t in ALL_TILE_TYPES}

# Display colors, consumed by rendering only
CATEGORY_COLORS = {
    TileCategory.CIRCLES: "#1e40af",     # blue
    TileCategory.BAMBOO: "#15803d",      # green
    TileCategory.CHARACTERS: "#b91c1c",  # red
    TileCategory.WINDS: "#7c3aed",       # purple
    TileCategory.DRAGONS: "#dc2626",     # red
    TileCategory.SEASONS: "#0891b2",     # cyan
    TileCategory.FLOWERS: "#db2777",     # pink
}
DEFAULT_CATEGORY_COLOR = "#374151"


def get_tile_type(type_id: str) -> Optional[TileType]:
    """Look up a tile type by id. Returns None for unknown ids."""
    return TILE_TYPES_BY_ID.get(type_id)


def match_key(tile_type: TileType) -> str:
    """Key shared by all types that are interchangeable for matching."""
    return tile_type.match_group or tile_type.id


def tiles_match(type1: TileType, type2: TileType) -> bool:
    """
    Check whether two tile types match.

    Identical types always match. Bonus tiles also match any other tile
    of the same match group (e.g. Spring and Winter).
    """
    if type1.id == type2.id:
        return True
    return bool(type1.match_group) and type1.match_group == type2.match_group


def type_ids_match(type_id1: str, type_id2: str) -> bool:
    """Match predicate on type ids. Unknown ids never match."""
    type1 = get_tile_type(type_id1)
    type2 = get_tile_type(type_id2)
    if type1 is None or type2 is None:
        return False
    return tiles_match(type1, type2)


def get_category_color(category: TileCategory) -> str:
    """Get display color for a tile category."""
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)
