"""Terrain tile types and their persistence codes."""

from enum import IntEnum


class TileType(IntEnum):
    """Terrain kinds stored in a chunk's uint8 tile grid."""

    GRASS = 0
    WATER = 1

    @property
    def code(self) -> str:
        """Single-letter code used by the RLE tile codec."""
        return _TILE_CODES[self]

    @property
    def walkable(self) -> bool:
        """Whether movers can stand on this terrain type."""
        return self in _WALKABLE_TYPES

    @classmethod
    def from_code(cls, code: str) -> "TileType":
        """Look up a tile type by its persistence code.

        Raises:
            KeyError: If the code is not registered.
        """
        return _CODE_TILES[code]


_TILE_CODES: dict[TileType, str] = {
    TileType.GRASS: "g",
    TileType.WATER: "w",
}

_CODE_TILES: dict[str, TileType] = {code: tile for tile, code in _TILE_CODES.items()}

# Define sets for O(1) lookup
_WALKABLE_TYPES = frozenset({
    TileType.GRASS,
})
