"""Tests for the TileType registry."""

import pytest

from riverworld.tile_types import TileType


class TestTileCodes:
    def test_grass_code(self) -> None:
        assert TileType.GRASS.code == "g"

    def test_water_code(self) -> None:
        assert TileType.WATER.code == "w"

    def test_codes_are_unique_letters(self) -> None:
        codes = [tile.code for tile in TileType]
        assert len(set(codes)) == len(codes)
        assert all(len(code) == 1 and code.islower() for code in codes)

    def test_from_code_roundtrip(self) -> None:
        for tile in TileType:
            assert TileType.from_code(tile.code) is tile

    def test_from_unknown_code_raises(self) -> None:
        with pytest.raises(KeyError):
            TileType.from_code("x")


class TestTileWalkability:
    def test_grass_walkable(self) -> None:
        assert TileType.GRASS.walkable

    def test_water_not_walkable(self) -> None:
        assert not TileType.WATER.walkable
