"""Tests for saving and loading worlds."""

import json

import numpy as np
import pytest

from riverworld.chunks import ChunkManager
from riverworld.config import GenerationConfig
from riverworld.exceptions import CorruptSaveDataError
from riverworld.persistence import SAVE_FORMAT_VERSION, load_world, save_world
from riverworld.types import Direction


class TestSaveWorld:
    def test_writes_document(self, temp_dir, manager: ChunkManager) -> None:
        path = temp_dir / "saves" / "world.json"

        save_world(path, manager)

        document = json.loads(path.read_text())
        assert document["seed"] == 42
        assert len(document["chunks"]) == 1
        assert document["metadata"]["version"] == SAVE_FORMAT_VERSION
        assert document["metadata"]["chunk_size"] == 10


class TestLoadWorld:
    def test_roundtrip(self, temp_dir, manager: ChunkManager) -> None:
        manager.expand_world(Direction.NORTH)
        path = temp_dir / "world.json"
        save_world(path, manager)

        loaded = load_world(path)

        assert loaded.seed == manager.seed
        assert loaded.chunk_count == 2
        for chunk in manager.get_all_chunks():
            other = loaded.get_chunk(chunk.chunk_x, chunk.chunk_y)
            np.testing.assert_array_equal(chunk.tiles, other.tiles)
            assert chunk.edge_boundaries == other.edge_boundaries

    def test_chunk_size_from_metadata(self, temp_dir) -> None:
        manager = ChunkManager(5, GenerationConfig(chunk_size=16))
        manager.generate_chunk(0, 0)
        path = temp_dir / "world.json"
        save_world(path, manager)

        loaded = load_world(path)

        assert loaded.chunk_size == 16
        assert loaded.get_chunk(0, 0).tiles.shape == (16, 16)

    def test_missing_file(self, temp_dir) -> None:
        with pytest.raises(FileNotFoundError):
            load_world(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir) -> None:
        path = temp_dir / "broken.json"
        path.write_text("{not json")
        with pytest.raises(CorruptSaveDataError):
            load_world(path)

    def test_wrong_chunk_size(self, temp_dir, manager: ChunkManager) -> None:
        """Tiles saved at one size cannot be loaded at another."""
        path = temp_dir / "world.json"
        save_world(path, manager)

        with pytest.raises(CorruptSaveDataError):
            load_world(path, GenerationConfig(chunk_size=12))

    def test_metadata_not_an_object(self, temp_dir, manager: ChunkManager) -> None:
        document = manager.serialize()
        document["metadata"] = [1]
        path = temp_dir / "world.json"
        path.write_text(json.dumps(document))

        with pytest.raises(CorruptSaveDataError, match="metadata"):
            load_world(path)

    def test_metadata_chunk_size_out_of_range(self, temp_dir, manager: ChunkManager) -> None:
        document = manager.serialize()
        document["metadata"] = {"chunk_size": 5}
        path = temp_dir / "world.json"
        path.write_text(json.dumps(document))

        with pytest.raises(CorruptSaveDataError, match="chunk_size"):
            load_world(path)

    def test_invalid_utf8(self, temp_dir) -> None:
        path = temp_dir / "binary.json"
        path.write_bytes(b'{"seed": "\xff\xfe"}')

        with pytest.raises(CorruptSaveDataError):
            load_world(path)
