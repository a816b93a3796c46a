"""Shared test fixtures for riverworld tests."""

import tempfile
from pathlib import Path

import pytest

from riverworld.chunks import ChunkManager
from riverworld.config import GenerationConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config() -> GenerationConfig:
    """Default 10x10 generation settings."""
    return GenerationConfig()


@pytest.fixture
def busy_config() -> GenerationConfig:
    """Larger chunks with several wide, forking rivers."""
    return GenerationConfig(
        chunk_size=24,
        river_min_width=1,
        river_max_width=3,
        river_sources_min=2,
        river_sources_max=4,
        river_fork_probability=0.3,
        river_turn_probability=0.3,
    )


@pytest.fixture
def manager(config: GenerationConfig) -> ChunkManager:
    """World with seed 42 and only the origin chunk generated."""
    chunk_manager = ChunkManager(42, config)
    chunk_manager.generate_chunk(0, 0)
    return chunk_manager


@pytest.fixture
def open_grid():
    """Walkability predicate for an unbounded, fully open map."""
    return lambda x, y: True


@pytest.fixture
def walled_grid():
    """10x10 open grid with a wall at x=5 except a gap at y=9.

        . . . . . W . . . .
        . . . . . W . . . .
        ...
        . . . . . . . . . .   <- y = 9 gap
    """

    def is_walkable(x: int, y: int) -> bool:
        if not (0 <= x < 10 and 0 <= y < 10):
            return False
        return not (x == 5 and y != 9)

    return is_walkable
