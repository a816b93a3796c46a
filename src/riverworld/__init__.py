"""Chunked procedural river terrain and grid pathfinding."""

from .chunks import (
    Chunk,
    ChunkManager,
    chunk_coords,
    local_coords,
    world_coords,
)
from .config import GenerationConfig, WorldConfig, load_config
from .encoding import compress_tiles, decompress_tiles
from .exceptions import CorruptSaveDataError, UnknownChunkError, WorldError
from .generator import ChunkData, WorldGenerator
from .pathfinding import (
    find_nearest_orthogonal_position,
    find_path,
    manhattan_distance,
)
from .persistence import load_world, save_world
from .rng import SeededRandom
from .tile_types import TileType
from .types import (
    BoundaryCrossing,
    Direction,
    EdgeBoundaries,
    Position,
    WorldBounds,
)

__all__ = [
    # Types
    "BoundaryCrossing",
    "Direction",
    "EdgeBoundaries",
    "Position",
    "TileType",
    "WorldBounds",
    # Generation
    "ChunkData",
    "SeededRandom",
    "WorldGenerator",
    "compress_tiles",
    "decompress_tiles",
    # Chunks
    "Chunk",
    "ChunkManager",
    "chunk_coords",
    "local_coords",
    "world_coords",
    # Pathfinding
    "find_path",
    "find_nearest_orthogonal_position",
    "manhattan_distance",
    # Config
    "GenerationConfig",
    "WorldConfig",
    "load_config",
    # Persistence
    "load_world",
    "save_world",
    # Exceptions
    "WorldError",
    "UnknownChunkError",
    "CorruptSaveDataError",
]
