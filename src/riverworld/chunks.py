"""Sparse chunk storage with seam-consistent expansion."""

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
import structlog
from numpy.typing import NDArray
from pydantic import BaseModel, Field, ValidationError

from .config import GenerationConfig
from .exceptions import CorruptSaveDataError, UnknownChunkError
from .generator import IncomingBoundaries, WorldGenerator
from .tile_types import TileType
from .types import Direction, EdgeBoundaries, WorldBounds

logger = structlog.get_logger()


def chunk_coords(x: int, y: int, size: int) -> tuple[int, int]:
    """Convert world tile coordinates to chunk coordinates."""
    return (x // size, y // size)


def world_coords(
    chunk_x: int, chunk_y: int, local_x: int, local_y: int, size: int
) -> tuple[int, int]:
    """Convert chunk + local offset to world tile coordinates."""
    return (chunk_x * size + local_x, chunk_y * size + local_y)


def local_coords(x: int, y: int, size: int) -> tuple[int, int]:
    """Convert world tile coordinates to coordinates within a chunk."""
    return (x % size, y % size)


@dataclass(frozen=True)
class Chunk:
    """A generated square region of the world. Never mutated once created."""

    chunk_x: int
    chunk_y: int
    tiles: NDArray[np.uint8]  # Shape: (size, size), indexed [y, x]
    edge_boundaries: EdgeBoundaries

    @property
    def size(self) -> int:
        return self.tiles.shape[0]

    def tile_at(self, local_x: int, local_y: int) -> TileType:
        return TileType(int(self.tiles[local_y, local_x]))


class SavedChunk(BaseModel):
    """Persisted form of a chunk."""

    x: int
    y: int
    tiles: str
    edge_boundaries: EdgeBoundaries = Field(
        default_factory=EdgeBoundaries, alias="edgeBoundaries"
    )


class SavedWorld(BaseModel):
    """Persisted form of a whole world."""

    seed: int
    chunks: list[SavedChunk] = []


class ChunkManager:
    """Owns every generated chunk of one world.

    Chunks are created exactly once, on the first request for their
    coordinate; later requests return the stored chunk.
    """

    def __init__(self, seed: int, config: GenerationConfig | None = None):
        self.seed = seed
        self.config = config or GenerationConfig()
        self.generator = WorldGenerator(seed, self.config)
        self._chunks: dict[tuple[int, int], Chunk] = {}

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def get_chunk(self, chunk_x: int, chunk_y: int) -> Chunk | None:
        return self._chunks.get((chunk_x, chunk_y))

    def has_chunk(self, chunk_x: int, chunk_y: int) -> bool:
        return (chunk_x, chunk_y) in self._chunks

    def get_all_chunks(self) -> list[Chunk]:
        return list(self._chunks.values())

    def generate_chunk(
        self,
        chunk_x: int,
        chunk_y: int,
        incoming: IncomingBoundaries | None = None,
    ) -> Chunk:
        """Return the chunk at a coordinate, generating it if needed.

        Inbound crossings are ignored when the chunk already exists.
        """
        key = (chunk_x, chunk_y)
        existing = self._chunks.get(key)
        if existing is not None:
            return existing

        data = self.generator.generate_chunk(chunk_x, chunk_y, incoming)
        data.tiles.setflags(write=False)
        chunk = Chunk(
            chunk_x=chunk_x,
            chunk_y=chunk_y,
            tiles=data.tiles,
            edge_boundaries=data.edge_boundaries,
        )
        self._chunks[key] = chunk

        logger.info(
            "chunk_generated",
            chunk_x=chunk_x,
            chunk_y=chunk_y,
            seeded_from_neighbor=bool(incoming),
            exits=chunk.edge_boundaries.total(),
        )
        return chunk

    def expand_chunk(self, chunk_x: int, chunk_y: int, direction: Direction) -> Chunk:
        """Generate the neighbor of an existing chunk, continuing its rivers.

        The source's outbound crossings on ``direction`` become the new
        chunk's inbound crossings on the opposite edge.

        Raises:
            UnknownChunkError: If the source chunk was never generated.
        """
        source = self.get_chunk(chunk_x, chunk_y)
        if source is None:
            raise UnknownChunkError(chunk_x, chunk_y)

        dx, dy = direction.delta
        incoming = {direction.opposite: source.edge_boundaries.for_edge(direction)}
        return self.generate_chunk(chunk_x + dx, chunk_y + dy, incoming)

    def expand_world(self, direction: Direction) -> list[Chunk]:
        """Expand every chunk on the world's outer edge in ``direction``.

        Returns:
            The neighbor chunks, one per edge chunk, ordered along the edge.
            Empty if no chunk has been generated yet.
        """
        chunks = self.get_all_chunks()
        if not chunks:
            return []

        if direction == Direction.NORTH:
            edge_y = min(c.chunk_y for c in chunks)
            edge = [c for c in chunks if c.chunk_y == edge_y]
        elif direction == Direction.SOUTH:
            edge_y = max(c.chunk_y for c in chunks)
            edge = [c for c in chunks if c.chunk_y == edge_y]
        elif direction == Direction.EAST:
            edge_x = max(c.chunk_x for c in chunks)
            edge = [c for c in chunks if c.chunk_x == edge_x]
        else:
            edge_x = min(c.chunk_x for c in chunks)
            edge = [c for c in chunks if c.chunk_x == edge_x]

        edge.sort(key=lambda c: (c.chunk_x, c.chunk_y))
        return [self.expand_chunk(c.chunk_x, c.chunk_y, direction) for c in edge]

    def get_world_bounds(self) -> WorldBounds:
        """Tile-space rectangle covering all generated chunks."""
        if not self._chunks:
            return WorldBounds()

        size = self.chunk_size
        chunk_xs = [cx for cx, _ in self._chunks]
        chunk_ys = [cy for _, cy in self._chunks]
        return WorldBounds(
            min_x=min(chunk_xs) * size,
            max_x=(max(chunk_xs) + 1) * size - 1,
            min_y=min(chunk_ys) * size,
            max_y=(max(chunk_ys) + 1) * size - 1,
        )

    def get_tile(self, x: int, y: int) -> TileType | None:
        """Tile at world coordinates, or None outside generated chunks."""
        size = self.chunk_size
        chunk = self._chunks.get(chunk_coords(x, y, size))
        if chunk is None:
            return None
        local_x, local_y = local_coords(x, y, size)
        return chunk.tile_at(local_x, local_y)

    def is_walkable(self, x: int, y: int) -> bool:
        """Terrain-only walkability: generated and not water."""
        tile = self.get_tile(x, y)
        return tile is not None and tile.walkable

    def walkability(self, is_free: Callable[[int, int], bool]) -> Callable[[int, int], bool]:
        """Combine terrain walkability with a caller's occupancy check."""

        def predicate(x: int, y: int) -> bool:
            return self.is_walkable(x, y) and is_free(x, y)

        return predicate

    def serialize(self) -> dict[str, Any]:
        """Persistable form: seed plus each chunk's compressed tiles."""
        return {
            "seed": self.seed,
            "chunks": [
                {
                    "x": chunk.chunk_x,
                    "y": chunk.chunk_y,
                    "tiles": self.generator.compress_tiles(chunk.tiles),
                    "edgeBoundaries": chunk.edge_boundaries.to_json(),
                }
                for chunk in self._chunks.values()
            ],
        }

    @classmethod
    def deserialize(
        cls, data: dict[str, Any], config: GenerationConfig | None = None
    ) -> "ChunkManager":
        """Rebuild a manager from serialize() output.

        Tiles are restored verbatim; nothing is regenerated.

        Raises:
            CorruptSaveDataError: If the document or any tile string is invalid.
        """
        try:
            saved = SavedWorld.model_validate(data)
        except ValidationError as e:
            raise CorruptSaveDataError(f"Invalid world save: {e}") from e

        manager = cls(saved.seed, config)
        size = manager.chunk_size
        for saved_chunk in saved.chunks:
            key = (saved_chunk.x, saved_chunk.y)
            if key in manager._chunks:
                raise CorruptSaveDataError(f"Duplicate chunk {key} in save data")
            tiles = manager.generator.decompress_tiles(saved_chunk.tiles, size)
            tiles.setflags(write=False)
            manager._chunks[key] = Chunk(
                chunk_x=saved_chunk.x,
                chunk_y=saved_chunk.y,
                tiles=tiles,
                edge_boundaries=saved_chunk.edge_boundaries,
            )

        logger.info("world_deserialized", seed=saved.seed, chunks=manager.chunk_count)
        return manager
