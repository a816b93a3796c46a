"""Stochastic river carving for a single chunk.

Rivers are grown by carving cursors that walk across a grass grid, stamping
water as they go. Cursors that leave the chunk are recorded as boundary
crossings so a neighbor generated later can continue the same river.
"""

import math
from collections import deque
from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import GenerationConfig
from .encoding import compress_tiles, decompress_tiles
from .rng import SeededRandom
from .tile_types import TileType
from .types import BoundaryCrossing, Direction, EdgeBoundaries

logger = structlog.get_logger()

CHUNK_SEED_X_FACTOR = 31
CHUNK_SEED_Y_FACTOR = 37

# Origin sources: edge index rolled by the RNG -> edge
_SOURCE_EDGES = (Direction.WEST, Direction.NORTH, Direction.EAST, Direction.SOUTH)

IncomingBoundaries = Mapping[Direction, Sequence[BoundaryCrossing]]


@dataclass
class CarvingCursor:
    """Generation-time state of one growing river strand."""

    x: float
    y: float
    width: int
    dir_x: int
    dir_y: int
    segments: int = 0

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size


@dataclass
class ChunkData:
    """Output of generating one chunk."""

    tiles: NDArray[np.uint8]
    edge_boundaries: EdgeBoundaries


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def rotate_direction(dir_x: int, dir_y: int, angle: float) -> tuple[int, int]:
    """Rotate a direction vector and snap it back onto the integer grid.

    May return (0, 0) for degenerate inputs; callers skip the rotation then.
    """
    cos = math.cos(angle)
    sin = math.sin(angle)
    return (
        _round_half_up(dir_x * cos - dir_y * sin),
        _round_half_up(dir_x * sin + dir_y * cos),
    )


def stamp_water(tiles: NDArray[np.uint8], center_x: int, center_y: int, width: int) -> None:
    """Mark a square of radius width // 2 around a center as water."""
    size = tiles.shape[0]
    half_width = width // 2
    x0 = max(0, center_x - half_width)
    x1 = min(size, center_x + half_width + 1)
    y0 = max(0, center_y - half_width)
    y1 = min(size, center_y + half_width + 1)
    if x0 < x1 and y0 < y1:
        tiles[y0:y1, x0:x1] = TileType.WATER


class WorldGenerator:
    """Deterministic per-chunk terrain synthesis from a base seed."""

    def __init__(self, base_seed: int, config: GenerationConfig | None = None):
        self.base_seed = base_seed
        self.config = config or GenerationConfig()

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    def chunk_seed(self, chunk_x: int, chunk_y: int) -> int:
        """Derive the RNG seed for a chunk.

        Linear in the coordinates, so seeds repeat along some lattices
        (e.g. (37, 0) and (0, 31) share a seed). Kept for save compatibility.
        """
        return (
            self.base_seed
            + chunk_x * CHUNK_SEED_X_FACTOR
            + chunk_y * CHUNK_SEED_Y_FACTOR
        )

    def generate_chunk(
        self,
        chunk_x: int,
        chunk_y: int,
        incoming: IncomingBoundaries | None = None,
    ) -> ChunkData:
        """Carve one chunk's rivers.

        Args:
            chunk_x, chunk_y: Chunk coordinates.
            incoming: Crossings entering this chunk, keyed by the edge they
                enter through. When absent or empty, fresh sources are
                spawned on a random edge.

        Returns:
            ChunkData with the tile grid and outbound crossings.
        """
        config = self.config
        size = config.chunk_size
        rng = SeededRandom(self.chunk_seed(chunk_x, chunk_y))

        tiles = np.full((size, size), TileType.GRASS, dtype=np.uint8)
        exits: dict[Direction, list[BoundaryCrossing]] = {d: [] for d in Direction}

        cursors = deque(self._incoming_cursors(incoming or {}, size))
        if not cursors:
            cursors.extend(self._source_cursors(rng, size))

        max_iterations = size * 10
        iterations = 0

        while cursors and iterations < max_iterations:
            iterations += 1
            cursor = cursors.popleft()

            self._carve_segment(tiles, cursor, rng)
            cursor.segments += 1

            if not cursor.in_bounds(size):
                self._record_exit(cursor, size, exits)
                continue

            if cursor.segments >= 2 and rng.next_bool(config.river_fork_probability):
                fork = self._fork(cursor, rng)
                if fork is not None:
                    cursors.append(fork)

            if rng.next_bool(config.river_turn_probability):
                angle = math.pi / 4 if rng.next_bool() else -math.pi / 4
                new_dir = rotate_direction(cursor.dir_x, cursor.dir_y, angle)
                if new_dir != (0, 0):
                    cursor.dir_x, cursor.dir_y = new_dir

            cursors.append(cursor)

        edge_boundaries = EdgeBoundaries(
            north=tuple(exits[Direction.NORTH]),
            south=tuple(exits[Direction.SOUTH]),
            east=tuple(exits[Direction.EAST]),
            west=tuple(exits[Direction.WEST]),
        )

        logger.debug(
            "chunk_carved",
            chunk_x=chunk_x,
            chunk_y=chunk_y,
            iterations=iterations,
            capped=bool(cursors),
            exits=edge_boundaries.total(),
            water_tiles=int(np.count_nonzero(tiles == TileType.WATER)),
        )

        return ChunkData(tiles=tiles, edge_boundaries=edge_boundaries)

    def _incoming_cursors(
        self, incoming: IncomingBoundaries, size: int
    ) -> list[CarvingCursor]:
        """Spawn one cursor per inbound crossing on its edge."""
        cursors: list[CarvingCursor] = []
        # Edge order fixes the FIFO order, and with it the RNG draw order.
        for edge in (Direction.WEST, Direction.NORTH, Direction.EAST, Direction.SOUTH):
            inward_x, inward_y = edge.inward
            for crossing in incoming.get(edge, ()):
                x, y = self._edge_start(edge, crossing.position_along(edge), size)
                cursors.append(
                    CarvingCursor(
                        x=x,
                        y=y,
                        width=crossing.width,
                        dir_x=crossing.dir_x if crossing.dir_x is not None else inward_x,
                        dir_y=crossing.dir_y if crossing.dir_y is not None else inward_y,
                    )
                )
        return cursors

    def _source_cursors(self, rng: SeededRandom, size: int) -> list[CarvingCursor]:
        """Spawn fresh river sources for a chunk with no inbound rivers."""
        config = self.config
        cursors: list[CarvingCursor] = []
        num_sources = rng.next_int(config.river_sources_min, config.river_sources_max)

        for _ in range(num_sources):
            edge = _SOURCE_EDGES[rng.next_int(0, 3)]
            x, y = self._edge_start(edge, rng.next_int(5, size - 5), size)
            dir_x, dir_y = edge.inward
            cursors.append(
                CarvingCursor(
                    x=x,
                    y=y,
                    width=rng.next_int(config.river_min_width, config.river_max_width),
                    dir_x=dir_x,
                    dir_y=dir_y,
                )
            )
        return cursors

    @staticmethod
    def _edge_start(edge: Direction, along: float, size: int) -> tuple[float, float]:
        if edge == Direction.WEST:
            return (0, along)
        if edge == Direction.NORTH:
            return (along, 0)
        if edge == Direction.EAST:
            return (size - 1, along)
        return (along, size - 1)

    def _carve_segment(
        self, tiles: NDArray[np.uint8], cursor: CarvingCursor, rng: SeededRandom
    ) -> None:
        size = tiles.shape[0]
        meander = self.config.river_meander_amount

        for _ in range(self.config.river_segment_length):
            stamp_water(tiles, math.floor(cursor.x), math.floor(cursor.y), cursor.width)

            offset_x = (rng.next() - 0.5) * meander
            offset_y = (rng.next() - 0.5) * meander
            cursor.x += cursor.dir_x + offset_x
            cursor.y += cursor.dir_y + offset_y

            if not cursor.in_bounds(size):
                break

    @staticmethod
    def _record_exit(
        cursor: CarvingCursor,
        size: int,
        exits: dict[Direction, list[BoundaryCrossing]],
    ) -> None:
        """Record a crossing on every edge the cursor left through."""

        def crossing(x: float, y: float) -> BoundaryCrossing:
            return BoundaryCrossing(
                x=x, y=y, width=cursor.width, dir_x=cursor.dir_x, dir_y=cursor.dir_y
            )

        exit_y = max(0, min(size - 1, cursor.y))
        if cursor.x < 0:
            exits[Direction.WEST].append(crossing(0, exit_y))
        elif cursor.x >= size:
            exits[Direction.EAST].append(crossing(size - 1, exit_y))

        exit_x = max(0, min(size - 1, cursor.x))
        if cursor.y < 0:
            exits[Direction.NORTH].append(crossing(exit_x, 0))
        elif cursor.y >= size:
            exits[Direction.SOUTH].append(crossing(exit_x, size - 1))

    def _fork(self, parent: CarvingCursor, rng: SeededRandom) -> CarvingCursor | None:
        """Roll a sibling cursor branching 90 degrees off the parent."""
        config = self.config
        width = rng.next_int(config.river_min_width, config.river_max_width)
        angle = math.pi / 2 if rng.next_bool() else -math.pi / 2
        dir_x, dir_y = rotate_direction(parent.dir_x, parent.dir_y, angle)
        if (dir_x, dir_y) == (0, 0):
            return None
        return CarvingCursor(x=parent.x, y=parent.y, width=width, dir_x=dir_x, dir_y=dir_y)

    def compress_tiles(self, tiles: NDArray[np.uint8]) -> str:
        return compress_tiles(tiles)

    def decompress_tiles(self, compressed: str, size: int | None = None) -> NDArray[np.uint8]:
        return decompress_tiles(compressed, size if size is not None else self.chunk_size)
