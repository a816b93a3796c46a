"""Core types shared by generation, chunk management and pathfinding."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Chunk edge / expansion direction.

    Coordinate system: +X is East, +Y is South.
    """

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def opposite(self) -> "Direction":
        """The edge facing this one across a chunk seam."""
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        """Chunk coordinate offset of the neighbor in this direction."""
        return DIRECTION_DELTAS[self]

    @property
    def inward(self) -> tuple[int, int]:
        """Flow vector pointing into a chunk from this edge."""
        dx, dy = DIRECTION_DELTAS[self]
        return (-dx, -dy)


DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class Position(BaseModel, frozen=True):
    """Immutable 2D tile coordinate."""

    x: int
    y: int

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __repr__(self) -> str:
        return f"Position(x={self.x}, y={self.y})"


class BoundaryCrossing(BaseModel):
    """Where, how wide, and which way a river leaves a chunk edge.

    Both coordinates are chunk-local. The one running along the edge is
    clamped into the chunk; the other is pinned to the edge row/column.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    x: float
    y: float
    width: int
    dir_x: int | None = Field(default=None, alias="dirX")
    dir_y: int | None = Field(default=None, alias="dirY")

    def position_along(self, edge: Direction) -> float:
        """Coordinate of the crossing measured along the given edge."""
        if edge in (Direction.NORTH, Direction.SOUTH):
            return self.x
        return self.y


class EdgeBoundaries(BaseModel, frozen=True):
    """Outbound river crossings recorded on each edge of a chunk."""

    north: tuple[BoundaryCrossing, ...] = ()
    south: tuple[BoundaryCrossing, ...] = ()
    east: tuple[BoundaryCrossing, ...] = ()
    west: tuple[BoundaryCrossing, ...] = ()

    def for_edge(self, direction: Direction) -> tuple[BoundaryCrossing, ...]:
        """Crossings on the edge facing ``direction``."""
        return getattr(self, direction.value)

    def total(self) -> int:
        """Number of crossings over all four edges."""
        return len(self.north) + len(self.south) + len(self.east) + len(self.west)

    def to_json(self) -> dict[str, list[dict]]:
        """JSON-ready layout using the persisted ``dirX``/``dirY`` keys."""
        return {
            direction.value: [
                crossing.model_dump(by_alias=True, exclude_none=True)
                for crossing in self.for_edge(direction)
            ]
            for direction in (
                Direction.NORTH,
                Direction.SOUTH,
                Direction.EAST,
                Direction.WEST,
            )
        }


class WorldBounds(BaseModel, frozen=True):
    """Inclusive tile-space rectangle covering every generated chunk."""

    min_x: int = 0
    max_x: int = 0
    min_y: int = 0
    max_y: int = 0

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1
