"""Command-line interface for world generation."""

import argparse
import random
import sys
from pathlib import Path

import structlog

from .chunks import ChunkManager
from .config import WorldConfig, find_config, load_config
from .exceptions import WorldError
from .tile_types import TileType
from .types import Direction

_TILE_GLYPHS = {
    TileType.GRASS: ".",
    TileType.WATER: "~",
}


def render_ascii(manager: ChunkManager) -> str:
    """Render the generated world as text, blank where no chunk exists."""
    bounds = manager.get_world_bounds()
    if manager.chunk_count == 0:
        return ""

    lines = []
    for y in range(bounds.min_y, bounds.max_y + 1):
        row = []
        for x in range(bounds.min_x, bounds.max_x + 1):
            tile = manager.get_tile(x, y)
            row.append(" " if tile is None else _TILE_GLYPHS[tile])
        lines.append("".join(row))
    return "\n".join(lines)


def _configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if verbose else 20),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a chunked river world and print it as ASCII"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="World seed (default: config or random)"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Config name or TOML path"
    )
    parser.add_argument(
        "--expand",
        "-e",
        action="append",
        default=[],
        choices=[d.value for d in Direction],
        help="Expand the world edge in a direction (repeatable, applied in order)",
    )
    parser.add_argument(
        "--load", type=str, default=None, help="Load a saved world instead of generating"
    )
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="Write the world save to this path"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Do not print the ASCII map"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to keep --help fast
    from .persistence import load_world, save_world

    config = load_config(find_config(args.config)) if args.config else WorldConfig()

    try:
        if args.load:
            manager = load_world(Path(args.load), config.generation if args.config else None)
        else:
            seed = args.seed if args.seed is not None else config.seed
            if seed is None:
                seed = random.randrange(1_000_000)
            manager = ChunkManager(seed, config.generation)
            manager.generate_chunk(0, 0)

        for direction in args.expand:
            manager.expand_world(Direction(direction))
    except (WorldError, FileNotFoundError) as e:
        logger.error("world_failed", error=str(e))
        return 1

    bounds = manager.get_world_bounds()
    logger.info(
        "world_ready",
        seed=manager.seed,
        chunks=manager.chunk_count,
        width=bounds.width,
        height=bounds.height,
    )

    if not args.quiet:
        print(render_ascii(manager))

    if args.output:
        save_world(Path(args.output), manager)

    return 0


if __name__ == "__main__":
    sys.exit(main())
