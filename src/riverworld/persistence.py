"""World persistence: save and load chunk managers as JSON files."""

import json
from datetime import datetime, timezone
from pathlib import Path

import structlog
from pydantic import ValidationError

from .chunks import ChunkManager
from .config import GenerationConfig
from .exceptions import CorruptSaveDataError

logger = structlog.get_logger()

SAVE_FORMAT_VERSION = 1


def save_world(path: Path, manager: ChunkManager) -> None:
    """Write a world to disk.

    Args:
        path: Output path (should end with .json).
        manager: World to save.
    """
    document = manager.serialize()
    document["metadata"] = {
        "version": SAVE_FORMAT_VERSION,
        "chunk_size": manager.chunk_size,
        "saved_at": datetime.now(timezone.utc).isoformat(),
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, separators=(",", ":")))

    logger.info(
        "world_saved",
        path=str(path),
        chunks=manager.chunk_count,
        size_kb=round(path.stat().st_size / 1024, 1),
    )


def load_world(path: Path, config: GenerationConfig | None = None) -> ChunkManager:
    """Load a world saved by save_world.

    Raises:
        FileNotFoundError: If file doesn't exist.
        CorruptSaveDataError: If the file is not a valid world save.
    """
    if not path.exists():
        raise FileNotFoundError(f"World save not found: {path}")

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptSaveDataError(f"Invalid JSON in {path}: {e}") from e

    metadata = document.get("metadata", {}) if isinstance(document, dict) else {}
    if not isinstance(metadata, dict):
        raise CorruptSaveDataError(f"Save metadata must be an object in {path}")

    saved_size = metadata.get("chunk_size")
    if config is None and saved_size is not None:
        try:
            config = GenerationConfig(chunk_size=saved_size)
        except ValidationError as e:
            raise CorruptSaveDataError(f"Invalid chunk_size in {path}: {saved_size!r}") from e

    manager = ChunkManager.deserialize(document, config)
    logger.info("world_loaded", path=str(path), seed=manager.seed, chunks=manager.chunk_count)
    return manager
