"""Custom exceptions for the river world."""


class WorldError(Exception):
    """Base exception for world errors."""

    pass


class UnknownChunkError(WorldError):
    """Raised when an operation needs a chunk that was never generated."""

    def __init__(self, chunk_x: int, chunk_y: int):
        super().__init__(f"Unknown source chunk ({chunk_x}, {chunk_y})")
        self.chunk_x = chunk_x
        self.chunk_y = chunk_y


class CorruptSaveDataError(WorldError):
    """Raised when persisted tiles or a save document cannot be decoded."""

    pass
