"""Run-length tile encoding for compact chunk persistence."""

import re

import numpy as np
from numpy.typing import NDArray

from .exceptions import CorruptSaveDataError
from .tile_types import TileType

_FALLBACK_CODE = TileType.GRASS.code
_TOKEN_RE = re.compile(r"([a-z])(\d+)")
_STREAM_RE = re.compile(r"(?:[a-z]\d+)+")


def _tile_code(value: int) -> str:
    try:
        return TileType(value).code
    except ValueError:
        return _FALLBACK_CODE


def compress_tiles(tiles: NDArray[np.uint8]) -> str:
    """Run-length encode a square tile grid.

    Flattens the grid row-major and emits ``<code><count>`` tokens with no
    separators, e.g. ``"g12w3g85"``. Unknown tile values are written with
    the grass code.

    Args:
        tiles: 2D uint8 array indexed [y, x].

    Returns:
        RLE string whose counts sum to ``tiles.size``.
    """
    flat = tiles.flatten()
    if len(flat) == 0:
        return ""

    parts: list[str] = []
    current_code = _tile_code(int(flat[0]))
    count = 0

    for value in flat:
        code = _tile_code(int(value))
        if code == current_code:
            count += 1
        else:
            parts.append(f"{current_code}{count}")
            current_code = code
            count = 1

    # Write final run
    parts.append(f"{current_code}{count}")
    return "".join(parts)


def decompress_tiles(data: str, size: int) -> NDArray[np.uint8]:
    """Decode an RLE string produced by compress_tiles.

    Args:
        data: RLE-encoded tile string.
        size: Chunk edge length; the result has shape (size, size).

    Returns:
        2D uint8 tile grid.

    Raises:
        CorruptSaveDataError: If the string is malformed, uses an unknown
            code, or its counts do not sum to size*size.
    """
    expected_size = size * size
    if not _STREAM_RE.fullmatch(data):
        raise CorruptSaveDataError(f"Malformed tile data: {data[:40]!r}")

    result = np.zeros(expected_size, dtype=np.uint8)

    pos = 0
    for match in _TOKEN_RE.finditer(data):
        code, count_text = match.groups()
        try:
            tile = TileType.from_code(code)
        except KeyError:
            raise CorruptSaveDataError(f"Unknown tile code {code!r}") from None
        count = int(count_text)
        if count == 0:
            raise CorruptSaveDataError("Tile run with zero length")
        if pos + count > expected_size:
            raise CorruptSaveDataError(
                f"RLE decode overflow: {pos + count} > {expected_size}"
            )
        result[pos : pos + count] = tile
        pos += count

    if pos != expected_size:
        raise CorruptSaveDataError(
            f"RLE decode size mismatch: got {pos}, expected {expected_size}"
        )

    return result.reshape((size, size))
