from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np

from ..raster import Raster

logger = logging.getLogger(__name__)

BRAILLE_BASE = 0x2800
CELL_WIDTH = 2
CELL_HEIGHT = 3

# (dx, dy) of each dot, indexed by its bit in the pattern offset.
DOT_BITS: Tuple[Tuple[int, int], ...] = (
    (0, 0),
    (0, 1),
    (0, 2),
    (1, 0),
    (1, 1),
    (1, 2),
)


def grid_size(width: int, height: int) -> Tuple[int, int]:
    """Return (cells per line, lines) for a raster; partial cells are dropped."""
    cells = len(range(0, width - 1, CELL_WIDTH))
    lines = len(range(0, height - 2, CELL_HEIGHT))
    return cells, lines


def braille_cell(raster: Raster, x: int, y: int) -> str:
    """Pack the 2x3 binary block whose top-left pixel is (x, y) into one Braille glyph."""
    pattern = 0
    for bit, (dx, dy) in enumerate(DOT_BITS):
        pattern |= raster.get(x + dx, y + dy) << bit
    return chr(BRAILLE_BASE + pattern)


def render_braille(raster: Raster) -> str:
    """Render a binary raster as lines of Braille glyphs, each line ending in a newline."""
    if not raster.is_binary():
        raise ValueError("Braille rendering requires a binary raster")
    cells, lines = grid_size(raster.width, raster.height)
    logger.debug("Braille grid %dx%d from %dx%d raster", cells, lines, raster.width, raster.height)
    if lines == 0:
        return ""
    if cells == 0:
        return "\n" * lines
    block = raster.pixels[: lines * CELL_HEIGHT, : cells * CELL_WIDTH].astype(np.uint8)
    block = block.reshape(lines, CELL_HEIGHT, cells, CELL_WIDTH)
    patterns = np.zeros((lines, cells), dtype=np.uint8)
    for bit, (dx, dy) in enumerate(DOT_BITS):
        patterns |= block[:, dy, :, dx] << bit
    out: List[str] = []
    for row in patterns:
        out.append("".join(chr(BRAILLE_BASE + int(p)) for p in row))
        out.append("\n")
    return "".join(out)
