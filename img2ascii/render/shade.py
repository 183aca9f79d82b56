from __future__ import annotations

import logging
import math
from typing import List, Tuple

import numpy as np

from ..raster import Raster, check_sample
from .sobel import NO_EDGE, decode_direction, round_half_up

logger = logging.getLogger(__name__)

ORIENTATION_GLYPHS = ("-", "/", "|", "\\")

# Upper bound (exclusive) of each intensity band and its glyph, darkest first.
SHADE_BANDS: Tuple[Tuple[int, str], ...] = (
    (51, "█"),
    (102, "▓"),
    (153, "▒"),
    (204, "░"),
    (256, " "),
)

SHADE_TABLE = np.array(
    [next(glyph for bound, glyph in SHADE_BANDS if level < bound) for level in range(256)]
)


def shade_glyph(value: int) -> str:
    check_sample(value)
    return str(SHADE_TABLE[value])


def orientation_index(codes: np.ndarray) -> np.ndarray:
    """Map edge codes to the nearest multiple of 45 degrees, folded onto four glyphs."""
    theta = decode_direction(codes)
    return round_half_up(theta / (math.pi / 4)).astype(np.int64) % len(ORIENTATION_GLYPHS)


def orientation_glyph(code: int) -> str:
    index = orientation_index(np.array([code]))[0]
    return ORIENTATION_GLYPHS[int(index)]


def render_shade(raster: Raster, edges: Raster) -> str:
    """Render one glyph per pixel: an orientation stroke on edges, a shading block elsewhere."""
    if (edges.width, edges.height) != (raster.width, raster.height):
        raise ValueError("Edge map must match the raster dimensions")
    glyphs = SHADE_TABLE[raster.pixels]
    is_edge = edges.pixels != NO_EDGE
    if np.any(is_edge):
        strokes = np.array(ORIENTATION_GLYPHS)[orientation_index(edges.pixels[is_edge])]
        glyphs = glyphs.copy()
        glyphs[is_edge] = strokes
    out: List[str] = []
    for row in glyphs:
        out.append("".join(row.tolist()))
        out.append("\n")
    logger.debug("Shade grid %dx%d", raster.width, raster.height)
    return "".join(out)
