from __future__ import annotations

from enum import Enum

from ..raster import Raster
from .braille import braille_cell, render_braille
from .otsu import binarize, histogram, otsu, otsu_threshold
from .shade import render_shade, shade_glyph
from .sobel import EDGE_THRESHOLD, sobel_edges


class RenderMode(str, Enum):
    BRAILLE = "braille"
    SHADE = "shade"


def render(raster: Raster, mode: RenderMode = RenderMode.BRAILLE, edge_threshold: float = EDGE_THRESHOLD) -> str:
    """Run the selected pipeline: Otsu + Braille, or Sobel + shading."""
    if mode == RenderMode.BRAILLE:
        return render_braille(otsu(raster))
    if mode == RenderMode.SHADE:
        return render_shade(raster, sobel_edges(raster, edge_threshold))
    raise ValueError(f"Unknown render mode: {mode}")


__all__ = [
    "EDGE_THRESHOLD",
    "RenderMode",
    "binarize",
    "braille_cell",
    "histogram",
    "otsu",
    "otsu_threshold",
    "render",
    "render_braille",
    "render_shade",
    "shade_glyph",
    "sobel_edges",
]
