from __future__ import annotations

import logging
import math
from typing import Sequence, Tuple

import numpy as np

from ..raster import Raster

logger = logging.getLogger(__name__)

SOBEL_X = ((-1, 0, 1), (-2, 0, 2), (-1, 0, 1))
SOBEL_Y = ((-1, -2, -1), (0, 0, 0), (1, 2, 1))

EDGE_THRESHOLD = 120.0
NO_EDGE = 0
DIRECTION_STEPS = 254
TWO_PI = 2.0 * math.pi


def round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def convolve(raster: Raster, kernel: Sequence[Sequence[int]]) -> np.ndarray:
    """Correlate a 3x3 kernel over the raster.

    A neighbour that falls outside the raster is replaced by the centre pixel's
    own row or column, not by the nearest edge pixel.
    """
    height, width = raster.height, raster.width
    image = raster.pixels.astype(np.int32)
    ys = np.arange(height)[:, None]
    xs = np.arange(width)[None, :]
    acc = np.zeros((height, width), dtype=np.int32)
    for ky in (-1, 0, 1):
        py = ys + ky
        py = np.where((py < 0) | (py >= height), ys, py)
        for kx in (-1, 0, 1):
            weight = kernel[ky + 1][kx + 1]
            if not weight:
                continue
            px = xs + kx
            px = np.where((px < 0) | (px >= width), xs, px)
            acc += weight * image[py, px]
    return acc


def gradients(raster: Raster) -> Tuple[np.ndarray, np.ndarray]:
    return convolve(raster, SOBEL_X), convolve(raster, SOBEL_Y)


def encode_direction(theta: np.ndarray) -> np.ndarray:
    """Quantize angles in [0, 2pi) to edge codes in [1, 255]."""
    codes = round_half_up(theta * DIRECTION_STEPS / TWO_PI) + 1
    return np.clip(codes, 1, 255).astype(np.uint8)


def decode_direction(codes: np.ndarray) -> np.ndarray:
    """Inverse of encode_direction, in radians."""
    return (codes.astype(np.float64) - 1) / DIRECTION_STEPS * TWO_PI


def sobel_edges(raster: Raster, threshold: float = EDGE_THRESHOLD) -> Raster:
    """Return an edge map: 0 where the gradient magnitude is <= threshold, else the direction code."""
    gx, gy = gradients(raster)
    magnitude = np.sqrt(gx.astype(np.float64) ** 2 + gy.astype(np.float64) ** 2)
    theta = np.arctan2(gy, gx)
    theta = np.where(theta < 0, theta + TWO_PI, theta)
    edges = np.where(magnitude > threshold, encode_direction(theta), NO_EDGE).astype(np.uint8)
    logger.debug(
        "Sobel threshold %.1f marked %d of %d pixels as edges",
        threshold,
        int(np.count_nonzero(edges)),
        raster.size,
    )
    return Raster(edges)
