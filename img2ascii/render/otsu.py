from __future__ import annotations

import logging

import numpy as np

from ..raster import Raster

logger = logging.getLogger(__name__)

LEVELS = 256


def histogram(raster: Raster) -> np.ndarray:
    """Count samples per intensity; 256 bins summing to the raster size."""
    return np.bincount(raster.pixels.ravel(), minlength=LEVELS).astype(np.int64)


def otsu_threshold(hist: np.ndarray) -> int:
    """Return the level maximizing between-class variance, ties resolved to the largest level.

    Class 0 holds the levels <= t. Levels where either class is empty are skipped,
    so a single-valued histogram yields 0.
    """
    counts = [int(c) for c in hist]
    total = sum(counts)
    total_mass = sum(i * c for i, c in enumerate(counts))
    w0 = 0
    m0 = 0
    best_variance = 0.0
    threshold = 0
    for level, count in enumerate(counts):
        w0 += count
        m0 += level * count
        w1 = total - w0
        if w0 > 0 and w1 > 0:
            m1 = (total_mass - m0) / w1
            variance = w0 * w1 * (m0 / w0 - m1) ** 2
            if variance >= best_variance:
                best_variance = variance
                threshold = level
    return threshold


def binarize(raster: Raster, threshold: int) -> Raster:
    """Return a new raster holding 1 where the sample exceeds `threshold`, else 0."""
    return Raster((raster.pixels > threshold).astype(np.uint8))


def otsu(raster: Raster) -> Raster:
    threshold = otsu_threshold(histogram(raster))
    logger.debug("Otsu threshold %d for %dx%d raster", threshold, raster.width, raster.height)
    return binarize(raster, threshold)
