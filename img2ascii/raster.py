from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

import numpy as np

from .errors import BoundsError, RasterAllocationError


@dataclass(frozen=True, eq=False)
class Raster:
    """Row-major 8-bit grayscale buffer shared by the ingest and render stages."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def create(cls, width: int, height: int, fill: int = 0) -> "Raster":
        """Allocate a raster of the given size with every sample set to `fill`."""
        if width < 0 or height < 0:
            raise ValueError("Raster dimensions must not be negative")
        check_sample(fill)
        try:
            pixels = np.full((height, width), fill, dtype=np.uint8)
        except MemoryError as exc:
            raise RasterAllocationError(f"Not enough memory for a {width}x{height} raster") from exc
        return cls(pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Raster":
        """Copy a 2-D array of samples in [0, 255] into a new raster."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError("Raster data must be two-dimensional")
        if array.size and (array.min() < 0 or array.max() > 255):
            raise ValueError("Raster samples must be in range [0, 255]")
        try:
            pixels = np.ascontiguousarray(array, dtype=np.uint8).copy()
        except MemoryError as exc:
            raise RasterAllocationError("Not enough memory for raster copy") from exc
        return cls(pixels)

    def validate(self) -> None:
        """Validate the backing store layout."""
        if self.pixels.ndim != 2:
            raise ValueError("Raster pixels must be a 2-D array")
        if self.pixels.dtype != np.uint8:
            raise ValueError("Raster pixels must be uint8")
        if not self.pixels.flags["C_CONTIGUOUS"]:
            raise ValueError("Raster pixels must be row-major contiguous")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> int:
        return self.width * self.height

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.pixels[y, x])

    def set(self, x: int, y: int, value: int) -> int:
        """Replace the sample at (x, y) and return the previous value."""
        self._check(x, y)
        check_sample(value)
        previous = int(self.pixels[y, x])
        self.pixels[y, x] = value
        return previous

    def rows(self) -> List[np.ndarray]:
        """Return one writable view per row, each starting at offset y * width of the buffer."""
        return [self.pixels[y] for y in range(self.height)]

    def __iter__(self) -> Iterator[int]:
        for value in self.pixels.flat:
            yield int(value)

    def is_binary(self) -> bool:
        return not bool(np.any(self.pixels > 1))

    def dump(self) -> str:
        """Return the samples as text, one row per line, followed by the dimensions."""
        lines = [" ".join(str(int(v)) for v in row) for row in self.pixels]
        lines.append(f"width: {self.width}, height: {self.height}")
        return "\n".join(lines) + "\n"

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise BoundsError(f"Indices out of range: ({x}, {y}) for {self.width}x{self.height} raster")


def check_sample(value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"Sample value {value} out of range [0, 255]")
