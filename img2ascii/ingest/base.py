from __future__ import annotations

import contextlib
from typing import BinaryIO, Iterator, Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, RasterAllocationError
from ..raster import Raster

# BT.709 luma weights scaled to integers; they sum to exactly LUMA_SCALE.
LUMA_WEIGHTS = (2126, 7152, 722)
LUMA_SCALE = 10000

WHITE = (255, 255, 255)

DECODER_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Convert an (h, w, 3) RGB array to BT.709 luma, truncated to 8 bits."""
    channels = rgb.astype(np.uint32)
    red_w, green_w, blue_w = LUMA_WEIGHTS
    total = channels[..., 0] * red_w + channels[..., 1] * green_w + channels[..., 2] * blue_w
    return (total // LUMA_SCALE).astype(np.uint8)


def composite_on_background(samples: np.ndarray, alpha: np.ndarray, background: Sequence[int]) -> np.ndarray:
    """Blend samples over an opaque background; `samples` is (h, w, c) or (h, w)."""
    fg = samples.astype(np.uint32)
    a = alpha.astype(np.uint32)
    if fg.ndim == 3:
        a = a[..., None]
        bg = np.asarray(background, dtype=np.uint32).reshape(1, 1, -1)
    else:
        bg = np.uint32(background[0])
    out = (fg * a + bg * (255 - a) + 127) // 255
    return out.astype(np.uint8)


class ImageLoader:
    """Decode one image format from an open binary stream into a grayscale raster."""

    format_name = ""

    def load(self, stream: BinaryIO) -> Raster:
        raise NotImplementedError

    @contextlib.contextmanager
    def _open_image(self, stream: BinaryIO) -> Iterator[Image.Image]:
        try:
            img = Image.open(stream, formats=[self.format_name])
        except DECODER_ERRORS as exc:
            raise DecodeError(f"Invalid {self.format_name} file: {exc}") from exc
        with img:
            try:
                img.load()
            except DECODER_ERRORS as exc:
                raise DecodeError(f"Failed to decode {self.format_name} data: {exc}") from exc
            yield img

    @staticmethod
    def _to_raster(gray: np.ndarray) -> Raster:
        height, width = gray.shape
        raster = Raster.create(width, height)
        for row, samples in zip(raster.rows(), gray):
            row[:] = samples
        return raster

    @staticmethod
    def _as_array(img: Image.Image) -> np.ndarray:
        try:
            return np.asarray(img)
        except MemoryError as exc:
            raise RasterAllocationError("Not enough memory for scanline buffer") from exc
