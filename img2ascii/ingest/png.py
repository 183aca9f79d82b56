from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Dict, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

from ..errors import DecodeError
from ..raster import Raster
from .base import WHITE, ImageLoader, composite_on_background, luminance

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class ColorType(IntEnum):
    GRAY = 0
    RGB = 2
    PALETTE = 3
    GRAY_ALPHA = 4
    RGBA = 6


VALID_BIT_DEPTHS: Dict[ColorType, Tuple[int, ...]] = {
    ColorType.GRAY: (1, 2, 4, 8, 16),
    ColorType.RGB: (8, 16),
    ColorType.PALETTE: (1, 2, 4, 8),
    ColorType.GRAY_ALPHA: (8, 16),
    ColorType.RGBA: (8, 16),
}


@dataclass(frozen=True)
class PngHeader:
    """IHDR fields plus the ancillary chunks that drive the grayscale transforms."""

    width: int
    height: int
    bit_depth: int
    color_type: ColorType
    background: Optional[bytes] = None
    has_transparency: bool = False

    @property
    def has_alpha(self) -> bool:
        if self.color_type in (ColorType.GRAY_ALPHA, ColorType.RGBA):
            return True
        return self.color_type == ColorType.PALETTE and self.has_transparency


def read_png_header(stream: BinaryIO) -> PngHeader:
    """Read IHDR, bKGD and tRNS from the stream, then rewind it."""
    start = stream.tell()
    try:
        return _parse_chunks(stream)
    finally:
        stream.seek(start)


def _parse_chunks(stream: BinaryIO) -> PngHeader:
    if stream.read(len(PNG_SIGNATURE)) != PNG_SIGNATURE:
        raise DecodeError("Invalid PNG file: bad signature")
    ihdr: Optional[Tuple[int, int, int, int]] = None
    background = None
    has_transparency = False
    while True:
        head = stream.read(8)
        if len(head) < 8:
            raise DecodeError("Invalid PNG file: truncated before image data")
        length, chunk_type = struct.unpack(">I4s", head)
        if chunk_type in (b"IDAT", b"IEND"):
            break
        data = stream.read(length)
        crc = stream.read(4)
        if len(data) < length or len(crc) < 4:
            raise DecodeError(f"Invalid PNG file: truncated {chunk_type.decode('latin-1')} chunk")
        if chunk_type == b"IHDR":
            if length < 13:
                raise DecodeError("Invalid PNG file: short IHDR chunk")
            width, height, bit_depth, color_type = struct.unpack(">IIBB", data[:10])
            ihdr = (width, height, bit_depth, color_type)
        elif chunk_type == b"bKGD":
            background = data
        elif chunk_type == b"tRNS":
            has_transparency = True
    if ihdr is None:
        raise DecodeError("Invalid PNG file: missing IHDR chunk")
    width, height, bit_depth, raw_color_type = ihdr
    try:
        color_type = ColorType(raw_color_type)
    except ValueError:
        raise DecodeError(f"Unsupported PNG color type {raw_color_type}") from None
    if bit_depth not in VALID_BIT_DEPTHS[color_type]:
        raise DecodeError(f"Unsupported bit depth {bit_depth} for PNG color type {color_type.name}")
    return PngHeader(width, height, bit_depth, color_type, background, has_transparency)


def scale_sample(value: int, bit_depth: int) -> int:
    """Scale a sample of the given bit depth to 8 bits (16-bit keeps the high byte)."""
    if bit_depth == 16:
        return value >> 8
    if bit_depth == 8:
        return min(value, 255)
    return min(value, (1 << bit_depth) - 1) * 255 // ((1 << bit_depth) - 1)


class PngLoader(ImageLoader):
    format_name = "PNG"

    def load(self, stream: BinaryIO) -> Raster:
        header = read_png_header(stream)
        logger.debug(
            "PNG %dx%d color type %s, bit depth %d, bKGD %s, tRNS %s",
            header.width,
            header.height,
            header.color_type.name,
            header.bit_depth,
            header.background is not None,
            header.has_transparency,
        )
        with self._open_image(stream) as img:
            gray = self._to_gray(img, header)
        if gray.shape != (header.height, header.width):
            raise DecodeError(f"Decoded PNG size {gray.shape[1]}x{gray.shape[0]} does not match header")
        return self._to_raster(gray)

    def _to_gray(self, img: Image.Image, header: PngHeader) -> np.ndarray:
        color_type = header.color_type
        if color_type == ColorType.GRAY:
            return self._gray(img)
        background = self._background_rgb(img, header)
        if color_type == ColorType.GRAY_ALPHA:
            samples = self._as_array(img if img.mode == "LA" else img.convert("LA"))
            logger.debug("Compositing gray+alpha onto %s", background)
            return composite_on_background(samples[..., 0], samples[..., 1], background[:1])
        if header.has_alpha:
            rgba = self._as_array(img if img.mode == "RGBA" else img.convert("RGBA"))
            logger.debug("Compositing RGBA onto %s", background)
            rgb = composite_on_background(rgba[..., :3], rgba[..., 3], background)
        else:
            rgb = self._as_array(img if img.mode == "RGB" else img.convert("RGB"))
        return luminance(rgb)

    def _gray(self, img: Image.Image) -> np.ndarray:
        if img.mode.startswith("I"):
            wide = self._as_array(img).astype(np.uint32)
            return (wide >> 8).astype(np.uint8)
        if img.mode != "L":
            img = img.convert("L")
        return self._as_array(img)

    @staticmethod
    def _background_rgb(img: Image.Image, header: PngHeader) -> Sequence[int]:
        data = header.background
        if not data:
            return WHITE
        if header.color_type == ColorType.PALETTE:
            index = data[0]
            palette = img.getpalette() or []
            rgb = palette[3 * index : 3 * index + 3]
            if len(rgb) < 3:
                return WHITE
            return tuple(rgb)
        if header.color_type in (ColorType.GRAY, ColorType.GRAY_ALPHA):
            if len(data) < 2:
                return WHITE
            value = scale_sample(int.from_bytes(data[:2], "big"), header.bit_depth)
            return (value, value, value)
        if len(data) < 6:
            return WHITE
        return tuple(
            scale_sample(int.from_bytes(data[i : i + 2], "big"), header.bit_depth) for i in (0, 2, 4)
        )
