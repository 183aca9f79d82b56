"""Shared test fixtures."""

from __future__ import annotations

import io
import struct
import zlib
from pathlib import Path
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from img2ascii.raster import Raster


def png_chunk(chunk_type: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def raw_png(width: int, height: int, bit_depth: int, color_type: int, rows, chunks=()) -> bytes:
    """Assemble a PNG from packed scanlines, each stored with filter type 0."""
    ihdr = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, 0)
    scanlines = b"".join(b"\x00" + bytes(row) for row in rows)
    return (
        b"\x89PNG\r\n\x1a\n"
        + png_chunk(b"IHDR", ihdr)
        + b"".join(png_chunk(chunk_type, data) for chunk_type, data in chunks)
        + png_chunk(b"IDAT", zlib.compress(scanlines))
        + png_chunk(b"IEND", b"")
    )


def insert_before_idat(png: bytes, chunk: bytes) -> bytes:
    offset = png.index(b"IDAT") - 4
    return png[:offset] + chunk + png[offset:]


def encode_image(img: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt, **params)
    return buf.getvalue()


def raster_of(rows) -> Raster:
    return Raster.from_array(np.array(rows, dtype=np.uint8))


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    def write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return write


@pytest.fixture
def write_image(write_file) -> Callable[..., Path]:
    def write(name: str, img: Image.Image, fmt: str, **params) -> Path:
        return write_file(name, encode_image(img, fmt, **params))

    return write


@pytest.fixture
def transparent_palette_png() -> bytes:
    img = Image.new("P", (2, 2), 0)
    img.putpalette([0, 0, 0, 255, 0, 0])
    return encode_image(img, "PNG", transparency=0)
