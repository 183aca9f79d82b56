from __future__ import annotations

import os
from typing import Dict, Optional, Set

from ..errors import UnsupportedFileError
from .base import ImageLoader, composite_on_background, luminance
from .jpeg import JpegLoader
from .png import PngHeader, PngLoader, read_png_header

SUPPORTED_EXTENSIONS: Set[str] = {".jpg", ".jpeg", ".png"}


def file_extension(path: str) -> str:
    return os.path.splitext(path)[1].lower()


class ImageLoaderRegistry:
    def __init__(self, loaders: Optional[Dict[str, ImageLoader]] = None) -> None:
        if loaders is None:
            jpeg_loader = JpegLoader()
            loaders = {".jpg": jpeg_loader, ".jpeg": jpeg_loader, ".png": PngLoader()}
        self._loaders = loaders

    @property
    def supported_extensions(self) -> Set[str]:
        return set(self._loaders.keys())

    def loader_for(self, path: str) -> ImageLoader:
        ext = file_extension(path)
        loader = self._loaders.get(ext)
        if not loader:
            raise UnsupportedFileError(path, ext)
        return loader


__all__ = [
    "ImageLoader",
    "ImageLoaderRegistry",
    "JpegLoader",
    "PngHeader",
    "PngLoader",
    "SUPPORTED_EXTENSIONS",
    "composite_on_background",
    "file_extension",
    "luminance",
    "read_png_header",
]
