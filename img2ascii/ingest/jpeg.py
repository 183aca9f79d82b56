from __future__ import annotations

import logging
from typing import BinaryIO

from ..raster import Raster
from .base import ImageLoader, luminance

logger = logging.getLogger(__name__)


class JpegLoader(ImageLoader):
    format_name = "JPEG"

    def load(self, stream: BinaryIO) -> Raster:
        with self._open_image(stream) as img:
            logger.debug("Decoded JPEG %dx%d, mode %s", img.width, img.height, img.mode)
            if img.mode == "L":
                gray = self._as_array(img)
            else:
                rgb = img if img.mode == "RGB" else img.convert("RGB")
                gray = luminance(self._as_array(rgb))
        return self._to_raster(gray)
