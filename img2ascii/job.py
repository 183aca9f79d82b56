from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import OpenError
from .ingest import ImageLoaderRegistry
from .raster import Raster
from .render import EDGE_THRESHOLD, RenderMode, render

logger = logging.getLogger(__name__)

OUTPUT_ENCODING = "utf-8"


@dataclass
class ArtSettings:
    mode: RenderMode = RenderMode.BRAILLE
    edge_threshold: float = EDGE_THRESHOLD


class ArtJobBuilder:
    def __init__(self, settings: Optional[ArtSettings] = None, registry: Optional[ImageLoaderRegistry] = None) -> None:
        self.settings = settings or ArtSettings()
        self.registry = registry or ImageLoaderRegistry()

    def build_from_file(self, path: str) -> bytes:
        raster = self.load(path)
        text = render(raster, self.settings.mode, self.settings.edge_threshold)
        return text.encode(OUTPUT_ENCODING)

    def load(self, path: str) -> Raster:
        loader = self.registry.loader_for(path)
        try:
            stream = open(path, "rb")
        except OSError as exc:
            raise OpenError(path, exc.strerror or "") from exc
        with stream:
            raster = loader.load(stream)
        logger.debug("Loaded %s as %dx%d grayscale raster", path, raster.width, raster.height)
        return raster
