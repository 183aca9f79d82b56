from .errors import (
    BoundsError,
    DecodeError,
    Img2AsciiError,
    OpenError,
    RasterAllocationError,
    UnsupportedFileError,
    WriteError,
)
from .job import ArtJobBuilder, ArtSettings
from .raster import Raster
from .render import RenderMode, render

__version__ = "0.1.0"

__all__ = [
    "ArtJobBuilder",
    "ArtSettings",
    "BoundsError",
    "DecodeError",
    "Img2AsciiError",
    "OpenError",
    "Raster",
    "RasterAllocationError",
    "RenderMode",
    "UnsupportedFileError",
    "WriteError",
    "render",
]
