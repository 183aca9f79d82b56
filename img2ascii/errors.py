from __future__ import annotations


class Img2AsciiError(Exception):
    """Base class for failures reported to the user."""


class UnsupportedFileError(Img2AsciiError):
    def __init__(self, path: str, suffix: str) -> None:
        self.path = path
        self.suffix = suffix
        super().__init__(f"Unsupported file type: {suffix or '(none)'}")


class OpenError(Img2AsciiError):
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f'Cannot open file "{path}"'
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DecodeError(Img2AsciiError):
    pass


class RasterAllocationError(Img2AsciiError):
    pass


class WriteError(Img2AsciiError):
    pass


class BoundsError(IndexError):
    """Raster access outside its bounds; a programming error, never reported as a user failure."""
