from __future__ import annotations

from typing import BinaryIO

from ..errors import OpenError, WriteError

DEFAULT_OUTPUT = "out.txt"


class FileSink:
    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def write(self, data: bytes) -> None:
        try:
            handle = open(self._path, "wb")
        except OSError as exc:
            raise OpenError(self._path, exc.strerror or "") from exc
        with handle:
            self._write_all(handle, data)

    def _write_all(self, handle: BinaryIO, data: bytes) -> None:
        try:
            written = handle.write(data)
            handle.flush()
        except OSError as exc:
            raise WriteError(f"Error while writing output: {exc}") from exc
        if written != len(data):
            raise WriteError(f"Error while writing output: wrote {written} of {len(data)} bytes")


def write_output(path: str, data: bytes) -> None:
    FileSink(path).write(data)
