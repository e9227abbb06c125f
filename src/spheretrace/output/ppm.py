"""Plain-text PPM (P3) image writer.

File layout:

    P3
    <width> <height>
    255
    r g b
    r g b
    ...

with one pixel per line, top-left pixel first.

Example:
    >>> with PPMWriter("render.ppm", 1000, 500) as ppm:
    ...     for r, g, b in pixels:
    ...         ppm.write_pixel(r, g, b)
"""

from __future__ import annotations

import os
from types import TracebackType
from typing import TextIO

from spheretrace.output.sink import PixelSinkError, _check_channel, _check_dimensions

MAX_COLOR_VALUE = 255


class PPMWriter:
    """Pixel sink that streams a P3 PPM file to disk.

    The header is written on creation. Closing the writer after fewer than
    ``width * height`` pixels raises PixelSinkError, unless the writer is
    being closed because of another exception.

    Attributes:
        path: Output file path.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, path: str | os.PathLike[str], width: int, height: int) -> None:
        """Create the file and write the header.

        Raises:
            ValueError: If width or height is not positive.
            PixelSinkError: If the file cannot be created or written.
        """
        _check_dimensions(width, height)
        self.path = os.fspath(path)
        self.width = width
        self.height = height
        self._count = 0
        try:
            self._file: TextIO | None = open(self.path, "w", encoding="ascii")
        except OSError as e:
            raise PixelSinkError(f"Unable to create {self.path}: {e}") from e
        try:
            self._write(f"P3\n{width} {height}\n{MAX_COLOR_VALUE}\n")
        except PixelSinkError:
            self.close(check_complete=False)
            raise

    @property
    def pixels_written(self) -> int:
        return self._count

    @property
    def closed(self) -> bool:
        return self._file is None

    def _write(self, text: str) -> None:
        if self._file is None:
            raise PixelSinkError(f"Cannot write to closed PPM file {self.path}")
        try:
            self._file.write(text)
        except OSError as e:
            raise PixelSinkError(f"Can't write to {self.path}: {e}") from e

    def write_pixel(self, r: int, g: int, b: int) -> None:
        """Append the next pixel.

        Raises:
            ValueError: If a channel is outside [0, 255].
            PixelSinkError: On I/O failure, or if every pixel was already written.
        """
        if self._count >= self.width * self.height:
            raise PixelSinkError(
                f"{self.path} already holds all {self.width * self.height} pixels"
            )
        r, g, b = _check_channel(r), _check_channel(g), _check_channel(b)
        self._write(f"{r} {g} {b}\n")
        self._count += 1

    def close(self, check_complete: bool = True) -> None:
        """Flush and close the file.

        Args:
            check_complete: Raise if fewer than width * height pixels were
                written.

        Raises:
            PixelSinkError: On I/O failure or an incomplete image.
        """
        if self._file is None:
            return
        file, self._file = self._file, None
        try:
            file.close()
        except OSError as e:
            raise PixelSinkError(f"Can't write to {self.path}: {e}") from e
        expected = self.width * self.height
        if check_complete and self._count != expected:
            raise PixelSinkError(
                f"{self.path} is incomplete: {self._count} of {expected} pixels written"
            )

    def __enter__(self) -> PPMWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close(check_complete=exc_type is None)

    def __repr__(self) -> str:
        return (
            f"PPMWriter(path={self.path!r}, width={self.width}, height={self.height}, "
            f"written={self._count})"
        )
