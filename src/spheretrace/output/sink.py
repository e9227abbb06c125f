"""Pixel sink contract and an in-memory sink.

A pixel sink is created for a fixed width and height and then receives
``width * height`` RGB byte triples through :meth:`PixelSink.write_pixel`,
in row-major order starting from the top-left pixel.

Example:
    >>> sink = ArraySink(4, 2)
    >>> for _ in range(8):
    ...     sink.write_pixel(255, 0, 0)
    >>> sink.image.shape
    (2, 4, 3)
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
import numpy.typing as npt


class PixelSinkError(RuntimeError):
    """Raised when a pixel sink cannot be created or written."""


class PixelSink(Protocol):
    """Receiver for the rendered pixel stream."""

    width: int
    height: int

    def write_pixel(self, r: int, g: int, b: int) -> None: ...


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")


def _check_channel(value: int) -> int:
    value = int(value)
    if not 0 <= value <= 255:
        raise ValueError(f"Color channel out of range [0, 255]: {value}")
    return value


class ArraySink:
    """Collects pixels into a NumPy image buffer.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        image: uint8 array of shape (height, width, 3); row 0 is the top row.
    """

    def __init__(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self.width = width
        self.height = height
        self.image: npt.NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self._count = 0

    @property
    def pixels_written(self) -> int:
        return self._count

    @property
    def complete(self) -> bool:
        """True once every pixel has been written."""
        return self._count == self.width * self.height

    def write_pixel(self, r: int, g: int, b: int) -> None:
        """Store the next pixel in row-major order.

        Raises:
            PixelSinkError: If the image is already complete.
            ValueError: If a channel is outside [0, 255].
        """
        if self.complete:
            raise PixelSinkError(
                f"Image already holds all {self.width * self.height} pixels"
            )
        row, col = divmod(self._count, self.width)
        self.image[row, col] = (_check_channel(r), _check_channel(g), _check_channel(b))
        self._count += 1


def write_image(image: npt.NDArray[np.uint8], sink: PixelSink) -> None:
    """Flush a finished (height, width, 3) image to a sink in row-major order.

    Raises:
        ValueError: If the image shape does not match the sink dimensions.
    """
    if image.shape != (sink.height, sink.width, 3):
        raise ValueError(
            f"Image shape {image.shape} does not match sink "
            f"({sink.height}, {sink.width}, 3)"
        )
    for r, g, b in image.reshape(-1, 3).tolist():
        sink.write_pixel(r, g, b)
