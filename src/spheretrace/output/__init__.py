"""Pixel sinks and image export.

Components:
    sink: PixelSink protocol, PixelSinkError and the in-memory ArraySink
    ppm: Plain-text PPM (P3) writer
    export: PNG export via Pillow and suffix-based save_image
"""

from .export import compute_rmse, save_image, save_png, save_ppm
from .ppm import PPMWriter
from .sink import ArraySink, PixelSink, PixelSinkError, write_image

__all__ = [
    "PixelSink",
    "PixelSinkError",
    "ArraySink",
    "PPMWriter",
    "write_image",
    "save_image",
    "save_png",
    "save_ppm",
    "compute_rmse",
]
