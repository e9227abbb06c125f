"""Image export utilities for rendered images.

Supported formats:
    - PPM (plain-text P3, streamed through PPMWriter)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from spheretrace.output.export import save_image
    >>> sink = ArraySink(200, 100)
    >>> render(scene, camera, settings, sink, rng)
    >>> save_image(sink.image, "spheres.png")
"""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.output.ppm import PPMWriter
from spheretrace.output.sink import PixelSinkError, write_image

SUPPORTED_SUFFIXES = (".ppm", ".png")


def save_png(image: npt.NDArray[np.uint8], filepath: str | os.PathLike[str]) -> None:
    """Save an 8-bit (H, W, 3) image as a PNG file.

    Raises:
        ValueError: If the array is not a uint8 RGB image.
        PixelSinkError: If the file cannot be written.
    """
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(
            f"Expected a uint8 array of shape (H, W, 3), got {image.dtype} {image.shape}"
        )
    pil_image = PILImage.fromarray(image)
    try:
        pil_image.save(os.fspath(filepath), format="PNG")
    except OSError as e:
        raise PixelSinkError(f"Unable to write {os.fspath(filepath)}: {e}") from e


def save_ppm(image: npt.NDArray[np.uint8], filepath: str | os.PathLike[str]) -> None:
    """Save an 8-bit (H, W, 3) image as a plain-text PPM file."""
    height, width = image.shape[:2]
    with PPMWriter(filepath, width, height) as ppm:
        write_image(image, ppm)


def save_image(image: npt.NDArray[np.uint8], filepath: str | os.PathLike[str]) -> Path:
    """Save an image, choosing the format from the file suffix.

    Returns:
        The output path.

    Raises:
        ValueError: If the suffix is neither .ppm nor .png.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".png":
        save_png(image, path)
    elif suffix == ".ppm":
        save_ppm(image, path)
    else:
        raise ValueError(
            f"Unsupported output format {suffix!r}; expected one of {SUPPORTED_SUFFIXES}"
        )
    return path


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
