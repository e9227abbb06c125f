"""Sampler and driver loop.

For every pixel, N jittered camera rays are traced, their radiance averaged,
gamma corrected with a component-wise square root and quantized to 8 bits.
Pixels are produced in row-major order starting from the top-left pixel,
which is the order pixel sinks expect.

Example:
    >>> from spheretrace.core.renderer import RenderSettings, render
    >>> from spheretrace.core.sampling import make_rng
    >>> from spheretrace.output.ppm import PPMWriter
    >>> from spheretrace.scene.presets import reference_camera, reference_scene
    >>>
    >>> settings = RenderSettings(width=200, height=100, samples_per_pixel=4)
    >>> with PPMWriter("render.ppm", settings.width, settings.height) as ppm:
    ...     render(reference_scene(), reference_camera(), settings, ppm, make_rng(0))
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass

from spheretrace.camera.pinhole import Camera
from spheretrace.core.integrator import MAX_DEPTH, ray_color
from spheretrace.core.sampling import RandomSource, make_rng
from spheretrace.core.vector import Vec3
from spheretrace.geometry.hittable import Hittable
from spheretrace.output.sink import PixelSink
from spheretrace.scene.world import Scene

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]

# Scale applied after gamma correction so that 1.0 maps to 255
COLOR_SCALE = 255.99


@dataclass(frozen=True)
class RenderSettings:
    """Image and sampling configuration for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of diffuse bounces per path.
    """

    width: int = 1000
    height: int = 500
    samples_per_pixel: int = 4
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def to_rgb8(color: Vec3) -> tuple[int, int, int]:
    """Gamma correct (square root) and quantize a linear color to bytes."""
    scaled = color.sqrt() * COLOR_SCALE
    return (_quantize(scaled.x), _quantize(scaled.y), _quantize(scaled.z))


def _quantize(value: float) -> int:
    return min(255, max(0, int(value)))


def sample_pixel(
    x: int,
    y: int,
    scene: Hittable,
    camera: Camera,
    settings: RenderSettings,
    rng: RandomSource,
) -> Vec3:
    """Average radiance over the jittered samples of one pixel.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = bottom).
        scene: The scene to trace against.
        camera: The camera generating primary rays.
        settings: Image size, sample count and depth cap.
        rng: Random source for jitter and bounces.

    Returns:
        The linear (not gamma corrected) average radiance.
    """
    total = Vec3(0.0, 0.0, 0.0)
    for _ in range(settings.samples_per_pixel):
        u = (x + rng.random()) / settings.width
        v = (y + rng.random()) / settings.height
        ray = camera.get_ray(u, v)
        total = total + ray_color(ray, scene, rng, max_depth=settings.max_depth)
    return total / settings.samples_per_pixel


def iter_pixels(
    scene: Hittable | Iterable[Hittable],
    camera: Camera,
    settings: RenderSettings,
    rng: RandomSource,
) -> Generator[tuple[int, int, int], None, None]:
    """Yield quantized pixels in row-major order from the top-left pixel.

    Yields:
        (r, g, b) byte triples, ``settings.pixel_count`` of them.
    """
    scene = _as_scene(scene)
    for y in range(settings.height - 1, -1, -1):
        for x in range(settings.width):
            yield to_rgb8(sample_pixel(x, y, scene, camera, settings, rng))


def render(
    scene: Hittable | Iterable[Hittable],
    camera: Camera,
    settings: RenderSettings,
    sink: PixelSink,
    rng: RandomSource | None = None,
    callback: ProgressCallback | None = None,
) -> int:
    """Render the scene and stream every pixel to the sink.

    Args:
        scene: A Scene, or any ordered iterable of Hittable objects.
        camera: The camera generating primary rays.
        settings: Image size, sample count and depth cap.
        sink: Destination for the pixel stream.
        rng: Random source. A fresh unseeded generator is used if omitted.
        callback: Optional callback called after each finished row.
            Receives (rows_completed, total_rows).

    Returns:
        The number of pixels written.

    Raises:
        ValueError: If the sink dimensions differ from the settings.
        PixelSinkError: If the sink fails; the render stops immediately.
    """
    if (sink.width, sink.height) != (settings.width, settings.height):
        raise ValueError(
            f"Sink is {sink.width}x{sink.height} but settings request "
            f"{settings.width}x{settings.height}"
        )
    if rng is None:
        rng = make_rng()

    written = 0
    for r, g, b in iter_pixels(scene, camera, settings, rng):
        sink.write_pixel(r, g, b)
        written += 1
        if callback is not None and written % settings.width == 0:
            callback(written // settings.width, settings.height)
    return written


def _as_scene(scene: Hittable | Iterable[Hittable]) -> Hittable:
    if isinstance(scene, Hittable):
        return scene
    return Scene(scene)
