"""Data-parallel diffuse path tracer using Taichi kernels.

This module renders the same image model as ``spheretrace.core.integrator``
but evaluates every pixel in parallel on the Taichi backend (CPU threads or
GPU). The recursive bounce is unrolled into a loop that multiplies the path
attenuation by 0.5 per bounce, with the same depth cap, traversal modes and
sky gradient as the pure Python integrator.

The scene and camera are uploaded once into Taichi fields and are read-only
while the kernel runs. Each Taichi thread draws from its own random state.
The finished image is returned as a NumPy array, top row first, so it can be
flushed to any pixel sink in row-major order.

Note:
    Fields are allocated at import time, so ``ti.init`` must be called
    before this module is imported.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu, random_seed=0)
    >>> from spheretrace.accel.integrator import render
    >>> from spheretrace.scene.presets import reference_camera, reference_scene
    >>> sink = ArraySink(1000, 500)
    >>> render(reference_scene(), reference_camera(), RenderSettings(), sink)
"""

from collections.abc import Iterable

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.camera.pinhole import Camera
from spheretrace.core.integrator import ATTENUATION, SKY_HORIZON, SKY_ZENITH, T_MAX, T_MIN
from spheretrace.core.renderer import COLOR_SCALE, ProgressCallback, RenderSettings
from spheretrace.geometry.hittable import Hittable
from spheretrace.geometry.sphere import Sphere
from spheretrace.output.sink import PixelSink, write_image
from spheretrace.scene.world import Scene, TraversalMode

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_SKY_HORIZON = vec3(*SKY_HORIZON)
_SKY_ZENITH = vec3(*SKY_ZENITH)


@ti.dataclass
class SphereHit:
    """Record of a ray-scene intersection.

    Attributes:
        hit: 1 if the ray intersected a sphere, 0 on a miss.
        t: The ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: Outward unit normal at the intersection. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


# =============================================================================
# Scene, Camera and Image Fields
# =============================================================================

# Sphere storage: Structure of Arrays layout, in scene precedence order
_sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
_sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
_num_spheres = ti.field(dtype=ti.i32, shape=())
_nearest_hit = ti.field(dtype=ti.i32, shape=())

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_initialized = ti.field(dtype=ti.i32, shape=())

# Quantized output, indexed [x, y] with y = 0 at the bottom
_pixels = ti.Vector.field(3, dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def clear_scene() -> None:
    """Remove all uploaded spheres and reset the traversal mode."""
    _num_spheres[None] = 0
    _nearest_hit[None] = 0


def upload_scene(scene: Iterable[Hittable]) -> int:
    """Copy the scene's spheres into Taichi fields.

    Args:
        scene: A Scene or ordered iterable of spheres. A Scene's traversal
            mode is uploaded too; a plain iterable uses first-hit order.

    Returns:
        The number of spheres uploaded.

    Raises:
        TypeError: If an object is not a Sphere.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    objects = list(scene)
    if len(objects) > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    for obj in objects:
        if not isinstance(obj, Sphere):
            raise TypeError(
                f"Taichi backend only renders spheres, got {type(obj).__name__}"
            )

    for idx, sphere in enumerate(objects):
        _sphere_centers[idx] = sphere.center.to_tuple()
        _sphere_radii[idx] = sphere.radius
    _num_spheres[None] = len(objects)

    nearest = isinstance(scene, Scene) and scene.mode is TraversalMode.NEAREST_HIT
    _nearest_hit[None] = int(nearest)
    return len(objects)


def get_sphere_count() -> int:
    """Get the number of spheres uploaded."""
    return int(_num_spheres[None])


def upload_camera(camera: Camera) -> None:
    """Copy the camera's origin and image plane into Taichi fields."""
    _camera_origin[None] = camera.origin.to_tuple()
    _lower_left_corner[None] = camera.lower_left_corner.to_tuple()
    _horizontal[None] = camera.horizontal.to_tuple()
    _vertical[None] = camera.vertical.to_tuple()
    _camera_initialized[None] = 1


# =============================================================================
# Taichi Functions
# =============================================================================


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
    t_min: ti.f32,
    t_max: ti.f32,
) -> SphereHit:
    """Ray-sphere intersection returning the nearer root inside (t_min, t_max)."""
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if radius > 0.0:
        oc = ray_origin - center
        a = tm.dot(ray_direction, ray_direction)
        b = tm.dot(oc, ray_direction)
        c = tm.dot(oc, oc) - radius * radius
        discriminant = b * b - a * c

        if discriminant >= 0.0:
            sqrt_d = ti.sqrt(discriminant)

            t = (-b - sqrt_d) / a
            valid = (t > t_min) and (t < t_max)

            if not valid:
                t = (-b + sqrt_d) / a
                valid = (t > t_min) and (t < t_max)

            if valid:
                did_hit = 1
                hit_t = t
                hit_point = ray_origin + t * ray_direction
                hit_normal = tm.normalize(hit_point - center)

    return SphereHit(hit=did_hit, t=hit_t, point=hit_point, normal=hit_normal)


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3, t_min: ti.f32, t_max: ti.f32) -> SphereHit:
    """Test a ray against all uploaded spheres.

    In first-hit mode the first sphere (in upload order) reporting a hit
    wins; in nearest-hit mode t_max shrinks to the closest hit so far.
    """
    result = SphereHit(hit=0, t=0.0, point=vec3(0.0, 0.0, 0.0), normal=vec3(0.0, 0.0, 0.0))
    closest_t = t_max
    nearest = _nearest_hit[None]

    for i in range(_num_spheres[None]):
        if result.hit == 0 or nearest == 1:
            rec = hit_sphere(
                ray_origin, ray_direction, _sphere_centers[i], _sphere_radii[i], t_min, closest_t
            )
            if rec.hit == 1:
                result = rec
                if nearest == 1:
                    closest_t = rec.t

    return result


@ti.func
def random_unit_vector() -> vec3:
    """Rejection-sample a point inside the unit sphere and normalize it."""
    p = vec3(0.0, 0.0, 0.0)
    while True:
        p = vec3(
            ti.random(ti.f32) * 2.0 - 1.0,
            ti.random(ti.f32) * 2.0 - 1.0,
            ti.random(ti.f32) * 2.0 - 1.0,
        )
        length_sq = tm.dot(p, p)
        if length_sq > 0.0 and length_sq < 1.0:
            break
    return tm.normalize(p)


@ti.func
def sky_color(direction: vec3) -> vec3:
    """White-to-blue gradient by the normalized direction's y component."""
    unit_direction = tm.normalize(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * _SKY_HORIZON + t * _SKY_ZENITH


@ti.func
def trace(ray_origin: vec3, ray_direction: vec3, max_depth: ti.i32) -> vec3:
    """Iterative form of the recursive diffuse integrator."""
    origin = ray_origin
    direction = ray_direction
    attenuation = 1.0
    depth = 0

    while depth < max_depth:
        rec = intersect_scene(origin, direction, T_MIN, T_MAX)
        if rec.hit == 0:
            break
        target = rec.point + rec.normal + random_unit_vector()
        origin = rec.point
        direction = tm.normalize(target - rec.point)
        attenuation *= ATTENUATION
        depth += 1

    return attenuation * sky_color(direction)


@ti.func
def get_ray_direction(u: ti.f32, v: ti.f32) -> vec3:
    """Unit direction from the camera origin through image point (u, v)."""
    target = _lower_left_corner[None] + u * _horizontal[None] + v * _vertical[None]
    return tm.normalize(target - _camera_origin[None])


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32, samples: ti.i32, max_depth: ti.i32):
    """Render every pixel of the active region in parallel."""
    for i, j in ti.ndrange(width, height):
        total = vec3(0.0, 0.0, 0.0)
        for _ in range(samples):
            u = (ti.cast(i, ti.f32) + ti.random(ti.f32)) / ti.cast(width, ti.f32)
            v = (ti.cast(j, ti.f32) + ti.random(ti.f32)) / ti.cast(height, ti.f32)
            direction = get_ray_direction(u, v)
            total += trace(_camera_origin[None], direction, max_depth)

        color = ti.sqrt(total / ti.cast(samples, ti.f32)) * COLOR_SCALE
        color = tm.clamp(color, 0.0, 255.0)
        _pixels[i, j] = ti.cast(color, ti.i32)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(settings: RenderSettings) -> npt.NDArray[np.uint8]:
    """Render the uploaded scene with the uploaded camera.

    Args:
        settings: Image size, sample count and depth cap.

    Returns:
        uint8 array of shape (height, width, 3), top row first.

    Raises:
        ValueError: If the image exceeds the maximum supported size.
        RuntimeError: If no camera has been uploaded.
    """
    if settings.width > MAX_IMAGE_WIDTH or settings.height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({settings.width}x{settings.height}) exceed maximum "
            f"supported ({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )
    if _camera_initialized[None] == 0:
        raise RuntimeError("Camera not set up. Call upload_camera() first.")

    _render_kernel(
        settings.width, settings.height, settings.samples_per_pixel, settings.max_depth
    )

    # Extract active region, transpose (width, height, 3) -> (height, width, 3)
    image = _pixels.to_numpy()[: settings.width, : settings.height, :]
    image = np.transpose(image, (1, 0, 2))

    # Flip vertically (Taichi rows use bottom-left origin, images use top-left)
    image = np.flipud(image)

    return np.ascontiguousarray(image, dtype=np.uint8)


def render(
    scene: Iterable[Hittable],
    camera: Camera,
    settings: RenderSettings,
    sink: PixelSink,
    callback: ProgressCallback | None = None,
) -> int:
    """Render on the Taichi backend and stream the result to a sink.

    Same contract as ``spheretrace.core.renderer.render`` except that the
    random stream comes from Taichi (seeded through ``ti.init``) and the
    callback is called once, when the whole image is done.

    Returns:
        The number of pixels written.
    """
    if (sink.width, sink.height) != (settings.width, settings.height):
        raise ValueError(
            f"Sink is {sink.width}x{sink.height} but settings request "
            f"{settings.width}x{settings.height}"
        )
    upload_scene(scene)
    upload_camera(camera)
    image = render_image(settings)
    write_image(image, sink)
    if callback is not None:
        callback(settings.height, settings.height)
    return settings.pixel_count
