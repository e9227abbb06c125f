"""Recursive diffuse path tracing integrator.

Radiance along a ray is computed as:

    - miss:  a vertical sky gradient from white to light blue
    - hit:   half of the radiance arriving along a random diffuse bounce
             leaving the hit point (pure Lambertian, albedo 0.5)

There are no lights; all illumination comes from the sky. Recursion stops at
the first miss, or at ``max_depth`` bounces where the sky color of the
current ray is returned instead.

Example:
    >>> rng = make_rng(seed=1)
    >>> scene = Scene([Sphere(Vec3(0, 0, -1), 0.5)])
    >>> color = ray_color(camera.get_ray(0.5, 0.5), scene, rng)
"""

from __future__ import annotations

from spheretrace.core.ray import Ray
from spheretrace.core.sampling import RandomSource, random_unit_vector
from spheretrace.core.vector import Vec3
from spheretrace.geometry.hittable import Hittable

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum number of diffuse bounces before the sky color is returned
MAX_DEPTH = 50

# Ray parameter range for scene traversal. T_MAX is large but finite.
T_MIN = 0.0
T_MAX = 1e7

# Fraction of incoming radiance kept at each diffuse bounce
ATTENUATION = 0.5

# Sky gradient endpoints
SKY_HORIZON = Vec3(1.0, 1.0, 1.0)
SKY_ZENITH = Vec3(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Vec3:
    """Background radiance for a ray that escapes the scene.

    Blends white (looking down) to light blue (looking up) by
    ``t = 0.5 * (unit_direction.y + 1)``.
    """
    unit_direction = ray.direction.normalized()
    t = 0.5 * (unit_direction.y + 1.0)
    return SKY_HORIZON.lerp(SKY_ZENITH, t)


def ray_color(
    ray: Ray,
    scene: Hittable,
    rng: RandomSource,
    depth: int = 0,
    max_depth: int = MAX_DEPTH,
) -> Vec3:
    """Compute the radiance carried back along a ray.

    Args:
        ray: The ray to trace.
        scene: The scene (usually a Scene) to intersect.
        rng: Random source for bounce directions.
        depth: Number of bounces already taken.
        max_depth: Bounce cap. At this depth the sky color is returned
            without testing the scene.

    Returns:
        The RGB radiance as a Vec3 with components in [0, 1].
    """
    if depth >= max_depth:
        return sky_color(ray)

    rec = scene.hit(ray, T_MIN, T_MAX)
    if not rec.hit:
        return sky_color(ray)

    target = rec.point + rec.normal + random_unit_vector(rng)
    bounce = Ray.from_points(rec.point, target)
    return ray_color(bounce, scene, rng, depth + 1, max_depth) * ATTENUATION
