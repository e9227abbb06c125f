"""Sphere primitive and ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

which gives the quadratic ``a*t^2 + 2*b*t + c = 0`` with:
    a = dot(direction, direction)
    b = dot(oc, direction)  (half of the traditional 'b')
    c = dot(oc, oc) - radius^2
    oc = origin - center

Example:
    >>> sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5)
    >>> ray = Ray.from_points(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> sphere.hit(ray, 0.0, 1000.0).t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from spheretrace.core.ray import Ray
from spheretrace.core.vector import Vec3
from spheretrace.geometry.hittable import MISS, HitResult, Hittable


@dataclass(frozen=True, eq=False)
class Sphere(Hittable):
    """A sphere defined by center point and radius.

    Spheres compare and hash by identity, so the same values can appear
    twice in a scene as distinct objects.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (non-negative).
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        if self.radius < 0.0:
            raise ValueError(f"Sphere radius must be non-negative, got {self.radius}")

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitResult:
        """Test for ray-sphere intersection.

        The nearer root is tried first, so a ray that enters and leaves the
        sphere reports the entry point when it is in range.

        Args:
            ray: The ray to test.
            t_min: Minimum t value (exclusive) to accept.
            t_max: Maximum t value (exclusive) to accept.

        Returns:
            A HitResult with an outward-facing unit normal on hit, or MISS.

        Raises:
            ValueError: If the ray direction has zero length.
        """
        a = ray.direction.dot(ray.direction)
        if a == 0.0:
            raise ValueError("Cannot intersect a ray with a zero-length direction")
        if self.radius == 0.0:
            return MISS
        oc = ray.origin - self.center
        b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius

        discriminant = b * b - a * c
        if discriminant < 0.0:
            return MISS

        sqrt_d = math.sqrt(discriminant)
        for root in ((-b - sqrt_d) / a, (-b + sqrt_d) / a):
            if t_min < root < t_max:
                point = ray.point_at_parameter(root)
                return HitResult(
                    hit=True,
                    t=root,
                    point=point,
                    normal=self.outward_normal(point),
                )
        return MISS

    def outward_normal(self, point: Vec3) -> Vec3:
        """Unit normal pointing away from the center at ``point``."""
        return (point - self.center).normalized()
