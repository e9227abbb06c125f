"""Ray data structure.

A ray is an origin point plus a direction. Rays built with
:meth:`Ray.from_points` always carry a unit-length direction; the plain
constructor stores the direction exactly as given.

Example:
    >>> origin = Vec3(0.0, 0.0, 0.0)
    >>> ray = Ray.from_points(origin, Vec3(0.0, 0.0, -4.0))
    >>> ray.direction
    Vec3(0.0, 0.0, -1.0)
    >>> ray.point_at_parameter(2.0)
    Vec3(0.0, 0.0, -2.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from spheretrace.core.vector import Vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Unit length when the ray
            was built with :meth:`from_points`, unconstrained otherwise.
    """

    origin: Vec3
    direction: Vec3

    @classmethod
    def from_points(cls, origin: Vec3, other: Vec3) -> Ray:
        """Create a ray from ``origin`` heading toward ``other``.

        Args:
            origin: The starting point of the ray.
            other: Any point along the desired direction.

        Returns:
            A ray whose direction is ``normalize(other - origin)``.

        Raises:
            ValueError: If the two points coincide.
        """
        return cls(origin, (other - origin).normalized())

    def point_at_parameter(self, t: float) -> Vec3:
        """Compute the point ``origin + direction * t``."""
        return self.origin + self.direction * t

    at = point_at_parameter
