"""Intersection contract shared by all scene primitives.

Example:
    >>> class Nothing(Hittable):
    ...     def hit(self, ray, t_min, t_max):
    ...         return MISS
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from spheretrace.core.ray import Ray
from spheretrace.core.vector import Vec3


@dataclass(frozen=True)
class HitResult:
    """Outcome of a single ray-object intersection test.

    Attributes:
        hit: Whether the ray intersected the object.
        t: The ray parameter of the intersection. Only valid if hit is True.
        point: The intersection point. Only valid if hit is True.
        normal: The outward-facing unit surface normal at the intersection
            point. Only valid if hit is True.
    """

    hit: bool
    t: float = 0.0
    point: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)

    def __bool__(self) -> bool:
        return self.hit


# Shared miss record
MISS = HitResult(hit=False)


class Hittable(ABC):
    """Abstract base for anything a ray can hit."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitResult:
        """Test the ray against this object.

        Args:
            ray: The ray to test.
            t_min: Lower bound (exclusive) for an accepted ray parameter.
            t_max: Upper bound (exclusive) for an accepted ray parameter.

        Returns:
            A HitResult; check ``hit`` before reading the other fields.
        """
