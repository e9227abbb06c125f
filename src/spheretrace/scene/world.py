"""Scene storage and ray-scene traversal.

A Scene is an ordered list of Hittable objects. Two traversal modes exist:

    FIRST_HIT:   scan in insertion order and return the first object that
                 reports any hit in range. Object order is significant.
    NEAREST_HIT: test every object, shrinking t_max to the closest hit so
                 far, and return the globally nearest intersection.

FIRST_HIT is the default and matches the reference renders; NEAREST_HIT gives
physically correct occlusion.

Example:
    >>> scene = Scene([Sphere(Vec3(0, 0, -1), 0.5)])
    >>> scene.add(Sphere(Vec3(0, -100.5, -1), 100.0))
    >>> len(scene)
    2
    >>> rec = scene.hit(ray, 0.0, T_MAX)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum

from spheretrace.core.ray import Ray
from spheretrace.geometry.hittable import MISS, HitResult, Hittable


class TraversalMode(Enum):
    """How a Scene chooses between several objects hit by the same ray."""

    FIRST_HIT = "first"
    NEAREST_HIT = "nearest"


class Scene(Hittable):
    """An ordered collection of hittable objects.

    The scene is built once before rendering and only read afterwards.

    Attributes:
        mode: Traversal mode used by :meth:`hit`.
    """

    def __init__(
        self,
        objects: Iterable[Hittable] = (),
        mode: TraversalMode = TraversalMode.FIRST_HIT,
    ) -> None:
        self._objects: list[Hittable] = []
        self.mode = mode
        for obj in objects:
            self.add(obj)

    def add(self, obj: Hittable) -> None:
        """Append an object; later objects have lower first-hit precedence.

        Raises:
            TypeError: If obj does not implement Hittable.
        """
        if not isinstance(obj, Hittable):
            raise TypeError(f"Scene objects must be Hittable, got {type(obj).__name__}")
        self._objects.append(obj)

    @property
    def objects(self) -> tuple[Hittable, ...]:
        """The scene objects in precedence order."""
        return tuple(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitResult:
        """Test the ray against the scene using the configured mode."""
        if self.mode is TraversalMode.NEAREST_HIT:
            return self.hit_nearest(ray, t_min, t_max)
        return self.hit_first(ray, t_min, t_max)

    def hit_first(self, ray: Ray, t_min: float, t_max: float) -> HitResult:
        """Return the hit from the first object, in list order, that reports one.

        This is not necessarily the closest intersection.
        """
        for obj in self._objects:
            rec = obj.hit(ray, t_min, t_max)
            if rec.hit:
                return rec
        return MISS

    def hit_nearest(self, ray: Ray, t_min: float, t_max: float) -> HitResult:
        """Return the closest hit across all objects."""
        closest = MISS
        closest_t = t_max
        for obj in self._objects:
            rec = obj.hit(ray, t_min, closest_t)
            if rec.hit:
                closest = rec
                closest_t = rec.t
        return closest

    def __repr__(self) -> str:
        return f"Scene({len(self)} objects, mode={self.mode.value})"
