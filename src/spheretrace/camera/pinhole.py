"""Pinhole camera model for perspective projection ray generation.

The camera is a fixed eye point plus a rectangular image plane described by
its lower-left corner and two span vectors. Normalized image coordinates
(u, v) map to the image plane as:

    target = lower_left_corner + u * horizontal + v * vertical

with u = 0 at the left edge, u = 1 at the right edge, v = 0 at the bottom and
v = 1 at the top. There is no lens or aperture: every ray starts at the eye.

Example:
    >>> camera = Camera(
    ...     origin=Vec3(0, 0, 0),
    ...     lower_left_corner=Vec3(-2, -1, -1),
    ...     horizontal=Vec3(4, 0, 0),
    ...     vertical=Vec3(0, 2, 0),
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
    >>> ray.direction
    Vec3(0.0, 0.0, -1.0)

    >>> camera = Camera.look_at(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from spheretrace.core.ray import Ray
from spheretrace.core.vector import Vec3


@dataclass(frozen=True)
class Camera:
    """A pinhole camera with an explicit image plane.

    Attributes:
        origin: Eye position in world space.
        lower_left_corner: World-space position of image coordinate (0, 0).
        horizontal: Vector spanning the full image width.
        vertical: Vector spanning the full image height.
    """

    origin: Vec3
    lower_left_corner: Vec3
    horizontal: Vec3
    vertical: Vec3

    def image_point(self, u: float, v: float) -> Vec3:
        """World-space point on the image plane at (u, v)."""
        return self.lower_left_corner + self.horizontal * u + self.vertical * v

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        Args:
            u: Horizontal coordinate, roughly in [0, 1] (left to right).
            v: Vertical coordinate, roughly in [0, 1] (bottom to top).

        Returns:
            A ray from the camera origin with a unit direction toward the
            image-plane point at (u, v).
        """
        return Ray.from_points(self.origin, self.image_point(u, v))

    @classmethod
    def look_at(
        cls,
        lookfrom: tuple[float, float, float],
        lookat: tuple[float, float, float],
        vup: tuple[float, float, float],
        vfov: float,
        aspect_ratio: float,
    ) -> Camera:
        """Build a camera from a look-at description.

        The image plane sits at unit distance in front of ``lookfrom``.

        Args:
            lookfrom: Camera position in world space.
            lookat: Point the camera is looking at.
            vup: Up direction for camera orientation (typically (0, 1, 0)).
            vfov: Vertical field of view in degrees.
            aspect_ratio: Width divided by height of the output image.

        Raises:
            ValueError: If lookfrom equals lookat, or vup is parallel to the
                view direction.
        """
        # Convert FOV from degrees to radians
        theta = math.radians(vfov)
        viewport_height = 2.0 * math.tan(theta / 2.0)
        viewport_width = aspect_ratio * viewport_height

        eye = np.array(lookfrom, dtype=np.float64)
        target = np.array(lookat, dtype=np.float64)
        up = np.array(vup, dtype=np.float64)

        # w points from lookat toward lookfrom (backward)
        w = eye - target
        w_norm = np.linalg.norm(w)
        if w_norm == 0.0:
            raise ValueError("lookfrom and lookat must be different points")
        w = w / w_norm

        # u points right (perpendicular to w and vup)
        u = np.cross(up, w)
        u_norm = np.linalg.norm(u)
        if u_norm == 0.0:
            raise ValueError("vup must not be parallel to the view direction")
        u = u / u_norm

        # v points up in the camera's frame
        v = np.cross(w, u)

        horizontal = viewport_width * u
        vertical = viewport_height * v
        lower_left = eye - w - horizontal / 2.0 - vertical / 2.0

        return cls(
            origin=Vec3.from_iterable(eye),
            lower_left_corner=Vec3.from_iterable(lower_left),
            horizontal=Vec3.from_iterable(horizontal),
            vertical=Vec3.from_iterable(vertical),
        )
