"""Reference scene configuration.

The reference scene is three small diffuse spheres resting on a very large
"ground" sphere, viewed by a camera at the origin looking down -z through a
4 x 2 image plane:

    - center sphere: (0, 0, -1), radius 0.5
    - left sphere:   (-1, 0, -1), radius 0.5
    - right sphere:  (1, 0, -1), radius 0.5
    - ground:        (0, -100.5, -1), radius 100

Object order matters under first-hit traversal: the ground comes last.

Example:
    >>> from spheretrace.scene.presets import reference_camera, reference_scene
    >>> scene = reference_scene()
    >>> camera = reference_camera()
"""

from __future__ import annotations

from spheretrace.camera.pinhole import Camera
from spheretrace.core.vector import Vec3
from spheretrace.geometry.sphere import Sphere
from spheretrace.scene.world import Scene, TraversalMode

# Reference image configuration
REFERENCE_WIDTH = 1000
REFERENCE_HEIGHT = 500
REFERENCE_SAMPLES = 4

# (center, radius) in precedence order
REFERENCE_SPHERES: tuple[tuple[tuple[float, float, float], float], ...] = (
    ((0.0, 0.0, -1.0), 0.5),
    ((-1.0, 0.0, -1.0), 0.5),
    ((1.0, 0.0, -1.0), 0.5),
    ((0.0, -100.5, -1.0), 100.0),
)


def reference_scene(mode: TraversalMode = TraversalMode.FIRST_HIT) -> Scene:
    """Create the four-sphere reference scene.

    Args:
        mode: Traversal mode for the scene.

    Returns:
        A new Scene; callers may add further objects before rendering.
    """
    return Scene(
        (Sphere(Vec3(*center), radius) for center, radius in REFERENCE_SPHERES),
        mode=mode,
    )


def reference_camera() -> Camera:
    """Create the reference camera (2:1 image plane at z = -1)."""
    return Camera(
        origin=Vec3(0.0, 0.0, 0.0),
        lower_left_corner=Vec3(-2.0, -1.0, -1.0),
        horizontal=Vec3(4.0, 0.0, 0.0),
        vertical=Vec3(0.0, 2.0, 0.0),
    )
