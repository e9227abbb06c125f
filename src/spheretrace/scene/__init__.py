"""Scene storage, traversal and presets.

Components:
    world: Scene (ordered hittable list) and TraversalMode
    presets: The four-sphere reference scene and its camera
"""

from .presets import (
    REFERENCE_HEIGHT,
    REFERENCE_SAMPLES,
    REFERENCE_WIDTH,
    reference_camera,
    reference_scene,
)
from .world import Scene, TraversalMode

__all__ = [
    "Scene",
    "TraversalMode",
    "reference_scene",
    "reference_camera",
    "REFERENCE_WIDTH",
    "REFERENCE_HEIGHT",
    "REFERENCE_SAMPLES",
]
