"""Core rendering module.

Components:
    vector: Vec3 value type and vector operations
    ray: Ray data structure
    sampling: Random source protocol and rejection sampling
    integrator: Recursive diffuse radiance estimate
    renderer: Per-pixel sampling loop and render settings

Everything here is pure Python and NumPy; the Taichi backend lives in
spheretrace.accel.
"""

from .ray import Ray
from .sampling import RandomSource, make_rng, random_in_unit_sphere, random_unit_vector
from .vector import Vec3, cross, dot, reflect

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from spheretrace.core.integrator or spheretrace.core.renderer.

__all__ = [
    "Vec3",
    "dot",
    "cross",
    "reflect",
    "Ray",
    "RandomSource",
    "make_rng",
    "random_in_unit_sphere",
    "random_unit_vector",
]
