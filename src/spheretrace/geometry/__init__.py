"""Geometry module for the hittable contract and shape primitives.

Components:
    hittable: Hittable abstract base class and HitResult
    sphere: Sphere primitive with ray-sphere intersection
"""

from .hittable import MISS, HitResult, Hittable
from .sphere import Sphere

__all__ = [
    "Hittable",
    "HitResult",
    "MISS",
    "Sphere",
]
