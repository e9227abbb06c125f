"""Random sampling utilities for Monte Carlo path tracing.

The renderer never touches a global random generator. Every function that
needs randomness takes a *random source*: any object with a ``random()``
method returning a float in ``[0, 1)``. ``numpy.random.Generator`` and
``random.Random`` both qualify; :func:`make_rng` builds the default one.

Example:
    >>> rng = make_rng(seed=7)
    >>> direction = random_unit_vector(rng)
    >>> abs(direction.length() - 1.0) < 1e-12
    True
"""

from __future__ import annotations

from typing import Protocol

import numpy as np

from spheretrace.core.vector import Vec3


class RandomSource(Protocol):
    """Anything that can draw a uniform float in ``[0, 1)``."""

    def random(self) -> float: ...


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create the default random source.

    Args:
        seed: Optional seed. The same seed always yields the same stream,
            which makes renders reproducible.

    Returns:
        A NumPy ``Generator`` (PCG64).
    """
    return np.random.default_rng(seed)


def random_in_unit_sphere(rng: RandomSource) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling: candidates are drawn from the cube
    ``[-1, 1)^3`` until one has squared length below one. The origin itself
    is also rejected so the result can always be normalized.

    Args:
        rng: The random source. Three draws are made per trial.

    Returns:
        A point with ``0 < length < 1``.
    """
    while True:
        p = Vec3(
            rng.random() * 2.0 - 1.0,
            rng.random() * 2.0 - 1.0,
            rng.random() * 2.0 - 1.0,
        )
        if 0.0 < p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: RandomSource) -> Vec3:
    """Generate a random unit vector.

    This is the normalized version of :func:`random_in_unit_sphere`, which is
    the bounce direction used by the diffuse integrator.
    """
    p = random_in_unit_sphere(rng)
    p.normalize()
    return p
