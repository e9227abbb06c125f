"""Three-component vector type used throughout the renderer.

``Vec3`` is a small value type with the usual arithmetic operators. Every
operator returns a new vector; the only mutating methods are the explicit
in-place variants :meth:`Vec3.normalize` and :meth:`Vec3.sqrt_inplace`, which
give the same result as their copying counterparts.

Example:
    >>> a = Vec3(1.0, 0.0, 0.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vec3(0.0, 0.0, 1.0)
    >>> a @ b
    0.0
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from numbers import Real


class Vec3:
    """A 3D vector of floats.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_iterable(cls, values) -> Vec3:
        """Build a vector from any three-element iterable."""
        x, y, z = values
        return cls(x, y, z)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vec3:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __matmul__(self, other: Vec3) -> float:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.dot(other)

    def dot(self, other: Vec3) -> float:
        """Return the dot product ``self . other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Return the right-handed cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    # =========================================================================
    # Magnitude and normalization
    # =========================================================================

    def length_squared(self) -> float:
        """Return the squared length.

        Cheaper than :meth:`length` when only comparing magnitudes.
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> None:
        """Scale this vector to unit length in place.

        Raises:
            ValueError: If the vector has zero length.
        """
        norm = self.length()
        if norm == 0.0:
            raise ValueError(f"Cannot normalize a zero-length vector: {self!r}")
        self.x /= norm
        self.y /= norm
        self.z /= norm

    def normalized(self) -> Vec3:
        """Return a unit vector with the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        v = self.copy()
        v.normalize()
        return v

    def sqrt_inplace(self) -> None:
        """Replace each component with its square root."""
        self.x = math.sqrt(self.x)
        self.y = math.sqrt(self.y)
        self.z = math.sqrt(self.z)

    def sqrt(self) -> Vec3:
        """Return the component-wise square root."""
        v = self.copy()
        v.sqrt_inplace()
        return v

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this (incident) vector about ``normal``.

        Computes ``self - normal * 2 * dot(normal, self)``. The normal should
        be unit length for a mirror reflection.
        """
        return self - normal * (2.0 * normal.dot(self))

    def lerp(self, other: Vec3, t: float) -> Vec3:
        """Linearly interpolate from ``self`` (t=0) to ``other`` (t=1)."""
        return self * (1.0 - t) + other * t

    # =========================================================================
    # Conversions and comparison
    # =========================================================================

    def copy(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    # Mutable (see normalize/sqrt_inplace), so not hashable.
    __hash__ = None  # type: ignore[assignment]

    def isclose(self, other: Vec3, abs_tol: float = 1e-9) -> bool:
        """Component-wise approximate equality."""
        return (
            math.isclose(self.x, other.x, abs_tol=abs_tol)
            and math.isclose(self.y, other.y, abs_tol=abs_tol)
            and math.isclose(self.z, other.z, abs_tol=abs_tol)
        )

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return a.dot(b)


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return a.cross(b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector.
        normal: The surface normal (should be normalized).

    Returns:
        ``incident - normal * 2 * dot(normal, incident)``.
    """
    return incident.reflect(normal)
