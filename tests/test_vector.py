"""Unit tests for the vector module.

Tests cover:
- Arithmetic operators and their algebraic laws
- Dot and cross products
- Length, normalization and the zero-vector guard
- In-place variants (normalize, sqrt_inplace)
- Reflection
"""

import math

import pytest

from spheretrace.core.vector import Vec3, cross, dot, reflect

SAMPLE_VECTORS = [
    Vec3(1.0, 2.0, 3.0),
    Vec3(-4.5, 0.25, 7.0),
    Vec3(0.0, -1.0, 0.5),
    Vec3(3.0, 3.0, -3.0),
]


class TestVectorArithmetic:
    """Tests for arithmetic operators."""

    def test_add(self):
        """Test component-wise addition."""
        assert Vec3(1.0, 1.0, 1.0) + Vec3(1.0, 2.0, 3.0) == Vec3(2.0, 3.0, 4.0)

    def test_sub(self):
        """Test component-wise subtraction."""
        assert Vec3(1.0, 1.0, 1.0) - Vec3(1.0, 2.0, 3.0) == Vec3(0.0, -1.0, -2.0)

    def test_neg(self):
        """Test negation."""
        assert -Vec3(1.0, -2.0, 3.0) == Vec3(-1.0, 2.0, -3.0)

    def test_scale_is_commutative(self):
        """Test vector * scalar == scalar * vector."""
        v = Vec3(1.0, -2.0, 3.0)
        assert v * 2.5 == 2.5 * v == Vec3(2.5, -5.0, 7.5)

    def test_divide_by_scalar(self):
        """Test element-wise division by a scalar."""
        assert Vec3(2.0, 4.0, -6.0) / 2 == Vec3(1.0, 2.0, -3.0)

    def test_int_components_become_floats(self):
        """Test integer inputs are stored as floats."""
        v = Vec3(1, 2, 3)
        assert isinstance(v.x, float)
        assert v == Vec3(1.0, 2.0, 3.0)

    def test_operators_return_new_values(self):
        """Test operators never mutate their operands."""
        a = Vec3(1.0, 2.0, 3.0)
        b = Vec3(4.0, 5.0, 6.0)
        _ = a + b
        _ = a - b
        _ = a * 3.0
        _ = a / 3.0
        _ = -a
        assert a == Vec3(1.0, 2.0, 3.0)
        assert b == Vec3(4.0, 5.0, 6.0)

    def test_augmented_assignment_rebinds(self):
        """Test += produces a new object instead of mutating a shared one."""
        a = Vec3(1.0, 1.0, 1.0)
        alias = a
        a += Vec3(1.0, 0.0, 0.0)
        assert a == Vec3(2.0, 1.0, 1.0)
        assert alias == Vec3(1.0, 1.0, 1.0)

    def test_vector_times_vector_is_rejected(self):
        """Test that * between vectors raises; use dot() or @ instead."""
        with pytest.raises(TypeError):
            _ = Vec3(1.0, 0.0, 0.0) * Vec3(1.0, 0.0, 0.0)

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_addition_is_commutative(self, a, b):
        """Test a + b == b + a."""
        assert a + b == b + a

    def test_addition_is_associative(self):
        """Test (a + b) + c == a + (b + c) within floating-point tolerance."""
        a, b, c = SAMPLE_VECTORS[:3]
        assert ((a + b) + c).isclose(a + (b + c))


class TestDotAndCross:
    """Tests for dot and cross products."""

    def test_dot_basic(self):
        """Test dot product of axis vectors."""
        assert Vec3(0.0, 0.0, 1.0).dot(Vec3(0.0, 0.0, 1.0)) == 1.0
        assert Vec3(0.0, 0.0, 1.0).dot(Vec3(1.0, 0.0, 0.0)) == 0.0

    def test_matmul_is_dot(self):
        """Test the @ operator computes the dot product."""
        a = Vec3(1.0, 2.0, 3.0)
        b = Vec3(4.0, -5.0, 6.0)
        assert a @ b == a.dot(b) == dot(a, b) == 12.0

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_dot_is_symmetric(self, a, b):
        """Test dot(a, b) == dot(b, a)."""
        assert dot(a, b) == dot(b, a)

    def test_cross_basis(self):
        """Test the right-hand rule on the basis vectors."""
        x = Vec3(1.0, 0.0, 0.0)
        y = Vec3(0.0, 1.0, 0.0)
        z = Vec3(0.0, 0.0, 1.0)
        assert x.cross(y) == z
        assert y.cross(z) == x
        assert z.cross(x) == y

    def test_cross_component_formula(self):
        """Test cross product against the explicit component formula."""
        a = Vec3(2.0, -3.0, 5.0)
        b = Vec3(-1.0, 4.0, 0.5)
        expected = Vec3(
            a.y * b.z - a.z * b.y,
            a.z * b.x - a.x * b.z,
            a.x * b.y - a.y * b.x,
        )
        assert cross(a, b) == expected

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_cross_is_anticommutative(self, a, b):
        """Test cross(a, b) == -cross(b, a)."""
        assert cross(a, b).isclose(-cross(b, a))

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_cross_is_orthogonal_to_inputs(self, a, b):
        """Test cross(a, b) is perpendicular to both a and b."""
        c = cross(a, b)
        assert abs(dot(c, a)) < 1e-9
        assert abs(dot(c, b)) < 1e-9


class TestLengthAndNormalize:
    """Tests for magnitude and normalization."""

    def test_length(self):
        """Test length and squared length."""
        assert Vec3(0.0, 0.0, 1.0).length() == 1.0
        assert Vec3(1.0, 1.0, 1.0).length_squared() == 3.0
        assert Vec3(3.0, 4.0, 0.0).length() == 5.0

    @pytest.mark.parametrize("v", SAMPLE_VECTORS)
    def test_normalized_has_unit_length(self, v):
        """Test normalized() yields magnitude 1 for non-zero vectors."""
        assert abs(v.normalized().length() - 1.0) < 1e-12

    def test_normalized_keeps_direction(self):
        """Test normalized() only rescales the vector."""
        assert Vec3(0.0, 0.0, -4.0).normalized() == Vec3(0.0, 0.0, -1.0)

    def test_normalized_does_not_mutate(self):
        """Test normalized() leaves the receiver untouched."""
        v = Vec3(3.0, 4.0, 0.0)
        v.normalized()
        assert v == Vec3(3.0, 4.0, 0.0)

    def test_normalize_in_place_matches_normalized(self):
        """Test the in-place variant is observably equivalent."""
        v = Vec3(1.0, -2.0, 2.0)
        expected = v.normalized()
        result = v.normalize()
        assert result is None
        assert v == expected

    def test_normalize_zero_vector_raises(self):
        """Test normalizing a zero vector fails fast."""
        with pytest.raises(ValueError, match="zero-length"):
            Vec3(0.0, 0.0, 0.0).normalized()
        with pytest.raises(ValueError, match="zero-length"):
            Vec3().normalize()


class TestSqrtAndReflect:
    """Tests for component-wise sqrt and reflection."""

    def test_sqrt(self):
        """Test component-wise square root."""
        assert Vec3(4.0, 9.0, 0.25).sqrt() == Vec3(2.0, 3.0, 0.5)

    def test_sqrt_in_place_matches_sqrt(self):
        """Test sqrt_inplace() mutates to the same value sqrt() returns."""
        v = Vec3(0.5, 0.7, 1.0)
        expected = v.sqrt()
        v.sqrt_inplace()
        assert v == expected

    def test_reflect(self):
        """Test reflecting (1, 0, 0) about normal (-1, 0, 0)."""
        assert Vec3(1.0, 0.0, 0.0).reflect(Vec3(-1.0, 0.0, 0.0)) == Vec3(-1.0, 0.0, 0.0)

    def test_reflect_at_45_degrees(self):
        """Test reflection about an upward normal flips the y component."""
        incident = Vec3(1.0, -1.0, 0.0)
        assert reflect(incident, Vec3(0.0, 1.0, 0.0)) == Vec3(1.0, 1.0, 0.0)


class TestConversions:
    """Tests for iteration, comparison and helpers."""

    def test_unpacking(self):
        """Test vectors unpack into their components."""
        x, y, z = Vec3(1.0, 2.0, 3.0)
        assert (x, y, z) == (1.0, 2.0, 3.0)
        assert Vec3(1.0, 2.0, 3.0).to_tuple() == (1.0, 2.0, 3.0)

    def test_from_iterable(self):
        """Test construction from a sequence."""
        assert Vec3.from_iterable([1, 2, 3]) == Vec3(1.0, 2.0, 3.0)

    def test_lerp_endpoints(self):
        """Test lerp returns its endpoints at t=0 and t=1."""
        a = Vec3(1.0, 1.0, 1.0)
        b = Vec3(0.5, 0.7, 1.0)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0).isclose(b)

    def test_not_hashable(self):
        """Test vectors are not hashable since they have in-place methods."""
        with pytest.raises(TypeError):
            hash(Vec3())

    def test_repr(self):
        """Test repr shows the components."""
        assert repr(Vec3(1, 0, math.inf)) == "Vec3(1.0, 0.0, inf)"
