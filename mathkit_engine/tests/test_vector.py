"""Vector algebra, arity and unit checks."""
import math

import numpy as np
import pytest

from mathkit_engine.algebra.matrix import Matrix
from mathkit_engine.algebra.vector import Column, Row, Vector, Vector3D
from mathkit_engine.errors import ArityError, UnitVectorError

V1 = Vector(2.0, 3.0, 4.0)
V2 = Vector(5.0, 6.0, 7.0)


def _random_pairs(count, seed=7):
    rng = np.random.default_rng(seed)
    return [
        (Vector3D(*rng.uniform(-10, 10, 3)), Vector3D(*rng.uniform(-10, 10, 3)))
        for _ in range(count)
    ]


# ── construction / constants ─────────────────────────────────────────

def test_unit_axis_constants():
    assert Vector.i == Vector(1, 0, 0)
    assert Vector.j == Vector(0, 1, 0)
    assert Vector.k == Vector(0, 0, 1)
    assert Vector.origin.is_zero
    assert isinstance(Vector.i, Vector3D)


def test_arity_and_components():
    v = Vector(1, 2, 3, 4)
    assert v.arity == 4
    assert len(v) == 4
    assert v[2] == 3.0
    assert list(v) == [1.0, 2.0, 3.0, 4.0]


def test_dimensions_are_read_only():
    with pytest.raises(ValueError):
        V1.dimensions[0] = 10.0


def test_complex_components_promote_dtype():
    assert Vector(1, 2).dimensions.dtype == np.float64
    assert Vector(1, 2j).dimensions.dtype == np.complex128


def test_hashable_value_type():
    assert {Vector(1, 2): "a"}[Vector(1.0, 2.0)] == "a"


# ── arity ────────────────────────────────────────────────────────────

def test_to3d_wrong_arity():
    with pytest.raises(ArityError) as exc:
        Vector(1.0).to3d
    assert exc.value.expected == 3
    assert exc.value.actual == 1


def test_to3d_keeps_components():
    v = V1.to3d
    assert isinstance(v, Vector3D)
    assert v == V1


def test_vector3d_rejects_other_arity():
    with pytest.raises(ArityError):
        Vector3D(1.0, 2.0)


def test_add_mismatched_arity():
    with pytest.raises(ArityError):
        Vector(1, 2) + Vector(1, 2, 3)


# ── arithmetic ───────────────────────────────────────────────────────

def test_component_wise():
    assert V1 + V2 == Vector(7, 9, 11)
    assert V1 - V2 == Vector(-3, -3, -3)
    assert -V1 == Vector(-2, -3, -4)
    assert V1 / 2 == Vector(1, 1.5, 2)


def test_dot_product():
    assert V1 * V2 == 56.0


def test_cross_product():
    assert V1.to3d.cross(V2.to3d) == Vector(-3, 6, -3)
    assert Vector.i.cross(Vector.j) == Vector.k


@pytest.mark.parametrize("a, b", _random_pairs(10))
def test_cross_orthogonal(a, b):
    c = a.cross(b)
    assert abs(c * a) < 1e-9
    assert abs(c * b) < 1e-9


@pytest.mark.parametrize("a, b", _random_pairs(10, seed=11))
def test_cross_anticommutes(a, b):
    assert a.cross(b).allclose(-(b.cross(a)), atol=1e-12)


def test_outer_product():
    m = V1.outer(V2)
    assert isinstance(m, Matrix)
    assert m.shape == (3, 3)
    for i in range(3):
        for j in range(3):
            assert m[i, j] == V1[i] * V2[j]


def test_row_column_products():
    assert Row(1, 2, 3) * Column(4, 5, 6) == 32.0
    outer = Column(1, 2) * Row(3, 4)
    assert outer == Matrix([[3, 4], [6, 8]])


def test_row_and_column_views():
    assert isinstance(V1.row, Row)
    assert isinstance(V1.column, Column)
    assert V1.column == V1


# ── metric ───────────────────────────────────────────────────────────

@pytest.mark.parametrize("v, zero", [
    (Vector(0, 0, 0), True),
    (Vector(0.0), True),
    (Vector(0, 1e-3, 0), False),
    (Vector(3, 4), False),
])
def test_magnitude_zero_iff_zero_vector(v, zero):
    assert (v.magnitude == 0) == zero
    assert v.is_zero == zero


def test_magnitude_and_unit():
    v = Vector(3, 4)
    assert v.magnitude == 5.0
    assert v.unit.allclose(Vector(0.6, 0.8))


def test_as_unit_accepts_unit_vector():
    v = Vector(0.6, 0.8)
    assert v.as_unit() is v
    assert Vector.k.as_unit() is Vector.k


def test_as_unit_rejects_other_magnitude():
    with pytest.raises(UnitVectorError) as exc:
        Vector(3, 4).as_unit()
    assert exc.value.magnitude == 5.0


def test_unit_of_zero_vector():
    with pytest.raises(UnitVectorError):
        Vector.zero(3).unit


def test_projection_and_rejection():
    assert V1.projection_onto(Vector.i) == Vector(2, 0, 0)
    assert V1.rejection_from(Vector.i) == Vector(0, 3, 4)
    p = V1.projection_onto(V2)
    r = V1.rejection_from(V2)
    assert (p + r).allclose(V1)
    assert abs(r * V2) < 1e-9


def test_zero_vector_has_no_direction():
    with pytest.raises(UnitVectorError):
        V1.projection_onto(Vector.origin)
    with pytest.raises(UnitVectorError):
        V1.rejection_from(Vector.origin)
    with pytest.raises(UnitVectorError):
        Vector.origin.angle_from(V1)
    assert Vector.origin.projection_onto(V1).is_zero


def test_angle_between():
    assert math.isclose(Vector.i.angle_from(Vector.j), math.pi / 2)
    assert math.isclose(V1.angle_from(V1 * 3), 0.0, abs_tol=1e-7)
    expected = math.acos(56 / (V1.magnitude * V2.magnitude))
    assert math.isclose(V1.angle_from(V2), expected)
