"""Type-agnostic Add / Multiply dispatch."""
import numpy as np
import pytest

from mathkit_engine.algebra.complex import Complex
from mathkit_engine.algebra.dispatch import Kind, Operation, add, kind_of, multiply, subtract
from mathkit_engine.algebra.matrix import Matrix
from mathkit_engine.algebra.vector import Vector
from mathkit_engine.calculus import DoubleFunction, d_dt
from mathkit_engine.errors import BadOperationError


@pytest.mark.parametrize("value, kind", [
    (1, Kind.SCALAR),
    (2.5, Kind.SCALAR),
    (1j, Kind.SCALAR),
    (np.float64(3.0), Kind.SCALAR),
    (Complex(1, 1), Kind.SCALAR),
    (Vector(1, 2), Kind.VECTOR),
    (Matrix.eye(2), Kind.MATRIX),
    (d_dt, Kind.OPERATOR),
    (DoubleFunction(abs), Kind.FIELD),
    ("text", None),
])
def test_kind_of(value, kind):
    assert kind_of(value) is kind


def test_multiply_vector_by_scalar():
    assert multiply(Vector(1, 2, 3), 2.5) == Vector(2.5, 5.0, 7.5)
    assert multiply(2.5, Vector(1, 2, 3)) == Vector(2.5, 5.0, 7.5)


def test_add_scalar_to_vector_fails():
    v = Vector(1, 2, 3)
    with pytest.raises(BadOperationError) as exc:
        add(v, 2.5)
    assert exc.value.a is v
    assert exc.value.b == 2.5
    assert exc.value.symbol == "+"


def test_operators_route_through_dispatch():
    with pytest.raises(BadOperationError):
        Vector(1, 2, 3) + 2.5
    with pytest.raises(BadOperationError):
        2.5 + Vector(1, 2, 3)
    with pytest.raises(BadOperationError) as exc:
        Vector(1, 2) - Matrix.eye(2)
    assert exc.value.symbol == "-"


def test_unknown_operand_kind():
    with pytest.raises(BadOperationError):
        multiply("text", 2)


def test_scalar_rules():
    assert add(1, 2) == 3
    assert subtract(5.0, 2.0) == 3.0
    assert multiply(Complex(1, 1), Complex(1, 1)) == Complex(0, 2)
    assert add(Complex(1, 1), 1) == Complex(2, 1)


def test_vector_vector_rules():
    assert add(Vector(1, 2), Vector(3, 4)) == Vector(4, 6)
    assert subtract(Vector(1, 2), Vector(3, 4)) == Vector(-2, -2)
    assert multiply(Vector(1, 2), Vector(3, 4)) == 11.0


def test_custom_operation_table():
    concat = Operation("concat", "++")

    @concat.register(Kind.VECTOR, Kind.SCALAR, symmetric=True)
    def _append(vector, scalar):
        return Vector(*vector, scalar)

    assert concat(Vector(1, 2), 3) == Vector(1, 2, 3)
    # symmetric rules still receive (vector, scalar)
    assert concat(3, Vector(1, 2)) == Vector(1, 2, 3)
    assert concat.supports(Vector(1), 1)
    assert not concat.supports(Vector(1), Vector(1))
    with pytest.raises(BadOperationError) as exc:
        concat(Vector(1), Vector(1))
    assert exc.value.symbol == "++"
