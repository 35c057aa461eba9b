"""Differential operators (the OPERATOR kind).

``operator * field`` differentiates the field, ``operator * scalar`` and
``operator * vector`` differentiate a constant.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from mathkit_engine.algebra.dispatch import Kind, multiply
from mathkit_engine.algebra.vector import Vector
from mathkit_engine.calculus.fields import DoubleFunction, Field, ScalarField, VectorField
from mathkit_engine.errors import ArityError, BadOperationError


class DifferentialOperator:
    kind = Kind.OPERATOR
    __array_ufunc__ = None
    symbol = "d"

    def apply(self, field: Field) -> Field:
        raise NotImplementedError

    def __mul__(self, other):
        return multiply(self, other)

    def __rmul__(self, other):
        return multiply(other, self)

    def __repr__(self) -> str:
        return self.symbol


class Derivative(DifferentialOperator):
    """d/dt of a function of one variable."""

    symbol = "d/dt"

    def apply(self, field: Field) -> Field:
        if not isinstance(field, DoubleFunction):
            raise BadOperationError(self, field, multiply.symbol)
        return field.derivative


class DirectionalDerivative(DifferentialOperator):
    """Derivative of a field along a fixed direction.

    Built either from an explicit direction (normalized) or from an axis
    index, in which case the direction takes the arity of each point.
    """

    def __init__(self, direction: Optional[Vector] = None, axis: Optional[int] = None):
        if (direction is None) == (axis is None):
            raise ValueError("give exactly one of direction or axis")
        self.direction = direction.unit if direction is not None else None
        self.axis = axis
        if axis is None:
            self.symbol = f"d/d{self.direction}"
        elif axis < 3:
            self.symbol = f"d/d{'xyz'[axis]}"
        else:
            self.symbol = f"d/dx{axis}"

    @classmethod
    def along_axis(cls, axis: int) -> "DirectionalDerivative":
        return cls(axis=axis)

    def direction_at(self, point: Vector) -> Vector:
        if self.axis is not None:
            offset = np.zeros(point.arity)
            offset[self.axis] = 1.0
            return Vector.from_iterable(offset)
        if self.direction.arity != point.arity:
            raise ArityError(point.arity, self.direction.arity)
        return self.direction

    def apply(self, field: Field) -> Field:
        if not isinstance(field, (ScalarField, VectorField)):
            raise BadOperationError(self, field, multiply.symbol)
        h = field.step

        def derivative(point: Vector):
            step = self.direction_at(point) * h
            return (field(point + step) - field(point - step)) / (2 * h)

        return field._like(derivative)


d_dt = Derivative()
d_dx = DirectionalDerivative.along_axis(0)
d_dy = DirectionalDerivative.along_axis(1)
d_dz = DirectionalDerivative.along_axis(2)


# ── dispatch rules ───────────────────────────────────────────────────

@multiply.register(Kind.OPERATOR, Kind.FIELD)
def _differentiate_field(operator: DifferentialOperator, field: Field) -> Field:
    return operator.apply(field)


@multiply.register(Kind.OPERATOR, Kind.SCALAR)
def _differentiate_constant(operator: DifferentialOperator, scalar) -> float:
    return 0.0


@multiply.register(Kind.OPERATOR, Kind.VECTOR)
def _differentiate_constant_vector(operator: DifferentialOperator, vector: Vector) -> Vector:
    return vector._like(np.zeros(vector.arity))
