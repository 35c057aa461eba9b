"""Functions and fields that take part in dispatch as the FIELD kind.

``DoubleFunction`` maps numbers to numbers, ``ScalarField`` vectors to
numbers and ``VectorField`` vectors to vectors.  Derivatives are central
differences with step ``EngineConfig.derivative_step``.
"""
from __future__ import annotations

from typing import Callable

import numpy as np

from mathkit_engine.algebra.dispatch import Kind, add, multiply, subtract
from mathkit_engine.algebra.vector import Vector
from mathkit_engine.config import DEFAULT_CONFIG
from mathkit_engine.errors import BadOperationError


class Field:
    kind = Kind.FIELD
    __array_ufunc__ = None

    def __init__(self, fn: Callable, step: float = DEFAULT_CONFIG.derivative_step):
        self._fn = fn
        self.step = step

    def __call__(self, x):
        return self._fn(x)

    def _like(self, fn: Callable) -> "Field":
        return type(self)(fn, self.step)

    def __add__(self, other):
        return add(self, other)

    def __sub__(self, other):
        return subtract(self, other)

    def __mul__(self, other):
        return multiply(self, other)

    def __rmul__(self, other):
        return multiply(other, self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fn!r})"


class DoubleFunction(Field):
    """f: R -> R."""

    def differentiate(self, x: float) -> float:
        h = self.step
        return (self(x + h) - self(x - h)) / (2 * h)

    @property
    def derivative(self) -> "DoubleFunction":
        return self._like(self.differentiate)


def _axis_step(arity: int, axis: int, h: float) -> Vector:
    offset = np.zeros(arity)
    offset[axis] = h
    return Vector.from_iterable(offset)


class ScalarField(Field):
    """f: R^n -> R."""

    def partial_derivative(self, axis: int, point: Vector) -> float:
        step = _axis_step(point.arity, axis, self.step)
        return (self(point + step) - self(point - step)) / (2 * self.step)

    def gradient(self, point: Vector) -> Vector:
        return Vector.from_iterable(self.partial_derivative(i, point) for i in range(point.arity))


class VectorField(Field):
    """f: R^n -> R^m."""

    def partial_derivative(self, axis: int, point: Vector) -> Vector:
        step = _axis_step(point.arity, axis, self.step)
        return (self(point + step) - self(point - step)) / (2 * self.step)


# ── dispatch rules ───────────────────────────────────────────────────

@multiply.register(Kind.FIELD, Kind.SCALAR, symmetric=True)
def _scale_field(field: Field, scalar) -> Field:
    return field._like(lambda x: field(x) * scalar)


@add.register(Kind.FIELD, Kind.FIELD)
def _add_fields(a: Field, b: Field) -> Field:
    if type(a) is not type(b):
        raise BadOperationError(a, b, add.symbol)
    return a._like(lambda x: a(x) + b(x))


@subtract.register(Kind.FIELD, Kind.FIELD)
def _subtract_fields(a: Field, b: Field) -> Field:
    if type(a) is not type(b):
        raise BadOperationError(a, b, subtract.symbol)
    return a._like(lambda x: a(x) - b(x))
