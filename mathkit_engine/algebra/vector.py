"""Arity-checked vectors.

A ``Vector`` wraps a read-only 1-D numpy array (float64, or complex128 as soon
as one component is complex).  Values are never mutated; every operation
returns a new instance.  ``Row`` and ``Column`` tag the orientation used by
the matrix multiplication rules.
"""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from mathkit_engine.algebra.complex import Complex
from mathkit_engine.algebra.dispatch import Kind, add, is_scalar, multiply, subtract
from mathkit_engine.config import DEFAULT_CONFIG
from mathkit_engine.errors import ArityError, BadOperationError, UnitVectorError


def _component_array(values: Iterable) -> np.ndarray:
    items = [complex(v) if isinstance(v, Complex) else v for v in values]
    arr = np.asarray(items)
    if arr.ndim != 1:
        raise ValueError("vector components must be scalars")
    dtype = np.complex128 if np.iscomplexobj(arr) else np.float64
    arr = arr.astype(dtype)
    arr.flags.writeable = False
    return arr


class Vector:
    """Ordered tuple of numbers with component-wise algebra."""

    kind = Kind.VECTOR
    # Keep numpy from broadcasting over us; its binary ops defer to ours.
    __array_ufunc__ = None

    def __init__(self, *values):
        self._dimensions = _component_array(values)
        self._validate()

    def _validate(self) -> None:
        pass

    @classmethod
    def from_iterable(cls, values: Iterable) -> "Vector":
        return cls(*values)

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> "Vector":
        obj = cls.__new__(cls)
        obj._dimensions = _component_array(arr)
        obj._validate()
        return obj

    @classmethod
    def zero(cls, arity: int) -> "Vector":
        return cls._from_array(np.zeros(arity))

    # ── views ────────────────────────────────────────────────────────

    @property
    def dimensions(self) -> np.ndarray:
        return self._dimensions

    @property
    def arity(self) -> int:
        return len(self._dimensions)

    def __len__(self) -> int:
        return self.arity

    def __getitem__(self, index: int):
        return self._dimensions[index].item()

    def __iter__(self):
        return iter(self._dimensions.tolist())

    @property
    def row(self) -> "Row":
        return Row._from_array(self._dimensions)

    @property
    def column(self) -> "Column":
        return Column._from_array(self._dimensions)

    @property
    def to3d(self) -> "Vector3D":
        if isinstance(self, Vector3D):
            return self
        if self.arity != 3:
            raise ArityError(3, self.arity)
        return Vector3D._from_array(self._dimensions)

    # ── metric ───────────────────────────────────────────────────────

    @property
    def magnitude(self) -> float:
        return float(np.linalg.norm(self._dimensions))

    @property
    def is_zero(self) -> bool:
        return not np.any(self._dimensions)

    def as_unit(self, atol: float = DEFAULT_CONFIG.atol) -> "Vector":
        """Return ``self`` if it already has magnitude 1, else fail."""
        magnitude = self.magnitude
        if abs(magnitude - 1.0) > atol:
            raise UnitVectorError(magnitude)
        return self

    @property
    def unit(self) -> "Vector":
        """Normalized copy pointing the same way."""
        magnitude = self.magnitude
        if magnitude == 0.0:
            raise UnitVectorError(magnitude)
        return self / magnitude

    def dot(self, other: "Vector"):
        _check_arity(self, other)
        return np.dot(self._dimensions, other._dimensions).item()

    def outer(self, other: "Vector"):
        from mathkit_engine.algebra.matrix import Matrix

        return Matrix._from_array(np.outer(self._dimensions, other._dimensions))

    def projection_onto(self, other: "Vector") -> "Vector":
        if other.is_zero:
            raise UnitVectorError(0.0)
        return other * ((self * other) / (other * other))

    def rejection_from(self, other: "Vector") -> "Vector":
        return self - self.projection_onto(other)

    def angle_from(self, other: "Vector") -> float:
        if self.is_zero or other.is_zero:
            raise UnitVectorError(0.0)
        cosine = (self * other) / (self.magnitude * other.magnitude)
        return math.acos(max(-1.0, min(1.0, cosine)))

    def allclose(self, other: "Vector", atol: float = DEFAULT_CONFIG.atol) -> bool:
        return self.arity == other.arity and bool(
            np.allclose(self._dimensions, other._dimensions, rtol=0.0, atol=atol)
        )

    # ── operators ────────────────────────────────────────────────────

    def __add__(self, other):
        return add(self, other)

    def __radd__(self, other):
        return add(other, self)

    def __sub__(self, other):
        return subtract(self, other)

    def __rsub__(self, other):
        return subtract(other, self)

    def __mul__(self, other):
        return multiply(self, other)

    def __rmul__(self, other):
        return multiply(other, self)

    def __truediv__(self, other):
        if not is_scalar(other):
            raise BadOperationError(self, other, "/")
        if isinstance(other, Complex):
            other = complex(other)
        return self._like(self._dimensions / other)

    def __neg__(self):
        return self._like(-self._dimensions)

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.arity == other.arity and bool(np.array_equal(self._dimensions, other._dimensions))

    def __hash__(self):
        return hash(tuple(self._dimensions.tolist()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(c) for c in self)})"

    def __str__(self) -> str:
        return "<" + ", ".join(str(c) for c in self) + ">"

    def _like(self, arr: np.ndarray) -> "Vector":
        return type(self)._from_array(arr)


class Vector3D(Vector):
    """Vector of arity exactly 3; adds the cross product."""

    def _validate(self) -> None:
        if self.arity != 3:
            raise ArityError(3, self.arity)

    def cross(self, other: Vector) -> "Vector3D":
        """Cross product as the determinant of ``|i j k; a; b|``."""
        from mathkit_engine.algebra.matrix import SquareMatrix

        other = other.to3d
        symbolic = SquareMatrix([
            [Vector.i, Vector.j, Vector.k],
            list(self),
            list(other),
        ])
        return symbolic.determinant.to3d


class Row(Vector):
    """1×n vector."""


class Column(Vector):
    """n×1 vector."""

    def __str__(self) -> str:
        return "\n".join(f"[{c}]" for c in self)


Vector.i = Vector3D(1.0, 0.0, 0.0)
Vector.j = Vector3D(0.0, 1.0, 0.0)
Vector.k = Vector3D(0.0, 0.0, 1.0)
Vector.origin = Vector3D(0.0, 0.0, 0.0)


# ── dispatch rules ───────────────────────────────────────────────────

def _check_arity(a: Vector, b: Vector) -> None:
    if a.arity != b.arity:
        raise ArityError(a.arity, b.arity)


def _result_type(a: Vector, b: Vector) -> type:
    return type(a) if type(a) is type(b) else Vector


@add.register(Kind.VECTOR, Kind.VECTOR)
def _add_vectors(a: Vector, b: Vector) -> Vector:
    _check_arity(a, b)
    return _result_type(a, b)._from_array(a.dimensions + b.dimensions)


@subtract.register(Kind.VECTOR, Kind.VECTOR)
def _subtract_vectors(a: Vector, b: Vector) -> Vector:
    _check_arity(a, b)
    return _result_type(a, b)._from_array(a.dimensions - b.dimensions)


@multiply.register(Kind.VECTOR, Kind.VECTOR)
def _multiply_vectors(a: Vector, b: Vector):
    # column · row is the outer product, every other pairing is the dot product
    if isinstance(a, Column) and isinstance(b, Row):
        return a.outer(b)
    return a.dot(b)


@multiply.register(Kind.VECTOR, Kind.SCALAR, symmetric=True)
def _scale_vector(vector: Vector, scalar) -> Vector:
    if isinstance(scalar, Complex):
        scalar = complex(scalar)
    return vector._like(vector.dimensions * scalar)
