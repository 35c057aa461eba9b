"""Matrices over numbers or vectors.

Entries live in a read-only 2-D numpy array: float64 / complex128 for
numeric matrices, ``object`` as soon as one entry is a ``Vector``.  The
determinant is a first-row cofactor expansion written only in terms of
``+``, ``-`` and ``*`` on entries, so the same routine yields a number for
numeric matrices and a vector for the symbolic ``|i j k; a; b|`` matrix
behind the cross product.
"""
from __future__ import annotations

from typing import Iterable

import numpy as np

from mathkit_engine.algebra.complex import Complex
from mathkit_engine.algebra.dispatch import Kind, add, multiply, subtract
from mathkit_engine.algebra.vector import Column, Row, Vector, _component_array
from mathkit_engine.config import DEFAULT_CONFIG
from mathkit_engine.errors import (
    ArityError,
    BadOperationError,
    MatrixDimensionError,
    MatrixShapeError,
)


def _freeze(arr: np.ndarray) -> np.ndarray:
    if arr.dtype != object:
        dtype = np.complex128 if np.iscomplexobj(arr) else np.float64
        arr = arr.astype(dtype)
    else:
        arr = arr.copy()
    arr.flags.writeable = False
    return arr


def _entry_array(rows: Iterable[Iterable]) -> np.ndarray:
    rows = [list(r) for r in rows]
    widths = sorted({len(r) for r in rows})
    if len(widths) > 1:
        raise MatrixShapeError(f"Matrix rows must have equal length, got lengths {widths}.")
    m, n = len(rows), (widths[0] if widths else 0)
    flat = [complex(e) if isinstance(e, Complex) else e for r in rows for e in r]
    if any(isinstance(e, Vector) for e in flat):
        arr = np.empty((m, n), dtype=object)
        for idx, entry in enumerate(flat):
            arr[divmod(idx, n)] = entry
        return _freeze(arr)
    return _freeze(np.array(flat).reshape(m, n))


def _value(entry):
    return entry.item() if isinstance(entry, np.generic) else entry


def _entry_product(entry, minor):
    # vector entries must all sit in the expansion row; vector * vector is a dot product
    if isinstance(entry, Vector) and isinstance(minor, Vector):
        raise BadOperationError(entry, minor, "*")
    return entry * minor


def _cofactor_determinant(entries: np.ndarray):
    n = entries.shape[0]
    if n == 0:
        return 1.0
    if n == 1:
        return _value(entries[0, 0])
    if n == 2:
        a, b = _value(entries[0, 0]), _value(entries[0, 1])
        c, d = _value(entries[1, 0]), _value(entries[1, 1])
        return _entry_product(a, d) - _entry_product(b, c)
    rest = entries[1:, :]
    total = None
    for j in range(n):
        term = _entry_product(_value(entries[0, j]), _cofactor_determinant(np.delete(rest, j, axis=1)))
        if j % 2:
            term = -term
        total = term if total is None else total + term
    return total


class Matrix:
    """Rectangular grid of entries with value semantics."""

    kind = Kind.MATRIX
    __array_ufunc__ = None

    def __init__(self, rows: Iterable[Iterable]):
        self._entries = _entry_array(rows)
        self._validate()

    def _validate(self) -> None:
        pass

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> "Matrix":
        obj = cls.__new__(cls)
        obj._entries = _freeze(np.asarray(arr))
        obj._validate()
        return obj

    @classmethod
    def eye(cls, n: int) -> "Matrix":
        target = SquareMatrix if cls is Matrix else cls
        return target._from_array(np.eye(n))

    @classmethod
    def zeros(cls, m: int, n: int) -> "Matrix":
        return _shaped_type((m, n))._from_array(np.zeros((m, n)))

    # ── views ────────────────────────────────────────────────────────

    @property
    def entries(self) -> np.ndarray:
        return self._entries

    @property
    def shape(self) -> tuple[int, int]:
        return self._entries.shape

    @property
    def row_count(self) -> int:
        return self._entries.shape[0]

    @property
    def column_count(self) -> int:
        return self._entries.shape[1]

    @property
    def is_square(self) -> bool:
        return self.row_count == self.column_count

    def __getitem__(self, index: tuple[int, int]):
        return _value(self._entries[index])

    @property
    def row(self) -> "_RowAccessor":
        return _RowAccessor(self)

    @property
    def column(self) -> "_ColumnAccessor":
        return _ColumnAccessor(self)

    def to_lists(self) -> list[list]:
        return [[_value(e) for e in r] for r in self._entries]

    # ── structure ────────────────────────────────────────────────────

    @property
    def transpose(self) -> "Matrix":
        return self._with(self._entries.T)

    @property
    def conjugate_transpose(self) -> "Matrix":
        return self._with(self._entries.conj().T)

    @property
    def determinant(self):
        if not self.is_square:
            raise MatrixDimensionError()
        return _cofactor_determinant(self._entries)

    def direct_add(self, other: "Matrix") -> "Matrix":
        """Block-diagonal ``self ⊕ other``."""
        (m1, n1), (m2, n2) = self.shape, other.shape
        block = np.zeros((m1 + m2, n1 + n2), dtype=np.result_type(self._entries, other._entries))
        block[:m1, :n1] = self._entries
        block[m1:, n1:] = other._entries
        return _shaped_type(block.shape)._from_array(block)

    def tensor(self, other: "Matrix") -> "Matrix":
        """Kronecker product ``self ⊗ other``."""
        arr = np.kron(self._entries, other._entries)
        return _combined_type(self, other, arr.shape)._from_array(arr)

    def allclose(self, other: "Matrix", atol: float = DEFAULT_CONFIG.atol) -> bool:
        return self.shape == other.shape and bool(
            np.allclose(self._entries, other._entries, rtol=0.0, atol=atol)
        )

    def _with(self, arr: np.ndarray) -> "Matrix":
        target = type(self) if arr.shape == self.shape else _shaped_type(arr.shape)
        return target._from_array(arr)

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

    __matmul__ = __mul__
    __rmatmul__ = __rmul__

    def __neg__(self):
        return self._with(-self._entries)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._entries, other._entries))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_lists()!r})"

    def __str__(self) -> str:
        return "\n".join("[" + ", ".join(str(e) for e in r) + "]" for r in self.to_lists())


class SquareMatrix(Matrix):
    """Matrix with as many rows as columns."""

    def _validate(self) -> None:
        if not self.is_square:
            raise MatrixDimensionError(
                f"Square matrix expected, got {self.row_count}x{self.column_count}."
            )


def _shaped_type(shape: tuple[int, int]) -> type:
    return SquareMatrix if shape[0] == shape[1] else Matrix


def _combined_type(a: Matrix, b: Matrix, shape: tuple[int, int]) -> type:
    if type(a) is type(b) and (type(a) is Matrix or shape[0] == shape[1]):
        return type(a)
    return _shaped_type(shape)


# ── row / column accessors ──────────────────────────────────────────

def _line_values(line, length: int) -> np.ndarray:
    values = line.dimensions if isinstance(line, Vector) else _component_array(line)
    if len(values) != length:
        raise ArityError(length, len(values))
    return values


class _RowAccessor:
    def __init__(self, matrix: Matrix):
        self._matrix = matrix

    def __len__(self) -> int:
        return self._matrix.row_count

    def __getitem__(self, i: int) -> Row:
        return Row._from_array(self._matrix.entries[i, :])

    def __iter__(self):
        return (self[i] for i in range(len(self)))

    def replace(self, i: int, row) -> Matrix:
        """New matrix with row ``i`` swapped for ``row``."""
        entries = self._matrix.entries
        values = _line_values(row, self._matrix.column_count)
        arr = entries.astype(np.result_type(entries, values))
        arr[i, :] = values
        return self._matrix._with(arr)


class _ColumnAccessor:
    def __init__(self, matrix: Matrix):
        self._matrix = matrix

    def __len__(self) -> int:
        return self._matrix.column_count

    def __getitem__(self, j: int) -> Column:
        return Column._from_array(self._matrix.entries[:, j])

    def __iter__(self):
        return (self[j] for j in range(len(self)))

    def replace(self, j: int, column) -> Matrix:
        """New matrix with column ``j`` swapped for ``column``."""
        entries = self._matrix.entries
        values = _line_values(column, self._matrix.row_count)
        arr = entries.astype(np.result_type(entries, values))
        arr[:, j] = values
        return self._matrix._with(arr)


# ── dispatch rules ───────────────────────────────────────────────────

def _check_same_shape(a: Matrix, b: Matrix) -> None:
    if a.shape != b.shape:
        raise MatrixShapeError(f"Shapes {a.shape} and {b.shape} do not match.")


@add.register(Kind.MATRIX, Kind.MATRIX)
def _add_matrices(a: Matrix, b: Matrix) -> Matrix:
    _check_same_shape(a, b)
    return _combined_type(a, b, a.shape)._from_array(a.entries + b.entries)


@subtract.register(Kind.MATRIX, Kind.MATRIX)
def _subtract_matrices(a: Matrix, b: Matrix) -> Matrix:
    _check_same_shape(a, b)
    return _combined_type(a, b, a.shape)._from_array(a.entries - b.entries)


@multiply.register(Kind.MATRIX, Kind.MATRIX)
def _multiply_matrices(a: Matrix, b: Matrix) -> Matrix:
    if a.column_count != b.row_count:
        raise MatrixShapeError(f"Cannot multiply {a.shape} by {b.shape}.")
    arr = a.entries @ b.entries
    return _combined_type(a, b, arr.shape)._from_array(arr)


@multiply.register(Kind.MATRIX, Kind.SCALAR, symmetric=True)
def _scale_matrix(matrix: Matrix, scalar) -> Matrix:
    if isinstance(scalar, Complex):
        scalar = complex(scalar)
    return matrix._with(matrix.entries * scalar)


@multiply.register(Kind.MATRIX, Kind.VECTOR)
def _matrix_times_column(matrix: Matrix, vector: Vector) -> Column:
    if isinstance(vector, Row):
        raise BadOperationError(matrix, vector, "*")
    if vector.arity != matrix.column_count:
        raise ArityError(matrix.column_count, vector.arity)
    result_type = type(vector) if isinstance(vector, Column) else Column
    return result_type._from_array(matrix.entries @ vector.dimensions)


@multiply.register(Kind.VECTOR, Kind.MATRIX)
def _row_times_matrix(vector: Vector, matrix: Matrix) -> Row:
    if isinstance(vector, Column):
        raise BadOperationError(vector, matrix, "*")
    if vector.arity != matrix.row_count:
        raise ArityError(matrix.row_count, vector.arity)
    result_type = type(vector) if isinstance(vector, Row) else Row
    return result_type._from_array(vector.dimensions @ matrix.entries)
