"""Error taxonomy.

Every error is raised at the point of the invalid operation and propagates to
the caller unchanged.  Diagnostic values are kept as attributes.
"""
from __future__ import annotations

from typing import Any


class MathKitError(Exception):
    """Base class for all engine errors."""


class ArityError(MathKitError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected vector of arity {expected} but got {actual}.")


class UnitVectorError(MathKitError):
    def __init__(self, magnitude: float):
        self.magnitude = magnitude
        super().__init__(f"Expected unit vector but got vector of magnitude {magnitude}.")


class MatrixShapeError(MathKitError, ValueError):
    """Rows of unequal length."""


class MatrixDimensionError(MathKitError):
    def __init__(self, message: str = "Matrix must be square shaped to take the determinant."):
        super().__init__(message)


class GateDimensionError(MatrixDimensionError):
    """Gate or state size is not a power of two."""


class BadOperationError(MathKitError):
    def __init__(self, a: Any, b: Any, symbol: str):
        self.a = a
        self.b = b
        self.symbol = symbol
        super().__init__(f"Cannot execute operation: {a!r} {symbol} {b!r}")


class CircuitLayoutError(MathKitError, ValueError):
    """Gate placement does not fit the register."""


class CircuitBuildError(MathKitError):
    """Builder used after it was finalized."""
