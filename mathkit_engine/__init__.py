"""Vectors, matrices, type-agnostic arithmetic and a small quantum circuit simulator."""
from mathkit_engine.errors import (
    ArityError,
    BadOperationError,
    CircuitBuildError,
    CircuitLayoutError,
    GateDimensionError,
    MathKitError,
    MatrixDimensionError,
    MatrixShapeError,
    UnitVectorError,
)
from mathkit_engine.algebra import (
    Column,
    Complex,
    Kind,
    Matrix,
    Operation,
    Row,
    SquareMatrix,
    Vector,
    Vector3D,
    add,
    kind_of,
    multiply,
    subtract,
)
from mathkit_engine.calculus import DoubleFunction, ScalarField, VectorField
from mathkit_engine.quantum import QuantumBasis, QuantumCircuit, QuantumGate, QuantumState

__version__ = "0.1.0"
