# Importing the submodules registers their dispatch rules.
from mathkit_engine.algebra.complex import Complex
from mathkit_engine.algebra.dispatch import Kind, Operation, add, kind_of, multiply, subtract
from mathkit_engine.algebra.vector import Column, Row, Vector, Vector3D
from mathkit_engine.algebra.matrix import Matrix, SquareMatrix

__all__ = [
    'Complex',
    'Kind', 'Operation', 'add', 'kind_of', 'multiply', 'subtract',
    'Vector', 'Vector3D', 'Row', 'Column',
    'Matrix', 'SquareMatrix',
]
