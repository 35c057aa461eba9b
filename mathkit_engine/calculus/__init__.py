from mathkit_engine.calculus.fields import DoubleFunction, Field, ScalarField, VectorField
from mathkit_engine.calculus.operators import (
    Derivative,
    DifferentialOperator,
    DirectionalDerivative,
    d_dt,
    d_dx,
    d_dy,
    d_dz,
)

__all__ = [
    'Field', 'DoubleFunction', 'ScalarField', 'VectorField',
    'DifferentialOperator', 'Derivative', 'DirectionalDerivative',
    'd_dt', 'd_dx', 'd_dy', 'd_dz',
]
