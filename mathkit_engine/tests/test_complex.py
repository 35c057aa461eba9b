"""Complex value arithmetic."""
import math

from mathkit_engine.algebra.complex import Complex


def test_arithmetic():
    x = Complex(1.0, 1.0)
    assert x * x == Complex(0.0, 2.0)
    assert x + Complex(2.0, -3.0) == Complex(3.0, -2.0)
    assert x - 1 == Complex(0.0, 1.0)
    assert 2 * x == Complex(2.0, 2.0)
    assert -x == Complex(-1.0, -1.0)
    assert x / x == Complex(1.0, 0.0)


def test_conjugate_and_magnitude():
    x = Complex(1.0, 1.0)
    assert x.conjugate == Complex(1.0, -1.0)
    assert math.isclose(x.magnitude, math.sqrt(2))
    assert math.isclose(abs(Complex(3.0, 4.0)), 5.0)
    assert x * x.conjugate == Complex(2.0, 0.0)


def test_conversion():
    assert complex(Complex(1.5, -2.0)) == 1.5 - 2.0j
    assert Complex.from_complex(2j) == Complex(0.0, 2.0)
    assert Complex(2.0) == 2
    assert str(Complex(1.0, -1.0)) == "1.0 - 1.0i"
