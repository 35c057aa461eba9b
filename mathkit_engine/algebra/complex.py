"""Complex value type used for quantum amplitudes and gate entries.

Arrays store amplitudes as numpy complex128; ``Complex`` is the value handed
out at the API boundary and accepted anywhere a complex entry is expected.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    real: float
    imag: float = 0.0

    @classmethod
    def from_complex(cls, z) -> "Complex":
        z = complex(z)
        return cls(z.real, z.imag)

    @property
    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imag)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.real, self.imag)

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def __abs__(self) -> float:
        return self.magnitude

    def __neg__(self) -> "Complex":
        return Complex(-self.real, -self.imag)

    def _coerce(self, other):
        if isinstance(other, Complex):
            return complex(other)
        if isinstance(other, numbers.Number):
            return complex(other)
        return None

    def __add__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        return Complex.from_complex(complex(self) + z)

    __radd__ = __add__

    def __sub__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        return Complex.from_complex(complex(self) - z)

    def __rsub__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        return Complex.from_complex(z - complex(self))

    def __mul__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        a, b, c, d = self.real, self.imag, z.real, z.imag
        return Complex(a * c - b * d, a * d + b * c)

    __rmul__ = __mul__

    def __truediv__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        return Complex.from_complex(complex(self) / z)

    def __rtruediv__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        return Complex.from_complex(z / complex(self))

    def __eq__(self, other):
        z = self._coerce(other)
        if z is None:
            return NotImplemented
        return complex(self) == z

    def __hash__(self):
        return hash(complex(self))

    def __str__(self) -> str:
        sign = "-" if self.imag < 0 else "+"
        return f"{self.real} {sign} {abs(self.imag)}i"
