"""Type-agnostic arithmetic.

Operands are classified into a small set of kinds and each operation keeps a
table of rules keyed by the ``(kind_a, kind_b)`` pair.  Types take part by
declaring a class attribute ``kind``; plain numbers (and ``Complex``) are
scalars.  A pair with no rule raises ``BadOperationError``.

Rules are registered by the modules that define the operand types, e.g.::

    @multiply.register(Kind.VECTOR, Kind.SCALAR, symmetric=True)
    def _scale(vector, scalar):
        ...
"""
from __future__ import annotations

import enum
import numbers
from typing import Any, Callable

from mathkit_engine.algebra.complex import Complex
from mathkit_engine.errors import BadOperationError


class Kind(enum.Enum):
    SCALAR = "scalar"
    VECTOR = "vector"
    MATRIX = "matrix"
    OPERATOR = "operator"
    FIELD = "field"


def kind_of(value: Any) -> Kind | None:
    """Return the operand kind of ``value`` or None if it takes no part."""
    kind = getattr(type(value), "kind", None)
    if isinstance(kind, Kind):
        return kind
    if isinstance(value, (numbers.Number, Complex)):
        return Kind.SCALAR
    return None


def is_scalar(value: Any) -> bool:
    return kind_of(value) is Kind.SCALAR


Rule = Callable[[Any, Any], Any]


class Operation:
    """A binary operation resolved by the runtime kinds of both operands."""

    def __init__(self, name: str, symbol: str):
        self.name = name
        self.symbol = symbol
        self._rules: dict[tuple[Kind, Kind], Rule] = {}

    def register(self, kind_a: Kind, kind_b: Kind, symmetric: bool = False):
        """Decorator adding a rule for ``(kind_a, kind_b)``.

        With ``symmetric=True`` the swapped pair is registered too and the
        rule always receives its operands in the declared order.
        """
        def decorator(fn: Rule) -> Rule:
            self._rules[(kind_a, kind_b)] = fn
            if symmetric and kind_a is not kind_b:
                self._rules[(kind_b, kind_a)] = lambda a, b: fn(b, a)
            return fn
        return decorator

    def resolve(self, a: Any, b: Any) -> Rule | None:
        return self._rules.get((kind_of(a), kind_of(b)))

    def supports(self, a: Any, b: Any) -> bool:
        return self.resolve(a, b) is not None

    def __call__(self, a: Any, b: Any) -> Any:
        rule = self.resolve(a, b)
        if rule is None:
            raise BadOperationError(a, b, self.symbol)
        return rule(a, b)

    def __repr__(self) -> str:
        return f"Operation({self.name!r}, {self.symbol!r}, rules={len(self._rules)})"


add = Operation("add", "+")
subtract = Operation("subtract", "-")
multiply = Operation("multiply", "*")


# ── scalar ⊕ scalar ─────────────────────────────────────────────────

def _plain(value):
    return complex(value) if isinstance(value, Complex) else value


@add.register(Kind.SCALAR, Kind.SCALAR)
def _add_scalars(a, b):
    if isinstance(a, Complex) or isinstance(b, Complex):
        return Complex.from_complex(_plain(a) + _plain(b))
    return a + b


@subtract.register(Kind.SCALAR, Kind.SCALAR)
def _subtract_scalars(a, b):
    if isinstance(a, Complex) or isinstance(b, Complex):
        return Complex.from_complex(_plain(a) - _plain(b))
    return a - b


@multiply.register(Kind.SCALAR, Kind.SCALAR)
def _multiply_scalars(a, b):
    if isinstance(a, Complex) or isinstance(b, Complex):
        return Complex.from_complex(_plain(a) * _plain(b))
    return a * b
