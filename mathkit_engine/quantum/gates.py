"""Quantum gates and the named gate library.

Convention: BIG-ENDIAN.
  qubit 0 is the leftmost factor of every tensor product, so in a k-qubit
  gate the first qubit is the most significant bit of the row/col index.
  A controlled gate takes its control on its first qubit:
      cU = I ⊕ U   (control = 0 block, then control = 1 block)
"""
from __future__ import annotations

import numpy as np

from mathkit_engine.algebra.matrix import SquareMatrix
from mathkit_engine.config import DEFAULT_CONFIG
from mathkit_engine.errors import GateDimensionError

ENDIANNESS = "big"

_S2 = 1.0 / np.sqrt(2.0)


class QuantumGate(SquareMatrix):
    """Square complex matrix acting on 2^k amplitudes.

    Unitarity is a property of the library gates, checked on demand with
    ``is_unitary`` rather than on construction.
    """

    def _validate(self) -> None:
        super()._validate()
        n = self.row_count
        if n < 1 or n & (n - 1):
            raise GateDimensionError(f"Gate dimension must be a power of two, got {n}.")
        if self._entries.dtype != np.complex128:
            entries = self._entries.astype(np.complex128)
            entries.flags.writeable = False
            self._entries = entries

    @classmethod
    def identity(cls, qubits: int) -> "QuantumGate":
        return cls.eye(1 << qubits)

    @property
    def qubit_count(self) -> int:
        return self.row_count.bit_length() - 1

    @property
    def dagger(self) -> "QuantumGate":
        return self.conjugate_transpose

    def is_unitary(self, atol: float = DEFAULT_CONFIG.atol) -> bool:
        product = self.dagger * self
        return product.allclose(QuantumGate.identity(self.qubit_count), atol=atol)

    def controlled(self, controls: int = 1) -> "QuantumGate":
        """Gate with ``controls`` extra control qubits in front."""
        gate = self
        for _ in range(controls):
            block = QuantumGate.identity(gate.qubit_count).direct_add(gate)
            gate = QuantumGate._from_array(block.entries)
        return gate


def _gate(*rows) -> QuantumGate:
    return QuantumGate(rows)


# ── 1-qubit fixed ───────────────────────────────────────────────────
H = _gate([_S2, _S2], [_S2, -_S2])
X = _gate([0, 1], [1, 0])
Y = _gate([0, -1j], [1j, 0])
Z = _gate([1, 0], [0, -1])
S = _gate([1, 0], [0, 1j])
SQRT_S = _gate([1, 0], [0, np.exp(1j * np.pi / 4)])
T = SQRT_S
SQRT_NOT = _gate([0.5 + 0.5j, 0.5 - 0.5j], [0.5 - 0.5j, 0.5 + 0.5j])


# ── 1-qubit parameterised ──────────────────────────────────────────
def RY(theta: float) -> QuantumGate:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _gate([c, -s], [s, c])


def R(k: int) -> QuantumGate:
    return _gate([1, 0], [0, np.exp(2j * np.pi / 2**k)])


# ── multi-qubit ─────────────────────────────────────────────────────
SWAP = _gate([1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1])
CX = X.controlled()
CY = Y.controlled()
CZ = Z.controlled()
CS = S.controlled()
CCNOT = X.controlled(2)


# ── lookup ──────────────────────────────────────────────────────────
FIXED_GATES: dict[str, QuantumGate] = {
    "H": H, "X": X, "Y": Y, "Z": Z, "S": S, "T": T,
    "SQRT_NOT": SQRT_NOT, "SQRT_S": SQRT_S,
    "SWAP": SWAP, "CX": CX, "CNOT": CX, "CY": CY, "CZ": CZ, "CS": CS,
    "CCNOT": CCNOT,
}
PARAM_SPEC: dict[str, dict[str, type]] = {
    "RY": {"theta": float},
    "R": {"k": int},
}


_PARAM_GATES = {"RY": RY, "R": R}


def gate(name: str, **params) -> QuantumGate:
    """Return the gate for a library name, e.g. ``gate("RY", theta=0.5)``."""
    if name not in FIXED_GATES and name not in _PARAM_GATES:
        raise ValueError(f"unknown gate {name}")
    spec = PARAM_SPEC.get(name, {})
    for key in spec:
        if key not in params:
            raise ValueError(f"{name} requires param '{key}'")
    extra = set(params) - set(spec)
    if extra:
        raise ValueError(f"{name} got unexpected params {sorted(extra)}")
    if name in FIXED_GATES:
        return FIXED_GATES[name]
    return _PARAM_GATES[name](**params)
