"""Quantum states, the computational basis and measurement.

Index convention follows ``gates``: basis index ``b`` of an n-qubit register
has qubit 0 as its most significant bit.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from mathkit_engine.algebra.complex import Complex
from mathkit_engine.algebra.matrix import Matrix
from mathkit_engine.algebra.vector import Column
from mathkit_engine.config import DEFAULT_CONFIG
from mathkit_engine.errors import GateDimensionError
from mathkit_engine.logging_config import get_logger

log = get_logger(__name__)

_default_rng = np.random.default_rng(DEFAULT_CONFIG.seed)


def seed_default_rng(seed: Optional[int]) -> np.random.Generator:
    """Reseed the process-wide generator used when no ``rng`` is given."""
    global _default_rng
    _default_rng = np.random.default_rng(seed)
    return _default_rng


def default_rng() -> np.random.Generator:
    return _default_rng


class QuantumState(Column):
    """Column of 2^n complex amplitudes."""

    def _validate(self) -> None:
        n = self.arity
        if n < 1 or n & (n - 1):
            raise GateDimensionError(f"State length must be a power of two, got {n}.")
        if self._dimensions.dtype != np.complex128:
            amplitudes = self._dimensions.astype(np.complex128)
            amplitudes.flags.writeable = False
            self._dimensions = amplitudes

    @classmethod
    def basis(cls, qubit_count: int, index: int) -> "QuantumState":
        size = 1 << qubit_count
        if not 0 <= index < size:
            raise IndexError(f"basis index {index} out of range [0, {size})")
        amplitudes = np.zeros(size, dtype=np.complex128)
        amplitudes[index] = 1.0
        return cls._from_array(amplitudes)

    @classmethod
    def zero(cls, qubit_count: int) -> "QuantumState":
        """|0...0> on ``qubit_count`` qubits."""
        return cls.basis(qubit_count, 0)

    ground = zero

    @property
    def qubit_count(self) -> int:
        return self.arity.bit_length() - 1

    def amplitude(self, index: int) -> Complex:
        return Complex.from_complex(self._dimensions[index])

    @property
    def probabilities(self) -> np.ndarray:
        return np.abs(self._dimensions) ** 2

    def is_normalized(self, atol: float = DEFAULT_CONFIG.atol) -> bool:
        return abs(float(self.probabilities.sum()) - 1.0) <= atol

    def measure_index(self, rng: Optional[np.random.Generator] = None) -> int:
        """Sample a basis index with probability |amplitude|^2.

        A uniform draw over the total probability mass is located in the
        cumulative intervals; empty intervals are skipped so zero-probability
        outcomes never come back.
        """
        rng = rng if rng is not None else _default_rng
        probs = self.probabilities
        total = float(probs.sum())
        if total == 0.0:
            raise ValueError("cannot measure a state with no probability mass")
        draw = rng.random() * total
        cumulative = 0.0
        for index, p in enumerate(probs):
            if p == 0.0:
                continue
            cumulative += p
            if draw < cumulative:
                return index
        # rounding left the draw past the last interval
        return int(np.flatnonzero(probs)[-1])

    def measure(self, rng: Optional[np.random.Generator] = None) -> "QuantumState":
        """Collapse onto a sampled basis state."""
        index = self.measure_index(rng)
        log.debug("measured |%s>", format(index, f"0{self.qubit_count}b"))
        return QuantumState.basis(self.qubit_count, index)

    def sample_counts(self, shots: int, rng: Optional[np.random.Generator] = None) -> dict[int, int]:
        """Histogram of ``shots`` independent measurements."""
        rng = rng if rng is not None else _default_rng
        counts: dict[int, int] = {}
        for _ in range(shots):
            index = self.measure_index(rng)
            counts[index] = counts.get(index, 0) + 1
        return counts


class QuantumBasis:
    """The 2^n computational basis states of an n-qubit register."""

    def __init__(self, qubit_count: int):
        self.qubit_count = qubit_count
        eye = Matrix.eye(1 << qubit_count)
        self.states = tuple(QuantumState._from_array(c.dimensions) for c in eye.column)

    @classmethod
    def eye_basis(cls, qubit_count: int) -> "QuantumBasis":
        return cls(qubit_count)

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index: int) -> QuantumState:
        return self.states[index]

    def __iter__(self):
        return iter(self.states)

    def index_of(self, state: QuantumState) -> int:
        return self.states.index(state)
