"""Circuit construction and evaluation.

Lifecycle:
  building   – ``CircuitBuilder`` collects one ``ParallelLeg`` per
               ``parallel()`` block.
  finalized  – ``build()`` returns an immutable ``QuantumCircuit``; the
               builder refuses further legs.
  evaluated  – ``QuantumCircuit.evaluate`` reduces all legs to one gate
               (computed once, cached).
  applied    – ``apply(state)`` multiplies that gate into a state.

Within a leg, gates on disjoint contiguous qubit ranges are tensored in qubit
order and unaddressed qubits are padded with identity.  Across legs the first
leg acts first, so the equivalent gate is ``leg_N * ... * leg_1``.
"""
from __future__ import annotations

import contextlib
import functools
from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from mathkit_engine.errors import CircuitBuildError, CircuitLayoutError
from mathkit_engine.logging_config import get_logger
from mathkit_engine.quantum.gates import QuantumGate
from mathkit_engine.quantum.state import QuantumState

log = get_logger(__name__)

QubitSpec = Union[int, range]


@dataclass(frozen=True)
class GatePlacement:
    qubits: range
    gate: QuantumGate


def _as_range(qubits: QubitSpec) -> range:
    if isinstance(qubits, int):
        return range(qubits, qubits + 1)
    if isinstance(qubits, range):
        if qubits.step != 1 or len(qubits) == 0:
            raise CircuitLayoutError(f"qubit range {qubits} must be non-empty and contiguous")
        return qubits
    raise CircuitLayoutError(f"qubits must be an int or a range, got {qubits!r}")


def _place(qubit_count: int, qubits: QubitSpec, gate: QuantumGate) -> GatePlacement:
    span = _as_range(qubits)
    if span.start < 0 or span.stop > qubit_count:
        raise CircuitLayoutError(f"qubits {span} out of range [0, {qubit_count})")
    if gate.qubit_count != len(span):
        raise CircuitLayoutError(
            f"{gate.qubit_count}-qubit gate cannot act on {len(span)} qubit(s) {span}"
        )
    return GatePlacement(span, gate)


def _check_disjoint(placements: list[GatePlacement]) -> None:
    for before, after in zip(placements, placements[1:]):
        if before.qubits.stop > after.qubits.start:
            raise CircuitLayoutError(
                f"qubit ranges {before.qubits} and {after.qubits} overlap in one leg"
            )


class ParallelLeg:
    """One time step: gates acting simultaneously on disjoint qubits."""

    def __init__(self, qubit_count: int, placements: Iterable[GatePlacement] = ()):
        if qubit_count < 1:
            raise CircuitLayoutError(f"a register needs at least one qubit, got {qubit_count}")
        self.qubit_count = qubit_count
        ordered = sorted(
            (_place(qubit_count, p.qubits, p.gate) for p in placements),
            key=lambda p: p.qubits.start,
        )
        _check_disjoint(ordered)
        self.placements = tuple(ordered)

    @functools.cached_property
    def evaluate(self) -> QuantumGate:
        """The single gate equivalent to this leg over the whole register."""
        factors: list[QuantumGate] = []
        cursor = 0
        for placement in self.placements:
            if placement.qubits.start > cursor:
                factors.append(QuantumGate.identity(placement.qubits.start - cursor))
            factors.append(placement.gate)
            cursor = placement.qubits.stop
        if cursor < self.qubit_count:
            factors.append(QuantumGate.identity(self.qubit_count - cursor))
        return functools.reduce(QuantumGate.tensor, factors)

    def __repr__(self) -> str:
        return f"ParallelLeg({self.qubit_count}, {list(self.placements)!r})"


class QuantumCircuit:
    """Immutable sequence of parallel legs over ``qubit_count`` qubits."""

    def __init__(self, qubit_count: int, legs: Iterable[ParallelLeg] = ()):
        if qubit_count < 1:
            raise CircuitLayoutError(f"a register needs at least one qubit, got {qubit_count}")
        self.qubit_count = qubit_count
        self.parallel_legs = tuple(legs)
        for leg in self.parallel_legs:
            if leg.qubit_count != qubit_count:
                raise CircuitLayoutError(
                    f"leg over {leg.qubit_count} qubits in a {qubit_count}-qubit circuit"
                )

    @classmethod
    def builder(cls, qubit_count: int) -> "CircuitBuilder":
        return CircuitBuilder(qubit_count)

    @classmethod
    def build(
        cls,
        qubit_count: int,
        legs: Iterable[Union[ParallelLeg, Iterable[tuple[QubitSpec, QuantumGate]]]],
    ) -> "QuantumCircuit":
        """Circuit from legs given as ``ParallelLeg``s or ``(qubits, gate)`` pairs."""
        builder = CircuitBuilder(qubit_count)
        for leg in legs:
            if isinstance(leg, ParallelLeg):
                leg = [(p.qubits, p.gate) for p in leg.placements]
            builder.add_leg(*leg)
        return builder.build()

    def __len__(self) -> int:
        return len(self.parallel_legs)

    @functools.cached_property
    def evaluate(self) -> QuantumGate:
        """Equivalent gate ``leg_N * ... * leg_1``."""
        log.debug("evaluating %d-qubit circuit with %d legs", self.qubit_count, len(self))
        result = QuantumGate.identity(self.qubit_count)
        for leg in self.parallel_legs:
            result = leg.evaluate * result
        return result

    def apply(self, state: QuantumState) -> QuantumState:
        """Run ``state`` through the circuit (no renormalization)."""
        if state.qubit_count != self.qubit_count:
            raise CircuitLayoutError(
                f"{state.qubit_count}-qubit state given to a {self.qubit_count}-qubit circuit"
            )
        return self.evaluate * state

    def then(self, other: "QuantumCircuit") -> "QuantumCircuit":
        """Circuit running ``self`` and afterwards ``other``."""
        return QuantumCircuit(self.qubit_count, self.parallel_legs + other.parallel_legs)


class LegBuilder:
    """Collects the gates of one ``parallel()`` block."""

    def __init__(self, qubit_count: int):
        self.qubit_count = qubit_count
        self._placements: list[GatePlacement] = []

    def apply_gate(self, qubits: QubitSpec, gate: QuantumGate) -> "LegBuilder":
        placement = _place(self.qubit_count, qubits, gate)
        _check_disjoint(sorted(self._placements + [placement], key=lambda p: p.qubits.start))
        self._placements.append(placement)
        return self

    @property
    def placements(self) -> tuple[GatePlacement, ...]:
        return tuple(self._placements)


class CircuitBuilder:
    """Accumulates legs, then finalizes them into a ``QuantumCircuit``.

    Usage::

        builder = CircuitBuilder(3)
        with builder.parallel() as leg:
            leg.apply_gate(range(1, 2), gates.H)
        circuit = builder.build()
    """

    def __init__(self, qubit_count: int):
        if qubit_count < 1:
            raise CircuitLayoutError(f"a register needs at least one qubit, got {qubit_count}")
        self.qubit_count = qubit_count
        self._legs: list[ParallelLeg] = []
        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            raise CircuitBuildError("circuit already built")

    @contextlib.contextmanager
    def parallel(self) -> Iterator[LegBuilder]:
        self._check_open()
        leg = LegBuilder(self.qubit_count)
        yield leg
        self._legs.append(ParallelLeg(self.qubit_count, leg.placements))

    def add_leg(self, *applications: tuple[QubitSpec, QuantumGate]) -> "CircuitBuilder":
        """Append a leg from ``(qubits, gate)`` pairs."""
        with self.parallel() as leg:
            for qubits, gate in applications:
                leg.apply_gate(qubits, gate)
        return self

    def build(self) -> QuantumCircuit:
        self._check_open()
        self._finalized = True
        return QuantumCircuit(self.qubit_count, self._legs)
