from mathkit_engine.quantum.gates import QuantumGate, gate
from mathkit_engine.quantum.state import QuantumBasis, QuantumState, default_rng, seed_default_rng
from mathkit_engine.quantum.circuit import (
    CircuitBuilder,
    GatePlacement,
    LegBuilder,
    ParallelLeg,
    QuantumCircuit,
)
from mathkit_engine.quantum.io import circuit_from_dict, validate_circuit_dict

__all__ = [
    'QuantumGate', 'gate',
    'QuantumBasis', 'QuantumState', 'default_rng', 'seed_default_rng',
    'CircuitBuilder', 'GatePlacement', 'LegBuilder', 'ParallelLeg', 'QuantumCircuit',
    'circuit_from_dict', 'validate_circuit_dict',
]
