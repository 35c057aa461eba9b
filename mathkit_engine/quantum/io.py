"""Circuit dict validation and loading.

Format::

    {
      "number_of_qubits": 3,
      "legs": [
        [{"qubits": [1], "gate": "H"}],
        [{"qubits": [0, 1], "gate": "CX"}, {"qubits": [2], "gate": "RY",
                                            "params": {"theta": 0.5}}],
      ],
    }

Each leg is one time step; ``qubits`` lists the consecutive qubits a gate
acts on, in ascending order.  Placement rules (range, gate size, overlap)
are the ones ``CircuitBuilder`` enforces; their ``CircuitLayoutError`` is
reported with the position of the offending entry.
"""
from __future__ import annotations

from numbers import Real
from typing import Any

from mathkit_engine.errors import CircuitLayoutError
from mathkit_engine.quantum import gates as gmod
from mathkit_engine.quantum.circuit import GatePlacement, QuantumCircuit, _check_disjoint, _place

_TOP_KEYS = frozenset({"number_of_qubits", "legs"})
_ENTRY_KEYS = frozenset({"qubits", "gate", "params"})


def validate_circuit_dict(d: dict[str, Any]) -> dict:
    """Validate and normalise a circuit dict.  Raises ValueError on bad input."""
    validated, _ = _parse(d)
    return validated


def circuit_from_dict(d: dict[str, Any]) -> QuantumCircuit:
    validated, placements = _parse(d)
    return QuantumCircuit.build(
        validated["number_of_qubits"],
        [[(p.qubits, p.gate) for p in leg] for leg in placements],
    )


def _parse(d: Any) -> tuple[dict, list[list[GatePlacement]]]:
    if not isinstance(d, dict):
        raise ValueError("circuit must be a dict")
    if _TOP_KEYS - set(d):
        raise ValueError(f"missing required keys: {sorted(_TOP_KEYS - set(d))}")
    if set(d) - _TOP_KEYS:
        raise ValueError(f"unknown top-level keys: {sorted(set(d) - _TOP_KEYS)}")

    n, legs = d["number_of_qubits"], d["legs"]
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"number_of_qubits must be a positive int, got {n!r}")
    if not isinstance(legs, list) or any(not isinstance(leg, list) for leg in legs):
        raise ValueError("legs must be a list of lists")

    entries: list[list[dict]] = []
    placements: list[list[GatePlacement]] = []
    for i, leg in enumerate(legs):
        leg_entries, leg_placements = [], []
        for j, raw in enumerate(leg):
            entry, placement = _parse_entry(raw, n, f"leg[{i}].gate[{j}]")
            leg_entries.append(entry)
            leg_placements.append(placement)
        try:
            _check_disjoint(sorted(leg_placements, key=lambda p: p.qubits.start))
        except CircuitLayoutError as exc:
            raise ValueError(f"leg[{i}]: {exc}") from exc
        entries.append(leg_entries)
        placements.append(leg_placements)
    return {"number_of_qubits": n, "legs": entries}, placements


def _parse_entry(raw: Any, qubit_count: int, tag: str) -> tuple[dict, GatePlacement]:
    if not isinstance(raw, dict):
        raise ValueError(f"{tag}: must be a dict")
    if not {"qubits", "gate"} <= set(raw):
        raise ValueError(f"{tag}: missing 'qubits' or 'gate'")
    if set(raw) - _ENTRY_KEYS:
        raise ValueError(f"{tag}: unknown keys {sorted(set(raw) - _ENTRY_KEYS)}")

    span = _qubit_span(raw["qubits"], tag)
    name = raw["gate"]
    if not isinstance(name, str) or not (name in gmod.FIXED_GATES or name in gmod.PARAM_SPEC):
        raise ValueError(f"{tag}: unsupported gate {name!r}")
    params = dict(raw.get("params") or {})
    for key, value in params.items():
        expected = gmod.PARAM_SPEC.get(name, {}).get(key, Real)
        if isinstance(value, bool) or not isinstance(value, (expected, int)):
            raise ValueError(f"{tag}: param '{key}' must be {expected.__name__}, got {value!r}")

    try:
        placement = _place(qubit_count, span, gmod.gate(name, **params))
    except ValueError as exc:
        raise ValueError(f"{tag}: {exc}") from exc
    return {"qubits": list(span), "gate": name, "params": params}, placement


def _qubit_span(qubits: Any, tag: str) -> range:
    if not isinstance(qubits, list) or not qubits or any(
        isinstance(q, bool) or not isinstance(q, int) for q in qubits
    ):
        raise ValueError(f"{tag}: qubits must be a non-empty list of ints")
    span = range(qubits[0], qubits[-1] + 1)
    if list(span) != qubits:
        raise ValueError(f"{tag}: qubits must be consecutive and ascending, got {qubits}")
    return span
