"""Gate library: unitarity, controlled construction and lookup."""
import numpy as np
import pytest

from mathkit_engine.errors import GateDimensionError, MatrixDimensionError
from mathkit_engine.quantum import gates as gmod
from mathkit_engine.quantum.gates import QuantumGate

S2 = 1.0 / np.sqrt(2.0)


@pytest.mark.parametrize("name", sorted(gmod.FIXED_GATES))
def test_library_gates_are_unitary(name):
    assert gmod.gate(name).is_unitary()


@pytest.mark.parametrize("g", [gmod.RY(0.3), gmod.RY(np.pi), gmod.R(2), gmod.R(5)])
def test_parameterised_gates_are_unitary(g):
    assert g.is_unitary()


def test_entries_are_complex():
    assert gmod.X.entries.dtype == np.complex128
    assert gmod.X[0, 1] == 1.0


def test_qubit_counts():
    assert gmod.H.qubit_count == 1
    assert gmod.CX.qubit_count == 2
    assert gmod.CCNOT.qubit_count == 3
    assert QuantumGate.identity(4).shape == (16, 16)


def test_h_squared_is_identity():
    assert (gmod.H * gmod.H).allclose(QuantumGate.identity(1))


def test_roots():
    assert (gmod.SQRT_NOT * gmod.SQRT_NOT).allclose(gmod.X)
    assert (gmod.SQRT_S * gmod.SQRT_S).allclose(gmod.S)
    assert (gmod.S * gmod.S).allclose(gmod.Z)


def test_controlled_blocks():
    np.testing.assert_array_equal(
        gmod.CX.entries,
        np.array([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype=complex),
    )
    np.testing.assert_array_equal(gmod.CZ.entries, np.diag([1, 1, 1, -1]).astype(complex))
    np.testing.assert_array_equal(gmod.CY.entries[2:, 2:], gmod.Y.entries)
    np.testing.assert_array_equal(gmod.CS.entries[2:, 2:], gmod.S.entries)
    assert not gmod.CY.entries[:2, 2:].any()


def test_ccnot_swaps_last_two_basis_states():
    expected = np.eye(8, dtype=complex)[[0, 1, 2, 3, 4, 5, 7, 6]]
    np.testing.assert_array_equal(gmod.CCNOT.entries, expected)
    assert gmod.X.controlled(2) == gmod.CCNOT
    assert gmod.CX.controlled() == gmod.CCNOT


def test_gate_products_stay_gates():
    assert isinstance(gmod.H * gmod.X, QuantumGate)
    assert isinstance(gmod.H.tensor(gmod.X), QuantumGate)
    assert isinstance(gmod.H.dagger, QuantumGate)


def test_non_unitary_gate_is_allowed_but_detected():
    shear = QuantumGate([[1, 1], [0, 1]])
    assert not shear.is_unitary()


def test_dimension_must_be_power_of_two():
    with pytest.raises(GateDimensionError):
        QuantumGate([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    with pytest.raises(MatrixDimensionError):
        QuantumGate([[1, 0, 0], [0, 1, 0], [0, 0, 1]])


def test_lookup():
    assert gmod.gate("CNOT") is gmod.CX
    assert gmod.gate("RY", theta=np.pi).allclose(QuantumGate([[0, -1], [1, 0]]))
    assert gmod.gate("R", k=2).allclose(gmod.S)
    assert gmod.gate("CCNOT").qubit_count == 3
    with pytest.raises(ValueError, match="unknown gate"):
        gmod.gate("FOO")
    with pytest.raises(ValueError, match="requires param 'theta'"):
        gmod.gate("RY")
    with pytest.raises(ValueError, match="unexpected params"):
        gmod.gate("R", k=1, theta=0.5)
