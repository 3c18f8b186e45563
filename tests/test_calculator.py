"""
End-to-end tests for the Hückel calculator.

Tests cover:
- Reference molecules (ethylene, benzene, butadiene, naphthalene, ions)
- Charged systems and electron bookkeeping
- Error taxonomy
- Parameter updates on a live calculator
- Custom numbering
"""

import json
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tiny_huckel import (
    BondType,
    DiagonalizationError,
    ElectronCountError,
    HuckelCalculator,
    MissingEditorStateError,
    MoleculeLibrary,
    NoConjugatedSystemError,
    Structure,
)
from tiny_huckel.core import eigen
from tiny_huckel.core.parameters import DEFAULT_PARAMETERS


def calculate(name, charge=0, **kwargs):
    return HuckelCalculator(MoleculeLibrary.get(name), **kwargs).calculate(charge)


# ═══════════════════════════════════════════════════════════════════════
# REFERENCE MOLECULES
# ═══════════════════════════════════════════════════════════════════════

class TestReferenceMolecules:

    def test_ethylene(self):
        result = calculate("ethylene")
        assert len(result.pi_atoms) == 2
        assert all(a.pi_electrons == 1 for a in result.pi_atoms)
        np.testing.assert_array_equal(result.hamiltonian, [[0, 1], [1, 0]])
        np.testing.assert_allclose(result.energies, [1.0, -1.0])
        assert result.occupations == (2, 0)
        assert result.total_energy == pytest.approx(2.0)

    def test_ethylene_cation(self):
        result = calculate("ethylene", charge=1)
        assert result.total_pi_electrons == 1
        assert result.occupations == (1, 0)
        assert result.total_energy == pytest.approx(1.0)

    def test_benzene(self):
        result = calculate("benzene")
        np.testing.assert_allclose(result.energies, [2, 1, 1, -1, -1, -2], atol=1e-10)
        assert result.energy_expressions == (
            "α + 2β", "α + β", "α + β", "α - β", "α - β", "α - 2β")
        assert result.total_energy == pytest.approx(8.0)
        assert result.occupations == (2, 2, 2, 0, 0, 0)
        assert result.homo_index == 2
        assert result.lumo_index == 3
        assert result.homo_lumo_gap == pytest.approx(2.0)
        assert result.degenerate_groups == [[0], [1, 2], [3, 4], [5]]

    def test_benzene_bond_orders(self):
        result = calculate("benzene")
        orders = result.bond_orders
        assert len(orders) == 6
        for order in orders.values():
            assert order == pytest.approx(2 / 3)

    def test_butadiene(self):
        result = calculate("butadiene")
        np.testing.assert_allclose(result.energies, [1.618034, 0.618034, -0.618034, -1.618034], atol=1e-6)
        assert result.total_energy == pytest.approx(4.472136, abs=1e-6)
        assert result.bond_orders[(0, 1)] == pytest.approx(0.894, abs=1e-3)
        assert result.bond_orders[(1, 2)] == pytest.approx(0.447, abs=1e-3)

    def test_allyl_radical(self):
        result = calculate("allyl")
        np.testing.assert_allclose(result.energies, [np.sqrt(2), 0.0, -np.sqrt(2)], atol=1e-10)
        assert result.occupations == (2, 1, 0)
        assert result.energy_expressions[1] == "α"

    def test_cyclopentadienyl_anion(self):
        result = calculate("cyclopentadienyl", charge=-1)
        assert result.total_pi_electrons == 6
        assert result.total_energy == pytest.approx(6.472136, abs=1e-6)

    def test_naphthalene(self):
        result = calculate("naphthalene")
        assert result.n_orbitals == 10
        assert result.total_energy == pytest.approx(13.6832, abs=1e-4)

    def test_jacobi_matches_lapack(self):
        lapack = calculate("naphthalene")
        jacobi = calculate("naphthalene", method="jacobi")
        np.testing.assert_allclose(lapack.energies, jacobi.energies, atol=1e-9)
        assert lapack.total_energy == pytest.approx(jacobi.total_energy)


# ═══════════════════════════════════════════════════════════════════════
# INVARIANTS
# ═══════════════════════════════════════════════════════════════════════

class TestInvariants:

    @pytest.mark.parametrize("name", MoleculeLibrary.names())
    def test_preset_invariants(self, name):
        result = calculate(name, charge=MoleculeLibrary.suggested_charge(name))
        assert np.allclose(result.hamiltonian, result.hamiltonian.T)
        assert list(result.energies) == sorted(result.energies, reverse=True)
        assert sum(result.occupations) == result.total_pi_electrons
        assert list(result.occupations) == sorted(result.occupations, reverse=True)
        assert np.trace(result.density_matrix) == pytest.approx(result.total_pi_electrons)
        assert result.atomic_charges.sum() == pytest.approx(result.charge, abs=1e-9)

    def test_heteroatom_charges(self):
        """Pyrrole N gives up π density, pyridine N gains it."""
        pyrrole = calculate("pyrrole")
        pyridine = calculate("pyridine")
        assert pyrrole.atomic_charges[0] > 0
        assert pyridine.atomic_charges[0] < 0

    def test_adaptive_nitrogen(self):
        assert calculate("pyrrole").hamiltonian[0, 1] == pytest.approx(0.89)
        assert calculate("pyridine").hamiltonian[0, 1] == pytest.approx(1.02)

    def test_result_is_read_only(self):
        result = calculate("ethylene")
        with pytest.raises(ValueError):
            result.energies[0] = 5.0

    def test_to_dict_is_json_ready(self):
        data = calculate("pyridine").to_dict()
        decoded = json.loads(json.dumps(data))
        assert decoded["total_pi_electrons"] == 6
        assert decoded["energy_expressions"][0].startswith("α + ")
        assert decoded["pi_atoms"][0]["element"] == "N"
        assert decoded["parameters"]["hX"]["C"] == 0.0

    def test_results_compare_by_identity(self):
        first, second = calculate("benzene"), calculate("benzene")
        assert first == first
        assert first != second
        assert len({first, second}) == 2

    def test_repr(self):
        assert "C1, C2" in repr(calculate("ethylene"))


# ═══════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════

class TestErrors:

    def test_no_source(self):
        with pytest.raises(MissingEditorStateError):
            HuckelCalculator().calculate()

    def test_no_pi_system(self):
        s = Structure("ethane")
        s.add_bond(s.add_atom("C"), s.add_atom("C", 1.5, 0))
        with pytest.raises(NoConjugatedSystemError, match="No π system"):
            HuckelCalculator(s).calculate()

    def test_empty_structure(self):
        with pytest.raises(NoConjugatedSystemError):
            HuckelCalculator(Structure()).calculate()

    def test_too_positive_charge(self):
        with pytest.raises(ElectronCountError):
            calculate("ethylene", charge=3)

    def test_too_negative_charge(self):
        """Five electrons do not fit into two π orbitals."""
        with pytest.raises(ElectronCountError, match="capacity"):
            calculate("ethylene", charge=-3)

    def test_dianion_fills_all_orbitals(self):
        result = calculate("ethylene", charge=-2)
        assert result.occupations == (2, 2)
        assert result.atomic_charges.sum() == pytest.approx(-2.0)

    def test_diagonalization_failure_propagates(self, monkeypatch):
        def broken(*args, **kwargs):
            raise np.linalg.LinAlgError("no convergence")

        monkeypatch.setattr(eigen.linalg, "eigh", broken)
        with pytest.raises(DiagonalizationError, match="no convergence"):
            calculate("allyl")

    def test_non_finite_parameter_rejected(self):
        s = Structure("chloromethylene")
        c, cl = s.add_atom("C"), s.add_atom("Cl", 1.7, 0)
        s.add_bond(c, cl, BondType.DOUBLE)
        calc = HuckelCalculator(s)
        with pytest.raises(ValueError, match="finite"):
            calc.update_parameters({"hX": {"Cl": float("nan")}})
        assert calc.calculate().hamiltonian[1, 1] == pytest.approx(1.48)

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            HuckelCalculator(method="power")


# ═══════════════════════════════════════════════════════════════════════
# PARAMETERS AND WIRING
# ═══════════════════════════════════════════════════════════════════════

class TestCalculatorState:

    def test_update_round_trip(self):
        calc = HuckelCalculator(MoleculeLibrary.get("ethylene"))
        calc.update_parameters({"hX": {"Cl": 1.1}})
        params = calc.get_current_parameters()
        assert params.hx["Cl"] == 1.1
        assert params.hx["Br"] == DEFAULT_PARAMETERS.hx["Br"]

    def test_update_keywords(self):
        calc = HuckelCalculator(MoleculeLibrary.get("ethylene"))
        calc.update_parameters(hx={"F": 3.0}, hxy={"C-F": 0.4})
        assert calc.get_current_parameters().hx["F"] == 3.0
        assert calc.get_current_parameters().hxy["C-F"] == 0.4

    def test_update_does_not_recalculate(self):
        calc = HuckelCalculator(MoleculeLibrary.get("ethylene"))
        before = calc.calculate()
        calc.update_parameters({"hXY": {"C-C": 0.5}})
        assert before.total_energy == pytest.approx(2.0)
        assert before.parameters.hxy["C-C"] == 1.0
        after = calc.calculate()
        assert after.total_energy == pytest.approx(1.0)

    def test_reset(self):
        calc = HuckelCalculator()
        calc.update_parameters({"hXY": {"C-C": 0.5}})
        assert calc.reset_parameters() is DEFAULT_PARAMETERS

    def test_invalid_update_keeps_table(self):
        calc = HuckelCalculator()
        with pytest.raises(ValueError):
            calc.update_parameters({"hX": {"C": "x"}})
        assert calc.get_current_parameters() is DEFAULT_PARAMETERS

    def test_attach_later(self):
        calc = HuckelCalculator()
        calc.attach(MoleculeLibrary.get("ethylene"))
        assert calc.calculate().total_energy == pytest.approx(2.0)

    def test_custom_numbering(self):
        s = MoleculeLibrary.get("butadiene")
        first = s.get_atoms()[0].id
        calc = HuckelCalculator(s, numbering={first: "5"})
        atoms = calc.detect_pi_atoms()
        assert atoms[-1].id == first
        assert atoms[-1].user_number == "5"
        assert calc.calculate().pi_atoms[-1].label == "C5"

    def test_calculator_numbering_beats_structure_numbering(self):
        s = MoleculeLibrary.get("ethylene")
        s.set_custom_numbering({0: "3"})
        calc = HuckelCalculator(s)
        assert calc.detect_pi_atoms()[-1].user_number == "3"
        calc.set_numbering({0: "8"})
        assert calc.detect_pi_atoms()[-1].user_number == "8"

    def test_recalculate_on_structure_change(self):
        s = MoleculeLibrary.get("ethylene")
        calc = HuckelCalculator(s)
        results = []
        s.on_structure_changed(lambda structure: results.append(calc.calculate()))
        s.relabel(1, "N")
        assert len(results) == 1
        assert results[0].pi_atoms[1].element == "N"
        assert results[0].hamiltonian[1, 1] == pytest.approx(0.51)

    def test_heteroatom_chain(self):
        s = Structure("imine")
        c, n = s.add_atom("C"), s.add_atom("N", 1.3, 0)
        s.add_bond(c, n, BondType.DOUBLE)
        result = HuckelCalculator(s).calculate()
        assert result.hamiltonian[1, 1] == pytest.approx(0.51)
        assert result.total_pi_electrons == 2
