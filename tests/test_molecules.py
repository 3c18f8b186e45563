"""
Tests for the preset molecule library.
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tiny_huckel import HuckelCalculator
from tiny_huckel.molecules import BOND_LENGTH, MoleculeLibrary


class TestMoleculeLibrary:

    def test_names(self):
        names = MoleculeLibrary.names()
        for expected in ("ethylene", "benzene", "pyridine", "pyrrole", "naphthalene"):
            assert expected in names

    @pytest.mark.parametrize("name", MoleculeLibrary.names())
    def test_pi_atom_count(self, name):
        result = HuckelCalculator(MoleculeLibrary.get(name)).calculate(
            MoleculeLibrary.suggested_charge(name))
        assert len(result.pi_atoms) == MoleculeLibrary.describe()[name]["pi_atoms"]

    @pytest.mark.parametrize("name", MoleculeLibrary.names())
    def test_bond_lengths(self, name):
        structure = MoleculeLibrary.get(name)
        positions = {a.id: a.position for a in structure.get_atoms()}
        for bond in structure.get_bonds():
            (x1, y1), (x2, y2) = positions[bond.begin], positions[bond.end]
            assert math.hypot(x2 - x1, y2 - y1) == pytest.approx(BOND_LENGTH, abs=1e-9)

    def test_fresh_copies(self):
        first = MoleculeLibrary.get("benzene")
        first.relabel(0, "N")
        assert MoleculeLibrary.get("benzene").get_atoms()[0].label == "C"

    def test_case_insensitive(self):
        assert MoleculeLibrary.get("Benzene").name == "benzene"

    def test_unknown_molecule(self):
        with pytest.raises(ValueError, match="Unknown molecule"):
            MoleculeLibrary.get("unobtainium")

    def test_describe(self):
        info = MoleculeLibrary.describe()["cyclopentadienyl"]
        assert info["charge"] == -1
        assert "description" in info
        assert set(MoleculeLibrary.builders()) == set(MoleculeLibrary.names())
