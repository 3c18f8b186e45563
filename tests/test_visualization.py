"""
Tests for text reports and the matplotlib level diagram.
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tiny_huckel import HuckelCalculator, MoleculeLibrary
from tiny_huckel.visualization import (
    REPORTS,
    ascii_level_diagram,
    coefficients_report,
    energies_report,
    format_density_matrix,
    format_hamiltonian,
    format_total_energy,
    hamiltonian_cell,
    matrices_report,
    plot_energy_levels,
    render,
)


@pytest.fixture(scope="module")
def benzene():
    return HuckelCalculator(MoleculeLibrary.get("benzene")).calculate()


@pytest.fixture(scope="module")
def pyrrole():
    return HuckelCalculator(MoleculeLibrary.get("pyrrole")).calculate()


# ═══════════════════════════════════════════════════════════════════════
# MATRIX DUMPS
# ═══════════════════════════════════════════════════════════════════════

class TestMatrices:

    @pytest.mark.parametrize("value,diagonal,expected", [
        (0.0, True, "α"),
        (1.37, True, "α+1.370β"),
        (-0.45, True, "α-0.450β"),
        (0.0, False, "0"),
        (1.0, False, "β"),
        (-1.0, False, "-β"),
        (0.89, False, "0.890β"),
    ])
    def test_hamiltonian_cell(self, value, diagonal, expected):
        assert hamiltonian_cell(value, diagonal) == expected

    def test_hamiltonian_dump(self, pyrrole):
        text = format_hamiltonian(pyrrole.hamiltonian, pyrrole.pi_atoms)
        lines = text.splitlines()
        assert lines[0] == "1- Hamiltonian"
        assert "1 N1" in lines[1]
        assert lines[2].startswith("1 N1")
        assert "α+1.370β" in lines[2]
        assert "0.890β" in lines[2]
        assert len(lines) == 2 + 5

    def test_density_dump(self, benzene):
        text = format_density_matrix(benzene.density_matrix, benzene.pi_atoms)
        assert text.startswith("2- Electron density matrix P")
        assert "1.0000" in text
        assert "0.6667" in text

    def test_matrices_report(self, benzene):
        text = matrices_report(benzene)
        assert "1- Hamiltonian" in text
        assert "2- Electron density matrix P" in text


# ═══════════════════════════════════════════════════════════════════════
# REPORTS
# ═══════════════════════════════════════════════════════════════════════

class TestReports:

    def test_total_energy_text(self):
        assert format_total_energy(6, 8.0) == "6α + 8.0000β"
        assert format_total_energy(2, 0.0) == "2α"
        assert format_total_energy(1, -0.5) == "1α - 0.5000β"

    def test_energies(self, benzene):
        text = energies_report(benzene)
        assert "=== DETECTED π SYSTEM ===" in text
        assert "π electrons: 6" in text
        assert "ψ1: α + 2β (occupied, 2 electrons)" in text
        assert "ψ3: α + β (occupied (HOMO), 2 electrons)" in text
        assert "ψ4: α - β (virtual (LUMO), 0 electrons)" in text
        assert "Total π energy: 6α + 8.0000β" in text

    def test_singly_occupied(self):
        result = HuckelCalculator(MoleculeLibrary.get("allyl")).calculate()
        assert "ψ2: α (singly occupied (HOMO), 1 electron)" in energies_report(result)

    def test_coefficients(self, benzene):
        lines = coefficients_report(benzene).splitlines()
        assert lines[0] == "=== ORBITAL COEFFICIENTS ==="
        assert len(lines) == 2 + 6
        # ψ1 of benzene is uniform
        values = [float(line.split()[1]) for line in lines[2:]]
        np.testing.assert_allclose(np.abs(values), 1 / np.sqrt(6), atol=1e-4)

    def test_level_diagram(self, benzene):
        lines = ascii_level_diagram(benzene).splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("α - 2β")
        assert lines[-1].startswith("α + 2β")
        # Degenerate pair on one line
        assert "ψ2 [↑↓]" in lines[2] and "ψ3 [↑↓]" in lines[2]
        assert "ψ4 [  ]" in lines[1] and "ψ5 [  ]" in lines[1]

    @pytest.mark.parametrize("kind", list(REPORTS))
    def test_render(self, benzene, kind):
        assert render(benzene, kind).strip()

    def test_render_unknown(self, benzene):
        with pytest.raises(ValueError, match="Unknown report"):
            render(benzene, "poster")


# ═══════════════════════════════════════════════════════════════════════
# PLOTTING
# ═══════════════════════════════════════════════════════════════════════

class TestPlot:

    def test_plot_energy_levels(self, benzene):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        ax = plot_energy_levels(benzene)
        assert len(ax.lines) == 6
        assert "6 π electrons" in ax.get_title()
        plt.close("all")

    def test_plot_on_existing_axes(self, pyrrole):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        _, ax = plt.subplots()
        assert plot_energy_levels(pyrrole, ax=ax, title="pyrrole") is ax
        assert ax.get_title() == "pyrrole"
        plt.close("all")
