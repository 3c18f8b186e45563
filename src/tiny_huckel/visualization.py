"""
Text and plot output for Hückel results.

Features:
- Hamiltonian dump with symbolic α/β cells (no dependencies)
- Density matrix dump
- Orbital energy listing with HOMO/LUMO labels and total π energy
- MO coefficient table
- ASCII energy level diagram
- Energy level plot (requires matplotlib)
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .core.calculator import HuckelResult
from .core.detection import PiAtom
from .core.population import format_beta_coefficient

CELL = 12
LABEL = 10


def _atom_header(pi_atoms: Sequence[PiAtom], corner: str) -> str:
    cells = [f"{i + 1} {atom.label}".rjust(CELL) for i, atom in enumerate(pi_atoms)]
    return corner.ljust(LABEL) + "".join(cells)


def hamiltonian_cell(value: float, diagonal: bool) -> str:
    """Symbolic matrix element: ``α+1.370β`` on the diagonal, ``0.890β`` off it."""
    if diagonal:
        if abs(value) < 1e-3:
            return "α"
        return f"α{value:+.3f}β"
    if abs(value) < 1e-3:
        return "0"
    if abs(value - 1.0) < 1e-3:
        return "β"
    if abs(value + 1.0) < 1e-3:
        return "-β"
    return f"{value:.3f}β"


def format_hamiltonian(matrix: np.ndarray, pi_atoms: Sequence[PiAtom]) -> str:
    lines = ["1- Hamiltonian", _atom_header(pi_atoms, "H")]
    for i, atom in enumerate(pi_atoms):
        row = "".join(hamiltonian_cell(matrix[i, j], i == j).rjust(CELL)
                      for j in range(len(pi_atoms)))
        lines.append(f"{i + 1} {atom.label}".ljust(LABEL) + row)
    return "\n".join(lines) + "\n"


def format_density_matrix(matrix: np.ndarray, pi_atoms: Sequence[PiAtom]) -> str:
    lines = ["2- Electron density matrix P", _atom_header(pi_atoms, "P")]
    for i, atom in enumerate(pi_atoms):
        values = [0.0 if abs(v) < 1e-4 else v for v in matrix[i]]
        row = "".join(f"{v:.4f}".rjust(CELL) for v in values)
        lines.append(f"{i + 1} {atom.label}".ljust(LABEL) + row)
    return "\n".join(lines) + "\n"


def format_total_energy(total_electrons: int, total_energy: float) -> str:
    """``6α + 8β``; the β term is dropped when it is zero."""
    text = f"{total_electrons}α"
    if abs(total_energy) >= 1e-4:
        sign = "+" if total_energy > 0 else "-"
        text += f" {sign} {abs(total_energy):.4f}β"
    return text


def energies_report(result: HuckelResult) -> str:
    lines = [
        "=== DETECTED π SYSTEM ===",
        f"π atoms: {len(result.pi_atoms)}",
        f"π electrons: {result.total_pi_electrons}",
        "Atoms: " + ", ".join(f"{a.label}({a.pi_electrons}e-)" for a in result.pi_atoms),
        "",
        "=== ORBITAL ENERGIES ===",
    ]
    homo, lumo = result.homo_index, result.lumo_index
    for k, (expr, n) in enumerate(zip(result.energy_expressions, result.occupations)):
        kind = {2: "occupied", 1: "singly occupied", 0: "virtual"}[n]
        if k == homo:
            kind += " (HOMO)"
        if k == lumo:
            kind += " (LUMO)"
        lines.append(f"ψ{k + 1}: {expr} ({kind}, {n} electron{'s' if n != 1 else ''})")
    lines.append("")
    lines.append(f"Total π energy: {format_total_energy(result.total_pi_electrons, result.total_energy)}")
    return "\n".join(lines) + "\n"


def coefficients_report(result: HuckelResult) -> str:
    lines = ["=== ORBITAL COEFFICIENTS ===",
             "Atom".ljust(8) + "".join(f"ψ{k + 1}".ljust(CELL) for k in range(result.n_orbitals))]
    for i, atom in enumerate(result.pi_atoms):
        row = "".join(f"{result.coefficients[k, i]:.4f}".ljust(CELL)
                      for k in range(result.n_orbitals))
        lines.append(atom.label.ljust(8) + row)
    return "\n".join(lines) + "\n"


def matrices_report(result: HuckelResult) -> str:
    return (format_hamiltonian(result.hamiltonian, result.pi_atoms) + "\n"
            + format_density_matrix(result.density_matrix, result.pi_atoms))


def ascii_level_diagram(result: HuckelResult) -> str:
    """
    Energy levels from antibonding (top) to bonding (bottom).

    Example output:
        α - 2β        ----- ψ6 [  ]
        α - β         ----- ψ4 [  ] ----- ψ5 [  ]
        α + β         ----- ψ2 [↑↓] ----- ψ3 [↑↓]
        α + 2β        ----- ψ1 [↑↓]
    """
    marks = {2: "↑↓", 1: "↑ ", 0: "  "}
    lines: List[str] = []
    for group in reversed(result.degenerate_groups):
        expr = result.energy_expressions[group[0]]
        slots = " ".join(f"----- ψ{k + 1} [{marks[result.occupations[k]]}]" for k in group)
        lines.append(f"{expr:<14}{slots}")
    return "\n".join(lines) + "\n"


def full_report(result: HuckelResult) -> str:
    return "\n".join([
        energies_report(result),
        ascii_level_diagram(result),
        coefficients_report(result),
        matrices_report(result),
    ])


REPORTS = {
    "energies": energies_report,
    "coefficients": coefficients_report,
    "matrices": matrices_report,
    "diagram": ascii_level_diagram,
    "all": full_report,
}


def render(result: HuckelResult, kind: str = "all") -> str:
    if kind not in REPORTS:
        raise ValueError(f"Unknown report '{kind}'. Available: {', '.join(REPORTS)}")
    return REPORTS[kind](result)


def plot_energy_levels(result: HuckelResult, ax=None, title: Optional[str] = None):
    """
    Draw the MO level diagram with matplotlib.

    Degenerate levels are drawn side by side; occupied levels carry
    electron arrows. Returns the matplotlib Axes.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib required: pip install matplotlib")

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    width, gap = 0.8, 0.3
    for group in result.degenerate_groups:
        span = len(group) * width + (len(group) - 1) * gap
        for slot, k in enumerate(group):
            x0 = -span / 2 + slot * (width + gap)
            y = result.energies[k]
            color = "tab:orange" if k == result.homo_index else (
                "tab:blue" if k == result.lumo_index else "black")
            ax.plot([x0, x0 + width], [y, y], color=color, lw=2)
            n = result.occupations[k]
            if n >= 1:
                ax.annotate("", xy=(x0 + 0.3, y + 0.15), xytext=(x0 + 0.3, y - 0.15),
                            arrowprops=dict(arrowstyle="->"))
            if n == 2:
                ax.annotate("", xy=(x0 + 0.5, y - 0.15), xytext=(x0 + 0.5, y + 0.15),
                            arrowprops=dict(arrowstyle="->"))
        ax.text(span / 2 + 0.2, result.energies[group[0]],
                result.energy_expressions[group[0]], va="center", fontsize=9)

    # β < 0: bonding levels (large x) belong at the bottom
    ax.invert_yaxis()
    ax.set_xticks([])
    ax.set_ylabel("x  (E = α + xβ)")
    ax.set_title(title or f"Hückel MO levels ({result.total_pi_electrons} π electrons)")
    return ax
