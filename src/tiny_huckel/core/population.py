"""
Orbital ordering, electron filling and derived π-system quantities.

With H built in units of β (β < 0), a larger eigenvalue x_k means a more
bonding orbital, E_k = α + x_k·β. Orbitals are therefore sorted by
descending eigenvalue and filled from the top of that list.

Quantities:
    occupations    n_k ∈ {0, 1, 2}
    total energy   E_π = Σ n_k x_k           (in β, plus N·α)
    density        P_ij = Σ n_k c_ki c_kj
    charge         q_i = (π electrons given by atom i) − P_ii
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import ElectronCountError

logger = logging.getLogger(__name__)

ZERO_TOLERANCE = 1e-3
DEGENERACY_TOLERANCE = 1e-6


@dataclass(frozen=True, eq=False)
class OrbitalSet:
    """Sorted and populated molecular orbitals."""

    energies: np.ndarray
    coefficients: np.ndarray
    occupations: Tuple[int, ...]
    energy_expressions: Tuple[str, ...]
    total_energy: float
    total_electrons: int


def sort_orbitals(eigenvalues, eigenvectors) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sort MOs by descending eigenvalue.

    ``eigenvectors`` holds one MO per column; the returned coefficient
    matrix holds one MO per *row*, ``coefficients[k][i]`` being the
    weight of atom i in MO k.
    """
    eigenvalues = np.asarray(eigenvalues, dtype=float)
    eigenvectors = np.asarray(eigenvectors, dtype=float)
    order = np.argsort(-eigenvalues, kind="stable")
    return eigenvalues[order], eigenvectors[:, order].T


def aufbau_occupations(n_orbitals: int, total_electrons: int) -> List[int]:
    """
    Fill orbitals strictly in list order, two electrons each.

    Degenerate levels are not treated specially: the first orbital of a
    degenerate pair is doubly occupied before the second gets any
    electron.

    Raises
    ------
    ElectronCountError
        Negative count, or more electrons than 2 per orbital.
    """
    if total_electrons < 0:
        raise ElectronCountError(
            f"Cannot place {total_electrons} π electrons: charge removes more "
            f"electrons than the π system has"
        )
    if total_electrons > 2 * n_orbitals:
        raise ElectronCountError(
            f"Cannot place {total_electrons} π electrons in {n_orbitals} orbitals "
            f"(capacity {2 * n_orbitals})"
        )

    occupations = [0] * n_orbitals
    remaining = total_electrons
    for k in range(n_orbitals):
        if remaining >= 2:
            occupations[k] = 2
            remaining -= 2
        elif remaining == 1:
            occupations[k] = 1
            remaining = 0
        else:
            break
    return occupations


def format_beta_coefficient(value: float) -> str:
    """Magnitude to 3 decimals; ``"2"`` instead of ``"2.000"``, ``""`` for 1."""
    text = f"{abs(value):.3f}"
    if text.endswith(".000"):
        text = text[:-4]
    return "" if text == "1" else text


def energy_expression(value: float) -> str:
    """Symbolic orbital energy: ``α``, ``α + β``, ``α - 0.618β``."""
    if abs(value) < ZERO_TOLERANCE:
        return "α"
    sign = "+" if value > 0 else "-"
    return f"α {sign} {format_beta_coefficient(value)}β"


def total_pi_energy(energies: Sequence[float], occupations: Sequence[int]) -> float:
    """Σ n_k x_k in units of β."""
    return float(np.dot(np.asarray(energies, dtype=float),
                        np.asarray(occupations, dtype=float)))


def populate(eigenvalues, eigenvectors, total_electrons: int) -> OrbitalSet:
    """Sort, fill and label the orbitals of one calculation."""
    energies, coefficients = sort_orbitals(eigenvalues, eigenvectors)
    occupations = aufbau_occupations(len(energies), int(total_electrons))
    expressions = tuple(energy_expression(e) for e in energies)
    total = total_pi_energy(energies, occupations)

    if logger.isEnabledFor(logging.DEBUG):
        symbols = {2: "↑↓", 1: "↑ ", 0: "∅ "}
        for k, (expr, n) in enumerate(zip(expressions, occupations)):
            logger.debug("ψ%d: %s %s", k + 1, symbols[n], expr)

    return OrbitalSet(
        energies=energies,
        coefficients=coefficients,
        occupations=tuple(occupations),
        energy_expressions=expressions,
        total_energy=total,
        total_electrons=int(total_electrons),
    )


# ─── Derived quantities ──────────────────────────────────────────────────

def density_matrix(coefficients, occupations) -> np.ndarray:
    """Charge/bond-order matrix P = Cᵀ·diag(n)·C."""
    C = np.asarray(coefficients, dtype=float)
    n = np.asarray(occupations, dtype=float)
    return C.T @ (n[:, None] * C)


def atomic_charges(populations, pi_electrons) -> np.ndarray:
    """π charge per atom: contributed electrons minus π population."""
    return np.asarray(pi_electrons, dtype=float) - np.asarray(populations, dtype=float)


def bond_orders(density: np.ndarray,
                pairs: Iterable[Tuple[int, int]]) -> Dict[Tuple[int, int], float]:
    """π bond orders P_ij for the given index pairs (normalized as i < j)."""
    orders = {}
    for i, j in pairs:
        key = (min(i, j), max(i, j))
        orders[key] = float(density[i, j])
    return orders


def homo_index(energies: Sequence[float], occupations: Sequence[int]) -> Optional[int]:
    """Index of the occupied orbital with the lowest eigenvalue."""
    occupied = [k for k, n in enumerate(occupations) if n > 0]
    if not occupied:
        return None
    return min(occupied, key=lambda k: (energies[k], -k))


def lumo_index(energies: Sequence[float], occupations: Sequence[int]) -> Optional[int]:
    """Index of the empty orbital with the highest eigenvalue."""
    empty = [k for k, n in enumerate(occupations) if n == 0]
    if not empty:
        return None
    return max(empty, key=lambda k: (energies[k], -k))


def degenerate_groups(energies: Sequence[float],
                      tolerance: float = DEGENERACY_TOLERANCE) -> List[List[int]]:
    """Group consecutive indices of a sorted energy list that share a level."""
    groups: List[List[int]] = []
    for k, energy in enumerate(energies):
        if groups and abs(energies[groups[-1][0]] - energy) <= tolerance:
            groups[-1].append(k)
        else:
            groups.append([k])
    return groups
