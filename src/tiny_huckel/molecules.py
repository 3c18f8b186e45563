"""
Library of conjugated test molecules.

Each builder returns a fresh :class:`~tiny_huckel.core.structure.Structure`
with 2D coordinates (bond length 1.4) and Kekulé or delocalized bonds,
ready for :class:`~tiny_huckel.core.calculator.HuckelCalculator`.

Usage:
    mol = MoleculeLibrary.get("pyridine")
    MoleculeLibrary.names()
    MoleculeLibrary.describe()
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Sequence, Tuple

from .core.structure import BondType, Structure

BOND_LENGTH = 1.4

S, D, A = BondType.SINGLE, BondType.DOUBLE, BondType.AROMATIC


# =============================================================================
# Geometry helpers
# =============================================================================

def _ring(name: str, labels: Sequence[str], orders: Sequence[BondType]) -> Structure:
    """Regular polygon; ``orders[k]`` is the bond from atom k to atom k+1."""
    n = len(labels)
    radius = BOND_LENGTH / (2 * math.sin(math.pi / n))
    structure = Structure(name)
    ids = []
    for k, label in enumerate(labels):
        angle = math.pi / 2 + 2 * math.pi * k / n
        ids.append(structure.add_atom(label, radius * math.cos(angle), radius * math.sin(angle)))
    for k in range(n):
        structure.add_bond(ids[k], ids[(k + 1) % n], orders[k])
    return structure


def _chain(name: str, labels: Sequence[str], orders: Sequence[BondType]) -> Structure:
    """Zig-zag chain; ``orders[k]`` is the bond from atom k to atom k+1."""
    structure = Structure(name)
    dx = BOND_LENGTH * math.cos(math.radians(30))
    dy = BOND_LENGTH * math.sin(math.radians(30))
    ids = [
        structure.add_atom(label, k * dx, dy if k % 2 else 0.0)
        for k, label in enumerate(labels)
    ]
    for k, order in enumerate(orders):
        structure.add_bond(ids[k], ids[k + 1], order)
    return structure


# =============================================================================
# Builders
# =============================================================================

def ethylene() -> Structure:
    return _chain("ethylene", ["C", "C"], [D])


def allyl() -> Structure:
    """Allyl system with delocalized bonds (radical at charge 0)."""
    return _chain("allyl", ["C", "C", "C"], [A, A])


def butadiene() -> Structure:
    return _chain("butadiene", ["C"] * 4, [D, S, D])


def hexatriene() -> Structure:
    return _chain("hexatriene", ["C"] * 6, [D, S, D, S, D])


def formaldehyde() -> Structure:
    return _chain("formaldehyde", ["C", "O"], [D])


def acrolein() -> Structure:
    return _chain("acrolein", ["C", "C", "C", "O"], [D, S, D])


def cyclobutadiene() -> Structure:
    return _ring("cyclobutadiene", ["C"] * 4, [D, S, D, S])


def cyclopentadienyl() -> Structure:
    """C5H5 ring with delocalized bonds; the aromatic anion needs charge -1."""
    return _ring("cyclopentadienyl", ["C"] * 5, [A] * 5)


def benzene() -> Structure:
    return _ring("benzene", ["C"] * 6, [D, S, D, S, D, S])


def pyridine() -> Structure:
    return _ring("pyridine", ["N", "C", "C", "C", "C", "C"], [D, S, D, S, D, S])


def pyrrole() -> Structure:
    # N-H nitrogen: two single bonds, lone pair in the π system
    return _ring("pyrrole", ["N", "C", "C", "C", "C"], [S, D, S, D, S])


def furan() -> Structure:
    return _ring("furan", ["O", "C", "C", "C", "C"], [S, D, S, D, S])


def thiophene() -> Structure:
    return _ring("thiophene", ["S", "C", "C", "C", "C"], [S, D, S, D, S])


def naphthalene() -> Structure:
    """Two fused hexagons sharing the C4a-C8a edge, Kekulé bonds."""
    r = BOND_LENGTH
    cx = r * math.cos(math.radians(30))

    def vertex(center_x: float, degrees: float) -> Tuple[float, float]:
        return (center_x + r * math.cos(math.radians(degrees)),
                r * math.sin(math.radians(degrees)))

    positions = [
        vertex(cx, 90), vertex(cx, 30), vertex(cx, 330), vertex(cx, 270),   # C1-C4
        (0.0, -r / 2),                                                       # C4a
        vertex(-cx, 270), vertex(-cx, 210), vertex(-cx, 150), vertex(-cx, 90),  # C5-C8
        (0.0, r / 2),                                                        # C8a
    ]
    structure = Structure("naphthalene")
    ids = [structure.add_atom("C", x, y) for x, y in positions]
    c1, c2, c3, c4, c4a, c5, c6, c7, c8, c8a = ids
    for a, b, order in [
        (c1, c2, D), (c2, c3, S), (c3, c4, D), (c4, c4a, S), (c4a, c8a, D),
        (c8a, c1, S), (c4a, c5, S), (c5, c6, D), (c6, c7, S), (c7, c8, D),
        (c8, c8a, S),
    ]:
        structure.add_bond(a, b, order)
    return structure


# =============================================================================
# Molecule Library Interface
# =============================================================================

class MoleculeLibrary:
    """
    Central access point for the preset structures.

    Usage:
        mol = MoleculeLibrary.get("benzene")
        MoleculeLibrary.describe()["pyrrole"]["pi_atoms"]
    """

    _registry: Dict[str, Dict] = {
        "ethylene":         {"builder": ethylene,         "pi_atoms": 2,  "charge": 0,
                             "description": "Simplest π bond, E = α ± β."},
        "allyl":            {"builder": allyl,            "pi_atoms": 3,  "charge": 0,
                             "description": "Three-centre delocalized radical (cation at +1, anion at -1)."},
        "butadiene":        {"builder": butadiene,        "pi_atoms": 4,  "charge": 0,
                             "description": "Linear conjugated diene."},
        "hexatriene":       {"builder": hexatriene,       "pi_atoms": 6,  "charge": 0,
                             "description": "Linear conjugated triene."},
        "formaldehyde":     {"builder": formaldehyde,     "pi_atoms": 2,  "charge": 0,
                             "description": "Carbonyl π bond with a one-electron oxygen."},
        "acrolein":         {"builder": acrolein,         "pi_atoms": 4,  "charge": 0,
                             "description": "α,β-unsaturated aldehyde."},
        "cyclobutadiene":   {"builder": cyclobutadiene,   "pi_atoms": 4,  "charge": 0,
                             "description": "Antiaromatic ring with a degenerate non-bonding pair."},
        "cyclopentadienyl": {"builder": cyclopentadienyl, "pi_atoms": 5,  "charge": -1,
                             "description": "Aromatic as the anion (charge -1)."},
        "benzene":          {"builder": benzene,          "pi_atoms": 6,  "charge": 0,
                             "description": "Aromatic reference, E_π = 6α + 8β."},
        "pyridine":         {"builder": pyridine,         "pi_atoms": 6,  "charge": 0,
                             "description": "Pyridine-like nitrogen, one π electron."},
        "pyrrole":          {"builder": pyrrole,          "pi_atoms": 5,  "charge": 0,
                             "description": "Pyrrole-like nitrogen, lone pair in the π system."},
        "furan":            {"builder": furan,            "pi_atoms": 5,  "charge": 0,
                             "description": "Oxygen lone pair in an aromatic ring."},
        "thiophene":        {"builder": thiophene,        "pi_atoms": 5,  "charge": 0,
                             "description": "Sulfur lone pair in an aromatic ring."},
        "naphthalene":      {"builder": naphthalene,      "pi_atoms": 10, "charge": 0,
                             "description": "Two fused benzene rings."},
    }

    @classmethod
    def get(cls, name: str) -> Structure:
        """Build a fresh copy of a preset structure."""
        key = name.lower()
        if key not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ValueError(f"Unknown molecule '{name}'. Available: {available}")
        return cls._registry[key]["builder"]()

    @classmethod
    def names(cls) -> List[str]:
        return list(cls._registry.keys())

    @classmethod
    def suggested_charge(cls, name: str) -> int:
        return cls._registry[name.lower()]["charge"]

    @classmethod
    def describe(cls) -> Dict[str, dict]:
        """Metadata for every preset."""
        return {
            name: {
                "pi_atoms": info["pi_atoms"],
                "charge": info["charge"],
                "description": info["description"],
            }
            for name, info in cls._registry.items()
        }

    @classmethod
    def builders(cls) -> Dict[str, Callable[[], Structure]]:
        return {name: info["builder"] for name, info in cls._registry.items()}
