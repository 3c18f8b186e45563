"""
Detection of the conjugated π system.

An atom joins the π system when it carries a double, triple or
aromatic bond, or when it is N, O, S or P with at most three bonds (a
lone pair that can conjugate). Each member contributes 1 or 2 π
electrons depending on its element and bonding.

The detected atoms are ordered by their user-facing number, which fixes
the row/column order of the Hamiltonian.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .parameters import ADAPTIVE_ELEMENTS
from .structure import AtomView, BondType, BondView

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^([A-Z][a-z]?)(\d\w*)?$")


@dataclass(frozen=True)
class PiAtom:
    """An atom of the π system."""

    id: int
    element: str
    pi_electrons: int
    user_number: str

    @property
    def label(self) -> str:
        return f"{self.element}{self.user_number}"


def split_label(label: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Split an editor label into bare element and numbering suffix.

    ``"C12"`` → ``("C", "12")``, ``"Cl"`` → ``("Cl", None)``. An empty
    label is a carbon.
    """
    label = (label or "").strip()
    if not label:
        return "C", None
    match = _LABEL_RE.match(label)
    if match:
        return match.group(1), match.group(2)
    # Unusual labels: drop every digit, keep a trailing number if any.
    suffix = re.search(r"(\d+)$", label)
    element = re.sub(r"\d+", "", label) or "C"
    return element, suffix.group(1) if suffix else None


def is_in_pi_system(element: str, bonds: Sequence[BondView]) -> bool:
    if any(b.order >= BondType.DOUBLE for b in bonds):
        return True
    return element in ADAPTIVE_ELEMENTS and len(bonds) <= 3


def count_pi_electrons(element: str, bonds: Sequence[BondView]) -> int:
    """π electrons an included atom gives to the system."""
    orders = {b.order for b in bonds}
    if element == "C":
        return 1
    if element == "N":
        if BondType.TRIPLE in orders:
            return 2
        if BondType.DOUBLE in orders or BondType.AROMATIC in orders:
            return 1
        return 2
    if element in ("O", "S", "P"):
        if BondType.DOUBLE in orders or BondType.AROMATIC in orders:
            return 1
        return 2
    return 1


def _as_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def user_number_key(value: str) -> Tuple[int, int, str]:
    """
    Sort key for user numbers.

    Integers compare numerically, other numbers as strings; integers sort
    before non-integers so that mixed sets have a total order.
    """
    number = _as_int(value)
    if number is not None:
        return (0, number, "")
    return (1, 0, str(value))


def compare_user_numbers(a: str, b: str) -> int:
    """Three-way comparison of two user numbers, see :func:`user_number_key`."""
    ka, kb = user_number_key(a), user_number_key(b)
    return (ka > kb) - (ka < kb)


def detect_pi_atoms(atoms: Iterable[AtomView], bonds: Iterable[BondView],
                    custom_numbering: Optional[Mapping[int, str]] = None) -> List[PiAtom]:
    """
    Find the π atoms of a structure.

    Parameters
    ----------
    atoms, bonds :
        Current content of the structure editor. Atoms without a
        position are skipped.
    custom_numbering : mapping of atom id → str, optional
        User numbering; wins over a number baked into the label and over
        the positional fallback.

    Returns
    -------
    list of PiAtom
        Sorted by user number. Empty when the structure has no π system.
    """
    custom_numbering = custom_numbering or {}
    bonds = list(bonds)
    pi_atoms: List[PiAtom] = []

    position_index = 0
    for atom in atoms:
        if atom.position is None:
            continue
        element, suffix = split_label(atom.label)
        if custom_numbering.get(atom.id):
            user_number = str(custom_numbering[atom.id])
        elif suffix:
            user_number = suffix
        else:
            user_number = str(position_index + 1)
        position_index += 1

        atom_bonds = [b for b in bonds if b.involves(atom.id)]
        if not is_in_pi_system(element, atom_bonds):
            logger.debug("Atom %s%s (id %d) is not in the π system",
                         element, user_number, atom.id)
            continue

        electrons = count_pi_electrons(element, atom_bonds)
        logger.debug("Atom %s%s (id %d): %d π electron(s)",
                     element, user_number, atom.id, electrons)
        pi_atoms.append(PiAtom(atom.id, element, electrons, user_number))

    pi_atoms.sort(key=lambda p: user_number_key(p.user_number))
    logger.debug("%d π atoms detected: %s", len(pi_atoms),
                 ", ".join(f"{p.label}({p.pi_electrons}e)" for p in pi_atoms))
    return pi_atoms


def count_total_pi_electrons(pi_atoms: Iterable[PiAtom], total_charge: int = 0) -> int:
    """Sum of contributed π electrons minus the net molecular charge."""
    return sum(p.pi_electrons for p in pi_atoms) - int(total_charge)
