"""
Typed view of a 2D chemical structure.

The calculation core never talks to a drawing widget directly. It reads
atoms and bonds through the small :class:`StructureSource` protocol, which
any editor shim can implement. :class:`Structure` is the in-memory
implementation used by the presets, the CLI, the dashboard and the tests.

Example:
    >>> from tiny_huckel.core.structure import Structure, BondType
    >>> s = Structure()
    >>> a = s.add_atom("C", 0.0, 0.0)
    >>> b = s.add_atom("C", 1.4, 0.0)
    >>> s.add_bond(a, b, BondType.DOUBLE)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class BondType(IntEnum):
    """Bond order as reported by the structure editor."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4


@dataclass(frozen=True)
class AtomView:
    """A placed (or not yet placed) atom of the drawn molecule."""

    id: int
    label: str
    position: Optional[Tuple[float, float]] = None


@dataclass(frozen=True)
class BondView:
    """A bond between two atom ids."""

    begin: int
    end: int
    order: BondType = BondType.SINGLE

    def involves(self, atom_id: int) -> bool:
        return self.begin == atom_id or self.end == atom_id

    def other(self, atom_id: int) -> int:
        return self.end if self.begin == atom_id else self.begin


class StructureSource(Protocol):
    """What the calculation core needs from a structure editor."""

    def get_atoms(self) -> List[AtomView]:
        ...

    def get_bonds(self) -> List[BondView]:
        ...


StructureCallback = Callable[["Structure"], None]


class Structure:
    """
    Mutable in-memory molecule with change notification.

    Atom ids are assigned sequentially and never reused. Subscribers
    registered with :meth:`on_structure_changed` are called after every
    mutation.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._atoms: Dict[int, AtomView] = {}
        self._bonds: List[BondView] = []
        self._numbering: Dict[int, str] = {}
        self._next_id = 0
        self._subscribers: List[StructureCallback] = []

    # ---- StructureSource ----

    def get_atoms(self) -> List[AtomView]:
        return list(self._atoms.values())

    def get_bonds(self) -> List[BondView]:
        return list(self._bonds)

    def get_custom_numbering(self) -> Dict[int, str]:
        return dict(self._numbering)

    # ---- Editing ----

    def add_atom(self, label: str = "C", x: Optional[float] = 0.0,
                 y: Optional[float] = 0.0) -> int:
        """Add an atom and return its id. ``x=None`` leaves it unplaced."""
        atom_id = self._next_id
        self._next_id += 1
        position = None if x is None or y is None else (float(x), float(y))
        self._atoms[atom_id] = AtomView(atom_id, label, position)
        self._notify()
        return atom_id

    def add_bond(self, begin: int, end: int,
                 order: BondType = BondType.SINGLE) -> BondView:
        if begin == end:
            raise ValueError(f"Cannot bond atom {begin} to itself")
        for atom_id in (begin, end):
            if atom_id not in self._atoms:
                raise ValueError(f"Unknown atom id {atom_id}")
        bond = BondView(begin, end, BondType(order))
        self._bonds.append(bond)
        self._notify()
        return bond

    def remove_atom(self, atom_id: int) -> None:
        if atom_id not in self._atoms:
            raise ValueError(f"Unknown atom id {atom_id}")
        del self._atoms[atom_id]
        self._bonds = [b for b in self._bonds if not b.involves(atom_id)]
        self._numbering.pop(atom_id, None)
        self._notify()

    def relabel(self, atom_id: int, label: str) -> None:
        atom = self._atoms.get(atom_id)
        if atom is None:
            raise ValueError(f"Unknown atom id {atom_id}")
        self._atoms[atom_id] = AtomView(atom_id, label, atom.position)
        self._notify()

    def set_custom_numbering(self, numbering: Dict[int, str]) -> None:
        self._numbering = {int(k): str(v) for k, v in numbering.items()}
        self._notify()

    def clear_custom_numbering(self) -> None:
        self._numbering = {}
        self._notify()

    def apply_numbering_to_labels(self, numbering: Optional[Dict[int, str]] = None) -> None:
        """
        Write numbering back into atom labels (``C`` → ``C5``).

        Any numbering suffix already present is replaced. Uses the stored
        custom numbering when ``numbering`` is None.
        """
        from .detection import split_label

        numbering = self._numbering if numbering is None else numbering
        for atom_id, number in numbering.items():
            atom = self._atoms.get(int(atom_id))
            if atom is None:
                continue
            element, _ = split_label(atom.label)
            self._atoms[atom.id] = AtomView(atom.id, f"{element}{number}", atom.position)
        self._notify()

    # ---- Observers ----

    def on_structure_changed(self, callback: StructureCallback) -> Callable[[], None]:
        """Subscribe to mutations. Returns a function that unsubscribes."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    # ---- Plain-dict payloads ----

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "atoms": [
                {"id": a.id, "label": a.label,
                 "x": a.position[0] if a.position else None,
                 "y": a.position[1] if a.position else None}
                for a in self._atoms.values()
            ],
            "bonds": [
                {"begin": b.begin, "end": b.end, "order": int(b.order)}
                for b in self._bonds
            ],
            "numbering": {str(k): v for k, v in self._numbering.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Structure":
        """
        Build a structure from ``{"atoms": [...], "bonds": [...]}``.

        Atom ids in the payload are remapped to fresh sequential ids;
        bonds and numbering refer to the payload ids.
        """
        if not isinstance(data, dict) or "atoms" not in data:
            raise ValueError("Structure payload needs an 'atoms' list")

        structure = cls(name=data.get("name", ""))
        remap: Dict[int, int] = {}
        for index, atom in enumerate(data["atoms"]):
            payload_id = int(atom.get("id", index))
            if payload_id in remap:
                raise ValueError(f"Duplicate atom id {payload_id}")
            remap[payload_id] = structure.add_atom(
                atom.get("label", "C"), atom.get("x", 0.0), atom.get("y", 0.0)
            )
        for bond in data.get("bonds", []):
            try:
                begin, end = remap[int(bond["begin"])], remap[int(bond["end"])]
            except KeyError as exc:
                raise ValueError(f"Bond refers to unknown atom {exc}") from exc
            structure.add_bond(begin, end, BondType(int(bond.get("order", 1))))
        numbering = data.get("numbering") or {}
        if numbering:
            unknown = [k for k in numbering if int(k) not in remap]
            if unknown:
                raise ValueError(f"Numbering refers to unknown atoms {unknown}")
            structure.set_custom_numbering(
                {remap[int(k)]: v for k, v in numbering.items()}
            )
        logger.debug("Loaded structure %r: %d atoms, %d bonds",
                     structure.name, len(structure._atoms), len(structure._bonds))
        return structure

    def __len__(self) -> int:
        return len(self._atoms)

    def __repr__(self) -> str:
        return (f"Structure({self.name or 'unnamed'}, atoms={len(self._atoms)}, "
                f"bonds={len(self._bonds)})")
