"""
Hückel calculation façade.

Pipeline:
    structure → π atoms → Hamiltonian → eigenpairs → sorted, filled MOs

Example:
    >>> from tiny_huckel import HuckelCalculator, MoleculeLibrary
    >>> calc = HuckelCalculator(MoleculeLibrary.get("benzene"))
    >>> result = calc.calculate()
    >>> result.energy_expressions[0], round(result.total_energy, 6)
    ('α + 2β', 8.0)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np

from .detection import PiAtom, count_total_pi_electrons, detect_pi_atoms
from .eigen import METHODS, diagonalize
from .errors import MissingEditorStateError, NoConjugatedSystemError
from .hamiltonian import build_hamiltonian, index_map
from .parameters import DEFAULT_PARAMETERS, HuckelParameters, with_overrides
from .population import (
    atomic_charges,
    bond_orders,
    degenerate_groups,
    density_matrix,
    homo_index,
    lumo_index,
    populate,
)
from .structure import BondView, StructureSource

logger = logging.getLogger(__name__)


def _read_only(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class HuckelResult:
    """
    Outcome of one Hückel calculation.

    Attributes
    ----------
    energies : np.ndarray
        Eigenvalues x_k (E_k = α + x_k·β), descending.
    coefficients : np.ndarray
        ``coefficients[k][i]``: weight of π atom i in MO k.
    occupations : tuple of int
        Electrons per MO (0, 1 or 2), filled in list order.
    energy_expressions : tuple of str
        Symbolic energies such as ``"α + 1.618β"``.
    total_energy : float
        Σ n_k x_k in units of β; the α part is ``total_pi_electrons``·α.
    total_pi_electrons : int
        Charge-adjusted π electron count.
    pi_atoms : tuple of PiAtom
        Atoms in matrix order.
    parameters : HuckelParameters
        Snapshot of the parameter table used.
    hamiltonian : np.ndarray
        The secular matrix in units of β.
    bonds : tuple of (int, int)
        Index pairs of bonded π atoms.
    charge : int
        Net molecular charge requested.
    """

    energies: np.ndarray
    coefficients: np.ndarray
    occupations: Tuple[int, ...]
    energy_expressions: Tuple[str, ...]
    total_energy: float
    total_pi_electrons: int
    pi_atoms: Tuple[PiAtom, ...]
    parameters: HuckelParameters
    hamiltonian: np.ndarray
    bonds: Tuple[Tuple[int, int], ...] = ()
    charge: int = 0

    @property
    def n_orbitals(self) -> int:
        return len(self.energies)

    @property
    def homo_index(self) -> Optional[int]:
        return homo_index(self.energies, self.occupations)

    @property
    def lumo_index(self) -> Optional[int]:
        return lumo_index(self.energies, self.occupations)

    @property
    def homo_lumo_gap(self) -> Optional[float]:
        """x_HOMO − x_LUMO in units of |β|, None without both levels."""
        homo, lumo = self.homo_index, self.lumo_index
        if homo is None or lumo is None:
            return None
        return float(self.energies[homo] - self.energies[lumo])

    @property
    def density_matrix(self) -> np.ndarray:
        return density_matrix(self.coefficients, self.occupations)

    @property
    def pi_populations(self) -> np.ndarray:
        return np.diag(self.density_matrix).copy()

    @property
    def atomic_charges(self) -> np.ndarray:
        return atomic_charges(self.pi_populations, [a.pi_electrons for a in self.pi_atoms])

    @property
    def bond_orders(self) -> Dict[Tuple[int, int], float]:
        return bond_orders(self.density_matrix, self.bonds)

    @property
    def degenerate_groups(self) -> List[List[int]]:
        return degenerate_groups(self.energies)

    def to_dict(self) -> dict:
        """JSON-ready view of the result."""
        return {
            "energies": [float(e) for e in self.energies],
            "coefficients": self.coefficients.tolist(),
            "occupations": list(self.occupations),
            "energy_expressions": list(self.energy_expressions),
            "total_energy": self.total_energy,
            "total_pi_electrons": self.total_pi_electrons,
            "charge": self.charge,
            "pi_atoms": [
                {"id": a.id, "element": a.element, "pi_electrons": a.pi_electrons,
                 "user_number": a.user_number}
                for a in self.pi_atoms
            ],
            "homo_index": self.homo_index,
            "lumo_index": self.lumo_index,
            "hamiltonian": self.hamiltonian.tolist(),
            "density_matrix": self.density_matrix.tolist(),
            "atomic_charges": self.atomic_charges.tolist(),
            "bond_orders": [
                {"atoms": [i, j], "order": order}
                for (i, j), order in sorted(self.bond_orders.items())
            ],
            "parameters": self.parameters.to_dict(),
        }

    def __repr__(self) -> str:
        atoms = ", ".join(a.label for a in self.pi_atoms)
        return (f"HuckelResult([{atoms}], electrons={self.total_pi_electrons}, "
                f"E_π={self.total_pi_electrons}α {self.total_energy:+.4f}β)")


class HuckelCalculator:
    """
    Hückel MO calculator bound to a structure source.

    Parameters
    ----------
    source : StructureSource or None
        Where atoms and bonds are read from. Can be attached later with
        :meth:`attach`.
    numbering : mapping of atom id → str, optional
        Custom atom numbering. Overrides numbering the source itself
        provides through ``get_custom_numbering``.
    parameters : HuckelParameters, optional
        Initial parameter table. Default: ``DEFAULT_PARAMETERS``.
    method : {"lapack", "jacobi"}
        Eigensolver.
    """

    def __init__(self, source: Optional[StructureSource] = None,
                 numbering: Optional[Mapping[int, str]] = None,
                 parameters: Optional[HuckelParameters] = None,
                 method: str = "lapack"):
        if method not in METHODS:
            raise ValueError(f"Unknown method '{method}'. Available: {', '.join(METHODS)}")
        self._source = source
        self._numbering = dict(numbering) if numbering else None
        self._parameters = parameters if parameters is not None else DEFAULT_PARAMETERS
        self._method = method
        self._lock = threading.Lock()

    # ---- Wiring ----

    def attach(self, source: StructureSource) -> None:
        self._source = source

    def set_numbering(self, numbering: Optional[Mapping[int, str]]) -> None:
        self._numbering = dict(numbering) if numbering else None

    @property
    def method(self) -> str:
        return self._method

    # ---- Parameters ----

    def get_current_parameters(self) -> HuckelParameters:
        return self._parameters

    def update_parameters(self, partial: Optional[Mapping] = None, *,
                          hx: Optional[Mapping[str, float]] = None,
                          hxy: Optional[Mapping[str, float]] = None) -> HuckelParameters:
        """
        Merge overrides into the parameter table.

        Does not recalculate; call :meth:`calculate` again.
        """
        overrides = dict(partial or {})
        if hx:
            overrides["hX"] = {**overrides.get("hX", {}), **hx}
        if hxy:
            overrides["hXY"] = {**overrides.get("hXY", {}), **hxy}
        with self._lock:
            self._parameters = with_overrides(self._parameters, overrides)
            logger.debug("Parameters updated: %s", overrides)
            return self._parameters

    def reset_parameters(self) -> HuckelParameters:
        with self._lock:
            self._parameters = DEFAULT_PARAMETERS
            return self._parameters

    # ---- Calculation ----

    def _require_source(self) -> StructureSource:
        if self._source is None:
            raise MissingEditorStateError()
        return self._source

    def _numbering_for(self, source: StructureSource) -> Dict[int, str]:
        numbering: Dict[int, str] = {}
        getter = getattr(source, "get_custom_numbering", None)
        if callable(getter):
            numbering.update(getter() or {})
        if self._numbering:
            numbering.update(self._numbering)
        return numbering

    def detect_pi_atoms(self) -> List[PiAtom]:
        source = self._require_source()
        return detect_pi_atoms(source.get_atoms(), source.get_bonds(),
                               self._numbering_for(source))

    def calculate(self, total_charge: int = 0) -> HuckelResult:
        """
        Run the Hückel calculation on the current structure.

        Raises
        ------
        MissingEditorStateError
            No structure source attached.
        NoConjugatedSystemError
            The structure has no π atoms.
        DiagonalizationError
            The eigensolver failed.
        ElectronCountError
            The charge-adjusted electron count is negative or exceeds
            two electrons per π orbital.
        """
        source = self._require_source()
        parameters = self._parameters
        bonds: List[BondView] = list(source.get_bonds())

        pi_atoms = detect_pi_atoms(source.get_atoms(), bonds, self._numbering_for(source))
        if not pi_atoms:
            raise NoConjugatedSystemError()

        total_electrons = count_total_pi_electrons(pi_atoms, total_charge)
        H = build_hamiltonian(pi_atoms, bonds, parameters)
        eigenvalues, eigenvectors = diagonalize(H, method=self._method)
        orbitals = populate(eigenvalues, eigenvectors, total_electrons)

        indices = index_map(pi_atoms)
        pairs = sorted({
            (min(indices[b.begin], indices[b.end]), max(indices[b.begin], indices[b.end]))
            for b in bonds
            if b.begin in indices and b.end in indices and b.begin != b.end
        })

        result = HuckelResult(
            energies=_read_only(orbitals.energies),
            coefficients=_read_only(orbitals.coefficients),
            occupations=orbitals.occupations,
            energy_expressions=orbitals.energy_expressions,
            total_energy=orbitals.total_energy,
            total_pi_electrons=total_electrons,
            pi_atoms=tuple(pi_atoms),
            parameters=parameters,
            hamiltonian=_read_only(H),
            bonds=tuple(pairs),
            charge=int(total_charge),
        )
        logger.info("Hückel: %d π atoms, %d π electrons, E_π = %dα %+.4fβ",
                    len(pi_atoms), total_electrons, total_electrons, result.total_energy)
        return result
