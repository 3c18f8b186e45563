"""
Hückel secular matrix.

H is expressed in units of β relative to a common α:

    H[i][i] = hX(atom i)              α_i = α + hX·β
    H[i][j] = hXY(atom i, atom j)     for bonded π atoms, else 0

so that an MO energy reads E_k = α + x_k·β for eigenvalue x_k.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Sequence

import numpy as np

from .detection import PiAtom
from .parameters import DEFAULT_PARAMETERS, HuckelParameters, get_hx, get_hxy
from .structure import BondView

logger = logging.getLogger(__name__)


def index_map(pi_atoms: Sequence[PiAtom]) -> Dict[int, int]:
    """Atom id → matrix index, following the order of ``pi_atoms``."""
    return {atom.id: index for index, atom in enumerate(pi_atoms)}


def build_hamiltonian(pi_atoms: Sequence[PiAtom], bonds: Iterable[BondView],
                      parameters: HuckelParameters = DEFAULT_PARAMETERS) -> np.ndarray:
    """
    Build the n×n Hückel matrix for the ordered π atoms.

    Bonds with an endpoint outside the π system are ignored. A repeated
    bond between the same pair overwrites the earlier entry.
    """
    n = len(pi_atoms)
    H = np.zeros((n, n), dtype=float)
    indices = index_map(pi_atoms)

    for i, atom in enumerate(pi_atoms):
        H[i, i] = get_hx(atom.element, atom.pi_electrons, parameters)

    for bond in bonds:
        i = indices.get(bond.begin)
        j = indices.get(bond.end)
        if i is None or j is None or i == j:
            continue
        a, b = pi_atoms[i], pi_atoms[j]
        value = get_hxy(a.element, b.element, a.pi_electrons, b.pi_electrons, parameters)
        H[i, j] = H[j, i] = value
        logger.debug("Bond %s-%s: hXY = %.3f", a.label, b.label, value)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Hamiltonian (units of β):\n%s",
                     np.array2string(H, precision=3, suppress_small=True))
    return H


def is_symmetric(matrix: np.ndarray, atol: float = 1e-10) -> bool:
    matrix = np.asarray(matrix)
    return matrix.ndim == 2 and matrix.shape[0] == matrix.shape[1] and \
        bool(np.allclose(matrix, matrix.T, atol=atol))
