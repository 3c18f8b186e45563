"""
Core Hückel engine: structure view, parameters, π detection,
Hamiltonian, eigensolver, population and the calculation façade.
"""

from .errors import (
    HuckelError,
    NoConjugatedSystemError,
    DiagonalizationError,
    MissingEditorStateError,
    ElectronCountError,
)
from .structure import AtomView, BondView, BondType, Structure, StructureSource
from .parameters import (
    HuckelParameters,
    DEFAULT_PARAMETERS,
    ADAPTIVE_ELEMENTS,
    get_hx,
    get_hxy,
    with_overrides,
    load_parameters,
)
from .detection import PiAtom, detect_pi_atoms
from .hamiltonian import build_hamiltonian
from .eigen import diagonalize
from .population import populate, OrbitalSet
from .calculator import HuckelCalculator, HuckelResult

__all__ = [
    "HuckelError", "NoConjugatedSystemError", "DiagonalizationError",
    "MissingEditorStateError", "ElectronCountError",
    "AtomView", "BondView", "BondType", "Structure", "StructureSource",
    "HuckelParameters", "DEFAULT_PARAMETERS", "ADAPTIVE_ELEMENTS",
    "get_hx", "get_hxy", "with_overrides", "load_parameters",
    "PiAtom", "detect_pi_atoms",
    "build_hamiltonian",
    "diagonalize",
    "populate", "OrbitalSet",
    "HuckelCalculator", "HuckelResult",
]
