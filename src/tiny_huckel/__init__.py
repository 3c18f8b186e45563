"""
tiny-huckel: Simple Hückel MO calculations for conjugated π systems.

Features:
- Automatic π-system detection from a 2D structure
- Adaptive N/O/S/P parameters (one- vs two-electron sites)
- LAPACK or pure-numpy Jacobi diagonalization
- Energies, coefficients, charges, bond orders, HOMO/LUMO
- Text reports, matplotlib level diagrams, a Flask JSON API

Quick Start:
    >>> from tiny_huckel import HuckelCalculator, MoleculeLibrary
    >>> result = HuckelCalculator(MoleculeLibrary.get("benzene")).calculate()
    >>> result.energy_expressions
    ('α + 2β', 'α + β', 'α + β', 'α - β', 'α - β', 'α - 2β')

Custom structures:
    >>> from tiny_huckel import Structure, BondType, render
    >>> s = Structure("formaldehyde")
    >>> c, o = s.add_atom("C", 0, 0), s.add_atom("O", 1.2, 0)
    >>> _ = s.add_bond(c, o, BondType.DOUBLE)
    >>> print(render(HuckelCalculator(s).calculate(), "diagram"))
"""
__version__ = "1.0.0"

# Core components
from .core import (
    HuckelError,
    NoConjugatedSystemError,
    DiagonalizationError,
    MissingEditorStateError,
    ElectronCountError,
    AtomView,
    BondView,
    BondType,
    Structure,
    StructureSource,
    HuckelParameters,
    DEFAULT_PARAMETERS,
    with_overrides,
    load_parameters,
    PiAtom,
    HuckelCalculator,
    HuckelResult,
)

# Presets
from .molecules import MoleculeLibrary

# Reports
from .visualization import (
    render,
    full_report,
    energies_report,
    ascii_level_diagram,
    plot_energy_levels,
)

from .logging_config import setup_logging

__all__ = [
    # Errors
    'HuckelError',
    'NoConjugatedSystemError',
    'DiagonalizationError',
    'MissingEditorStateError',
    'ElectronCountError',
    # Structure
    'AtomView',
    'BondView',
    'BondType',
    'Structure',
    'StructureSource',
    # Parameters
    'HuckelParameters',
    'DEFAULT_PARAMETERS',
    'with_overrides',
    'load_parameters',
    # Calculation
    'PiAtom',
    'HuckelCalculator',
    'HuckelResult',
    # Presets and reports
    'MoleculeLibrary',
    'render',
    'full_report',
    'energies_report',
    'ascii_level_diagram',
    'plot_energy_levels',
    'setup_logging',
]
