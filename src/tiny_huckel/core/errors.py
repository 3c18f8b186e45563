"""
Error taxonomy for Hückel calculations.

Every error is raised where the problem is detected and propagates
unmodified to the caller; presentation layers (CLI, dashboard) decide
how to show it.
"""


class HuckelError(Exception):
    """Base class for all calculation errors."""


class NoConjugatedSystemError(HuckelError):
    """The structure contains no atom that belongs to a π system."""

    def __init__(self, message: str = "No π system detected") -> None:
        super().__init__(message)


class DiagonalizationError(HuckelError):
    """The eigensolver could not decompose the Hamiltonian."""

    def __init__(self, message: str = "Diagonalization failed") -> None:
        super().__init__(message)


class MissingEditorStateError(HuckelError):
    """A calculation was requested before a structure source was attached."""

    def __init__(self, message: str = "No structure editor attached") -> None:
        super().__init__(message)


class ElectronCountError(HuckelError, ValueError):
    """The charge-adjusted π electron count cannot be placed in the orbitals."""
