"""
Symmetric eigensolver adapter.

``diagonalize`` returns eigenvalues in ascending order and unit-norm
eigenvectors as the *columns* of a matrix, like ``numpy.linalg.eigh``.
Eigenvectors are only defined up to sign.

Two methods are available:

- ``"lapack"`` (default): ``scipy.linalg.eigh``. A 2×2 matrix that LAPACK
  rejects is solved in closed form.
- ``"jacobi"``: cyclic Jacobi rotations in pure numpy, useful as an
  independent cross-check for the small matrices of Hückel theory.
"""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from scipy import linalg

from .errors import DiagonalizationError

logger = logging.getLogger(__name__)

METHODS = ("lapack", "jacobi")


def _validate(matrix) -> np.ndarray:
    try:
        H = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DiagonalizationError(f"Diagonalization failed: not a numeric matrix ({exc})") from exc
    if H.ndim != 2 or H.shape[0] != H.shape[1]:
        raise DiagonalizationError(f"Diagonalization failed: matrix must be square, got shape {H.shape}")
    if H.shape[0] == 0:
        raise DiagonalizationError("Diagonalization failed: empty matrix")
    if not np.all(np.isfinite(H)):
        raise DiagonalizationError("Diagonalization failed: matrix contains NaN or infinity")
    if not np.allclose(H, H.T, atol=1e-10):
        raise DiagonalizationError("Diagonalization failed: matrix is not symmetric")
    return H


def _normalize_columns(vectors: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(vectors, axis=0)
    if np.any(norms < 1e-14):
        raise DiagonalizationError("Diagonalization failed: zero-length eigenvector")
    return vectors / norms


def diagonalize_2x2(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Closed-form eigenpairs of a real symmetric 2×2 matrix."""
    (a, b), (_, d) = matrix
    trace = a + d
    discriminant = (a - d) ** 2 + 4.0 * b * b
    root = np.sqrt(discriminant)
    low, high = (trace - root) / 2.0, (trace + root) / 2.0

    if abs(b) > 1e-14:
        vectors = np.array([[b, b], [low - a, high - a]], dtype=float)
    elif a <= d:
        vectors = np.eye(2)
    else:
        vectors = np.array([[0.0, 1.0], [1.0, 0.0]])
    return np.array([low, high]), _normalize_columns(vectors)


def jacobi_eigh(matrix: np.ndarray, tolerance: float = 1e-12,
                max_sweeps: int = 100) -> Tuple[np.ndarray, np.ndarray]:
    """
    Cyclic Jacobi eigenvalue algorithm.

    Each rotation zeroes one off-diagonal pair; sweeps repeat until the
    off-diagonal norm falls below ``tolerance`` (relative to the matrix
    norm).

    Raises
    ------
    DiagonalizationError
        If the matrix is not diagonal after ``max_sweeps`` sweeps.
    """
    A = np.array(matrix, dtype=float)
    n = A.shape[0]
    V = np.eye(n)
    scale = max(np.linalg.norm(A), 1.0)

    for sweep in range(max_sweeps):
        off = np.sqrt(np.sum(np.tril(A, -1) ** 2))
        if off < tolerance * scale:
            logger.debug("Jacobi converged after %d sweep(s)", sweep)
            order = np.argsort(np.diag(A))
            return np.diag(A)[order], _normalize_columns(V[:, order])

        for p in range(n - 1):
            for q in range(p + 1, n):
                if abs(A[p, q]) < 1e-300:
                    continue
                theta = (A[q, q] - A[p, p]) / (2.0 * A[p, q])
                sign = 1.0 if theta >= 0 else -1.0
                t = sign / (abs(theta) + np.sqrt(theta * theta + 1.0))
                c = 1.0 / np.sqrt(t * t + 1.0)
                s = t * c

                P = np.eye(n)
                P[p, p] = P[q, q] = c
                P[p, q] = s
                P[q, p] = -s
                A = P.T @ A @ P
                V = V @ P

    raise DiagonalizationError(
        f"Diagonalization failed: Jacobi did not converge in {max_sweeps} sweeps"
    )


def diagonalize(matrix, method: str = "lapack") -> Tuple[np.ndarray, np.ndarray]:
    """
    Eigen-decompose a real symmetric Hamiltonian.

    Parameters
    ----------
    matrix : array_like
        Square symmetric matrix.
    method : {"lapack", "jacobi"}
        Numerical routine to use.

    Returns
    -------
    tuple of (np.ndarray, np.ndarray)
        Ascending eigenvalues and the matching unit eigenvectors as
        columns.

    Raises
    ------
    DiagonalizationError
        Malformed input or a routine that cannot produce a decomposition.
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method '{method}'. Available: {', '.join(METHODS)}")
    H = _validate(matrix)
    n = H.shape[0]

    if n == 1:
        return H.diagonal().copy(), np.ones((1, 1))

    if method == "jacobi":
        return jacobi_eigh(H)

    try:
        eigenvalues, eigenvectors = linalg.eigh(H)
    except (linalg.LinAlgError, ValueError) as exc:
        if n == 2:
            logger.warning("LAPACK failed on 2x2 matrix (%s), using closed form", exc)
            return diagonalize_2x2(H)
        raise DiagonalizationError(f"Diagonalization failed: {exc}") from exc

    return eigenvalues, _normalize_columns(eigenvectors)
