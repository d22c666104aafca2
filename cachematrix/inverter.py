"""
Default Inverter

Inverts a square matrix with numpy.linalg. Any callable with the same
signature can be passed to cache_solve() instead.
"""

import logging
from typing import Optional, Protocol

import numpy as np

from cachematrix.exceptions import NotInvertibleError

logger = logging.getLogger(__name__)


class Inverter(Protocol):
    """Callable computing the inverse of a square matrix."""

    def __call__(self, matrix: np.ndarray, **options) -> np.ndarray:
        ...


def invert(matrix: np.ndarray, tol: Optional[float] = None) -> np.ndarray:
    """
    Compute the inverse of a square matrix.

    Args:
        matrix: Square 2-D array
        tol: Tolerance for detecting singularity. The matrix is treated as
            singular when its reciprocal condition number is below tol.

    Returns:
        The inverse as a new float array

    Raises:
        NotInvertibleError: If the matrix is not square or is singular
    """
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise NotInvertibleError("Only square matrices can be inverted", shape=matrix.shape)

    if not np.all(np.isfinite(matrix)):
        raise NotInvertibleError("Matrix contains NaN or infinite entries", shape=matrix.shape, tolerance=tol)

    if tol is not None:
        with np.errstate(divide='ignore'):
            rcond = 1.0 / np.linalg.cond(matrix)
        if not rcond >= tol:
            raise NotInvertibleError(
                f"Matrix is computationally singular: reciprocal condition number = {rcond:.6g}",
                shape=matrix.shape,
                tolerance=tol
            )

    try:
        inverse = np.linalg.inv(matrix)
    except np.linalg.LinAlgError as e:
        raise NotInvertibleError(f"Matrix is singular: {e}", shape=matrix.shape, tolerance=tol) from e

    if not np.all(np.isfinite(inverse)):
        raise NotInvertibleError("Inverse contains non-finite values", shape=matrix.shape, tolerance=tol)

    logger.debug("Inverted %dx%d matrix", matrix.shape[0], matrix.shape[1])
    return inverse
