"""
Cached Matrix

Holds a square matrix together with an optionally-cached inverse. Replacing
the matrix always clears the cached inverse in the same operation.
"""

import threading
import logging
from typing import Any, Optional, Tuple

import numpy as np

from cachematrix.exceptions import InvalidInputError

# R's matrix() default: a single NA cell
DEFAULT_MATRIX = [[np.nan]]

_NUMERIC_KINDS = 'biuf'


def _as_matrix(value: Any, strict_square: bool) -> np.ndarray:
    """Convert value to an owned, read-only 2-D float array or raise InvalidInputError."""
    try:
        arr = np.asarray(value)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Input must be a matrix: {e}") from e

    if arr.dtype.kind not in _NUMERIC_KINDS:
        raise InvalidInputError(
            f"Input must be a numeric matrix, got dtype {arr.dtype}",
            shape=arr.shape
        )
    if arr.ndim != 2:
        raise InvalidInputError(
            f"Input must be a matrix, got {arr.ndim}-dimensional value",
            shape=arr.shape
        )
    if arr.size == 0:
        raise InvalidInputError("Input must not be an empty matrix", shape=arr.shape)
    if strict_square and arr.shape[0] != arr.shape[1]:
        raise InvalidInputError("Input must be a square matrix", shape=arr.shape)

    # Always copy so no caller keeps a writable alias
    matrix = np.array(arr, dtype=float, copy=True)
    matrix.flags.writeable = False
    return matrix


class CachedMatrix:
    """A matrix that can cache its inverse."""

    def __init__(self, value: Any = None, strict_square: bool = True) -> None:
        """
        Initialize the cached matrix.

        Args:
            value: Initial matrix (defaults to a 1x1 NaN matrix)
            strict_square: Reject non-square input in set_matrix()

        Raises:
            InvalidInputError: If value is not matrix-shaped
        """
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._strict_square = strict_square
        self._value: np.ndarray = _as_matrix(
            DEFAULT_MATRIX if value is None else value, strict_square
        )
        self._cached_inverse: Optional[np.ndarray] = None

    def set_matrix(self, new_value: Any) -> None:
        """
        Replace the stored matrix and drop the cached inverse.

        Invalidation happens on every call, even if new_value equals the
        current matrix. On failure the instance is left unchanged.

        Raises:
            InvalidInputError: If new_value is not matrix-shaped
        """
        matrix = _as_matrix(new_value, self._strict_square)
        with self._lock:
            self._value = matrix
            self._cached_inverse = None
        self.logger.debug("Matrix replaced (shape %s), cached inverse cleared", matrix.shape)

    def get_matrix(self) -> np.ndarray:
        """Return the current matrix (read-only)."""
        return self._value

    def set_cached_inverse(self, inverse: np.ndarray) -> None:
        """Store inverse as the cached inverse of the current matrix, unchecked."""
        with self._lock:
            self._cached_inverse = inverse

    def get_cached_inverse(self) -> Optional[np.ndarray]:
        """Return the cached inverse, or None if it has not been computed."""
        return self._cached_inverse

    @property
    def has_cached_inverse(self) -> bool:
        return self._cached_inverse is not None

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._value.shape

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding the (matrix, cached inverse) pair."""
        return self._lock

    def __repr__(self) -> str:
        state = 'cached' if self.has_cached_inverse else 'empty'
        return f"CachedMatrix(shape={self.shape}, inverse={state})"
