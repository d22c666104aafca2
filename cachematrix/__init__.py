"""
cachematrix: a matrix that caches its inverse.

Provides:
- CachedMatrix: matrix holder with an invalidatable cached inverse
- cache_solve: return the cached inverse or compute and cache it
- invert: default numpy inverter
- SolveMetrics: hit/miss tracking
"""

from cachematrix.cached_matrix import CachedMatrix
from cachematrix.exceptions import (
    CacheMatrixError,
    ConfigError,
    InvalidInputError,
    NotInvertibleError,
)
from cachematrix.inverter import Inverter, invert
from cachematrix.metrics import SolveMetrics
from cachematrix.solve import cache_solve

__version__ = '1.0.0'

__all__ = [
    'CachedMatrix',
    'cache_solve',
    'invert',
    'Inverter',
    'SolveMetrics',
    'CacheMatrixError',
    'ConfigError',
    'InvalidInputError',
    'NotInvertibleError',
]
