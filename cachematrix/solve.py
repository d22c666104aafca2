"""
Cached solve

Returns the inverse of a CachedMatrix, running the inverter only when no
inverse is cached for the current matrix.
"""

import time
from typing import Any, Optional

import numpy as np

from cachematrix.cached_matrix import CachedMatrix
from cachematrix.exceptions import NotInvertibleError
from cachematrix.inverter import Inverter, invert
from cachematrix.logging_config import get_logger, log_debug, log_info, log_warning
from cachematrix.metrics import SolveMetrics

logger = get_logger(__name__)


def cache_solve(
    cm: CachedMatrix,
    inverter: Optional[Inverter] = None,
    metrics: Optional[SolveMetrics] = None,
    **options: Any
) -> np.ndarray:
    """
    Return the inverse of the matrix held by cm.

    If an inverse is already cached it is returned without calling the
    inverter. Otherwise the inverter is called with the matrix and the
    extra keyword options (e.g. tol), and the result is cached.

    Args:
        cm: The cached matrix
        inverter: Inversion routine, defaults to cachematrix.inverter.invert
        metrics: Optional metrics tracker
        **options: Forwarded verbatim to the inverter

    Returns:
        The inverse matrix

    Raises:
        NotInvertibleError: If the inverter cannot invert the matrix. The
            cache is left empty so the call can be retried.
    """
    inverter = inverter or invert

    with cm.lock:
        inverse = cm.get_cached_inverse()
        if inverse is not None:
            log_info(logger, "getting cached inverse", context={'shape': cm.shape})
            if metrics:
                metrics.record_hit()
            return inverse

        matrix = cm.get_matrix()
        log_debug(logger, "Computing inverse", context={'shape': matrix.shape})
        start = time.perf_counter()
        try:
            # Cache an owned, read-only copy so callers cannot edit the cache in place
            inverse = np.array(inverter(matrix, **options), dtype=float, copy=True)
            inverse.flags.writeable = False
        except NotInvertibleError:
            if metrics:
                metrics.record_failure()
            raise
        except (np.linalg.LinAlgError, ArithmeticError, ValueError) as e:
            if metrics:
                metrics.record_failure()
            log_warning(logger, f"Inversion failed: {e}", context={'shape': matrix.shape})
            raise NotInvertibleError(
                f"Matrix could not be inverted: {e}",
                shape=matrix.shape,
                tolerance=options.get('tol')
            ) from e

        cm.set_cached_inverse(inverse)

    if metrics:
        metrics.record_miss()
        metrics.record_compute_time(time.perf_counter() - start)
    return inverse
