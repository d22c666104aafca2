#!/usr/bin/env python3
"""
Demo entry point: invert a matrix twice, showing the second call hit the cache.

    python -m cachematrix '[[1, 2], [3, 4]]' --tolerance 1e-12
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import numpy as np

from cachematrix.cached_matrix import CachedMatrix
from cachematrix.config import load_config, solver_options
from cachematrix.exceptions import CacheMatrixError
from cachematrix.logging_config import setup_logging, get_logger
from cachematrix.metrics import SolveMetrics
from cachematrix.solve import cache_solve

DEFAULT_MATRIX_JSON = '[[2, 1], [1, 2]]'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Invert a matrix with a cached inverse')
    parser.add_argument('matrix', nargs='?', default=DEFAULT_MATRIX_JSON,
                        help='Matrix as a JSON array of rows (default: %(default)s)')
    parser.add_argument('-c', '--config', default=None,
                        help='Path to a JSON solver configuration file')
    parser.add_argument('-t', '--tolerance', type=float, default=None,
                        help='Reciprocal condition number below which the matrix is singular')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--json-logs', action='store_true',
                        help='Emit structured JSON log lines')
    parser.add_argument('--log-file', default=None,
                        help='Also write log records to this file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {'tolerance': args.tolerance}
    if args.debug:
        overrides['log_level'] = 'DEBUG'
    if args.json_logs:
        overrides['log_format'] = 'json'

    try:
        config = load_config(args.config, overrides=overrides)
    except CacheMatrixError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    setup_logging(
        level=getattr(logging, config['log_level']),
        format_type=config['log_format'],
        include_location=args.debug,
        log_file=args.log_file
    )
    logger = get_logger('cachematrix')
    metrics = SolveMetrics(logger=logger)

    try:
        cm = CachedMatrix(json.loads(args.matrix), strict_square=config['strict_square'])
        options = solver_options(config)
        inverse = cache_solve(cm, metrics=metrics, **options)
        # Second call is served from the cache
        cache_solve(cm, metrics=metrics, **options)
    except json.JSONDecodeError as e:
        logger.error("Matrix is not valid JSON: %s", e)
        return 1
    except CacheMatrixError as e:
        logger.error("%s", e)
        return 1

    print(np.array2string(inverse, precision=6, suppress_small=True))
    metrics.log_metrics()
    return 0


if __name__ == '__main__':
    sys.exit(main())
