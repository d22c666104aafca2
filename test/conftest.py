"""
Pytest configuration and fixtures for cachematrix tests.

Provides call-counting stub inverters, sample matrices and test setup.
"""

import pytest
import sys
import logging
from pathlib import Path
from unittest.mock import Mock

import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cachematrix.cached_matrix import CachedMatrix


@pytest.fixture
def counting_inverter():
    """Inverter stub that delegates to numpy and counts calls."""
    def _invert(matrix, **options):
        return np.linalg.inv(matrix)

    return Mock(side_effect=_invert)


@pytest.fixture
def failing_inverter():
    """Inverter stub that always reports a singular matrix."""
    return Mock(side_effect=np.linalg.LinAlgError("Singular matrix"))


@pytest.fixture
def symmetric_matrix():
    return [[2.0, 1.0], [1.0, 2.0]]


@pytest.fixture
def singular_matrix():
    return [[1.0, 2.0], [2.0, 4.0]]


@pytest.fixture
def cached_matrix(symmetric_matrix):
    """CachedMatrix holding [[2, 1], [1, 2]]."""
    return CachedMatrix(symmetric_matrix)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove cachematrix environment overrides."""
    monkeypatch.delenv("CACHEMATRIX_TOLERANCE", raising=False)
    monkeypatch.delenv("CACHEMATRIX_DEBUG", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test."""
    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    yield
    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
