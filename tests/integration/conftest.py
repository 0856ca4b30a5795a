"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    import random

    # Networks and trainers created without an explicit generator
    # fall back to the module-level one
    np.random.seed(42)
    random.seed(42)

    yield

    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def or_inputs():
    """OR inputs."""
    return [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]


@pytest.fixture
def or_outputs():
    """OR expected outputs."""
    return [[0.0], [1.0], [1.0], [1.0]]
