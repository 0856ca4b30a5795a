"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def config():
    """Default configuration: 2-6-1 perceptrons, 10 units, 4 winners."""
    from synevo.run.config import Config
    return Config()


@pytest.fixture
def rng():
    """A seeded source of randomness."""
    return random.Random(42)
