"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from neurostrand.genotype.innovation_tracker import InnovationTracker
from neurostrand.random_source import RandomSource


@pytest.fixture
def random():
    """Seeded source of randomness."""
    return RandomSource(seed=42)


@pytest.fixture
def tracker():
    """Fresh innovation tracker, deduplicating for the whole run."""
    return InnovationTracker()


@pytest.fixture
def scripted_random():
    """
    Stub source of randomness.
    Tests script its draws through 'bool', 'real' and 'pick' side effects.
    """
    return Mock(spec=RandomSource)
