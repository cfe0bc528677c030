"""
Shared fixtures for integration tests.
"""

import pytest

from neurostrand.config import Config


@pytest.fixture
def evolution_config():
    """Config with mutation rates high enough to grow topologies quickly."""
    config = Config()
    config.num_inputs = 3
    config.num_outputs = 2
    config.initial_enabled = True

    config.weight_perturb_prob = 0.8
    config.weight_perturb_amplitude = 0.5
    config.weight_replace_prob = 0.1

    config.node_add_probability = 0.2
    config.connection_add_probability = 0.3
    config.connection_add_attempts = 20

    config.disabled_chance = 0.75
    return config
