"""
Pytest configuration and shared fixtures for evobit tests.

This module provides reusable test fixtures for:
- Temporary directories and config files
- Random generators
- Sample individuals and populations
- GA configurations

Author: evobit developers
License: MIT
"""

import random
import sys
import tempfile
from pathlib import Path

import pytest
import yaml
from loguru import logger

from evobit.config import GAConfig
from evobit.genome import Individual, Population


# ============================================================================
# Logging
# ============================================================================

@pytest.fixture(autouse=True)
def reset_logger():
    """Restore a plain stderr sink after every test (the CLI replaces sinks)."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


# ============================================================================
# Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# Random Fixtures
# ============================================================================

@pytest.fixture
def rng():
    """Seeded generator shared by the operators under test."""
    return random.Random(1234)


# ============================================================================
# Genome Fixtures
# ============================================================================

@pytest.fixture
def target():
    """Eight-bit target solution."""
    return (1, 0, 1, 1, 0, 0, 1, 0)


def make_individual(bits, fitness=0):
    """Build an individual from a '0101' string or a list of bits."""
    if isinstance(bits, str):
        bits = [int(ch) for ch in bits]
    return Individual(bits, fitness)


@pytest.fixture
def individual_factory():
    """Factory building individuals from bit strings."""
    return make_individual


@pytest.fixture
def sample_pool():
    """Five individuals with distinct fitness values."""
    return [
        make_individual("1010", fitness=1),
        make_individual("1111", fitness=4),
        make_individual("0000", fitness=0),
        make_individual("1100", fitness=3),
        make_individual("0110", fitness=2),
    ]


@pytest.fixture
def sample_population(target, rng):
    """Random population of twelve individuals against the target."""
    return Population.random(target, 12, 4, 12, rng)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def ga_settings():
    """Keyword arguments for a small, valid GA configuration."""
    return {
        "solution": "10110010",
        "min_genome_length": 6,
        "max_genome_length": 10,
        "max_generation": 30,
        "population_size": 20,
        "seed": 42,
        "selection_strategy": "ELITISM",
        "mutation_target_strategy": "BOTH",
        "mutation_rate": 0.5,
        "bit_add_rate": 0.3,
        "bit_remove_rate": 0.3,
        "bit_flip_rate": 0.8,
        "crossover_strategy": "ONE_POINT",
        "crossover_rate": 0.5,
        "crossover_leftover_strategy": "KEEP_ALL_OR_NOTHING_RANDOMLY",
    }


@pytest.fixture
def ga_config(ga_settings):
    """Validated GA configuration."""
    return GAConfig(**ga_settings)


@pytest.fixture
def config_file(temp_dir, ga_settings):
    """YAML configuration file with an evolution section."""
    path = temp_dir / "config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(
            {"project_name": "evobit-test", "evolution": ga_settings},
            f,
            sort_keys=False,
        )
    return path
