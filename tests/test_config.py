"""
Tests for the configuration system.

Tests cover:
- GAConfig parsing (camelCase and snake_case keys)
- Cross-field validation
- YAML/JSON/environment loading

Author: evobit developers
License: MIT
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from evobit.config import EvobitConfig, GAConfig, LoggingConfig, load_config
from evobit.exceptions import ConfigurationError
from evobit.genome import (
    CrossoverLeftoverStrategy,
    CrossoverStrategy,
    MutationTargetStrategy,
    SelectionStrategy,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove EVOBIT_* variables inherited from the shell."""
    import os

    for key in list(os.environ):
        if key.startswith("EVOBIT_"):
            monkeypatch.delenv(key)
    return monkeypatch


# ============================================================================
# GAConfig Tests
# ============================================================================

class TestGAConfig:
    """Test GAConfig parsing and validation."""

    def test_snake_case_keys(self, ga_config):
        assert ga_config.solution == (1, 0, 1, 1, 0, 0, 1, 0)
        assert ga_config.population_size == 20
        assert ga_config.selection_strategy == SelectionStrategy.ELITISM
        assert ga_config.mutation_target_strategy == MutationTargetStrategy.BOTH
        assert ga_config.crossover_strategy == CrossoverStrategy.ONE_POINT

    def test_camel_case_keys(self):
        """Test the classic camelCase document layout."""
        config = GAConfig.model_validate(
            {
                "solution": [1, 0, 1],
                "minGenomeLength": 3,
                "maxGenomeLength": 3,
                "maxGeneration": 50,
                "populationSize": 4,
                "seed": 42,
                "selectionStrategy": "TOURNAMENT",
                "tournamentSize": 2,
                "crossoverLeftoverStrategy": "KEEP_ONE_OR_NOT_RANDOMLY",
            }
        )
        assert config.max_generation == 50
        assert config.tournament_size == 2
        assert config.crossover_leftover_strategy == CrossoverLeftoverStrategy.KEEP_ONE_OR_NOT_RANDOMLY

    def test_defaults(self):
        config = GAConfig(solution="11", min_genome_length=2, max_genome_length=4)
        assert config.max_generation == 100
        assert config.population_size == 50
        assert config.mutation_target_strategy == MutationTargetStrategy.CHILDREN
        assert config.mutation_rate == 0.0
        assert config.crossover_rate == 0.5

    def test_lowercase_strategy_names(self, ga_settings):
        ga_settings.update(selection_strategy="roulette", crossover_strategy=" uniform ")
        config = GAConfig(**ga_settings)
        assert config.selection_strategy == SelectionStrategy.ROULETTE
        assert config.crossover_strategy == CrossoverStrategy.UNIFORM

    def test_unknown_strategy_rejected(self, ga_settings):
        ga_settings["crossover_strategy"] = "THREE_POINT"
        with pytest.raises(ValidationError):
            GAConfig(**ga_settings)

    @pytest.mark.parametrize("solution", ["1 0 1 1", "1011", [1, 0, 1, 1], (1, 0, 1, 1)])
    def test_solution_formats(self, ga_settings, solution):
        ga_settings["solution"] = solution
        assert GAConfig(**ga_settings).solution == (1, 0, 1, 1)

    @pytest.mark.parametrize("solution", ["", "10a1", [1, 2], [], 1011])
    def test_invalid_solution(self, ga_settings, solution):
        ga_settings["solution"] = solution
        with pytest.raises(ValidationError):
            GAConfig(**ga_settings)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("population_size", 0),
            ("min_genome_length", 0),
            ("max_generation", -1),
            ("mutation_rate", 1.5),
            ("bit_flip_rate", -0.1),
            ("crossover_rate", 2.0),
        ],
    )
    def test_field_bounds(self, ga_settings, field, value):
        ga_settings[field] = value
        with pytest.raises(ValidationError):
            GAConfig(**ga_settings)

    def test_min_greater_than_max(self, ga_settings):
        ga_settings.update(min_genome_length=12, max_genome_length=10)
        with pytest.raises(ValidationError, match="min_genome_length"):
            GAConfig(**ga_settings)

    def test_tournament_requires_size(self, ga_settings):
        ga_settings["selection_strategy"] = "TOURNAMENT"
        with pytest.raises(ValidationError, match="tournament_size"):
            GAConfig(**ga_settings)

    def test_tournament_larger_than_survivors(self, ga_settings):
        """Test a tournament must fit in the survivor pool parents come from."""
        ga_settings.update(selection_strategy="TOURNAMENT", tournament_size=11)
        with pytest.raises(ValidationError, match="survivor"):
            GAConfig(**ga_settings)

        ga_settings["tournament_size"] = 10
        assert GAConfig(**ga_settings).tournament_size == 10

    def test_tournament_larger_than_population(self, ga_settings):
        ga_settings.update(selection_strategy="TOURNAMENT", tournament_size=25)
        with pytest.raises(ValidationError):
            GAConfig(**ga_settings)

    def test_no_survivors(self, ga_settings):
        ga_settings["crossover_rate"] = 1.0
        with pytest.raises(ValidationError, match="no survivors"):
            GAConfig(**ga_settings)

    def test_elitism_needs_two_survivors(self, ga_settings):
        ga_settings.update(population_size=4, crossover_rate=0.7)
        with pytest.raises(ValidationError, match="ELITISM"):
            GAConfig(**ga_settings)

        ga_settings["selection_strategy"] = "ROULETTE"
        assert GAConfig(**ga_settings).elite_count == 1

    def test_single_gene_genomes_need_growth(self, ga_settings):
        """Test genome bounds that can never be crossed over are rejected."""
        ga_settings.update(solution="1", min_genome_length=1, max_genome_length=1, bit_add_rate=0.0)
        with pytest.raises(ValidationError, match="max_genome_length"):
            GAConfig(**ga_settings)

        ga_settings["bit_add_rate"] = 0.5
        assert GAConfig(**ga_settings).max_genome_length == 1

    def test_no_breeding_skips_breeding_checks(self, ga_settings):
        ga_settings.update(crossover_rate=0.0, min_genome_length=1, max_genome_length=1, bit_add_rate=0.0)
        config = GAConfig(**ga_settings)
        assert config.elite_count == config.population_size

    @pytest.mark.parametrize(
        "population_size, crossover_rate, expected",
        [(20, 0.5, 10), (5, 0.5, 3), (10, 0.7, 3), (4, 0.5, 2), (7, 0.0, 7)],
    )
    def test_elite_count(self, ga_settings, population_size, crossover_rate, expected):
        ga_settings.update(population_size=population_size, crossover_rate=crossover_rate)
        assert GAConfig(**ga_settings).elite_count == expected

    def test_operator_configs(self, ga_config):
        assert ga_config.selection_config().strategy == SelectionStrategy.ELITISM
        assert ga_config.crossover_config().leftover_strategy == (
            CrossoverLeftoverStrategy.KEEP_ALL_OR_NOTHING_RANDOMLY
        )
        mutation = ga_config.mutation_config()
        assert mutation.mutation_rate == 0.5
        assert mutation.bit_flip_rate == 0.8

    def test_solution_serialized_as_bitstring(self, ga_config):
        assert ga_config.model_dump(mode="json")["solution"] == "10110010"


# ============================================================================
# EvobitConfig Tests
# ============================================================================

class TestEvobitConfig:
    """Test top-level configuration loading."""

    def test_from_dict_nested(self, ga_settings):
        config = EvobitConfig.from_dict({"project_name": "demo", "evolution": ga_settings})
        assert config.project_name == "demo"
        assert config.logging.level == "INFO"

    def test_from_dict_flat(self, ga_settings):
        """Test a flat GA document is treated as the evolution section."""
        config = EvobitConfig.from_dict(ga_settings)
        assert config.evolution.population_size == 20

    @pytest.mark.parametrize("data", [None, {}, [1, 2]])
    def test_from_dict_invalid(self, data):
        with pytest.raises(ConfigurationError):
            EvobitConfig.from_dict(data)

    def test_from_dict_wraps_validation_errors(self, ga_settings):
        ga_settings["population_size"] = -5
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            EvobitConfig.from_dict(ga_settings)

    def test_from_yaml(self, config_file):
        config = EvobitConfig.from_yaml(config_file)
        assert config.project_name == "evobit-test"
        assert config.evolution.seed == 42

    def test_from_yaml_camel_case_flat(self, temp_dir):
        path = temp_dir / "classic.yml"
        path.write_text(
            "solution: '101'\n"
            "minGenomeLength: 3\n"
            "maxGenomeLength: 3\n"
            "populationSize: 4\n"
            "selectionStrategy: ELITISM\n"
        )
        config = EvobitConfig.from_yaml(path)
        assert config.evolution.solution == (1, 0, 1)

    def test_from_yaml_missing(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            EvobitConfig.from_yaml(temp_dir / "missing.yaml")

    def test_from_yaml_malformed(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("evolution: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Malformed YAML"):
            EvobitConfig.from_yaml(path)

    def test_from_json(self, temp_dir, ga_settings):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"evolution": ga_settings, "logging": {"level": "debug"}}))
        config = EvobitConfig.from_json(path)
        assert config.logging.level == "DEBUG"

    def test_yaml_round_trip(self, temp_dir, config_file):
        original = EvobitConfig.from_yaml(config_file)
        path = temp_dir / "out" / "saved.yaml"
        original.to_yaml(path)

        with open(path) as f:
            assert yaml.safe_load(f)["evolution"]["solution"] == "10110010"
        assert EvobitConfig.from_yaml(path) == original

    def test_json_round_trip(self, temp_dir, config_file):
        original = EvobitConfig.from_yaml(config_file)
        path = temp_dir / "saved.json"
        original.to_json(path)
        assert EvobitConfig.from_json(path) == original

    def test_from_env(self, clean_env):
        clean_env.setenv("EVOBIT_EVOLUTION__SOLUTION", "0110")
        clean_env.setenv("EVOBIT_EVOLUTION__MIN_GENOME_LENGTH", "2")
        clean_env.setenv("EVOBIT_EVOLUTION__MAX_GENOME_LENGTH", "6")
        clean_env.setenv("EVOBIT_EVOLUTION__POPULATION_SIZE", "30")
        clean_env.setenv("EVOBIT_LOGGING__LEVEL", "warning")

        config = EvobitConfig.from_env()
        assert config.evolution.solution == (0, 1, 1, 0)
        assert config.evolution.population_size == 30
        assert config.logging.level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")


# ============================================================================
# load_config Tests
# ============================================================================

class TestLoadConfig:
    """Test the configuration factory."""

    def test_yaml_path(self, config_file):
        assert load_config(config_file).project_name == "evobit-test"

    def test_json_path(self, temp_dir, ga_settings):
        path = temp_dir / "config.json"
        path.write_text(json.dumps(ga_settings))
        assert load_config(str(path)).evolution.population_size == 20

    def test_unknown_suffix(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("")
        with pytest.raises(ConfigurationError, match="Unknown config format"):
            load_config(path)

    def test_environment_fallback(self, clean_env):
        clean_env.setenv("EVOBIT_EVOLUTION__SOLUTION", "11")
        clean_env.setenv("EVOBIT_EVOLUTION__MIN_GENOME_LENGTH", "2")
        clean_env.setenv("EVOBIT_EVOLUTION__MAX_GENOME_LENGTH", "2")
        assert load_config().evolution.solution == (1, 1)

    def test_nothing_supplied(self, clean_env):
        with pytest.raises(ConfigurationError, match="No configuration supplied"):
            load_config()
