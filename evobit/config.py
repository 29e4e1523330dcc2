"""
evobit Configuration System

Pydantic v2-based configuration with YAML/JSON support and environment overrides.

Features:
- Type-safe configuration models
- YAML/JSON file loading (snake_case or camelCase keys)
- Environment variable overrides
- Cross-field validation before a run starts

Author: evobit developers
Python: 3.11+
"""

from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any, Literal

from loguru import logger
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from evobit.exceptions import ConfigurationError
from evobit.genome.operators import CrossoverConfig, MutationConfig, SelectionConfig
from evobit.genome.strategies import (
    CrossoverLeftoverStrategy,
    CrossoverStrategy,
    MutationTargetStrategy,
    SelectionStrategy,
)


# =============================================================================
# Genetic Algorithm Configuration
# =============================================================================


class GAConfig(BaseModel):
    """Configuration for one evolutionary run."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Target
    solution: tuple[int, ...] = Field(
        ...,
        min_length=1,
        description="Target bit-string (list of 0/1 or a string such as '0110')",
    )

    # Genome shape
    min_genome_length: int = Field(
        ...,
        ge=1,
        description="Shortest genome in the initial population",
    )

    max_genome_length: int = Field(
        ...,
        ge=1,
        description="Longest genome in the initial population",
    )

    # Run
    max_generation: int = Field(
        default=100,
        ge=0,
        description="Last generation index; the loop runs max_generation + 1 times",
    )

    population_size: int = Field(
        default=50,
        ge=1,
        description="Number of individuals per generation",
    )

    seed: int = Field(
        default=0,
        description="Seed of the single random generator shared by all operators",
    )

    # Selection
    selection_strategy: SelectionStrategy = Field(
        default=SelectionStrategy.ELITISM,
        description="How survivors and parents are chosen",
    )

    tournament_size: int | None = Field(
        default=None,
        ge=1,
        description="Contestants per tournament round (TOURNAMENT only)",
    )

    # Mutation
    mutation_target_strategy: MutationTargetStrategy = Field(
        default=MutationTargetStrategy.CHILDREN,
        description="Which individuals are mutation candidates",
    )

    mutation_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Probability of a mutation attempt per candidate",
    )

    bit_add_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    bit_remove_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    bit_flip_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    # Crossover
    crossover_strategy: CrossoverStrategy = Field(
        default=CrossoverStrategy.ONE_POINT,
        description="How two parents are combined",
    )

    crossover_rate: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Share of each generation produced by crossover",
    )

    crossover_leftover_strategy: CrossoverLeftoverStrategy = Field(
        default=CrossoverLeftoverStrategy.KEEP_ALL_OR_NOTHING_RANDOMLY,
        description="Handling of the longer parent's tail (UNIFORM/ARITHMETIC)",
    )

    @field_validator("solution", mode="before")
    @classmethod
    def parse_solution(cls, v: Any) -> Any:
        """Accept '0110' strings as well as sequences of bits."""
        if isinstance(v, str):
            text = "".join(v.split())
            if any(ch not in "01" for ch in text):
                raise ValueError(f"solution may only contain '0' and '1' (got {v!r})")
            return [int(ch) for ch in text]
        if isinstance(v, int) and not isinstance(v, bool):
            # YAML reads an unquoted 0110 as a number and drops the leading zero
            raise ValueError("solution must be a quoted bit-string or a list of bits, not a number")
        return v

    @field_validator("solution")
    @classmethod
    def check_bits(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if any(bit not in (0, 1) for bit in v):
            raise ValueError("solution genes must be 0 or 1")
        return v

    @field_validator(
        "selection_strategy",
        "mutation_target_strategy",
        "crossover_strategy",
        "crossover_leftover_strategy",
        mode="before",
    )
    @classmethod
    def normalize_strategy_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> GAConfig:
        """Reject combinations that would fail mid-run."""
        if self.min_genome_length > self.max_genome_length:
            raise ValueError(
                f"min_genome_length ({self.min_genome_length}) must be <= "
                f"max_genome_length ({self.max_genome_length})"
            )

        elite_count = self.elite_count
        breeds = elite_count < self.population_size

        if self.selection_strategy == SelectionStrategy.TOURNAMENT:
            if self.tournament_size is None:
                raise ValueError("tournament_size is required for TOURNAMENT selection")
            if self.tournament_size > self.population_size:
                raise ValueError(
                    f"tournament_size ({self.tournament_size}) must be <= "
                    f"population_size ({self.population_size})"
                )
            if breeds and self.tournament_size > elite_count:
                raise ValueError(
                    f"tournament_size ({self.tournament_size}) must be <= the "
                    f"survivor count ({elite_count}) that parents are drawn from"
                )

        if breeds:
            if elite_count == 0:
                raise ValueError(
                    f"crossover_rate {self.crossover_rate} leaves no survivors to breed from"
                )
            if self.selection_strategy == SelectionStrategy.ELITISM and elite_count < 2:
                raise ValueError(
                    "ELITISM needs at least 2 survivors to pick parents from "
                    f"(crossover_rate {self.crossover_rate} keeps {elite_count})"
                )

            can_grow = self.mutation_rate > 0 and self.bit_add_rate > 0
            if self.max_genome_length < 2 and not can_grow:
                raise ValueError(
                    "max_genome_length < 2 makes every crossover impossible; "
                    "raise max_genome_length or enable bit additions"
                )

        return self

    @field_serializer("solution")
    def serialize_solution(self, solution: tuple[int, ...]) -> str:
        return "".join(str(bit) for bit in solution)

    @property
    def elite_count(self) -> int:
        """Survivors kept each generation: population_size * (1 - crossover_rate), rounded half up."""
        return math.floor(self.population_size * (1.0 - self.crossover_rate) + 0.5)

    def selection_config(self) -> SelectionConfig:
        return SelectionConfig(
            strategy=self.selection_strategy,
            tournament_size=self.tournament_size,
        )

    def crossover_config(self) -> CrossoverConfig:
        return CrossoverConfig(
            strategy=self.crossover_strategy,
            leftover_strategy=self.crossover_leftover_strategy,
        )

    def mutation_config(self) -> MutationConfig:
        return MutationConfig(
            mutation_rate=self.mutation_rate,
            bit_add_rate=self.bit_add_rate,
            bit_remove_rate=self.bit_remove_rate,
            bit_flip_rate=self.bit_flip_rate,
        )


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Configuration for console/file logging."""

    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional log file (rotated)",
    )

    serialize: bool = Field(
        default=False,
        description="Emit JSON log records",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


# =============================================================================
# Top-level Configuration
# =============================================================================


class EvobitConfig(BaseModel):
    """Main evobit configuration."""

    project_name: str = Field(
        default="evobit",
        description="Project name",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment",
    )

    evolution: GAConfig = Field(
        ...,
        description="Evolution configuration",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> EvobitConfig:
        """
        Build a configuration from parsed data.

        A flat document holding only GA keys (the classic format) is wrapped
        into the ``evolution`` section.

        Raises:
            ConfigurationError: If the data is missing or invalid
        """
        if not data:
            raise ConfigurationError("Configuration is empty")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")

        if "evolution" not in data and "solution" in data:
            data = {"evolution": data}

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration:\n{e}") from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> EvobitConfig:
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML file

        Returns:
            EvobitConfig instance
        """
        import yaml

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Malformed YAML in {path}: {e}") from e

        config = cls.from_dict(data)
        logger.info(f"Loaded configuration from {path}")
        return config

    @classmethod
    def from_json(cls, path: str | Path) -> EvobitConfig:
        """
        Load configuration from JSON file.

        Args:
            path: Path to JSON file

        Returns:
            EvobitConfig instance
        """
        import json

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Malformed JSON in {path}: {e}") from e

        config = cls.from_dict(data)
        logger.info(f"Loaded configuration from {path}")
        return config

    @classmethod
    def from_env(cls, prefix: str = "EVOBIT_") -> EvobitConfig:
        """
        Load configuration from environment variables.

        Environment variables should be in the format:
        EVOBIT_EVOLUTION__SOLUTION=0110
        EVOBIT_EVOLUTION__POPULATION_SIZE=100
        EVOBIT_LOGGING__LEVEL=DEBUG

        Values stay strings; pydantic coerces them to the field types.

        Args:
            prefix: Environment variable prefix

        Returns:
            EvobitConfig instance
        """
        config_dict: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue

            # Remove prefix and convert to nested dict
            parts = key[len(prefix):].lower().split("__")

            current = config_dict
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

        config = cls.from_dict(config_dict)
        logger.info(f"Loaded configuration from environment variables (prefix={prefix})")
        return config

    def to_yaml(self, path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to YAML file
        """
        import yaml

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.safe_dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

        logger.info(f"Saved configuration to {path}")

    def to_json(self, path: str | Path) -> None:
        """
        Save configuration to JSON file.

        Args:
            path: Path to JSON file
        """
        import json

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

        logger.info(f"Saved configuration to {path}")


# =============================================================================
# Configuration Factory
# =============================================================================


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "EVOBIT_",
) -> EvobitConfig:
    """
    Load configuration with automatic format detection.

    Priority:
    1. Explicit config file (YAML or JSON)
    2. Environment variables

    Args:
        config_path: Path to config file (YAML or JSON)
        env_prefix: Environment variable prefix

    Returns:
        EvobitConfig instance

    Raises:
        ConfigurationError: If no usable configuration is found
    """
    if config_path:
        path = Path(config_path)
        if path.suffix in (".yaml", ".yml"):
            return EvobitConfig.from_yaml(path)
        elif path.suffix == ".json":
            return EvobitConfig.from_json(path)
        else:
            raise ConfigurationError(f"Unknown config format: {path.suffix}")

    if any(key.startswith(env_prefix) for key in os.environ):
        logger.info("Using configuration from environment variables")
        return EvobitConfig.from_env(env_prefix)

    raise ConfigurationError(
        f"No configuration supplied: pass a YAML/JSON file or set {env_prefix}* variables"
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "EvobitConfig",
    "GAConfig",
    "LoggingConfig",
    "load_config",
]
