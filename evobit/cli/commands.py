"""
CLI Commands for evobit.

Provides command-line interface using Click framework.

Author: evobit developers
License: MIT
"""

from typing import Optional
from pathlib import Path
import sys

import click
import yaml
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from evobit.config import EvobitConfig, GAConfig, load_config
from evobit.exceptions import ConfigurationError
from evobit.monitoring.logging_config import configure_logging, log_error


EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_EXHAUSTED = 3

console = Console()


def _load(ctx: click.Context) -> EvobitConfig:
    """Load the configuration named on the command line (or from the environment)."""
    try:
        return load_config(ctx.obj["config"])
    except (ConfigurationError, FileNotFoundError) as e:
        log_error("Could not load configuration", e if ctx.obj["verbose"] else None)
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(EXIT_CONFIG_ERROR)


def _apply_overrides(evolution: GAConfig, **overrides) -> GAConfig:
    """Re-validate the evolution section with command line overrides applied."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return evolution
    try:
        return GAConfig(**{**evolution.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid override:\n{e}") from e


# Main CLI group
@click.group()
@click.version_option(version="0.1.0")
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config: Optional[str], verbose: bool):
    """
    evobit - evolve bit-strings toward a target.

    Genetic algorithm with pluggable selection, crossover and mutation.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose

    # Configure logging; `run` re-applies the configured level
    log_level = "DEBUG" if verbose else "INFO"
    logger.remove()
    logger.add(sys.stderr, level=log_level)


# Run command
@cli.command()
@click.option("--seed", "-s", type=int, default=None, help="Override the random seed")
@click.option("--max-generation", "-g", type=int, default=None, help="Override the last generation index")
@click.option("--population-size", "-p", type=int, default=None, help="Override the population size")
@click.option("--report", "-r", type=click.Path(), default=None, help="Write the history report (JSON)")
@click.pass_context
def run(ctx, seed: Optional[int], max_generation: Optional[int],
        population_size: Optional[int], report: Optional[str]):
    """Run the genetic algorithm."""
    from evobit.orchestrator import EvolutionOrchestrator

    config = _load(ctx)
    configure_logging(
        log_level="DEBUG" if ctx.obj["verbose"] else config.logging.level,
        log_file=config.logging.log_file,
        serialize=config.logging.serialize,
    )

    try:
        evolution = _apply_overrides(
            config.evolution,
            seed=seed,
            max_generation=max_generation,
            population_size=population_size,
        )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(EXIT_CONFIG_ERROR)

    orchestrator = EvolutionOrchestrator(evolution)
    result = orchestrator.run()

    table = Table(title="evobit result")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Termination", result.termination.value)
    table.add_row("Generation", str(result.generation))
    table.add_row("Fitness", f"{result.fittest.fitness} / {len(evolution.solution)}")
    table.add_row("Genome", result.fittest.bitstring())
    table.add_row("Target", "".join(str(bit) for bit in evolution.solution))
    table.add_row("Elapsed", f"{result.elapsed_seconds:.3f}s")
    console.print(table)

    if report:
        result.history.export_to_json(Path(report))
        console.print(f"History report written to {report}")

    sys.exit(EXIT_SUCCESS if result.succeeded else EXIT_EXHAUSTED)


# Config commands
@cli.group()
def config():
    """Configuration management."""
    pass


@config.command()
@click.pass_context
def show(ctx):
    """Print the resolved configuration as YAML."""
    loaded = _load(ctx)
    click.echo(
        yaml.safe_dump(loaded.model_dump(mode="json"), default_flow_style=False, sort_keys=False)
    )


@config.command()
@click.pass_context
def validate(ctx):
    """Validate the configuration."""
    loaded = _load(ctx)
    evolution = loaded.evolution
    console.print(
        f"[green]Configuration valid[/green]: target length {len(evolution.solution)}, "
        f"population {evolution.population_size}, "
        f"{evolution.elite_count} survivors per generation"
    )


if __name__ == "__main__":
    cli()
