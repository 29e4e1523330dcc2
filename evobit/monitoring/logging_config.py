"""
Logging setup for evobit runs.

Console output goes to stderr through loguru; an optional file sink rotates
and compresses old logs. The ``log_evolution_*`` helpers give every run the
same progress lines, tagged with ``phase`` (and ``generation``) extras.

Author: evobit developers
License: MIT
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    serialize: bool = False,
    rotation: str = "10 MB",
    retention: int = 5,
    format_string: Optional[str] = None,
) -> None:
    """
    Replace all loguru sinks with the evobit console (and file) sinks.

    Args:
        log_level: Minimum level name, case-insensitive
        log_file: Write a rotated copy of the log here as well
        serialize: Emit one JSON object per record instead of text
        rotation: When the file sink starts a new file
        retention: How many rotated files to keep
        format_string: Overrides ``DEFAULT_FORMAT`` for text output
    """
    level = log_level.upper()
    fmt = format_string or ("{message}" if serialize else DEFAULT_FORMAT)

    logger.remove()
    logger.configure(extra={"component": "evobit"})

    logger.add(sys.stderr, level=level, format=fmt, serialize=serialize, colorize=not serialize)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            level=level,
            format=fmt,
            serialize=serialize,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )


class LogContext:
    """Attach extras to every record logged inside a ``with`` block."""

    def __init__(self, **extras):
        self.extras = extras
        self._context = None

    def __enter__(self):
        self._context = logger.contextualize(**self.extras)
        self._context.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._context is not None:
            self._context.__exit__(exc_type, exc_val, exc_tb)
            self._context = None


def log_evolution_start(generations: int, population_size: int, elite_count: int, seed: int):
    """Log the shape of a run before generation 0."""
    with LogContext(phase="evolution"):
        logger.info(
            f"Evolving {population_size} individuals for up to {generations} generations "
            f"({elite_count} survivors per generation, seed={seed})"
        )


def log_evolution_generation(generation: int, best_fitness: int, avg_fitness: float,
                             unique_genomes: int, generation_time: float):
    """Log one bred generation."""
    with LogContext(phase="evolution", generation=generation):
        logger.info(
            f"Generation {generation}: best={best_fitness} avg={avg_fitness:.2f} "
            f"unique={unique_genomes} ({generation_time * 1000:.1f} ms)"
        )


def log_evolution_complete(termination: str, generation: int, best_genome: str,
                           best_fitness: int, total_time: float):
    """Log how a run ended and its fittest genome."""
    with LogContext(phase="evolution", generation=generation):
        logger.info(
            f"Evolution {termination.lower()} at generation {generation}: "
            f"best={best_genome} (fitness {best_fitness}) in {total_time:.2f}s"
        )


def log_error(message: str, exception: Optional[BaseException] = None):
    """Log an error; with ``exception`` the traceback is included."""
    if exception is None:
        logger.error(message)
    else:
        logger.opt(exception=exception).error(f"{message}: {exception}")
