"""
Logging for evobit.

Provides loguru-based console/file logging and run-level log helpers.

Author: evobit developers
License: MIT
"""

from .logging_config import (
    LogContext,
    configure_logging,
    log_error,
    log_evolution_complete,
    log_evolution_generation,
    log_evolution_start,
)

__all__ = [
    "LogContext",
    "configure_logging",
    "log_error",
    "log_evolution_complete",
    "log_evolution_generation",
    "log_evolution_start",
]
