"""
Command Line Interface for evobit.

Commands:
- evobit run: Run the genetic algorithm
- evobit config show: Print the resolved configuration
- evobit config validate: Validate a configuration

Author: evobit developers
License: MIT
"""

from .commands import cli

__all__ = ["cli"]
__version__ = "0.1.0"
