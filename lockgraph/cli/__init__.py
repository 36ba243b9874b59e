"""CLI module for lockgraph.

This module provides the command-line interface. It supports both CLI
arguments and environment variables for configuration.
"""

from .main import (
    Config,
    build_config,
    cli,
    evaluate_boolean,
    run,
)

__all__ = [
    "cli",
    "Config",
    "build_config",
    "run",
    "evaluate_boolean",
]
