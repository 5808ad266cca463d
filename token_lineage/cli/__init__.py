"""
CLI utilities for token_lineage.

This package provides shared functionality for the console scripts:
- Logging setup
- Argument parsing
- Command entry points
"""

from token_lineage.cli.args import add_execute_argument, add_matching_arguments
from token_lineage.cli.commands import run_cache, run_detect, run_match
from token_lineage.cli.logging import print_run_header, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "print_run_header",
    # Args
    "add_execute_argument",
    "add_matching_arguments",
    # Commands
    "run_detect",
    "run_match",
    "run_cache",
]
