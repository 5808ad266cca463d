"""
Argument parsing utilities for token_lineage CLI.

Provides standard argument patterns shared by the commands.
"""

import argparse

from token_lineage.config import get_settings


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually execute the operation (default is dry-run)",
    )


def confidence_value(value: str) -> int:
    """argparse type for a 0-100 confidence."""
    try:
        parsed = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from e
    if not 0 <= parsed <= 100:
        raise argparse.ArgumentTypeError(f"must be between 0 and 100, got {parsed}")
    return parsed


def positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from e
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {parsed}")
    return parsed


def add_matching_arguments(parser):
    """
    Add --min-confidence and --workers, defaulting to the configured settings.

    Args:
        parser: argparse.ArgumentParser instance
    """
    settings = get_settings()
    parser.add_argument(
        "--min-confidence",
        type=confidence_value,
        default=settings.min_confidence,
        help=f"Minimum confidence for a match (default: {settings.min_confidence})",
    )
    parser.add_argument(
        "--workers",
        type=positive_int,
        default=settings.max_workers,
        help=f"Worker threads for candidate evaluation (default: {settings.max_workers})",
    )
