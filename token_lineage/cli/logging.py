"""
Logging utilities for token_lineage CLI.

Provides logging setup and header printing functions with tqdm compatibility.
"""

import logging
import sys
import time
from pathlib import Path

from token_lineage.utils.tqdm_logging import TqdmLoggingHandler

NOISY_LOGGERS = ("httpx", "openai", "urllib3", "httpcore")


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes after every record."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(
    script_name: str,
    execute: bool = False,
    log_dir: Path = Path("logs"),
    tqdm_compatible: bool = True,
    verbose: bool = False,
) -> logging.Logger:
    """
    Set up logging for a command.

    Args:
        script_name: Name of the command (for log file naming)
        execute: If True, log to file + console. If False, only console.
        log_dir: Directory for log files
        tqdm_compatible: If True, use TqdmLoggingHandler for clean progress bar output
        verbose: Show DEBUG records on the console

    Returns:
        Configured logger instance
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    console_formatter = logging.Formatter("%(message)s")

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.ERROR)

    def console_handler() -> logging.Handler:
        if tqdm_compatible:
            handler: logging.Handler = TqdmLoggingHandler(level=console_level)
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setLevel(console_level)
        handler.setFormatter(console_formatter)
        return handler

    logger = logging.getLogger(script_name)
    logger.setLevel(logging.DEBUG)
    logger.handlers = []
    logger.propagate = False

    # Child loggers (token_lineage.detection.*) route through the package logger
    pkg_logger = logging.getLogger("token_lineage")
    pkg_logger.setLevel(logging.DEBUG)
    pkg_logger.handlers = [h for h in pkg_logger.handlers if isinstance(h, logging.NullHandler)]
    pkg_logger.propagate = False

    logger.addHandler(console_handler())
    pkg_logger.addHandler(console_handler())

    if execute:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{script_name}_{timestamp}.log"

        file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        logger.addHandler(file_handler)
        pkg_logger.addHandler(file_handler)

        logger.info(f"Log file: {log_file}")

    return logger


def print_run_header(title: str, execute: bool, logger: logging.Logger | None = None):
    """Banner naming the command and whether this run writes anything."""
    logger = logger or logging.getLogger(__name__)
    logger.info("=" * 70)
    logger.info(title if execute else f"{title} (Dry Run)")
    logger.info("=" * 70)
