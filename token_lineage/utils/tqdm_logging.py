"""
Logging handler that cooperates with tqdm progress bars.

Batch matching with several workers draws a progress bar on stderr; log
records written straight to the stream would be glued onto the bar.
"""

import logging
import sys
from typing import TextIO

from tqdm import tqdm


class TqdmLoggingHandler(logging.Handler):
    """Writes each formatted record through tqdm.write()."""

    def __init__(self, level: int = logging.NOTSET, stream: TextIO | None = None):
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
