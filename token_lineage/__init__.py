"""
Token Lineage - derivative detection for crypto tokens.

This package provides utilities for:
- Deciding whether a token is a derivative of a "runner" token
- Linking batches of candidate tokens to their most likely parent
- Optional LLM and description-embedding second opinions
- Common CLI utilities for the console scripts
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from token_lineage.constants import (  # noqa: E402
    DEFAULT_MIN_CONFIDENCE,
    MAX_CONFIDENCE,
)
from token_lineage.detection import (  # noqa: E402
    AggregateResult,
    DerivativeDetector,
    InvalidTokenError,
    Match,
    TokenDescriptor,
    batch_match,
    detect,
)

__all__ = [
    "__version__",
    # Detection
    "detect",
    "batch_match",
    "DerivativeDetector",
    "AggregateResult",
    "Match",
    "TokenDescriptor",
    "InvalidTokenError",
    # Constants
    "DEFAULT_MIN_CONFIDENCE",
    "MAX_CONFIDENCE",
]
