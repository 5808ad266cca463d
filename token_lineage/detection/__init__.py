"""
Derivative detection for crypto tokens.

Runs twelve independent detection methods over a (runner, candidate) pair,
fuses them into one confidence with an agreement bonus, and assigns batches
of candidates to their best runner.
"""

from token_lineage.detection.batch import (
    BatchMatcher,
    InvalidTokenError,
    Match,
    TokenDescriptor,
    batch_match,
)
from token_lineage.detection.detector import (
    AggregateResult,
    DerivativeDetector,
    agreement_bonus,
    detect,
    fuse_results,
    get_detector,
)
from token_lineage.detection.lexicon import DEFAULT_LEXICON, Lexicon
from token_lineage.detection.methods import DetectionMethod, DetectionResult, default_methods
from token_lineage.detection.themes import DEFAULT_THEMES, THEME_ENTITIES, ThemeDictionary, get_themes

__all__ = [
    # Methods
    "DetectionMethod",
    "DetectionResult",
    "default_methods",
    # Fusion
    "AggregateResult",
    "DerivativeDetector",
    "agreement_bonus",
    "fuse_results",
    "detect",
    "get_detector",
    # Batch
    "BatchMatcher",
    "InvalidTokenError",
    "Match",
    "TokenDescriptor",
    "batch_match",
    # Reference data
    "DEFAULT_LEXICON",
    "Lexicon",
    "DEFAULT_THEMES",
    "THEME_ENTITIES",
    "ThemeDictionary",
    "get_themes",
]
