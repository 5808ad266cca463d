"""
Signal Fusion / Master Detector.

Runs every detection method on one (runner, candidate) pair and reduces
the verdicts to a single AggregateResult:

1. No method matched -> not a derivative, confidence 0.
2. Otherwise the highest-confidence method sets the base score.
3. An agreement bonus is added based on how many distinct methods
   matched, capped at MAX_CONFIDENCE.

Agreement is rewarded additively rather than averaged so that one very
confident hit is never dragged down by weaker corroborating signals.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from token_lineage.constants import AGREEMENT_BONUSES, MAX_CONFIDENCE
from token_lineage.detection.lexicon import DEFAULT_LEXICON, Lexicon
from token_lineage.detection.methods import (
    DetectionMethod,
    DetectionResult,
    default_methods,
    make_pair,
)
from token_lineage.detection.themes import DEFAULT_THEMES, ThemeDictionary

logger = logging.getLogger(__name__)

NO_METHOD = "none"


@dataclass(frozen=True)
class AggregateResult:
    """Fused verdict for one (runner, candidate) pair."""

    is_derivative: bool
    best_method: str
    confidence: int
    explanation: str
    contributing_methods: tuple[DetectionResult, ...]  # Matched only, best first
    agreement_count: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "is_derivative": self.is_derivative,
            "best_method": self.best_method,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "agreement_count": self.agreement_count,
            "contributing_methods": [
                {
                    "method": r.method,
                    "confidence": r.confidence,
                    "explanation": r.explanation,
                }
                for r in self.contributing_methods
            ],
        }


NOT_DERIVATIVE = AggregateResult(
    is_derivative=False,
    best_method=NO_METHOD,
    confidence=0,
    explanation="",
    contributing_methods=(),
    agreement_count=0,
)


def agreement_bonus(agreement_count: int) -> int:
    """
    Bonus for the number of distinct methods that matched.

    +8 for 4 or more, +5 for 3, +2 for 2, nothing for a single method.
    """
    for minimum, bonus in AGREEMENT_BONUSES:
        if agreement_count >= minimum:
            return bonus
    return 0


def fuse_results(results: Sequence[DetectionResult]) -> AggregateResult:
    """
    Reduce per-method verdicts to an AggregateResult.

    Pure function of its input. Ties between methods with equal
    confidence keep their evaluation order.
    """
    matches = sorted(
        (r for r in results if r.matched),
        key=lambda r: r.confidence,
        reverse=True,
    )
    if not matches:
        return NOT_DERIVATIVE

    # A method may appear once per pair; count distinct names to be safe
    agreement_count = len({r.method for r in matches})
    best = matches[0]
    confidence = min(MAX_CONFIDENCE, best.confidence + agreement_bonus(agreement_count))

    return AggregateResult(
        is_derivative=True,
        best_method=best.method,
        confidence=confidence,
        explanation=best.explanation,
        contributing_methods=tuple(matches),
        agreement_count=agreement_count,
    )


class DerivativeDetector:
    """
    Runs a fixed set of detection methods and fuses their output.

    Stateless after construction and safe to share between threads.
    """

    def __init__(
        self,
        methods: Sequence[DetectionMethod] | None = None,
        lexicon: Lexicon = DEFAULT_LEXICON,
        themes: ThemeDictionary = DEFAULT_THEMES,
    ):
        """
        Initialize detector.

        Args:
            methods: Methods to run (default: the standard twelve)
            lexicon: Vocabulary for the default methods
            themes: Theme dictionary for the default methods
        """
        if methods is None:
            methods = default_methods(lexicon=lexicon, themes=themes)
        self.methods: tuple[DetectionMethod, ...] = tuple(methods)

    @property
    def method_names(self) -> list[str]:
        return [m.name for m in self.methods]

    def run_methods(
        self,
        runner_name: str,
        runner_symbol: str,
        token_name: str,
        token_symbol: str,
    ) -> list[DetectionResult]:
        """Every method's verdict, matched or not, in evaluation order."""
        pair = make_pair(runner_name, runner_symbol, token_name, token_symbol)
        return [method.evaluate(pair) for method in self.methods]

    def detect(
        self,
        runner_name: str,
        runner_symbol: str,
        token_name: str,
        token_symbol: str,
    ) -> AggregateResult:
        """Evaluate whether the candidate token is a derivative of the runner."""
        result = fuse_results(self.run_methods(runner_name, runner_symbol, token_name, token_symbol))
        if result.is_derivative:
            logger.debug(
                f"{token_symbol} <- {runner_symbol}: {result.best_method} "
                f"{result.confidence} ({result.agreement_count} methods)"
            )
        return result


_default_detector: DerivativeDetector | None = None


def get_detector() -> DerivativeDetector:
    """Get or create the shared default detector."""
    global _default_detector
    if _default_detector is None:
        _default_detector = DerivativeDetector()
    return _default_detector


def detect(
    runner_name: str,
    runner_symbol: str,
    token_name: str,
    token_symbol: str,
) -> AggregateResult:
    """
    Single-pair evaluation with the default detector.

    Args:
        runner_name: Runner token name
        runner_symbol: Runner ticker symbol
        token_name: Candidate token name
        token_symbol: Candidate ticker symbol

    Returns:
        AggregateResult (confidence 0 and best_method "none" when nothing matched)
    """
    return get_detector().detect(runner_name, runner_symbol, token_name, token_symbol)
