"""
Batch Matcher.

Assigns every candidate token to at most one runner:

1. Validate all descriptors up front (malformed input fails before any comparison)
2. For each candidate, evaluate every runner except the candidate itself
3. Keep the runner with the highest fused confidence
4. Emit a Match when that confidence meets the caller's threshold

Output is sorted by confidence, descending. Candidates without a
qualifying runner are simply absent; that is the normal state for
genuinely new tokens.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from token_lineage.constants import TIE_BREAK_FIRST, TIE_BREAK_MARKET_CAP
from token_lineage.detection.detector import AggregateResult, DerivativeDetector, get_detector
from token_lineage.utils.parallel import execute_parallel
from token_lineage.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)

SOURCE_ENGINE = "engine"


class InvalidTokenError(ValueError):
    """A token descriptor is missing required fields."""


@dataclass(frozen=True)
class TokenDescriptor:
    """
    Plain token record consumed by the engine.

    id and market_cap are bookkeeping for the batch matcher; detection
    itself only looks at name and symbol.
    """

    name: str
    symbol: str
    keywords: tuple[str, ...] = ()
    id: str | None = None
    market_cap: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TokenDescriptor:
        """
        Build a descriptor from a loosely-shaped dict.

        Accepts "keywords" or "freeformKeywords", and "market_cap" or
        "marketCap". Raises InvalidTokenError when name/symbol are unusable.
        """
        if not isinstance(data, Mapping):
            raise InvalidTokenError(f"Token must be a mapping, got {type(data).__name__}")

        keywords = data.get("keywords", data.get("freeformKeywords")) or ()
        if isinstance(keywords, str):
            keywords = (keywords,)
        market_cap = data.get("market_cap", data.get("marketCap")) or 0.0
        token_id = data.get("id")

        try:
            market_cap = float(market_cap)
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(f"Invalid market cap {market_cap!r}") from e

        token = cls(
            name=data.get("name"),
            symbol=data.get("symbol"),
            keywords=tuple(str(k) for k in keywords),
            id=str(token_id) if token_id is not None else None,
            market_cap=market_cap,
        )
        token.validate()
        return token

    def validate(self) -> None:
        """Raise InvalidTokenError if symbol is blank or name is not a string."""
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise InvalidTokenError(f"Token {self.id or self.name!r} has no symbol")
        if not isinstance(self.name, str):
            raise InvalidTokenError(f"Token {self.symbol!r} has no name")

    def is_same_token(self, other: TokenDescriptor) -> bool:
        """Identity by id when both carry one, otherwise by (name, symbol)."""
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return (self.name, self.symbol) == (other.name, other.symbol)

    @property
    def label(self) -> str:
        return f"{self.symbol} ({self.id})" if self.id else self.symbol


@dataclass(frozen=True)
class Match:
    """A candidate linked to its best runner."""

    candidate: TokenDescriptor
    runner: TokenDescriptor
    method: str
    confidence: int
    explanation: str
    agreement_count: int
    source: str = SOURCE_ENGINE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "candidate_id": self.candidate.id,
            "candidate_symbol": self.candidate.symbol,
            "candidate_name": self.candidate.name,
            "runner_id": self.runner.id,
            "runner_symbol": self.runner.symbol,
            "runner_name": self.runner.name,
            "method": self.method,
            "confidence": self.confidence,
            "explanation": self.explanation,
            "agreement_count": self.agreement_count,
            "source": self.source,
        }


def coerce_tokens(
    tokens: Iterable[TokenDescriptor | Mapping[str, Any]],
    role: str = "token",
) -> list[TokenDescriptor]:
    """
    Validate descriptors (converting dicts) before a batch starts.

    Raises:
        InvalidTokenError: naming the role and index of the first bad entry
    """
    coerced: list[TokenDescriptor] = []
    for index, token in enumerate(tokens):
        try:
            if isinstance(token, TokenDescriptor):
                token.validate()
                coerced.append(token)
            else:
                coerced.append(TokenDescriptor.from_dict(token))
        except InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid {role} at index {index}: {e}") from e
    return coerced


@dataclass
class _Best:
    runner: TokenDescriptor
    result: AggregateResult


@dataclass
class BatchMatcher:
    """
    Matches candidates against runners with one detector.

    The detector is pure, so candidates can be evaluated concurrently;
    results are reassembled in input order before sorting, giving the
    same output as the sequential path.
    """

    detector: DerivativeDetector = field(default_factory=get_detector)
    tie_break: str = TIE_BREAK_FIRST
    max_workers: int = 1
    show_progress: bool = False
    stats: ExecutionStats = field(default_factory=ExecutionStats, init=False)

    def __post_init__(self):
        if self.tie_break not in (TIE_BREAK_FIRST, TIE_BREAK_MARKET_CAP):
            raise ValueError(f"Unknown tie_break policy: {self.tie_break}")

    def _prefers(self, challenger: _Best, incumbent: _Best | None) -> bool:
        if incumbent is None:
            return True
        if challenger.result.confidence != incumbent.result.confidence:
            return challenger.result.confidence > incumbent.result.confidence
        if self.tie_break == TIE_BREAK_MARKET_CAP:
            return challenger.runner.market_cap > incumbent.runner.market_cap
        return False

    def best_runner(
        self,
        candidate: TokenDescriptor,
        runners: Sequence[TokenDescriptor],
    ) -> _Best | None:
        """Highest-confidence runner for one candidate, ignoring the candidate itself."""
        best: _Best | None = None
        for runner in runners:
            if runner.is_same_token(candidate):
                continue
            result = self.detector.detect(runner.name, runner.symbol, candidate.name, candidate.symbol)
            if not result.is_derivative:
                continue
            challenger = _Best(runner=runner, result=result)
            if self._prefers(challenger, best):
                best = challenger
        return best

    def match(
        self,
        runners: Iterable[TokenDescriptor | Mapping[str, Any]],
        candidates: Iterable[TokenDescriptor | Mapping[str, Any]],
        min_confidence: int,
    ) -> list[Match]:
        """
        Compute the best runner match for every candidate.

        Args:
            runners: Runner tokens (descriptors or dicts)
            candidates: Candidate tokens (descriptors or dicts)
            min_confidence: Threshold (0-100) a best match must meet

        Returns:
            Matches sorted by confidence, descending

        Raises:
            InvalidTokenError: if any descriptor is malformed
            ValueError: if min_confidence is outside 0-100
        """
        if not 0 <= min_confidence <= 100:
            raise ValueError(f"min_confidence must be between 0 and 100, got {min_confidence}")

        runner_list = coerce_tokens(runners, role="runner")
        candidate_list = coerce_tokens(candidates, role="candidate")
        self.stats = ExecutionStats(candidates=len(candidate_list), matched=0, unlinked=0)

        bests = self._evaluate_all(candidate_list, runner_list)

        matches: list[Match] = []
        for candidate, best in zip(candidate_list, bests):
            if best is None or best.result.confidence < min_confidence:
                self.stats.increment("unlinked")
                continue
            matches.append(
                Match(
                    candidate=candidate,
                    runner=best.runner,
                    method=best.result.best_method,
                    confidence=best.result.confidence,
                    explanation=best.result.explanation,
                    agreement_count=best.result.agreement_count,
                )
            )
            self.stats.increment("matched")
            self.stats.increment(f"method:{best.result.best_method}")

        # Stable: equal confidences keep candidate input order
        matches.sort(key=lambda m: m.confidence, reverse=True)

        method_counts = sorted(self.stats.with_prefix("method:").items())
        by_method = ", ".join(f"{k}={v}" for k, v in method_counts)
        logger.info(
            f"Batch match: {len(runner_list)} runners x {len(candidate_list)} candidates -> "
            f"{self.stats['matched']} matched, {self.stats['unlinked']} unlinked "
            f"(min_confidence={min_confidence}; by method: {by_method or 'none'})"
        )
        return matches

    def _evaluate_all(
        self,
        candidates: list[TokenDescriptor],
        runners: list[TokenDescriptor],
    ) -> list[_Best | None]:
        if self.max_workers <= 1 or len(candidates) <= 1:
            return [self.best_runner(candidate, runners) for candidate in candidates]

        outcomes = execute_parallel(
            candidates,
            lambda candidate: self.best_runner(candidate, runners),
            max_workers=self.max_workers,
            desc="Matching candidates",
            unit="token",
            show_progress=self.show_progress,
        )
        for outcome in outcomes:
            if not outcome.ok:
                raise outcome.error
        return [outcome.result for outcome in outcomes]


def batch_match(
    runners: Iterable[TokenDescriptor | Mapping[str, Any]],
    candidates: Iterable[TokenDescriptor | Mapping[str, Any]],
    min_confidence: int,
    detector: DerivativeDetector | None = None,
    tie_break: str = TIE_BREAK_FIRST,
    max_workers: int = 1,
    show_progress: bool = False,
) -> list[Match]:
    """
    Production entry point: best runner per candidate, above a threshold.

    Ties between runners go to the first runner in input order unless
    tie_break="market_cap" is requested.

    Returns:
        Matches sorted by confidence, descending
    """
    matcher = BatchMatcher(
        detector=detector or get_detector(),
        tie_break=tie_break,
        max_workers=max_workers,
        show_progress=show_progress,
    )
    return matcher.match(runners, candidates, min_confidence)
