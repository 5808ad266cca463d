"""
Secondary opinions for candidates the engine left unlinked.

Applies external collaborators in order of cost:
1. Semantic tier (moderate): description-embedding similarity
2. LLM tier (expensive): chat-model verdict over the runner list

Both are optional. Either one failing (missing key, API error, bad reply)
means "no opinion" for that candidate; the batch result is never lost.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from token_lineage.cache import AppCache
from token_lineage.constants import (
    CACHE_TTL_EMBEDDINGS,
    DEFAULT_LLM_MIN_CONFIDENCE,
    DEFAULT_SEMANTIC_THRESHOLD,
    EMBEDDING_MODEL,
    IMAGE_KEYWORD_PREFIX,
    LLM_MAX_TOKENS,
    LLM_MODEL,
    LLM_TEMPERATURE,
    MAX_CONFIDENCE,
)
from token_lineage.detection.batch import Match, TokenDescriptor
from token_lineage.detection.methods import round_score
from token_lineage.embeddings.openai_client import create_embedding, get_openai_client
from token_lineage.similarity.cosine import cosine_similarity, validate_embedding
from token_lineage.utils.hashing import compute_text_hash

if TYPE_CHECKING:
    from openai import OpenAI

logger = logging.getLogger(__name__)

SOURCE_LLM = "llm"
SOURCE_SEMANTIC = "semantic"
EMBEDDINGS_NAMESPACE = "embeddings"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class LLMVerdict:
    """Parsed reply of the LLM judge."""

    runner_symbol: str | None
    confidence: int
    reason: str


@dataclass
class TierMetrics:
    """
    Per-tier counters for one resolve pass.

    *_matches count accepted results only; below_threshold counts tier
    results dropped by the caller's floor (one candidate may add two).
    """

    considered: int = 0
    semantic_calls: int = 0
    semantic_matches: int = 0
    llm_calls: int = 0
    llm_matches: int = 0
    below_threshold: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "considered": self.considered,
            "semantic_calls": self.semantic_calls,
            "semantic_matches": self.semantic_matches,
            "llm_calls": self.llm_calls,
            "llm_matches": self.llm_matches,
            "below_threshold": self.below_threshold,
        }


def build_description(token: TokenDescriptor) -> str:
    """
    Text embedded for a token: name, symbol, image description, then other keywords.

    Only the first ``img:`` keyword is used as the image description.
    """
    prefix = IMAGE_KEYWORD_PREFIX
    images = [k[len(prefix) :] for k in token.keywords if k.startswith(prefix)]
    others = " ".join(k for k in token.keywords if not k.startswith(prefix))
    image_desc = images[0] if images else ""
    return f"{token.name} ({token.symbol}). {image_desc} {others}".strip()


def build_judge_prompt(candidate: TokenDescriptor, runners: Sequence[TokenDescriptor]) -> str:
    runner_list = "\n".join(f'- {r.symbol}: "{r.name}"' for r in runners)
    return f"""You are analyzing crypto meme tokens to find derivatives/copies.

Token to analyze:
- Symbol: {candidate.symbol}
- Name: "{candidate.name}"

Potential parent runners:
{runner_list}

Is this token likely a derivative/copy/tribute of any runner above? Consider:
- Similar names (misspellings, variations)
- Same theme/meme
- Obvious copies

Reply in JSON format:
{{"match": "SYMBOL" or null, "confidence": 0-100, "reason": "brief explanation"}}

If no clear match, return {{"match": null, "confidence": 0, "reason": "no match"}}"""


def parse_verdict(content: str) -> LLMVerdict | None:
    """Extract the first JSON object from a chat reply; None if there is none or it is malformed."""
    found = _JSON_OBJECT.search(content or "")
    if not found:
        return None
    try:
        payload = json.loads(found.group(0))
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict):
        return None

    symbol = payload.get("match")
    try:
        confidence = int(float(payload.get("confidence") or 0))
    except (TypeError, ValueError):
        return None
    return LLMVerdict(
        runner_symbol=str(symbol) if symbol else None,
        confidence=max(0, min(100, confidence)),
        reason=str(payload.get("reason") or ""),
    )


class LLMDerivativeJudge:
    """Asks a chat model whether a candidate copies one of the runners."""

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str = LLM_MODEL,
        min_confidence: int = DEFAULT_LLM_MIN_CONFIDENCE,
    ):
        """
        Args:
            client: OpenAI client (created from settings on first use if not provided)
            model: Chat model name
            min_confidence: Floor below which a verdict is ignored
        """
        self._client = client
        self.model = model
        self.min_confidence = min_confidence

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    def ask(self, candidate: TokenDescriptor, runners: Sequence[TokenDescriptor]) -> LLMVerdict | None:
        """Raw verdict from the model, or None on API or parse failure."""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_judge_prompt(candidate, runners)}],
                max_tokens=LLM_MAX_TOKENS,
                temperature=LLM_TEMPERATURE,
            )
            content = response.choices[0].message.content or ""
        except Exception as e:
            logger.warning(f"LLM comparison failed for {candidate.label}: {e}")
            return None

        verdict = parse_verdict(content)
        if verdict is None:
            logger.warning(f"Unparseable LLM reply for {candidate.label}: {content[:80]!r}")
        return verdict

    def judge(self, candidate: TokenDescriptor, runners: Sequence[TokenDescriptor]) -> Match | None:
        """
        Accepted verdict as a Match.

        The named symbol must belong to one of the runners (case-insensitive)
        and must not be the candidate itself.
        """
        eligible = [r for r in runners if not r.is_same_token(candidate)]
        if not eligible:
            return None

        verdict = self.ask(candidate, eligible)
        if verdict is None or verdict.runner_symbol is None:
            return None
        if verdict.confidence < self.min_confidence:
            return None

        wanted = verdict.runner_symbol.strip().lower()
        if wanted == candidate.symbol.strip().lower():
            return None
        runner = next((r for r in eligible if r.symbol.lower() == wanted), None)
        if runner is None:
            logger.debug(f"LLM named unknown runner {verdict.runner_symbol!r} for {candidate.label}")
            return None

        return Match(
            candidate=candidate,
            runner=runner,
            method=SOURCE_LLM,
            confidence=min(MAX_CONFIDENCE, verdict.confidence),
            explanation=verdict.reason,
            agreement_count=1,
            source=SOURCE_LLM,
        )


class DescriptionSimilarityScorer:
    """
    Scores candidate/runner pairs by description-embedding similarity.

    Vectors are cached on disk keyed by model and description text.
    """

    def __init__(
        self,
        client: OpenAI | None = None,
        cache: AppCache | None = None,
        model: str = EMBEDDING_MODEL,
        threshold: float = DEFAULT_SEMANTIC_THRESHOLD,
    ):
        self._client = client
        self.cache = cache
        self.model = model
        self.threshold = threshold

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    def embed(self, token: TokenDescriptor) -> list[float] | None:
        """Embedding of the token's description (None if it could not be created)."""
        description = build_description(token)

        def compute() -> list[float] | None:
            vector = create_embedding(self.client, description, model=self.model)
            return vector if validate_embedding(vector, expected_dimension=None) else None

        if self.cache is None:
            return compute()
        key = compute_text_hash(description, salt=self.model)
        return self.cache.get_or_compute(
            EMBEDDINGS_NAMESPACE, key, compute, ttl_days=CACHE_TTL_EMBEDDINGS
        )

    def best_runner(
        self,
        candidate: TokenDescriptor,
        runners: Sequence[TokenDescriptor],
        runner_vectors: Sequence[list[float] | None] | None = None,
    ) -> Match | None:
        """Most similar runner above the threshold, as a Match."""
        candidate_vec = self.embed(candidate)
        if candidate_vec is None:
            return None
        if runner_vectors is None:
            runner_vectors = [self.embed(r) for r in runners]

        best: tuple[float, TokenDescriptor] | None = None
        for runner, vector in zip(runners, runner_vectors):
            if vector is None or runner.is_same_token(candidate):
                continue
            similarity = cosine_similarity(candidate_vec, vector)
            if similarity > self.threshold and (best is None or similarity > best[0]):
                best = (similarity, runner)

        if best is None:
            return None
        similarity, runner = best
        return Match(
            candidate=candidate,
            runner=runner,
            method=SOURCE_SEMANTIC,
            confidence=min(MAX_CONFIDENCE, round_score(similarity * 100)),
            explanation=f"{round_score(similarity * 100)}% description similarity",
            agreement_count=1,
            source=SOURCE_SEMANTIC,
        )


class SecondaryOpinionPass:
    """
    Runs the semantic tier, then the LLM tier, for candidates without an engine match.

    Either tier may be None to disable it.
    """

    def __init__(
        self,
        semantic: DescriptionSimilarityScorer | None = None,
        judge: LLMDerivativeJudge | None = None,
    ):
        self.semantic = semantic
        self.judge = judge
        self.metrics = TierMetrics()

    def resolve_unmatched(
        self,
        runners: Sequence[TokenDescriptor],
        candidates: Sequence[TokenDescriptor],
        matches: Sequence[Match],
        min_confidence: int | None = None,
    ) -> list[Match]:
        """
        Add secondary-opinion matches for unmatched candidates.

        Args:
            runners: Runner descriptors
            candidates: All candidate descriptors from the batch
            matches: Engine matches already found
            min_confidence: Optional floor for secondary matches (each tier
                also applies its own threshold)

        Returns:
            Engine and secondary matches together, sorted by confidence descending
        """
        self.metrics = TierMetrics()
        matched = [m.candidate for m in matches]
        unmatched = [c for c in candidates if not any(c.is_same_token(m) for m in matched)]
        self.metrics.considered = len(unmatched)

        runner_vectors = None
        if self.semantic is not None and unmatched:
            runner_vectors = [self.semantic.embed(r) for r in runners]

        def passes(found: Match | None) -> bool:
            if found is None:
                return False
            if min_confidence is not None and found.confidence < min_confidence:
                self.metrics.below_threshold += 1
                return False
            return True

        resolved: list[Match] = []
        for candidate in unmatched:
            if self.semantic is not None:
                self.metrics.semantic_calls += 1
                found = self.semantic.best_runner(candidate, runners, runner_vectors)
                if passes(found):
                    self.metrics.semantic_matches += 1
                    resolved.append(found)
                    continue
            # A semantic hit under the floor is no opinion; the LLM still gets asked
            if self.judge is not None:
                self.metrics.llm_calls += 1
                found = self.judge.judge(candidate, runners)
                if passes(found):
                    self.metrics.llm_matches += 1
                    resolved.append(found)

        logger.info(
            f"Secondary opinions: {len(unmatched)} unmatched, "
            f"{self.metrics.semantic_matches} semantic, {self.metrics.llm_matches} llm, "
            f"{self.metrics.below_threshold} below threshold"
        )
        combined = list(matches) + resolved
        combined.sort(key=lambda m: m.confidence, reverse=True)
        return combined
