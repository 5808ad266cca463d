"""
Detection Methods Module.

Twelve independent signals that each decide whether a candidate token
looks like a derivative of a runner. Every method is isolated and
testable; none of them raise on odd input, they simply report no match.

Shared guards, applied before any method-specific logic:
- identical normalized symbols never match (a token is not its own derivative)
- runner symbols shorter than the method's minimum length never match
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property

from token_lineage.detection.lexicon import DEFAULT_LEXICON, Lexicon
from token_lineage.detection.themes import DEFAULT_THEMES, ThemeDictionary
from token_lineage.text.distance import (
    is_anagram,
    levenshtein,
    longest_common_substring,
    ngram_overlap,
    reverse_of,
)
from token_lineage.text.normalize import deleet, derepeat, normalize, split_compound
from token_lineage.text.phonetic import metaphone, soundex


def round_score(value: float) -> int:
    """Round half-up to an int (scores are never negative)."""
    return int(math.floor(value + 0.5))


def _letters_only(text: str) -> str:
    return "".join(char for char in text if char.isascii() and char.isalpha())


@dataclass(frozen=True)
class DetectionResult:
    """Verdict of one method for one (runner, candidate) pair."""

    matched: bool
    method: str
    confidence: int = 0  # 0 when not matched
    explanation: str = ""


@dataclass(frozen=True)
class ComparisonPair:
    """
    Raw runner and candidate strings plus their normalized forms.

    Built once per pair so the twelve methods share normalization work.
    """

    runner_name: str
    runner_symbol: str
    token_name: str
    token_symbol: str

    @cached_property
    def runner_sym(self) -> str:
        return normalize(self.runner_symbol)

    @cached_property
    def token_sym(self) -> str:
        return normalize(self.token_symbol)

    @cached_property
    def token_nm(self) -> str:
        return normalize(self.token_name)

    @property
    def same_symbol(self) -> bool:
        return self.runner_sym == self.token_sym


def make_pair(
    runner_name: str | None,
    runner_symbol: str | None,
    token_name: str | None,
    token_symbol: str | None,
) -> ComparisonPair:
    """Build a ComparisonPair, treating None as the empty string."""
    return ComparisonPair(
        runner_name=runner_name or "",
        runner_symbol=runner_symbol or "",
        token_name=token_name or "",
        token_symbol=token_symbol or "",
    )


class DetectionMethod(ABC):
    """Abstract base class for derivative detection methods."""

    # Minimum normalized runner symbol length this method will consider
    min_symbol_length: int = 1

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this method, reported as DetectionResult.method."""
        ...

    @abstractmethod
    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        """Method-specific logic; only called once the shared guards pass."""
        ...

    def evaluate(self, pair: ComparisonPair) -> DetectionResult:
        """Apply the shared guards, then the method-specific logic."""
        if pair.same_symbol or len(pair.runner_sym) < max(1, self.min_symbol_length):
            return self.miss()
        return self._evaluate(pair)

    def detect(
        self,
        runner_name: str,
        runner_symbol: str,
        token_name: str,
        token_symbol: str,
    ) -> DetectionResult:
        """
        Evaluate one runner/candidate pair.

        Args:
            runner_name: Runner token name
            runner_symbol: Runner ticker symbol
            token_name: Candidate token name
            token_symbol: Candidate ticker symbol

        Returns:
            DetectionResult with this method's verdict
        """
        return self.evaluate(make_pair(runner_name, runner_symbol, token_name, token_symbol))

    def hit(self, confidence: int, explanation: str) -> DetectionResult:
        return DetectionResult(
            matched=True,
            method=self.name,
            confidence=confidence,
            explanation=explanation,
        )

    def miss(self) -> DetectionResult:
        return DetectionResult(matched=False, method=self.name)


class DirectMatch(DetectionMethod):
    """Runner symbol appears verbatim inside the candidate symbol or name."""

    min_symbol_length = 3

    @property
    def name(self) -> str:
        return "direct"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        if pair.runner_sym in pair.token_sym:
            return self.hit(98, f"{pair.token_symbol} contains {pair.runner_symbol}")
        if pair.runner_sym in pair.token_nm:
            return self.hit(95, f'"{pair.token_name}" contains {pair.runner_symbol}')
        return self.miss()


@dataclass
class _LexiconMethod(DetectionMethod, ABC):
    lexicon: Lexicon = field(default=DEFAULT_LEXICON)


class PatternMatch(_LexiconMethod):
    """Candidate is exactly a known prefix + runner, or runner + known suffix."""

    min_symbol_length = 2

    @property
    def name(self) -> str:
        return "pattern"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        targets = (pair.token_sym, pair.token_nm)
        for prefix in self.lexicon.prefixes:
            if prefix + pair.runner_sym in targets:
                return self.hit(94, f"{prefix}+{pair.runner_symbol}")
        for suffix in self.lexicon.suffixes:
            if pair.runner_sym + suffix in targets:
                return self.hit(94, f"{pair.runner_symbol}+{suffix}")
        return self.miss()


class BoundaryMatch(DetectionMethod):
    """Runner symbol is a whole word of the candidate, or its head or tail."""

    min_symbol_length = 2

    @property
    def name(self) -> str:
        return "boundary"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym = pair.runner_sym
        words = split_compound(f"{pair.token_name} {pair.token_symbol}")
        if rsym in words:
            return self.hit(92, f'contains word "{pair.runner_symbol}"')

        starts = pair.token_sym.startswith(rsym) or pair.token_nm.startswith(rsym)
        ends = pair.token_sym.endswith(rsym) or pair.token_nm.endswith(rsym)
        if starts or ends:
            where = "starts" if starts else "ends"
            return self.hit(90, f"{where} with {pair.runner_symbol}")
        return self.miss()


class MisspellingMatch(_LexiconMethod):
    """Candidate symbol is a known letter swap or a small edit away from the runner."""

    min_symbol_length = 3

    @property
    def name(self) -> str:
        return "misspelling"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym, tsym = pair.runner_sym, pair.token_sym
        if abs(len(rsym) - len(tsym)) > 2:
            return self.miss()

        for a, b in self.lexicon.letter_swaps:
            if rsym.replace(a, b) == tsym or rsym.replace(b, a) == tsym:
                return self.hit(90, f"{a}<->{b} swap")

        distance = levenshtein(rsym, tsym)
        if distance == 1:
            return self.hit(88, "1 char difference")
        if distance == 2 and len(rsym) >= 5:
            return self.hit(78, "2 char difference")
        return self.miss()


class PhoneticMatch(DetectionMethod):
    """Symbols, or the first words of the names, sound alike."""

    min_symbol_length = 3

    @property
    def name(self) -> str:
        return "phonetic"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym = _letters_only(pair.runner_symbol)
        tsym = _letters_only(pair.token_symbol)
        if len(rsym) < 3 or len(tsym) < 3 or rsym.lower() == tsym.lower():
            return self.miss()

        if rsym[0].lower() == tsym[0].lower():
            if soundex(rsym) == soundex(tsym):
                return self.hit(85, "soundex match")
            if metaphone(rsym) == metaphone(tsym):
                return self.hit(83, "metaphone match")

        rword = _letters_only(_first_word(pair.runner_name))
        tword = _letters_only(_first_word(pair.token_name))
        if len(rword) >= 4 and len(tword) >= 4 and rword[0].lower() == tword[0].lower():
            if soundex(rword) == soundex(tword) or metaphone(rword) == metaphone(tword):
                return self.hit(80, "name sounds similar")
        return self.miss()


def _first_word(text: str) -> str:
    words = text.split()
    return words[0] if words else ""


class LeetMatch(DetectionMethod):
    """Candidate symbol decodes to the runner once leet speak or letter runs are undone."""

    min_symbol_length = 3

    @property
    def name(self) -> str:
        return "leet"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym = pair.runner_sym
        raw = pair.token_symbol.lower()

        if normalize(deleet(raw)) == rsym:
            return self.hit(88, "leet speak conversion")
        if normalize(derepeat(raw)) == rsym:
            return self.hit(86, "repeated chars removed")
        if normalize(derepeat(deleet(raw))) == rsym:
            return self.hit(84, "leet + repeated chars")
        return self.miss()


class NgramMatch(DetectionMethod):
    """High trigram overlap between the symbols."""

    min_symbol_length = 4
    threshold = 0.70

    @property
    def name(self) -> str:
        return "ngram"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        if len(pair.token_sym) < 4:
            return self.miss()
        overlap = ngram_overlap(pair.runner_sym, pair.token_sym, 3)
        if overlap >= self.threshold:
            return self.hit(
                round_score(75 + overlap * 20),
                f"{round_score(overlap * 100)}% trigram overlap",
            )
        return self.miss()


class FuzzyMatch(DetectionMethod):
    """Normalized edit similarity of the symbols is at least 0.80."""

    min_symbol_length = 4
    threshold = 0.80

    @property
    def name(self) -> str:
        return "fuzzy"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym, tsym = pair.runner_sym, pair.token_sym
        max_len = max(len(rsym), len(tsym))
        similarity = 1 - levenshtein(rsym, tsym) / max_len
        if similarity >= self.threshold:
            return self.hit(round_score(similarity * 95), f"{round_score(similarity * 100)}% similar")
        return self.miss()


class ReverseMatch(DetectionMethod):
    """Candidate symbol is the runner spelled backwards, or an anagram of it."""

    min_symbol_length = 3

    @property
    def name(self) -> str:
        return "reverse"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        if reverse_of(pair.runner_sym, pair.token_sym):
            return self.hit(82, "reversed spelling")
        if is_anagram(pair.runner_sym, pair.token_sym):
            return self.hit(75, "anagram")
        return self.miss()


class SubstringMatch(DetectionMethod):
    """Most of the runner symbol survives as one contiguous run in the candidate."""

    min_symbol_length = 3
    threshold = 0.75

    @property
    def name(self) -> str:
        return "substring"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym = pair.runner_sym
        best = max(
            longest_common_substring(rsym, pair.token_sym),
            longest_common_substring(rsym, pair.token_nm),
        )
        ratio = best / len(rsym)
        if ratio >= self.threshold and best >= 3:
            return self.hit(round_score(70 + ratio * 20), f"{best}/{len(rsym)} chars match")
        return self.miss()


@dataclass
class ThemeMatch(DetectionMethod):
    """
    Runner and candidate share a theme, and the runner owns that theme.

    Ownership means the runner's text contains the theme's canonical
    keyword, so "FROG INU" does not claim every frog-themed token.
    """

    themes: ThemeDictionary = field(default=DEFAULT_THEMES)

    @property
    def name(self) -> str:
        return "theme"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        runner_text = f"{pair.runner_name} {pair.runner_symbol}"
        token_themes = set(self.themes.get_themes(f"{pair.token_name} {pair.token_symbol}"))
        shared = [t for t in self.themes.get_themes(runner_text) if t in token_themes]
        if shared and any(self.themes.has_canonical(runner_text, theme) for theme in shared):
            return self.hit(72, f"same theme: {', '.join(shared)}")
        return self.miss()


class KeywordMatch(_LexiconMethod):
    """Candidate carries a derivative keyword plus a word taken from the runner symbol."""

    @property
    def name(self) -> str:
        return "keyword"

    def _evaluate(self, pair: ComparisonPair) -> DetectionResult:
        rsym = pair.runner_symbol.lower()
        text = f"{pair.token_name} {pair.token_symbol}".lower()
        words = split_compound(text)
        for keyword in self.lexicon.derivative_keywords:
            if keyword not in text:
                continue
            for word in words:
                if len(word) >= 3 and word in rsym:
                    return self.hit(78, f'"{keyword}" + "{word}"')
        return self.miss()


def default_methods(
    lexicon: Lexicon = DEFAULT_LEXICON,
    themes: ThemeDictionary = DEFAULT_THEMES,
) -> list[DetectionMethod]:
    """The twelve methods in evaluation order."""
    return [
        DirectMatch(),
        PatternMatch(lexicon=lexicon),
        BoundaryMatch(),
        MisspellingMatch(lexicon=lexicon),
        PhoneticMatch(),
        LeetMatch(),
        NgramMatch(),
        FuzzyMatch(),
        ReverseMatch(),
        SubstringMatch(),
        ThemeMatch(themes=themes),
        KeywordMatch(lexicon=lexicon),
    ]
