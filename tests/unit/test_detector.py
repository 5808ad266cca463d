"""
Unit tests for signal fusion in token_lineage.detection.detector.
"""

import pytest

from token_lineage.constants import MAX_CONFIDENCE
from token_lineage.detection.detector import (
    NOT_DERIVATIVE,
    DerivativeDetector,
    agreement_bonus,
    detect,
    fuse_results,
)
from token_lineage.detection.methods import DetectionResult, DirectMatch, LeetMatch


def hit(method: str, confidence: int) -> DetectionResult:
    return DetectionResult(matched=True, method=method, confidence=confidence, explanation=method)


def miss(method: str) -> DetectionResult:
    return DetectionResult(matched=False, method=method)


class TestAgreementBonus:
    """Tests for agreement_bonus()."""

    @pytest.mark.parametrize("count,bonus", [(0, 0), (1, 0), (2, 2), (3, 5), (4, 8), (12, 8)])
    def test_schedule(self, count, bonus):
        assert agreement_bonus(count) == bonus

    def test_monotonic(self):
        bonuses = [agreement_bonus(n) for n in range(13)]
        assert bonuses == sorted(bonuses)


class TestFuseResults:
    """Tests for fuse_results()."""

    def test_no_matches(self):
        assert fuse_results([miss("direct"), miss("fuzzy")]) == NOT_DERIVATIVE
        assert fuse_results([]) == NOT_DERIVATIVE

    def test_not_derivative_shape(self):
        assert NOT_DERIVATIVE.best_method == "none"
        assert NOT_DERIVATIVE.confidence == 0
        assert NOT_DERIVATIVE.contributing_methods == ()
        assert NOT_DERIVATIVE.agreement_count == 0

    def test_single_match_has_no_bonus(self):
        result = fuse_results([miss("direct"), hit("fuzzy", 83)])
        assert result.is_derivative
        assert result.best_method == "fuzzy"
        assert result.confidence == 83
        assert result.agreement_count == 1

    def test_bonus_added_to_best(self):
        result = fuse_results([hit("misspelling", 90), hit("leet", 88)])
        assert result.confidence == 92
        assert result.agreement_count == 2

    def test_capped(self):
        result = fuse_results([hit("direct", 98), hit("pattern", 94), hit("boundary", 92), hit("theme", 72)])
        assert result.confidence == MAX_CONFIDENCE

    def test_tie_keeps_evaluation_order(self):
        result = fuse_results([hit("leet", 88), hit("misspelling", 88)])
        assert result.best_method == "leet"

    def test_contributing_methods_sorted_and_matched_only(self):
        result = fuse_results([hit("theme", 72), miss("direct"), hit("fuzzy", 83)])
        assert [r.method for r in result.contributing_methods] == ["fuzzy", "theme"]

    def test_more_agreement_never_lowers_confidence(self):
        results = [hit("substring", 80)]
        previous = fuse_results(results).confidence
        for method, confidence in [("theme", 72), ("keyword", 78), ("reverse", 75), ("fuzzy", 76)]:
            results.append(hit(method, confidence))
            current = fuse_results(results).confidence
            assert current >= previous
            previous = current

    def test_bounds(self):
        result = fuse_results([hit("a", 1)])
        assert 0 <= result.confidence <= MAX_CONFIDENCE


class TestDetect:
    """End-to-end checks of the default detector."""

    def test_prefixed_copy(self):
        result = detect("Pepe", "PEPE", "Baby Pepe", "BABYPEPE")
        assert result.is_derivative
        assert result.best_method == "direct"
        assert result.agreement_count >= 4
        assert result.confidence == MAX_CONFIDENCE

    def test_leet_copy(self):
        result = detect("Pepe", "PEPE", "P3P3", "P3P3")
        assert result.best_method == "misspelling"
        assert {r.method for r in result.contributing_methods} == {"misspelling", "leet"}
        assert result.confidence == 92

    def test_unrelated(self):
        result = detect("Solana", "SOL", "Unrelated Project", "XYZ")
        assert not result.is_derivative
        assert result.confidence == 0
        assert result.best_method == "none"

    def test_direct_containment(self):
        result = detect("Pepe", "PEPE", "Baby Pepe Token", "BABYPEPE")
        assert result.is_derivative
        assert result.best_method in {"direct", "pattern", "boundary"}
        assert result.confidence >= 90

    def test_leet_copy_with_suffix_word(self):
        result = detect("Pepe", "PEPE", "P3P3 Coin", "P3P3")
        assert result.is_derivative
        assert result.best_method in {"leet", "misspelling"}
        assert result.confidence >= 80

    def test_one_letter_runner_is_not_contained_in_everything(self):
        assert not detect("X Corp", "X", "Anything", "XYZABC").is_derivative

    def test_single_letter_runner_does_not_match_everything(self):
        assert not detect("X", "X", "Xavier", "XAVIER").is_derivative

    def test_same_symbol_is_not_a_derivative(self):
        assert not detect("Pepe", "PEPE", "Pepe (bridged)", "pepe").is_derivative

    def test_deterministic(self):
        first = detect("Bonk", "BONK", "Bonk Inu", "BONKINU")
        second = detect("Bonk", "BONK", "Bonk Inu", "BONKINU")
        assert first == second

    @pytest.mark.parametrize(
        "args",
        [
            ("", "", "", ""),
            ("🐸", "🐸", "🐸🐸", "🐸🐸"),
            ("ПЕПЕ", "ПЕПЕ", "Бэби ПЕПЕ", "БПЕПЕ"),
            ("Pepe", "PEPE", "a" * 500, "B" * 200),
        ],
    )
    def test_never_raises(self, args):
        result = detect(*args)
        assert 0 <= result.confidence <= MAX_CONFIDENCE

    def test_to_dict(self):
        data = detect("Pepe", "PEPE", "P3P3", "P3P3").to_dict()
        assert data["best_method"] == "misspelling"
        assert [m["method"] for m in data["contributing_methods"]] == ["misspelling", "leet"]


class TestDerivativeDetector:
    """Tests for custom detector construction."""

    def test_default_has_twelve_methods(self):
        assert len(DerivativeDetector().method_names) == 12

    def test_custom_methods(self):
        detector = DerivativeDetector(methods=[DirectMatch(), LeetMatch()])
        assert detector.method_names == ["direct", "leet"]

        result = detector.detect("Pepe", "PEPE", "P3P3", "P3P3")
        assert result.best_method == "leet"
        assert result.confidence == 88

    def test_run_methods_reports_every_method(self):
        results = DerivativeDetector().run_methods("Pepe", "PEPE", "Frog", "FROG")
        assert len(results) == 12
