"""
Unit tests for token_lineage.text.distance.
"""

from token_lineage.text.distance import (
    is_anagram,
    levenshtein,
    longest_common_substring,
    ngram_overlap,
    reverse_of,
)


class TestLevenshtein:
    """Tests for levenshtein()."""

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_identity(self):
        assert levenshtein("pepe", "pepe") == 0

    def test_symmetric(self):
        assert levenshtein("bonk", "bunker") == levenshtein("bunker", "bonk")

    def test_empty_side(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3
        assert levenshtein("", "") == 0

    def test_single_edits(self):
        assert levenshtein("pepe", "pepu") == 1  # substitute
        assert levenshtein("pepe", "pepes") == 1  # insert
        assert levenshtein("pepe", "ppe") == 1  # delete


class TestLongestCommonSubstring:
    """Tests for longest_common_substring()."""

    def test_contained(self):
        assert longest_common_substring("pepe", "babypepe") == 4

    def test_partial(self):
        assert longest_common_substring("bonkers", "bonkerz") == 6

    def test_disjoint(self):
        assert longest_common_substring("abc", "xyz") == 0

    def test_empty(self):
        assert longest_common_substring("", "pepe") == 0


class TestNgramOverlap:
    """Tests for ngram_overlap()."""

    def test_identical(self):
        assert ngram_overlap("pepe", "pepe") == 1.0

    def test_denominator_is_larger_set(self):
        # {pep, epe} vs {pep, epe, pes}
        assert ngram_overlap("pepe", "pepes") == 2 / 3

    def test_too_short(self):
        assert ngram_overlap("ab", "abc") == 0.0

    def test_bounded(self):
        value = ngram_overlap("pepecoin", "coinpepe")
        assert 0.0 <= value <= 1.0


class TestAnagramAndReverse:
    """Tests for is_anagram() and reverse_of()."""

    def test_anagram(self):
        assert is_anagram("doge", "gode")

    def test_identical_is_not_anagram(self):
        assert not is_anagram("pepe", "pepe")

    def test_different_letters(self):
        assert not is_anagram("doge", "dogs")

    def test_reverse(self):
        assert reverse_of("doge", "egod")
        assert not reverse_of("doge", "doge")
