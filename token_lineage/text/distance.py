"""
String distance utilities.

Edit distance, longest common substring, n-gram overlap and
anagram/reversal checks used by the detection methods.
"""

from __future__ import annotations

from token_lineage.text.normalize import ngrams


def levenshtein(a: str, b: str) -> int:
    """
    Classic edit distance with unit cost for insert, delete and substitute.

    Symmetric, and levenshtein(a, a) == 0.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Single rolling row over b
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def longest_common_substring(a: str, b: str) -> int:
    """
    Length of the longest contiguous run common to both strings.

    Dynamic programming, O(len(a) * len(b)).
    """
    if not a or not b:
        return 0

    best = 0
    previous = [0] * (len(b) + 1)
    for char_a in a:
        current = [0] * (len(b) + 1)
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current[j] = previous[j - 1] + 1
                if current[j] > best:
                    best = current[j]
        previous = current
    return best


def ngram_overlap(a: str, b: str, n: int = 3) -> float:
    """
    Shared n-gram count divided by the size of the larger n-gram set.

    The denominator is max(|A|, |B|), not |A ∪ B|. Returns 0.0 when
    either string has no n-grams.

    Args:
        a: First string (normalized internally)
        b: Second string (normalized internally)
        n: Gram length (default: trigrams)

    Returns:
        Overlap ratio in [0, 1]
    """
    grams_a = set(ngrams(a, n))
    grams_b = set(ngrams(b, n))
    if not grams_a or not grams_b:
        return 0.0
    return len(grams_a & grams_b) / max(len(grams_a), len(grams_b))


def is_anagram(a: str, b: str) -> bool:
    """True if both strings use the same characters and are not identical."""
    return a != b and sorted(a) == sorted(b)


def reverse_of(a: str, b: str) -> bool:
    """True if a read backwards equals b."""
    return a[::-1] == b
