"""
Text primitives for derivative detection.

- Normalization (case folding, de-repetition, leet decoding, compound splitting)
- String distances (Levenshtein, longest common substring, n-gram overlap)
- Phonetic coders (Soundex, simplified Metaphone)
"""

from token_lineage.text.distance import (
    is_anagram,
    levenshtein,
    longest_common_substring,
    ngram_overlap,
    reverse_of,
)
from token_lineage.text.normalize import (
    deleet,
    derepeat,
    ngrams,
    normalize,
    split_compound,
)
from token_lineage.text.phonetic import metaphone, soundex

__all__ = [
    # Normalization
    "normalize",
    "derepeat",
    "deleet",
    "split_compound",
    "ngrams",
    # Distance
    "levenshtein",
    "longest_common_substring",
    "ngram_overlap",
    "is_anagram",
    "reverse_of",
    # Phonetic
    "soundex",
    "metaphone",
]
