"""
Text Normalization Module.

Canonicalizes raw token names and symbols before comparison.
Every function here is pure and total: empty or malformed input
yields empty output rather than an error.
"""

from __future__ import annotations

import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_REPEAT_RE = re.compile(r"(.)\1{2,}")
_CAMEL_RE = re.compile(r"([a-z])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[\s\-_]+")

LEET_MAP: dict[str, str] = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "7": "t",
    "8": "b",
    "@": "a",
    "$": "s",
    "!": "i",
}


def normalize(text: str) -> str:
    """
    Lowercase and strip every character outside [a-z0-9].

    Idempotent: normalize(normalize(s)) == normalize(s).
    """
    if not text:
        return ""
    return _NON_ALNUM_RE.sub("", text.lower())


def derepeat(text: str) -> str:
    """
    Collapse runs of 3+ identical characters down to exactly 2.

    "peeeepe" -> "peepe". The pair is kept on purpose; downstream
    comparisons were tuned against this output.
    """
    if not text:
        return ""
    return _REPEAT_RE.sub(r"\1\1", text)


def deleet(text: str) -> str:
    """Decode leet-speak characters ("p3p3" -> "pepe"); unmapped characters pass through."""
    if not text:
        return ""
    return "".join(LEET_MAP.get(char, char) for char in text)


def split_compound(text: str) -> list[str]:
    """
    Split camel-case and separator-delimited text into lowercase words.

    Args:
        text: Raw name or symbol, e.g. "BabyPepeKing" or "baby-pepe_king"

    Returns:
        Lowercase word tokens, e.g. ["baby", "pepe", "king"]
    """
    if not text:
        return []
    spaced = _CAMEL_RE.sub(r"\1 \2", text)
    spaced = _ACRONYM_RE.sub(r"\1 \2", spaced)
    return [word for word in _SEPARATOR_RE.split(spaced.lower()) if word]


def ngrams(text: str, n: int) -> list[str]:
    """
    All contiguous substrings of length n of the normalized text.

    Returns an empty list when the normalized text is shorter than n
    or n is not positive.
    """
    if n <= 0:
        return []
    normalized = normalize(text)
    return [normalized[i : i + n] for i in range(len(normalized) - n + 1)]
