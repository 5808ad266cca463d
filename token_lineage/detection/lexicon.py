"""
Curated vocabularies used by the detection methods.

All tables are immutable and bundled in a Lexicon so a detector can be
built against a different vocabulary (tests use small ones).
"""

from __future__ import annotations

from dataclasses import dataclass

DERIVATIVE_PREFIXES: tuple[str, ...] = (
    "baby", "mini", "micro", "nano", "mega", "giga", "ultra", "super", "hyper",
    "king", "queen", "prince", "princess", "lord", "lady", "sir", "mr", "mrs",
    "dr", "chief", "son", "daughter", "wife", "mom", "dad", "mother", "father",
    "bro", "sis", "little", "big", "fat", "slim", "rich", "poor", "happy", "sad",
    "angry", "mad", "dark", "evil", "good", "holy", "saint", "demon", "god",
    "devil", "new", "old", "og", "real", "true", "original", "fake", "based",
    "rare", "meta", "sol", "eth", "base", "on", "the", "el", "la", "le",
)  # fmt: skip

DERIVATIVE_SUFFIXES: tuple[str, ...] = (
    "2", "20", "2024", "2025", "2026", "3", "ii", "iii", "iv", "v", "jr", "sr",
    "pro", "max", "plus", "lite", "ultra", "prime", "gold", "diamond",
    "platinum", "inu", "wif", "hat", "coin", "token", "meme", "fi", "swap",
    "dex", "ai", "bot", "agent", "gpt", "x", "z", "army", "gang", "squad",
    "club", "cult", "maxi", "fam", "bros", "moon", "pump", "run", "runner",
    "chain", "verse", "world", "land", "classic", "remix", "reborn", "returns",
    "strikes", "rising", "saga", "sol", "eth", "base", "on", "onchain",
)  # fmt: skip

# Symmetric substitutions tried in both directions on the runner symbol
LETTER_SWAPS: tuple[tuple[str, str], ...] = (
    ("o", "0"), ("i", "1"), ("e", "3"), ("a", "4"), ("s", "5"), ("b", "8"),
    ("o", "u"), ("i", "e"), ("a", "e"), ("c", "k"), ("s", "z"), ("y", "i"),
    ("ph", "f"), ("ck", "k"), ("ee", "i"), ("oo", "u"), ("er", "a"),
    ("or", "a"), ("x", "ks"), ("qu", "kw"), ("tion", "shun"), ("ght", "t"),
)  # fmt: skip

DERIVATIVE_KEYWORDS: tuple[str, ...] = (
    "baby", "mini", "king", "queen", "son", "daughter", "wife", "mother",
    "father", "revenge", "returns", "reborn", "rising", "strikes", "saga",
    "classic", "2.0", "pro", "max", "ultra", "super", "mega", "giga",
)  # fmt: skip


@dataclass(frozen=True)
class Lexicon:
    """Vocabulary tables consumed by the pattern, misspelling and keyword methods."""

    prefixes: tuple[str, ...] = DERIVATIVE_PREFIXES
    suffixes: tuple[str, ...] = DERIVATIVE_SUFFIXES
    letter_swaps: tuple[tuple[str, str], ...] = LETTER_SWAPS
    derivative_keywords: tuple[str, ...] = DERIVATIVE_KEYWORDS


DEFAULT_LEXICON = Lexicon()
