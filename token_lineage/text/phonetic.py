"""
Phonetic coders for sound-alike detection.

Provides standard 4-character Soundex and a simplified, intentionally
lossy Metaphone transform. Neither needs to match a canonical
implementation; both only need to be stable and deterministic.
"""

from __future__ import annotations

import re

_NON_ALPHA_RE = re.compile(r"[^A-Z]")
_SILENT_HEAD_RE = re.compile(r"^(KN|GN|PN|AE|WR)")
_VOWEL_RE = re.compile(r"[AEIOU]")
_DOUBLE_RE = re.compile(r"(.)\1+")

SOUNDEX_CODES: dict[str, str] = {
    **dict.fromkeys("BFPV", "1"),
    **dict.fromkeys("CGJKQSXZ", "2"),
    **dict.fromkeys("DT", "3"),
    "L": "4",
    **dict.fromkeys("MN", "5"),
    "R": "6",
}


def _letters(text: str) -> str:
    return _NON_ALPHA_RE.sub("", (text or "").upper())


def soundex(text: str) -> str:
    """
    Standard 4-character Soundex code.

    The first letter is kept; later letters map to digit groups.
    Uncoded letters (vowels, H, W, Y) emit nothing and do not reset the
    previous code, so duplicates separated only by them still collapse.

    Returns:
        Code such as "P100", or "" when the input has no letters
    """
    letters = _letters(text)
    if not letters:
        return ""

    result = letters[0]
    previous_code = SOUNDEX_CODES.get(letters[0], "")
    for letter in letters[1:]:
        if len(result) >= 4:
            break
        code = SOUNDEX_CODES.get(letter, "")
        if code and code != previous_code:
            result += code
        previous_code = code or previous_code

    return (result + "000")[:4]


def metaphone(text: str) -> str:
    """
    Simplified Metaphone, truncated to 4 characters.

    Rules applied in order: silent head pairs (KN, GN, PN, AE, WR) keep
    only their second letter, MB$ -> M, X -> KS, PH -> F, CK -> K,
    SCH -> SK, GH dropped, vowels dropped, repeated letters collapsed.
    """
    s = _letters(text)
    if not s:
        return ""

    s = _SILENT_HEAD_RE.sub(lambda m: m.group(1)[1], s)
    if s.endswith("MB"):
        s = s[:-1]
    s = s.replace("X", "KS")
    s = s.replace("PH", "F")
    s = s.replace("CK", "K")
    s = s.replace("SCH", "SK")
    s = s.replace("GH", "")
    s = _VOWEL_RE.sub("", s)
    s = _DOUBLE_RE.sub(r"\1", s)

    return s[:4]
