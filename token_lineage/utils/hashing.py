"""Stable cache keys for embedded texts."""

import hashlib


def compute_text_hash(text: str, salt: str = "") -> str:
    """
    SHA256 hex digest of stripped text, optionally salted (e.g. with a model name).

    Returns an empty string for empty text.
    """
    if not text:
        return ""
    payload = f"{salt}\x00{text.strip()}" if salt else text.strip()
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
