"""
Unit tests for token_lineage.utils.hashing module.
"""

from token_lineage.utils.hashing import compute_text_hash


def test_compute_text_hash():
    """Same text gives the same 64-character digest."""
    digest = compute_text_hash("Pepe (PEPE). a green frog")
    assert len(digest) == 64
    assert digest == compute_text_hash("Pepe (PEPE). a green frog")


def test_compute_text_hash_empty():
    assert compute_text_hash("") == ""


def test_compute_text_hash_strips_whitespace():
    assert compute_text_hash("  Pepe  ") == compute_text_hash("Pepe")


def test_compute_text_hash_salt_changes_digest():
    """Different embedding models must not share cache keys."""
    text = "Pepe (PEPE)."
    assert compute_text_hash(text, salt="model-a") != compute_text_hash(text, salt="model-b")
    assert compute_text_hash(text, salt="model-a") != compute_text_hash(text)
