"""
Unit tests for token_lineage.text.phonetic.
"""

import pytest

from token_lineage.text.phonetic import metaphone, soundex


class TestSoundex:
    """Tests for soundex()."""

    @pytest.mark.parametrize(
        "word,code",
        [
            ("Robert", "R163"),
            ("Rupert", "R163"),
            ("Ashcraft", "A261"),
            ("Pfister", "P236"),
            ("Lee", "L000"),
        ],
    )
    def test_known_codes(self, word, code):
        assert soundex(word) == code

    def test_uncoded_letters_do_not_reset(self):
        """P-E-P: the second P is separated only by a vowel, so it collapses."""
        assert soundex("pepe") == "P000"

    def test_ignores_non_letters(self):
        assert soundex("R0B3RT") == soundex("RBRT")

    def test_no_letters(self):
        assert soundex("") == ""
        assert soundex("1234") == ""

    def test_always_four_characters(self):
        for word in ("A", "Bonk", "Dogwifhat", "Pneumonoultramicroscopic"):
            assert len(soundex(word)) == 4


class TestMetaphone:
    """Tests for metaphone()."""

    def test_silent_head_keeps_second_letter(self):
        assert metaphone("Knight") == "NT"
        assert metaphone("Wright") == "RT"

    def test_ph_becomes_f(self):
        assert metaphone("phone") == "FN"

    def test_trailing_mb(self):
        assert metaphone("Lamb") == "LM"

    def test_every_x_becomes_ks(self):
        assert metaphone("Xerox") == "KSRK"

    def test_gh_dropped(self):
        assert metaphone("light") == metaphone("lite") == "LT"

    def test_doubles_collapse(self):
        assert metaphone("Pepper") == "PR"

    def test_truncated_to_four(self):
        assert len(metaphone("Dogwifhat")) <= 4

    def test_no_letters(self):
        assert metaphone("") == ""
        assert metaphone("420") == ""
