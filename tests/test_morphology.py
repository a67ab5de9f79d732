"""Tests for inflection folding."""

import pytest

from crossletters.dictionary import load_small_words
from crossletters.engine import SubwordExtractor, filter_inflections, is_redundant, reduced_roots


class TestReducedRoots:
    """Test the suffix rules."""

    @pytest.mark.parametrize("word,roots", [
        ("GARDENS", ["GARDEN"]),
        ("RAGED", ["RAG"]),
        ("READING", ["READ"]),
        ("NEARER", ["NEAR"]),
        ("NEAREST", ["NEAR"]),
        ("ITS", []),
        ("AGED", []),
        ("ARE", []),
    ])
    def test_roots(self, word, roots):
        """Each rule strips its suffix only past its length threshold."""
        assert reduced_roots(word) == roots

    def test_several_rules(self):
        """A word can match more than one rule."""
        assert reduced_roots("TESTERS") == ["TESTER"]
        assert reduced_roots("BEST") == []
        assert reduced_roots("RESTED") == ["REST"]


class TestFilterInflections:
    """Test candidate-set folding."""

    def test_plural_dropped(self):
        """A plural is dropped when its singular is a candidate."""
        assert filter_inflections(["GARDENS", "GARDEN", "RANGE"]) == ["GARDEN", "RANGE"]

    def test_plural_kept_without_root(self):
        """A plural whose root is absent survives."""
        assert filter_inflections(["GARDENS", "RANGE"]) == ["GARDENS", "RANGE"]

    def test_judged_against_original_set(self):
        """Two derivations of one root are both dropped."""
        assert filter_inflections(["LONGER", "LONGEST", "LONG"]) == ["LONG"]

    def test_chain_uses_original_set(self):
        """RANGERS is dropped because RANGER was a candidate, even though RANGER goes too."""
        assert filter_inflections(["RANG", "RANGER", "RANGERS"]) == ["RANG"]

    def test_short_words_kept(self):
        """Words at or under a rule's threshold are never treated as inflections."""
        assert filter_inflections(["ITS", "IT", "AGED", "AG"]) == ["ITS", "IT", "AGED", "AG"]

    def test_other_suffixes(self):
        """Past tense, gerund, comparative and superlative forms are dropped."""
        words = ["PLAYED", "PLAY", "READING", "READ", "NEARER", "NEAREST", "NEAR"]
        assert filter_inflections(words) == ["PLAY", "READ", "NEAR"]

    def test_order_preserved(self):
        """Survivors keep their input order."""
        words = ["DANGER", "GARDEN", "RANGE", "END"]
        assert filter_inflections(words) == words

    def test_no_survivor_has_root_in_input(self):
        """No survivor reduces to a word of the input, on real extraction output."""
        words = SubwordExtractor(load_small_words()).extract("GARDENS", 3, 50_000)
        original = set(words)
        for word in filter_inflections(words):
            assert not any(root in original for root in reduced_roots(word)), word


class TestIsRedundant:
    """Test the placement-time inflection check."""

    def test_word_is_inflection_of_placed(self):
        """A plural of a placed word is redundant."""
        assert is_redundant("GARDENS", {"GARDEN"})

    def test_placed_is_inflection_of_word(self):
        """A root of a placed word is redundant too."""
        assert is_redundant("GARDEN", {"GARDENS"})

    def test_unrelated(self):
        """Anagrams are not inflections."""
        assert not is_redundant("DANGER", {"GARDEN", "RANGE"})
