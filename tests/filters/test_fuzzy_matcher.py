#!/usr/bin/env python3
"""
Tests for fuzzy string matching.

Covers normalization, Levenshtein distance and every rule of the
similarity score in its precedence order.
"""

import pytest

from list_search.filters.fuzzy_matcher import (
    FuzzyMatcher,
    levenshtein_distance,
    normalize,
    similarity,
    words,
)


class TestNormalization:
    """Test trimming, lowercasing and word splitting."""

    def test_normalize(self):
        assert normalize("  Hello World \n") == "hello world"

    def test_words_collapses_whitespace_runs(self):
        assert words("  Main \t Street  ") == ["main", "street"]

    def test_words_of_empty_string(self):
        """An empty string yields one empty token."""
        assert words("") == [""]
        assert words("   ") == [""]

    def test_no_punctuation_stripping(self):
        assert words("Hello, world!") == ["hello,", "world!"]


class TestLevenshteinDistance:
    """Test Levenshtein distance calculation."""

    def test_known_distances(self):
        assert levenshtein_distance("hello", "hello") == 0
        assert levenshtein_distance("hello", "hallo") == 1
        assert levenshtein_distance("hello", "hellos") == 1
        assert levenshtein_distance("hellos", "hello") == 1
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_empty_strings(self):
        assert levenshtein_distance("", "test") == 4
        assert levenshtein_distance("test", "") == 4
        assert levenshtein_distance("", "") == 0

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("flaw", "lawn"),
        ("", "abc"),
        ("gumbo", "gambol"),
        ("café", "cafe"),
    ])
    def test_symmetry(self, a, b):
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    def test_case_sensitive(self):
        """Distance works on raw strings; similarity normalizes first."""
        assert levenshtein_distance("Park", "park") == 1


class TestSimilarityRules:
    """Test each similarity rule, in precedence order."""

    def test_equal_after_normalization(self):
        assert similarity("Community Garden", "  community garden ") == 100

    def test_single_word_query_matching_a_word(self):
        """A whole-word hit beats the substring rule."""
        assert similarity("Enterprise Server", "server") == 100

    def test_candidate_contains_query(self):
        assert similarity("Enterprise Servers", "server") == 85

    def test_query_contains_candidate(self):
        assert similarity("park", "parking") == 75

    def test_shared_words_ratio(self):
        # main and street are shared: 2 * 2 / (5 + 3)
        assert similarity("Bike lanes on Main Street", "main street lights") == 50

    def test_shared_words_accept_contained_words(self):
        assert similarity("Bike lanes", "bike lane") == 100

    def test_misspelled_word_counts_as_shared(self):
        """cat and bat are one edit apart, within the edit allowance for 3 letters."""
        assert similarity("cat", "bat") == 100

    def test_edit_allowance_grows_with_word_length(self):
        assert FuzzyMatcher.words_match("on", "in") is False
        assert FuzzyMatcher.words_match("cat", "bat") is True
        assert FuzzyMatcher.words_match("garden", "gardne") is True
        assert FuzzyMatcher.words_match("library", "lbirray") is False

    def test_shared_words_round_half_up(self):
        """12.5 rounds to 13, not to the even 12."""
        candidate = "alpha 11 22 33 44 55 66 77 88 99 10 20 30 40"
        assert similarity(candidate, "alpha qqqq") == 13

    def test_edit_distance_fallback(self):
        # distance 3 over 7 characters
        assert similarity("kitten", "sitting") == 57
        assert similarity("abcd", "abxy") == 50

    def test_fallback_at_cutoff_is_zero(self):
        # distance 3 over 5 characters leaves exactly 40
        assert similarity("abcde", "abxyz") == 0

    def test_unrelated_strings(self):
        assert similarity("cat", "xyz") == 0


class TestSimilarityProperties:
    """Test properties that hold for all inputs."""

    @pytest.mark.parametrize("text", [
        "a", "Park", "Bike lanes on Main Street", "  spaced  out  ", "Éclairage public", "12345",
    ])
    def test_reflexive(self, text):
        assert similarity(text, text) == 100

    @pytest.mark.parametrize("candidate,query", [
        ("", ""),
        ("", "abc"),
        ("abc", ""),
        ("   ", "x"),
        ("Street lighting report", "lighting"),
        ("Raised beds next to the library", "library garden beds"),
        ("zzzz", "a b c d e f"),
        ("Éclairage public", "eclairage"),
    ])
    def test_bounded(self, candidate, query):
        assert 0 <= similarity(candidate, query) <= 100

    def test_empty_edges_follow_substring_rules(self):
        assert similarity("", "") == 100
        assert similarity("", "abc") == 75
        assert similarity("abc", "") == 85

    def test_deterministic(self):
        first = similarity("Street lighting report", "street lights")
        assert all(similarity("Street lighting report", "street lights") == first for _ in range(5))
