#!/usr/bin/env python3
"""
Fuzzy string matching for list search.

Scores how close a record value is to a query on a 0-100 scale. Cheap
heuristics (exact match, substring, prefix/suffix, shared words) are tried
first, in a fixed order; Levenshtein distance over the whole strings is the
last resort.
"""

import math
import re
from typing import List

WHITESPACE = re.compile(r"\s+")

EXACT_SCORE = 100
CANDIDATE_CONTAINS_QUERY_SCORE = 85
QUERY_CONTAINS_CANDIDATE_SCORE = 75
PREFIX_SCORE = 70
SUFFIX_SCORE = 60
INFIX_SCORE = 50
# Edit-distance similarity at or below this is noise
FALLBACK_MIN_SIMILARITY = 40
MAX_WORD_EDITS = 2


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class FuzzyMatcher:
    """Fuzzy string matching utilities."""

    @staticmethod
    def normalize(text: str) -> str:
        """Trim and lowercase."""
        return text.strip().lower()

    @staticmethod
    def words(text: str) -> List[str]:
        """
        Split normalized text on whitespace runs.

        An empty string yields ``[""]``, not an empty list.
        """
        return WHITESPACE.split(FuzzyMatcher.normalize(text))

    @staticmethod
    def levenshtein_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return FuzzyMatcher.levenshtein_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]

    @staticmethod
    def words_match(word: str, query_word: str) -> bool:
        """
        Whether a candidate word has a counterpart in the query.

        Equal, either one containing the other, or within a small edit
        distance that grows with the candidate word length (at most 2).
        """
        if word == query_word:
            return True
        if query_word in word or word in query_word:
            return True
        max_edits = min(MAX_WORD_EDITS, len(word) // 3)
        return FuzzyMatcher.levenshtein_distance(word, query_word) <= max_edits

    @staticmethod
    def _single_word_score(candidate: str, candidate_words: List[str], query: str) -> int:
        if query in candidate_words:
            return EXACT_SCORE
        if query in candidate:
            return CANDIDATE_CONTAINS_QUERY_SCORE
        if candidate in query:
            return QUERY_CONTAINS_CANDIDATE_SCORE

        best = 0
        for word in candidate_words:
            prefix = PREFIX_SCORE if word.startswith(query) else 0
            suffix = SUFFIX_SCORE if word.endswith(query) else 0
            infix = INFIX_SCORE if query in word else 0
            best = max(best, prefix, suffix, infix)
        return best

    @staticmethod
    def similarity(candidate: str, query: str) -> int:
        """
        Score how well ``candidate`` matches ``query``, from 0 to 100.

        Rules are tried in order and the first one that applies wins:

        1. Equal after normalization: 100.
        2. Single-word query: 100 if it is one of the candidate words, 85 if
           the candidate contains it, 75 if it contains the candidate, else
           the best per-word prefix (70), suffix (60) or infix (50) match.
        3. Shared words: ``2 * common / (len(words1) + len(words2))`` as a
           percentage, where a candidate word is common when
           :meth:`words_match` finds a query word for it.
        4. Edit distance over the whole strings as a percentage of the longer
           one, kept only above 40.

        Args:
            candidate: Record field value
            query: Search text

        Returns:
            Integer score, 0 meaning no match
        """
        str1 = FuzzyMatcher.normalize(candidate)
        str2 = FuzzyMatcher.normalize(query)

        if str1 == str2:
            return EXACT_SCORE

        words1 = WHITESPACE.split(str1)
        words2 = WHITESPACE.split(str2)

        if len(words2) == 1:
            score = FuzzyMatcher._single_word_score(str1, words1, str2)
            if score > 0:
                return score

        common = [
            word for word in words1
            if any(FuzzyMatcher.words_match(word, w2) for w2 in words2)
        ]
        if common:
            match_ratio = (len(common) * 2) / (len(words1) + len(words2))
            return _round_half_up(match_ratio * 100)

        distance = FuzzyMatcher.levenshtein_distance(str1, str2)
        max_length = max(len(str1), len(str2))
        similarity = max(0.0, 100 - (distance / max_length * 100))

        if similarity > FALLBACK_MIN_SIMILARITY:
            return _round_half_up(similarity)
        return 0


normalize = FuzzyMatcher.normalize
words = FuzzyMatcher.words
levenshtein_distance = FuzzyMatcher.levenshtein_distance
similarity = FuzzyMatcher.similarity
