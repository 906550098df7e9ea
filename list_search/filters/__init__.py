"""
Filters package for list search.

Fuzzy string similarity used to score records, and tag filtering used to
narrow the list view.
"""

from .fuzzy_matcher import FuzzyMatcher, levenshtein_distance, normalize, similarity, words
from .tag_filter import collect_tags, filter_by_tag, parse_tags

__all__ = [
    "FuzzyMatcher",
    "levenshtein_distance",
    "normalize",
    "similarity",
    "words",
    "collect_tags",
    "filter_by_tag",
    "parse_tags",
]
