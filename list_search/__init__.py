"""
list_search: fuzzy search and relevance ranking for list widgets.

Records (an id plus a field mapping) are scored against a free-text or
``field:value`` query with a 0-100 string similarity and returned best
first.
"""

from .filters.fuzzy_matcher import levenshtein_distance, similarity
from .core.query_parser import parse_query
from .interfaces.search_record import RankedRecord, SearchOutcome, SearchRecord
from .ranking.record_ranker import RecordRanker, get_record_ranker

__version__ = "1.0.0"

__all__ = [
    "levenshtein_distance",
    "similarity",
    "parse_query",
    "RankedRecord",
    "SearchOutcome",
    "SearchRecord",
    "RecordRanker",
    "get_record_ranker",
]
