#!/usr/bin/env python3
"""
Record ranking for list search.

Scores every record against a query, keeps the ones that match and hands
them to a ranking policy for ordering. Three query shapes are handled:

- short free text (fewer than 3 characters): a word-prefix filter, every
  kept record getting the same fixed score;
- field-qualified (``field:value``): only that field is scored;
- free text: every searchable field is scored against the whole query and
  the record keeps its best field score.

Nothing here holds per-query state. Each call builds fresh results, so the
ranker can run on every keystroke.
"""

from typing import Dict, List, Optional, Sequence

from ..core.config import RankerSettings, get_config
from ..core.query_parser import ParsedQuery, is_empty_query, parse_query
from ..filters.fuzzy_matcher import similarity, words
from ..filters.tag_filter import collect_tags, filter_by_tag
from ..interfaces.search_record import RankedRecord, SearchOutcome, SearchRecord
from ..utils.logging_middleware import log_timing, search_logger
from .policy_engine import RankingContext, RankingPolicyEngine


class RecordRanker:
    """
    Scores and orders records against free-text or field-qualified queries.
    """

    def __init__(
        self,
        settings: Optional[RankerSettings] = None,
        policy_engine: Optional[RankingPolicyEngine] = None,
    ):
        """
        Initialize the ranker.

        Args:
            settings: Thresholds and field names. If None, built from the
                global configuration.
            policy_engine: Policy registry. If None, a new engine with the
                built-in policies.
        """
        self.settings = settings or RankerSettings.from_config(get_config())
        self.policy_engine = policy_engine or RankingPolicyEngine(self.settings.default_policy)

    def score_records(
        self,
        records: Sequence[SearchRecord],
        query: str,
        searchable_fields: Optional[Sequence[str]] = None,
    ) -> Dict[str, int]:
        """
        Score records against a query.

        Returns:
            Record id to score for every matching record; empty for an empty
            query or when no record matches
        """
        return {item.id: item.score for item in self._score(records, query, searchable_fields)}

    def rank(
        self,
        records: Sequence[SearchRecord],
        query: str,
        searchable_fields: Optional[Sequence[str]] = None,
        policy_name: Optional[str] = None,
    ) -> List[RankedRecord]:
        """
        Score records and order the matches.

        Args:
            records: Records to search, in baseline order
            query: Raw query text
            searchable_fields: Fields free-text queries may inspect. If None,
                the configured searchable fields.
            policy_name: Ranking policy; ``"title_priority"`` puts title
                substring matches first. If None, the default policy.

        Returns:
            Matching records with scores, best first
        """
        if is_empty_query(query):
            return []

        parsed = parse_query(query)
        scored = self._score_parsed(records, parsed, self._fields(searchable_fields))
        context = RankingContext(query_text=parsed.text, title_field=self.settings.title_field)
        return self.policy_engine.rank_results(scored, context, policy_name)

    def search(
        self,
        records: Sequence[SearchRecord],
        query: str,
        searchable_fields: Optional[Sequence[str]] = None,
        policy_name: Optional[str] = None,
    ) -> SearchOutcome:
        """
        Run a search the way a list view consumes it.

        An empty or whitespace-only query turns search off and returns the
        records unranked. Any other query turns search on, even when nothing
        matches.
        """
        if is_empty_query(query):
            return SearchOutcome.inactive(list(records))

        with log_timing("search", search_logger) as metadata:
            ranked = self.rank(records, query, searchable_fields, policy_name)
            metadata["input_count"] = len(records)
            metadata["output_count"] = len(ranked)

        return SearchOutcome.from_ranked(query.strip(), ranked)

    def collect_tags(self, records: Sequence[SearchRecord]) -> List[str]:
        """Distinct tags in the ranker's tags field, in first-seen order."""
        return collect_tags(records, self.settings.tags_field)

    def filter_by_tag(
        self, records: Sequence[SearchRecord], tag: Optional[str]
    ) -> List[SearchRecord]:
        """Narrow records to those tagged ``tag`` in the ranker's tags field."""
        return filter_by_tag(records, tag, self.settings.tags_field)

    # Private methods

    def _fields(self, searchable_fields: Optional[Sequence[str]]) -> List[str]:
        if searchable_fields is None:
            return list(self.settings.searchable_fields)
        return list(searchable_fields)

    def _score(
        self,
        records: Sequence[SearchRecord],
        query: str,
        searchable_fields: Optional[Sequence[str]],
    ) -> List[RankedRecord]:
        if is_empty_query(query):
            return []
        return self._score_parsed(records, parse_query(query), self._fields(searchable_fields))

    def _score_parsed(
        self,
        records: Sequence[SearchRecord],
        parsed: ParsedQuery,
        fields: List[str],
    ) -> List[RankedRecord]:
        """Matching records with scores, in input order."""
        if parsed.is_field_qualified:
            return self._score_field(records, parsed.field, parsed.text)

        if len(parsed.text) < self.settings.short_query_length:
            return self._score_short(records, parsed.text, fields)

        terms = [
            term for term in words(parsed.text)
            if len(term) >= self.settings.min_term_length
        ]
        if not terms:
            search_logger.debug("No search terms long enough", query_length=len(parsed.text))
            return []

        return self._score_free_text(records, parsed.text, fields)

    def _score_short(
        self, records: Sequence[SearchRecord], query: str, fields: List[str]
    ) -> List[RankedRecord]:
        prefix = query.lower()
        kept = []
        for record in records:
            for field in fields:
                text = record.get_text(field)
                if text is None:
                    continue
                if any(word.startswith(prefix) for word in text.lower().split()):
                    kept.append(RankedRecord(record=record, score=self.settings.short_query_score))
                    break
        return kept

    def _score_field(
        self, records: Sequence[SearchRecord], field: str, value: str
    ) -> List[RankedRecord]:
        kept = []
        for record in records:
            text = record.get_text(field)
            if text is None:
                continue
            score = similarity(text, value)
            if score > 0:
                kept.append(RankedRecord(record=record, score=score))
        return kept

    def _score_free_text(
        self, records: Sequence[SearchRecord], query: str, fields: List[str]
    ) -> List[RankedRecord]:
        kept = []
        for record in records:
            best = 0
            for field in fields:
                text = record.get_text(field)
                if text is not None:
                    best = max(best, similarity(text, query))
            if best > 0:
                kept.append(RankedRecord(record=record, score=best))
        return kept


_record_ranker: Optional[RecordRanker] = None


def get_record_ranker() -> RecordRanker:
    """
    Get or create the global record ranker.

    Returns:
        Global RecordRanker instance
    """
    global _record_ranker
    if _record_ranker is None:
        _record_ranker = RecordRanker()
    return _record_ranker


def reset_record_ranker() -> None:
    """Reset the global record ranker (useful for testing)."""
    global _record_ranker
    _record_ranker = None
