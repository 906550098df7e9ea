"""
Ranking package for list search.

Scores records against queries and orders the matches through pluggable
ranking policies.
"""

from .policy_engine import (
    RankingContext,
    RankingPolicy,
    RankingPolicyEngine,
    ScoreRankingPolicy,
    TitlePriorityRankingPolicy,
)
from .record_ranker import RecordRanker, get_record_ranker, reset_record_ranker

__all__ = [
    "RankingContext",
    "RankingPolicy",
    "RankingPolicyEngine",
    "ScoreRankingPolicy",
    "TitlePriorityRankingPolicy",
    "RecordRanker",
    "get_record_ranker",
    "reset_record_ranker",
]
