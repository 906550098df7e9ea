#!/usr/bin/env python3
"""
Ranking policies for ordering scored records.

Scoring decides which records match and how well; a ranking policy decides
the order they are shown in. The default orders by score. The title
priority policy, used when results come from a live feature service rather
than an in-memory list, puts literal title matches first.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..core.config import Config
from ..interfaces.search_record import RankedRecord
from ..utils.logging_middleware import ranking_logger


@dataclass(frozen=True)
class RankingContext:
    """Query information a policy may order by."""
    query_text: str
    title_field: str = Config.TITLE_FIELD


class RankingPolicy(ABC):
    """
    Abstract base class for ranking policies.

    Policies only reorder; they never add, drop or rescore records. Every
    policy must be stable so equal records keep their input order.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this ranking policy."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Return a description of this ranking policy."""

    @abstractmethod
    def rank(self, ranked: List[RankedRecord], context: RankingContext) -> List[RankedRecord]:
        """
        Order scored records.

        Args:
            ranked: Scored records in input order
            context: Ranking context with the query

        Returns:
            New list, best first
        """

    def get_configuration(self) -> Dict[str, Any]:
        """Get current policy configuration for debugging."""
        return {
            "name": self.name,
            "description": self.description
        }


class ScoreRankingPolicy(RankingPolicy):
    """Descending similarity score; ties keep input order."""

    @property
    def name(self) -> str:
        return "default"

    @property
    def description(self) -> str:
        return "Orders by descending similarity score, ties in input order"

    def rank(self, ranked: List[RankedRecord], context: RankingContext) -> List[RankedRecord]:
        return sorted(ranked, key=lambda item: item.score, reverse=True)


class TitlePriorityRankingPolicy(RankingPolicy):
    """
    Literal title matches first, then descending score.

    A record whose title contains the query text (ignoring case) is placed
    before every record whose title does not, whatever the scores. Within
    each group the order is by descending score, ties in input order.
    """

    @property
    def name(self) -> str:
        return "title_priority"

    @property
    def description(self) -> str:
        return "Title substring matches first, then descending similarity score"

    def rank(self, ranked: List[RankedRecord], context: RankingContext) -> List[RankedRecord]:
        needle = context.query_text.strip().lower()

        def sort_key(item: RankedRecord):
            title = item.record.get_text(context.title_field)
            title_hit = title is not None and needle in title.lower()
            return (not title_hit, -item.score)

        return sorted(ranked, key=sort_key)


class RankingPolicyEngine:
    """
    Registry of ranking policies.

    Provides policy registration and selection, and logs every ranking with
    its duration.
    """

    def __init__(self, default_policy_name: str = Config.DEFAULT_RANKING_POLICY):
        self.policies: Dict[str, RankingPolicy] = {}
        self.register_policy(ScoreRankingPolicy())
        self.register_policy(TitlePriorityRankingPolicy())
        self.default_policy_name = default_policy_name

    def register_policy(self, policy: RankingPolicy) -> None:
        """
        Register a ranking policy, replacing any policy of the same name.

        Raises:
            ValueError: If policy does not implement RankingPolicy
        """
        if not isinstance(policy, RankingPolicy):
            raise ValueError("Policy must implement RankingPolicy interface")

        self.policies[policy.name] = policy
        ranking_logger.info(f"Registered ranking policy: {policy.name}")

    def unregister_policy(self, name: str) -> bool:
        """Remove a policy. Returns False if it was not registered."""
        if name not in self.policies:
            return False
        if name == self.default_policy_name:
            ranking_logger.warning(f"Unregistering default policy: {name}")
        del self.policies[name]
        return True

    def list_policies(self) -> List[str]:
        """List all registered policy names."""
        return list(self.policies.keys())

    def get_policy(self, name: str) -> Optional[RankingPolicy]:
        """Get a policy by name."""
        return self.policies.get(name)

    def set_default_policy(self, name: str) -> bool:
        """Set the default policy. Returns False if it does not exist."""
        if name in self.policies:
            self.default_policy_name = name
            ranking_logger.info(f"Set default ranking policy: {name}")
            return True
        return False

    def rank_results(
        self,
        ranked: List[RankedRecord],
        context: RankingContext,
        policy_name: Optional[str] = None
    ) -> List[RankedRecord]:
        """
        Order scored records using the named or default policy.

        Raises:
            ValueError: If the policy doesn't exist
        """
        policy_name = policy_name or self.default_policy_name
        policy = self.policies.get(policy_name)

        if not policy:
            available_policies = ", ".join(self.list_policies())
            raise ValueError(f"Policy '{policy_name}' not found. Available: {available_policies}")

        if not ranked:
            return []

        start_time = time.perf_counter()
        try:
            ordered = policy.rank(ranked, context)
        except Exception as e:
            ranking_logger.error(
                "Ranking failed",
                policy=policy_name,
                error=str(e),
                duration_ms=(time.perf_counter() - start_time) * 1000
            )
            raise

        ranking_logger.debug(
            "Ranking completed",
            policy=policy_name,
            input_count=len(ranked),
            duration_ms=(time.perf_counter() - start_time) * 1000
        )
        return ordered

    def get_all_policy_info(self) -> Dict[str, Dict[str, Any]]:
        """Get information about all registered policies."""
        return {name: policy.get_configuration()
                for name, policy in self.policies.items()}
