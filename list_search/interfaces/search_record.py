#!/usr/bin/env python3
"""
Record and result schema for list search.

Records are supplied by the host list (an identifier plus a field mapping)
and are never mutated here; results pair records with integer similarity
scores and carry the "search active" flag the list view switches on.
"""

import math
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional


def is_absent(value: Any) -> bool:
    """True for values that count as missing: None, NaN and falsy scalars."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value


def to_text(value: Any) -> str:
    """Coerce a field value to the text it is compared as."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


class SearchRecord(BaseModel):
    """
    One record of the list being searched.

    Field values may be strings, numbers, booleans or None; scoring coerces
    them to text and skips the missing ones.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque record identifier")
    data: Dict[str, Any] = Field(default_factory=dict, description="Field name to value")

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, v):
        """Accept numeric identifiers, as returned by feature services."""
        if v is None:
            raise ValueError('Record id is required')
        return to_text(v)

    def get_field(self, name: str) -> Any:
        """Raw value of a field, None when missing."""
        return self.data.get(name)

    def get_text(self, name: str) -> Optional[str]:
        """Field value as text, or None when the field is absent or falsy."""
        value = self.data.get(name)
        if is_absent(value):
            return None
        return to_text(value)


class RankedRecord(BaseModel):
    """A record kept by a search, with its similarity score."""

    model_config = ConfigDict(frozen=True)

    record: SearchRecord
    score: int = Field(..., ge=0, le=100, description="Similarity score (0 to 100)")

    @property
    def id(self) -> str:
        return self.record.id


class SearchOutcome(BaseModel):
    """
    What a list view renders after a query.

    With ``search_active`` False the records are the unranked baseline and
    ``scores`` is empty. With it True the records are the ranked matches,
    possibly none.
    """

    query: str = Field(default="", description="Trimmed query that produced this outcome")
    search_active: bool = Field(..., description="Whether records are a ranked search result")
    records: List[SearchRecord] = Field(default_factory=list, description="Records in display order")
    scores: Dict[str, int] = Field(default_factory=dict, description="Record id to similarity score")

    @property
    def result_count(self) -> int:
        return len(self.records)

    @property
    def ranked(self) -> List[RankedRecord]:
        return [
            RankedRecord(record=record, score=self.scores[record.id])
            for record in self.records
            if record.id in self.scores
        ]

    @classmethod
    def inactive(cls, records: List[SearchRecord]) -> "SearchOutcome":
        """Baseline view shown when the query is empty."""
        return cls(query="", search_active=False, records=list(records), scores={})

    @classmethod
    def from_ranked(cls, query: str, ranked: List[RankedRecord]) -> "SearchOutcome":
        return cls(
            query=query,
            search_active=True,
            records=[item.record for item in ranked],
            scores={item.id: item.score for item in ranked},
        )
