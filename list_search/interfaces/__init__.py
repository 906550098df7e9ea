"""
Interfaces package for list search.

Pydantic models for the records handed in by the host list and the ranked
results handed back.
"""

from .search_record import (
    RankedRecord,
    SearchOutcome,
    SearchRecord,
    is_absent,
    to_text,
)

__all__ = ["RankedRecord", "SearchOutcome", "SearchRecord", "is_absent", "to_text"]
