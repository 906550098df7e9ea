"""Pytest configuration for list search tests.

Puts the project root on sys.path so tests import ``list_search`` without
an install, and provides the shared record fixtures.
"""

import sys
from pathlib import Path
from typing import List

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import list_search.core.config as config_module  # noqa: E402
from list_search.core.config import RankerSettings  # noqa: E402
from list_search.interfaces.search_record import SearchRecord  # noqa: E402
from list_search.ranking.record_ranker import RecordRanker, reset_record_ranker  # noqa: E402


@pytest.fixture
def sample_records() -> List[SearchRecord]:
    """Proposals as a voting list would show them."""
    return [
        SearchRecord(id="1", data={
            "title": "Bike lanes on Main Street",
            "description": "Protected lanes from the station to the park",
            "tags": "mobility, safety",
            "votes": 12,
        }),
        SearchRecord(id="2", data={
            "title": "Community garden",
            "description": "Raised beds next to the library",
            "tags": "green, parks",
            "votes": 4,
        }),
        SearchRecord(id="3", data={
            "title": "Street lighting report",
            "description": "Survey of broken lamps",
            "tags": "safety",
            "votes": 0,
        }),
        SearchRecord(id="4", data={
            "title": None,
            "description": "",
            "tags": None,
        }),
    ]


@pytest.fixture
def ranker() -> RecordRanker:
    """Ranker with default thresholds, independent of any config file."""
    return RecordRanker(RankerSettings(searchable_fields=["title", "description"]))


@pytest.fixture(autouse=True)
def _reset_globals(monkeypatch):
    """Each test starts without a cached configuration or shared ranker."""
    monkeypatch.setattr(config_module, "_config_instance", None)
    reset_record_ranker()
    yield
    reset_record_ranker()
