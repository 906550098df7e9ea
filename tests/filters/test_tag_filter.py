#!/usr/bin/env python3
"""
Tests for tag filtering.
"""

from list_search.core.config import RankerSettings, reload_config
from list_search.filters.tag_filter import collect_tags, filter_by_tag, parse_tags
from list_search.interfaces.search_record import SearchRecord
from list_search.ranking.record_ranker import RecordRanker, get_record_ranker


class TestParseTags:
    """Test splitting of comma-separated tag values."""

    def test_trims_and_drops_empty(self):
        assert parse_tags(" green, parks ,, ") == ["green", "parks"]

    def test_missing(self):
        assert parse_tags(None) == []
        assert parse_tags("") == []


class TestCollectTags:
    """Test collecting the tags offered as toggles."""

    def test_first_seen_order_without_duplicates(self, sample_records):
        assert collect_tags(sample_records) == ["mobility", "safety", "green", "parks"]

    def test_other_field(self):
        records = [SearchRecord(id="1", data={"labels": "a, b"})]

        assert collect_tags(records, tags_field="labels") == ["a", "b"]


class TestFilterByTag:
    """Test narrowing records to a selected tag."""

    def test_case_insensitive_substring(self, sample_records):
        kept = filter_by_tag(sample_records, "SAFETY")

        assert [record.id for record in kept] == ["1", "3"]

    def test_substring_of_longer_tag(self, sample_records):
        assert [record.id for record in filter_by_tag(sample_records, "park")] == ["2"]

    def test_no_tag_keeps_everything(self, sample_records):
        assert filter_by_tag(sample_records, None) == sample_records
        assert filter_by_tag(sample_records, "") == sample_records

    def test_preserves_ranked_order(self, ranker, sample_records):
        outcome = ranker.search(sample_records, "street lighting")

        kept = filter_by_tag(outcome.records, "safety")

        assert [record.id for record in kept] == ["3", "1"]


class TestConfiguredTagsField:
    """Test that the configured tags field drives tag filtering."""

    def test_yaml_override_changes_collected_tags(self, tmp_path):
        config_file = tmp_path / "search.yaml"
        config_file.write_text("search:\n  tags_field: labels\n")
        reload_config(str(config_file))
        records = [SearchRecord(id="1", data={"labels": "green", "tags": "red"})]

        assert collect_tags(records) == ["green"]
        assert [record.id for record in filter_by_tag(records, "gre")] == ["1"]
        assert filter_by_tag(records, "red") == []

    def test_explicit_field_wins_over_config(self, tmp_path):
        config_file = tmp_path / "search.yaml"
        config_file.write_text("search:\n  tags_field: labels\n")
        reload_config(str(config_file))
        records = [SearchRecord(id="1", data={"labels": "green", "tags": "red"})]

        assert collect_tags(records, tags_field="tags") == ["red"]

    def test_ranker_uses_its_settings(self):
        ranker = RecordRanker(RankerSettings(tags_field="labels"))
        records = [
            SearchRecord(id="1", data={"labels": "green, parks"}),
            SearchRecord(id="2", data={"labels": "safety"}),
        ]

        assert ranker.collect_tags(records) == ["green", "parks", "safety"]
        assert [record.id for record in ranker.filter_by_tag(records, "SAFE")] == ["2"]

    def test_global_ranker_follows_yaml(self, tmp_path):
        config_file = tmp_path / "search.yaml"
        config_file.write_text("search:\n  tags_field: labels\n")
        reload_config(str(config_file))

        ranker = get_record_ranker()

        assert ranker.settings.tags_field == "labels"
        assert ranker.collect_tags([SearchRecord(id="1", data={"labels": "green"})]) == ["green"]
