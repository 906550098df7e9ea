"""
Tag filtering for list records.

Records carry their tags as one comma-separated text field. The list view
offers every distinct tag as a toggle and narrows the current records
(ranked or baseline) to those tagged with the selected one.
"""

from typing import List, Optional, Sequence

from ..core.config import Config, get_config
from ..interfaces.search_record import SearchRecord


def parse_tags(value: Optional[str]) -> List[str]:
    """Split a comma-separated tag value into trimmed, non-empty tags."""
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def resolve_tags_field(tags_field: Optional[str] = None) -> str:
    """The given tags field, else the configured one."""
    if tags_field:
        return tags_field
    return get_config().get("search", {}).get("tags_field", Config.TAGS_FIELD)


def collect_tags(records: Sequence[SearchRecord], tags_field: Optional[str] = None) -> List[str]:
    """Distinct tags across records, in first-seen order."""
    tags_field = resolve_tags_field(tags_field)
    seen = {}
    for record in records:
        for tag in parse_tags(record.get_text(tags_field)):
            seen.setdefault(tag, None)
    return list(seen)


def filter_by_tag(
    records: Sequence[SearchRecord],
    tag: Optional[str],
    tags_field: Optional[str] = None,
) -> List[SearchRecord]:
    """
    Keep records whose tag text contains ``tag``, ignoring case.

    The match is a substring test on the whole tag text, so selecting
    ``"park"`` also keeps records tagged ``"parking"``. Without a tag the
    records are returned unchanged, in their original order.
    """
    if not tag:
        return list(records)

    tags_field = resolve_tags_field(tags_field)
    needle = tag.lower()
    kept = []
    for record in records:
        text = record.get_text(tags_field)
        if text is not None and needle in text.lower():
            kept.append(record)
    return kept
