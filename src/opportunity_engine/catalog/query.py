"""Catalog queries over normalized records: grouping, filtering, search, paging."""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, Field

from opportunity_engine.classification.priority import PriorityClassifier
from opportunity_engine.classification.types import classify_type
from opportunity_engine.estimation import parse_money_range
from opportunity_engine.matching import contains_query, skill_key
from opportunity_engine.models.opportunity import (
    OpportunityRecord,
    OpportunityType,
    PriorityBucket,
)

OTHER_GROUP = "Other"
DEFAULT_PAGE_SIZE = 10

# Filter tokens used by listing pages ("quick-wins", "passive")
_BUCKET_ALIASES: dict[str, PriorityBucket] = {
    "quickwins": PriorityBucket.QUICK_WIN,
    "passive": PriorityBucket.PASSIVE_INCOME,
    "aspirationalpath": PriorityBucket.ASPIRATIONAL,
}
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def as_records(records: Any) -> list[OpportunityRecord]:
    """Materialize input as a new list of records; None or non-collections -> []."""
    if records is None or isinstance(records, (str, bytes, Mapping)):
        return []
    if not isinstance(records, Iterable):
        return []
    return [r for r in records if isinstance(r, OpportunityRecord)]


def _dedup_key(record: OpportunityRecord) -> tuple[str, object]:
    return ("id", record.id) if record.id is not None else ("object", id(record))


def group_by_skill(records: Any) -> dict[str, list[OpportunityRecord]]:
    """
    Fan-out grouping by skill tag: a record tagged {A, B} appears in both
    A and B. Records without usable tags go to "Other". Within a group a
    record appears once (by id). Keys are sorted; group order follows input.
    """
    groups: dict[str, list[OpportunityRecord]] = {}
    seen: dict[str, set[tuple[str, object]]] = {}

    def add(key: str, record: OpportunityRecord) -> None:
        marker = _dedup_key(record)
        members = seen.setdefault(key, set())
        if marker in members:
            return
        members.add(marker)
        groups.setdefault(key, []).append(record)

    for record in as_records(records):
        keys = [k for k in (skill_key(s) for s in record.skills) if k is not None]
        if not keys:
            add(OTHER_GROUP, record)
            continue
        for key in keys:
            add(key, record)

    return {key: groups[key] for key in sorted(groups)}


def search(records: Any, query: Optional[str]) -> list[OpportunityRecord]:
    """Case-insensitive substring match on title, description or type; empty query matches all."""
    items = as_records(records)
    if not isinstance(query, str) or not query.strip():
        return items
    return [r for r in items if contains_query(query, r.title, r.description, r.type.value)]


def filter_by_type(
    records: Any,
    opp_type: Union[OpportunityType, str, None],
) -> list[OpportunityRecord]:
    """Exact type filter; raw strings are classified first. None keeps everything."""
    items = as_records(records)
    if opp_type is None:
        return items
    wanted = classify_type(opp_type)
    return [r for r in items if r.type == wanted]


def parse_bucket(value: Union[PriorityBucket, str, None]) -> Optional[PriorityBucket]:
    """Bucket from an enum, its value, its name or a listing filter token."""
    if isinstance(value, PriorityBucket):
        return value
    if not isinstance(value, str):
        return None
    token = _NON_ALNUM.sub("", value.lower())
    for bucket in PriorityBucket:
        if token in (_NON_ALNUM.sub("", bucket.value.lower()), bucket.name.lower().replace("_", "")):
            return bucket
    return _BUCKET_ALIASES.get(token)


def filter_by_priority(
    records: Any,
    bucket: Union[PriorityBucket, str, None],
    classifier: Optional[PriorityClassifier] = None,
) -> list[OpportunityRecord]:
    """
    Keep records whose derived bucket equals `bucket`. None keeps everything;
    an unrecognized bucket string matches nothing.
    """
    items = as_records(records)
    if bucket is None:
        return items
    wanted = parse_bucket(bucket)
    if wanted is None:
        return []
    classifier = classifier or PriorityClassifier()
    return [r for r in items if classifier.classify(r) == wanted]


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for `total` items; 0 when empty or page_size < 1."""
    if page_size < 1 or total < 1:
        return 0
    return math.ceil(total / page_size)


def paginate(records: Any, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[OpportunityRecord]:
    """
    Slice records[(page-1)*page_size : page*page_size].
    Out-of-range pages (including page < 1) give an empty list; never raises.
    Clamping back to page 1 is left to the caller.
    """
    items = as_records(records)
    if not isinstance(page, int) or not isinstance(page_size, int) or page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return items[start : start + page_size]


def _income_upper(record: OpportunityRecord) -> float:
    parsed = parse_money_range(record.income_potential)
    return parsed[1] if parsed else 0.0


# Sort key name -> (key function, descending)
SORT_KEYS: dict[str, tuple[Callable[[OpportunityRecord], Any], bool]] = {
    "roi": (lambda r: r.roi_score, True),
    "newest": (lambda r: r.created_at.timestamp(), True),
    "income": (_income_upper, True),
    "title": (lambda r: r.title.lower(), False),
}


def sort_records(records: Any, key: Optional[str]) -> list[OpportunityRecord]:
    """Stable sort by a named key; None or unknown keys keep input order."""
    items = as_records(records)
    if key not in SORT_KEYS:
        return items
    key_fn, descending = SORT_KEYS[key]
    return sorted(items, key=key_fn, reverse=descending)


class CatalogPage(BaseModel):
    """One page of a catalog query."""

    items: list[OpportunityRecord] = Field(default_factory=list)
    page: int
    page_size: int
    total: int = Field(..., description="Matches before paging")
    total_pages: int


@dataclass(frozen=True)
class CatalogQuery:
    """
    Listing query: type and priority filters, then text search, then
    sort and page. Unset filters keep everything.
    """

    opp_type: Union[OpportunityType, str, None] = None
    priority: Union[PriorityBucket, str, None] = None
    text: Optional[str] = None
    sort: Optional[str] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def matching(self, records: Any, classifier: Optional[PriorityClassifier] = None) -> list[OpportunityRecord]:
        """All records passing filters and search, sorted, before paging."""
        items = filter_by_type(records, self.opp_type)
        items = filter_by_priority(items, self.priority, classifier)
        items = search(items, self.text)
        return sort_records(items, self.sort)

    def run(self, records: Any, classifier: Optional[PriorityClassifier] = None) -> CatalogPage:
        matched = self.matching(records, classifier)
        return CatalogPage(
            items=paginate(matched, self.page, self.page_size),
            page=self.page,
            page_size=self.page_size,
            total=len(matched),
            total_pages=page_count(len(matched), self.page_size),
        )
