"""Catalog-style queries over normalized opportunity records."""

from .query import (
    DEFAULT_PAGE_SIZE,
    OTHER_GROUP,
    SORT_KEYS,
    CatalogPage,
    CatalogQuery,
    as_records,
    filter_by_priority,
    filter_by_type,
    group_by_skill,
    page_count,
    paginate,
    parse_bucket,
    search,
    sort_records,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "OTHER_GROUP",
    "SORT_KEYS",
    "CatalogPage",
    "CatalogQuery",
    "as_records",
    "filter_by_priority",
    "filter_by_type",
    "group_by_skill",
    "page_count",
    "paginate",
    "parse_bucket",
    "search",
    "sort_records",
]
