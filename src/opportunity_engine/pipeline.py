"""Pipeline orchestration: normalize a batch → classify → query."""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Optional

from opportunity_engine.catalog import CatalogPage, CatalogQuery
from opportunity_engine.classification import PriorityClassifier
from opportunity_engine.estimation import DEFAULT_TABLES, EstimateTables
from opportunity_engine.models.opportunity import OpportunityRecord
from opportunity_engine.normalization import (
    STUB_DESCRIPTION,
    is_stored_row,
    normalize,
    normalize_stored,
    to_payload,
)

logger = logging.getLogger(__name__)


def normalize_many(
    raw_items: Iterable[Any],
    *,
    ingested_at: datetime,
    tables: EstimateTables = DEFAULT_TABLES,
) -> list[OpportunityRecord]:
    """
    Normalize a batch of producer payloads and/or stored rows.
    Items are independent; one bad payload yields a stub, not a failed batch.
    """
    records: list[OpportunityRecord] = []
    for raw in raw_items or []:
        if is_stored_row(raw):
            records.append(normalize_stored(raw, ingested_at=ingested_at, tables=tables))
        else:
            records.append(normalize(raw, ingested_at=ingested_at, tables=tables))
    stubs = sum(1 for r in records if r.description == STUB_DESCRIPTION)
    if stubs:
        logger.info("Normalized %d opportunities (%d stubs)", len(records), stubs)
    return records


def run_catalog(
    raw_items: Iterable[Any],
    query: CatalogQuery,
    *,
    ingested_at: datetime,
    tables: EstimateTables = DEFAULT_TABLES,
    clamp_page: bool = False,
) -> CatalogPage:
    """
    Normalize raw items and run a catalog query over them.
    With clamp_page=True a page past the end falls back to page 1,
    the reset rule listing screens apply after a filter shrinks results.
    """
    records = normalize_many(raw_items, ingested_at=ingested_at, tables=tables)
    classifier = PriorityClassifier()
    result = query.run(records, classifier)
    if clamp_page and result.page > 1 and result.page > result.total_pages:
        logger.debug("Page %d past last page %d; resetting to 1", result.page, result.total_pages)
        result = replace(query, page=1).run(records, classifier)
    return result


def describe(record: OpportunityRecord, classifier: Optional[PriorityClassifier] = None) -> dict[str, Any]:
    """Serialized record with its derived priority bucket attached."""
    classifier = classifier or PriorityClassifier()
    data = to_payload(record)
    data["priority"] = classifier.classify(record).value
    return data
