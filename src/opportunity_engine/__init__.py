"""Opportunity normalization and classification engine."""

from opportunity_engine.catalog import CatalogPage, CatalogQuery, group_by_skill, paginate, search
from opportunity_engine.classification import classify, classify_type
from opportunity_engine.estimation import estimate
from opportunity_engine.models import OpportunityRecord, OpportunityType, PriorityBucket, RiskLevel
from opportunity_engine.normalization import normalize, normalize_stored, to_payload

__all__ = [
    "CatalogPage",
    "CatalogQuery",
    "OpportunityRecord",
    "OpportunityType",
    "PriorityBucket",
    "RiskLevel",
    "classify",
    "classify_type",
    "estimate",
    "group_by_skill",
    "normalize",
    "normalize_stored",
    "paginate",
    "search",
    "to_payload",
]
