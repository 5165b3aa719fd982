"""Data models for canonical opportunity records and raw payloads."""

from opportunity_engine.models.opportunity import (
    OpportunityRecord,
    OpportunityType,
    PriorityBucket,
    Resource,
    RiskLevel,
    SuccessStory,
)
from opportunity_engine.models.raw import ParsedPayload, ParseResult, StubPayload

__all__ = [
    "OpportunityRecord",
    "OpportunityType",
    "ParsedPayload",
    "ParseResult",
    "PriorityBucket",
    "Resource",
    "RiskLevel",
    "StubPayload",
    "SuccessStory",
]
