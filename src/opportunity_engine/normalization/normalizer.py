"""Single entry point turning raw opportunity payloads into canonical records."""

import json
import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from opportunity_engine.classification.types import DEFAULT_TYPE, classify_type
from opportunity_engine.estimation import DEFAULT_TABLES, EstimateTables, estimate
from opportunity_engine.models.opportunity import OpportunityRecord, RiskLevel
from opportunity_engine.models.raw import ParsedPayload, ParseResult, StubPayload

from .parsers import (
    coerce_int,
    coerce_resources,
    coerce_str_list,
    coerce_success_stories,
    coerce_text,
    first_text,
    get_field,
    parse_risk_level,
    parse_timestamp,
    unique,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Opportunity"
DEFAULT_DESCRIPTION = "A monetization opportunity matched to your skills."
STUB_DESCRIPTION = "Error loading opportunity details"
DEFAULT_STEPS: tuple[str, ...] = (
    "Research your target market and competitors",
    "Set up your portfolio, storefront or profile",
    "Create your first offering and set pricing",
    "Reach out to your first customers and gather feedback",
)

# Stored rows wrap the producer payload under this key
ENVELOPE_KEY = "opportunityData"

_DESCRIPTION_KEYS = ("description", "howItWorks", "details")
_REQUIRED_SKILL_KEYS = ("requiredSkills", "skillsRequired")


def parse_payload(raw: Any) -> ParseResult:
    """
    Decode a raw payload. Strings are parsed as JSON; mappings are used as-is;
    anything else is an empty mapping. Only undecodable strings are stubs.
    """
    if isinstance(raw, str):
        try:
            decoded = json.loads(raw)
        except (ValueError, RecursionError) as e:
            return StubPayload(reason=f"invalid JSON: {e}")
        if not isinstance(decoded, dict):
            return StubPayload(reason=f"JSON payload is {type(decoded).__name__}, not an object")
        return ParsedPayload(data=decoded)
    if isinstance(raw, Mapping):
        return ParsedPayload(data=dict(raw))
    return ParsedPayload(data={})


def _record_id(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, str)):
        return str(value).strip() or None
    return None


def build_stub(
    fallback_title: Optional[str],
    *,
    ingested_at: datetime,
    container: Optional[Mapping[str, Any]] = None,
    tables: EstimateTables = DEFAULT_TABLES,
) -> OpportunityRecord:
    """Minimal record for a payload that could not be decoded."""
    container = container or {}
    metrics = estimate(DEFAULT_TYPE, (), tables)
    return OpportunityRecord(
        id=_record_id(get_field(container, "id")),
        title=coerce_text(fallback_title) or DEFAULT_TITLE,
        type=DEFAULT_TYPE,
        description=STUB_DESCRIPTION,
        income_potential=metrics.income_potential,
        startup_cost=metrics.startup_cost,
        risk_level=RiskLevel.MEDIUM,
        steps_to_start=DEFAULT_STEPS,
        roi_score=metrics.roi_score,
        time_to_first_revenue=metrics.time_to_first_revenue,
        skill_gap_days=metrics.skill_gap_days,
        skills=unique(coerce_str_list(get_field(container, "skills"))),
        created_at=parse_timestamp(get_field(container, "createdAt")) or ingested_at,
    )


def normalize(
    raw: Any,
    fallback_title: Optional[str] = None,
    *,
    ingested_at: datetime,
    container: Optional[Mapping[str, Any]] = None,
    tables: EstimateTables = DEFAULT_TABLES,
) -> OpportunityRecord:
    """
    Normalize one raw payload (JSON string, mapping or None) into a record.
    Never raises for malformed input: undecodable strings produce a stub
    record, missing or wrongly typed fields fall back to table estimates.
    `container` is the stored row the payload came from, if any; its id,
    title, type, skills and createdAt are used when the payload lacks them.
    `ingested_at` is supplied by the caller; no clock is read here.
    """
    parsed = parse_payload(raw)
    if isinstance(parsed, StubPayload):
        logger.warning(
            "Stub opportunity record for %r: %s",
            fallback_title or DEFAULT_TITLE,
            parsed.reason,
        )
        return build_stub(fallback_title, ingested_at=ingested_at, container=container, tables=tables)
    return _from_mapping(
        parsed.data,
        fallback_title,
        ingested_at=ingested_at,
        container=container or {},
        tables=tables,
    )


def _required_skills(data: Mapping[str, Any]) -> tuple[str, ...]:
    for key in _REQUIRED_SKILL_KEYS:
        value = get_field(data, key)
        if value is not None:
            return unique(coerce_str_list(value))
    return ()


def _from_mapping(
    data: Mapping[str, Any],
    fallback_title: Optional[str],
    *,
    ingested_at: datetime,
    container: Mapping[str, Any],
    tables: EstimateTables,
) -> OpportunityRecord:
    opp_type = classify_type(get_field(data, "type") or get_field(container, "type"))

    required_skills = _required_skills(data)
    skills_value = get_field(data, "skills")
    if not isinstance(skills_value, list):
        skills_value = get_field(container, "skills")
    skills = unique(coerce_str_list(skills_value))

    metrics = estimate(opp_type, required_skills, tables)
    roi_score = coerce_int(get_field(data, "roiScore"), 0, 100)
    skill_gap_days = coerce_int(get_field(data, "skillGapDays"), 0)
    if roi_score is None or skill_gap_days is None:
        logger.debug("Estimating metrics for %s opportunity %r", opp_type.value, get_field(data, "title"))

    steps = coerce_str_list(get_field(data, "stepsToStart"))

    return OpportunityRecord(
        id=_record_id(get_field(data, "id")) or _record_id(get_field(container, "id")),
        title=(
            first_text(data, "title", "name")
            or first_text(container, "title")
            or coerce_text(fallback_title)
            or DEFAULT_TITLE
        ),
        type=opp_type,
        description=first_text(data, *_DESCRIPTION_KEYS) or DEFAULT_DESCRIPTION,
        income_potential=first_text(data, "incomePotential") or metrics.income_potential,
        startup_cost=first_text(data, "startupCost") or metrics.startup_cost,
        risk_level=parse_risk_level(get_field(data, "riskLevel")) or RiskLevel.MEDIUM,
        steps_to_start=tuple(steps) if steps else DEFAULT_STEPS,
        resources=coerce_resources(get_field(data, "resources")),
        success_stories=coerce_success_stories(get_field(data, "successStories")),
        roi_score=roi_score if roi_score is not None else metrics.roi_score,
        time_to_first_revenue=first_text(data, "timeToFirstRevenue") or metrics.time_to_first_revenue,
        skill_gap_days=skill_gap_days if skill_gap_days is not None else metrics.skill_gap_days,
        required_skills=required_skills,
        skills=skills,
        created_at=(
            parse_timestamp(get_field(data, "createdAt"))
            or parse_timestamp(get_field(container, "createdAt"))
            or ingested_at
        ),
    )


def is_stored_row(raw: Any) -> bool:
    """True for a stored-row envelope carrying the payload under opportunityData."""
    return isinstance(raw, Mapping) and ENVELOPE_KEY in raw


def normalize_stored(
    row: Mapping[str, Any],
    fallback_title: Optional[str] = None,
    *,
    ingested_at: datetime,
    tables: EstimateTables = DEFAULT_TABLES,
) -> OpportunityRecord:
    """Normalize a stored row: unwrap opportunityData, use the row as container."""
    return normalize(
        row.get(ENVELOPE_KEY),
        fallback_title or coerce_text(row.get("title")),
        ingested_at=ingested_at,
        container=row,
        tables=tables,
    )


def to_payload(record: OpportunityRecord) -> dict[str, Any]:
    """JSON-ready camelCase dict; normalizing it reproduces the record."""
    return record.model_dump(mode="json", by_alias=True)
