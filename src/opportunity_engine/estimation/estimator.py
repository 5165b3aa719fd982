"""Deterministic fill-in estimates for ROI, income, cost, timing and skill gap."""

import re
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from opportunity_engine.models.opportunity import OpportunityType

from .tables import DEFAULT_TABLES, EstimateTables

# Skill gap grows by this many days per required skill, plus a fixed ramp-up
DAYS_PER_SKILL = 3
SKILL_GAP_BASE_DAYS = 2

# "$1,000-$5,000/month", "$500", "$1.5k"
_MONEY_PATTERN = re.compile(r"\$\s*([0-9][0-9,]*(?:\.[0-9]+)?)\s*([kK])?")


class MetricsEstimate(BaseModel):
    """Estimated values for the five numeric/estimate record fields."""

    model_config = ConfigDict(frozen=True)

    roi_score: int
    income_potential: str
    startup_cost: str
    time_to_first_revenue: str
    skill_gap_days: int


def distinct_skills(skills: Iterable[str]) -> list[str]:
    """Stripped, non-empty skills in first-seen order, without duplicates."""
    seen: set[str] = set()
    out: list[str] = []
    for skill in skills:
        if not isinstance(skill, str):
            continue
        s = skill.strip()
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return out


def estimate_skill_gap_days(
    opp_type: OpportunityType,
    required_skills: Iterable[str],
    tables: EstimateTables = DEFAULT_TABLES,
) -> int:
    """3 days per required skill plus 2; type default when no skills are known."""
    count = len(distinct_skills(required_skills))
    if count:
        return DAYS_PER_SKILL * count + SKILL_GAP_BASE_DAYS
    return tables.for_type(opp_type).skill_gap_days


def estimate(
    opp_type: OpportunityType,
    required_skills: Iterable[str] = (),
    tables: EstimateTables = DEFAULT_TABLES,
) -> MetricsEstimate:
    """Estimate all fill-in fields for a type. Pure; same inputs, same output."""
    entry = tables.for_type(opp_type)
    return MetricsEstimate(
        roi_score=entry.roi_score,
        income_potential=entry.income_potential,
        startup_cost=entry.startup_cost,
        time_to_first_revenue=entry.time_to_first_revenue,
        skill_gap_days=estimate_skill_gap_days(opp_type, required_skills, tables),
    )


def _money_value(amount: str, suffix: Optional[str]) -> float:
    value = float(amount.replace(",", ""))
    return value * 1000 if suffix else value


def parse_money_range(text: Optional[str]) -> Optional[tuple[float, float]]:
    """
    Parse a dollar range such as "$1,000-$5,000/month" into (low, high).
    A single amount yields (amount, amount). None when no amount is found.
    """
    if not text:
        return None
    amounts = [_money_value(m.group(1), m.group(2)) for m in _MONEY_PATTERN.finditer(text)]
    if not amounts:
        return None
    low, high = amounts[0], amounts[1] if len(amounts) > 1 else amounts[0]
    return (min(low, high), max(low, high))
