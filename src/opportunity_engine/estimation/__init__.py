"""Type-conditioned heuristic estimates."""

from .estimator import (
    MetricsEstimate,
    distinct_skills,
    estimate,
    estimate_skill_gap_days,
    parse_money_range,
)
from .tables import DEFAULT_TABLES, EstimateTables, TypeEstimate

__all__ = [
    "DEFAULT_TABLES",
    "EstimateTables",
    "MetricsEstimate",
    "TypeEstimate",
    "distinct_skills",
    "estimate",
    "estimate_skill_gap_days",
    "parse_money_range",
]
