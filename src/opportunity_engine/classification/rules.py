"""Priority rules: each returns (matched, explanation)."""

from opportunity_engine.models.opportunity import OpportunityRecord, OpportunityType, RiskLevel

QUICK_WIN_MIN_ROI = 80
QUICK_WIN_MAX_GAP_DAYS = 14
ASPIRATIONAL_MIN_GAP_DAYS = 30


def apply_quick_win_rule(record: OpportunityRecord) -> tuple[bool, str]:
    """
    Quick win: ROI above 80, low risk, revenue within weeks, skill gap under 14 days.
    All four must hold.
    """
    misses: list[str] = []
    if not record.roi_score > QUICK_WIN_MIN_ROI:
        misses.append(f"ROI {record.roi_score} not above {QUICK_WIN_MIN_ROI}")
    if record.risk_level != RiskLevel.LOW:
        misses.append(f"risk {record.risk_level.value} is not Low")
    if "week" not in record.time_to_first_revenue.lower():
        misses.append(f"first revenue '{record.time_to_first_revenue}' not measured in weeks")
    if not record.skill_gap_days < QUICK_WIN_MAX_GAP_DAYS:
        misses.append(f"skill gap {record.skill_gap_days} days not under {QUICK_WIN_MAX_GAP_DAYS}")

    if misses:
        return False, "Not a quick win: " + "; ".join(misses)
    return True, (
        f"Quick win: ROI {record.roi_score}, low risk, "
        f"revenue in {record.time_to_first_revenue}, {record.skill_gap_days}-day skill gap"
    )


def apply_passive_income_rule(record: OpportunityRecord) -> tuple[bool, str]:
    """Passive income type."""
    if record.type == OpportunityType.PASSIVE:
        return True, "Passive income opportunity"
    return False, f"Type {record.type.value} is not passive income"


def apply_aspirational_rule(record: OpportunityRecord) -> tuple[bool, str]:
    """Aspirational: skill gap over 30 days."""
    if record.skill_gap_days > ASPIRATIONAL_MIN_GAP_DAYS:
        return True, f"Aspirational: {record.skill_gap_days}-day skill gap"
    return False, f"Skill gap {record.skill_gap_days} days not over {ASPIRATIONAL_MIN_GAP_DAYS}"
