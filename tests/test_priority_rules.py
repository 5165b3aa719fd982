"""Unit tests for priority rules."""

from datetime import datetime, timezone

import pytest

from opportunity_engine.classification.rules import (
    apply_aspirational_rule,
    apply_passive_income_rule,
    apply_quick_win_rule,
)
from opportunity_engine.models.opportunity import OpportunityRecord, OpportunityType, RiskLevel


def _make_record(**kwargs) -> OpportunityRecord:
    """Record that clears every quick-win condition unless overridden."""
    defaults = {
        "id": "opp-1",
        "title": "Landing page audits",
        "description": "Audit landing pages for small SaaS teams.",
        "type": OpportunityType.SERVICE,
        "income_potential": "$1,000-$8,000",
        "startup_cost": "$0",
        "risk_level": RiskLevel.LOW,
        "roi_score": 85,
        "time_to_first_revenue": "2-4 weeks",
        "skill_gap_days": 10,
        "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return OpportunityRecord(**defaults)


class TestQuickWinRule:
    """Tests for apply_quick_win_rule."""

    def test_all_conditions_met(self) -> None:
        """ROI 85, Low risk, weeks, 10-day gap is a quick win."""
        matched, exp = apply_quick_win_rule(_make_record())
        assert matched is True
        assert "Quick win" in exp

    @pytest.mark.parametrize(
        "override",
        [
            {"roi_score": 80},
            {"risk_level": RiskLevel.MEDIUM},
            {"time_to_first_revenue": "1-3 months"},
            {"skill_gap_days": 14},
        ],
    )
    def test_each_condition_required(self, override: dict) -> None:
        """Failing any one condition is not a quick win."""
        matched, exp = apply_quick_win_rule(_make_record(**override))
        assert matched is False
        assert exp.startswith("Not a quick win")

    def test_week_match_case_insensitive(self) -> None:
        """'Weeks' in any casing counts."""
        matched, _ = apply_quick_win_rule(_make_record(time_to_first_revenue="1-2 Weeks"))
        assert matched is True

    def test_explanation_lists_misses(self) -> None:
        """Every failed condition is named."""
        _, exp = apply_quick_win_rule(_make_record(roi_score=50, skill_gap_days=40))
        assert "ROI 50" in exp
        assert "skill gap 40" in exp


class TestPassiveIncomeRule:
    """Tests for apply_passive_income_rule."""

    def test_passive_type(self) -> None:
        """Passive income type matches."""
        matched, _ = apply_passive_income_rule(_make_record(type=OpportunityType.PASSIVE))
        assert matched is True

    def test_other_type(self) -> None:
        """Other types do not match."""
        matched, exp = apply_passive_income_rule(_make_record())
        assert matched is False
        assert "Service-Based" in exp


class TestAspirationalRule:
    """Tests for apply_aspirational_rule."""

    def test_over_thirty_days(self) -> None:
        """31 days matches."""
        matched, _ = apply_aspirational_rule(_make_record(skill_gap_days=31))
        assert matched is True

    def test_thirty_days_does_not_match(self) -> None:
        """Exactly 30 days does not match."""
        matched, _ = apply_aspirational_rule(_make_record(skill_gap_days=30))
        assert matched is False
