"""Unit tests for estimate tables and the metrics estimator."""

import pytest
from pydantic import ValidationError

from opportunity_engine.estimation import (
    DEFAULT_TABLES,
    EstimateTables,
    TypeEstimate,
    distinct_skills,
    estimate,
    parse_money_range,
)
from opportunity_engine.models.opportunity import OpportunityType as T


class TestDefaultTables:
    """Built-in per-type tables."""

    @pytest.mark.parametrize(
        ("opp_type", "roi", "time_to_revenue", "gap_days"),
        [
            (T.FREELANCE, 70, "2-4 weeks", 7),
            (T.DIGITAL_PRODUCT, 80, "1-3 months", 21),
            (T.CONTENT, 67, "2-6 weeks", 14),
            (T.SERVICE, 75, "1-2 weeks", 10),
            (T.PASSIVE, 67, "3-6 months", 30),
            (T.INFO_PRODUCT, 70, "~30 days", 14),
        ],
    )
    def test_type_entries(self, opp_type: T, roi: int, time_to_revenue: str, gap_days: int) -> None:
        """Each type resolves to its band midpoint and timing."""
        result = estimate(opp_type, [])
        assert result.roi_score == roi
        assert result.time_to_first_revenue == time_to_revenue
        assert result.skill_gap_days == gap_days

    def test_freelance_money_ranges(self) -> None:
        """Freelance income and startup ranges."""
        result = estimate(T.FREELANCE)
        assert result.income_potential == "$1,000-$5,000"
        assert result.startup_cost == "$0-$100"

    def test_digital_product_money_ranges(self) -> None:
        """Digital product income and startup ranges."""
        result = estimate(T.DIGITAL_PRODUCT)
        assert result.income_potential == "$500-$10,000"
        assert result.startup_cost == "$100-$1,000"

    def test_info_product_uses_default(self) -> None:
        """Types without an entry use the default entry."""
        assert DEFAULT_TABLES.info_product is None
        assert DEFAULT_TABLES.for_type(T.INFO_PRODUCT) == DEFAULT_TABLES.default

    def test_tables_frozen(self) -> None:
        """Tables cannot be reassigned at runtime."""
        with pytest.raises(ValidationError):
            DEFAULT_TABLES.default = DEFAULT_TABLES.freelance


class TestSkillGap:
    """Skill gap from required skills."""

    def test_three_skills(self) -> None:
        """3 * 3 + 2 = 11."""
        assert estimate(T.FREELANCE, ["A", "B", "C"]).skill_gap_days == 11

    def test_skills_override_type_default(self) -> None:
        """Known skills replace the type default even for passive income."""
        assert estimate(T.PASSIVE, ["Writing"]).skill_gap_days == 5

    def test_duplicates_and_blanks_ignored(self) -> None:
        """Skills are counted after stripping and de-duplication."""
        assert distinct_skills([" A", "A", "", "  ", "B"]) == ["A", "B"]
        assert estimate(T.FREELANCE, [" A", "A", ""]).skill_gap_days == 5

    def test_deterministic(self) -> None:
        """No randomness: repeated calls agree."""
        assert estimate(T.CONTENT, ["Video"]) == estimate(T.CONTENT, ["Video"])


class TestTypeEstimate:
    """Validation of estimate entries."""

    def test_invalid_band_rejected(self) -> None:
        """Band must satisfy 0 <= low <= high <= 100."""
        with pytest.raises(ValidationError):
            TypeEstimate(
                roi_band=(90, 70),
                time_to_first_revenue="1 week",
                income_potential="$1",
                startup_cost="$0",
                skill_gap_days=1,
            )

    def test_midpoint_rounds_down(self) -> None:
        """Odd band sums round down."""
        entry = TypeEstimate(
            roi_band=(60, 75),
            time_to_first_revenue="1 week",
            income_potential="$1",
            startup_cost="$0",
            skill_gap_days=1,
        )
        assert entry.roi_score == 67


class TestFromYaml:
    """Loading table overrides from YAML."""

    def test_nested_partial_override(self, tmp_path) -> None:
        """Partial entries merge over the built-in defaults."""
        path = tmp_path / "tables.yaml"
        path.write_text(
            "estimates:\n"
            "  Digital Product:\n"
            "    roi_band: [80, 90]\n"
            "  other:\n"
            "    time_to_first_revenue: '~45 days'\n"
        )
        tables = EstimateTables.from_yaml(path)
        digital = tables.for_type(T.DIGITAL_PRODUCT)
        assert digital.roi_score == 85
        assert digital.time_to_first_revenue == "1-3 months"
        assert tables.for_type(T.INFO_PRODUCT).time_to_first_revenue == "~45 days"
        assert tables.for_type(T.FREELANCE) == DEFAULT_TABLES.freelance

    def test_flat_new_type_entry(self, tmp_path) -> None:
        """A new entry for a type without one starts from the default entry."""
        path = tmp_path / "tables.yaml"
        path.write_text("info_product:\n  skill_gap_days: 9\n")
        tables = EstimateTables.from_yaml(path)
        info = tables.for_type(T.INFO_PRODUCT)
        assert info.skill_gap_days == 9
        assert info.roi_score == DEFAULT_TABLES.default.roi_score

    def test_empty_file_gives_defaults(self, tmp_path) -> None:
        """An empty file changes nothing."""
        path = tmp_path / "tables.yaml"
        path.write_text("")
        assert EstimateTables.from_yaml(path) == DEFAULT_TABLES

    def test_invalid_values_raise(self, tmp_path) -> None:
        """Invalid overrides fail validation."""
        path = tmp_path / "tables.yaml"
        path.write_text("freelance:\n  roi_band: [50, 150]\n")
        with pytest.raises(ValidationError):
            EstimateTables.from_yaml(path)


class TestParseMoneyRange:
    """Tests for parse_money_range."""

    def test_range_with_suffix(self) -> None:
        """Range with thousands separators and a timeframe."""
        assert parse_money_range("$1,000-$5,000/month") == (1000.0, 5000.0)

    def test_single_amount(self) -> None:
        """Single amount yields a degenerate range."""
        assert parse_money_range("$500") == (500.0, 500.0)

    def test_k_suffix(self) -> None:
        """'k' multiplies by a thousand."""
        assert parse_money_range("$1.5k-$3k") == (1500.0, 3000.0)

    def test_no_amount(self) -> None:
        """No dollar amount gives None."""
        assert parse_money_range("free") is None
        assert parse_money_range(None) is None
