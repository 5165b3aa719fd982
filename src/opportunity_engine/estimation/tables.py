"""Per-type estimate tables used to fill missing financial/timing fields."""

from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for estimate table loading. Run: pip install -e ."
    ) from e
from pydantic import BaseModel, ConfigDict, Field, model_validator

from opportunity_engine.classification.types import classify_type
from opportunity_engine.models.opportunity import OpportunityType


class TypeEstimate(BaseModel):
    """Heuristic estimates for one opportunity type."""

    model_config = ConfigDict(frozen=True)

    roi_band: tuple[int, int] = Field(..., description="(low, high) ROI score band")
    time_to_first_revenue: str
    income_potential: str
    startup_cost: str
    skill_gap_days: int = Field(..., ge=0, description="Used when no required skills are known")

    @model_validator(mode="after")
    def _check_band(self) -> "TypeEstimate":
        low, high = self.roi_band
        if not 0 <= low <= high <= 100:
            raise ValueError(f"roi_band must satisfy 0 <= low <= high <= 100, got {self.roi_band}")
        return self

    @property
    def roi_score(self) -> int:
        """Representative ROI: band midpoint, rounded down."""
        low, high = self.roi_band
        return (low + high) // 2


# OpportunityType -> EstimateTables attribute
_TYPE_FIELDS: dict[OpportunityType, str] = {
    OpportunityType.FREELANCE: "freelance",
    OpportunityType.DIGITAL_PRODUCT: "digital_product",
    OpportunityType.CONTENT: "content_creation",
    OpportunityType.SERVICE: "service_based",
    OpportunityType.PASSIVE: "passive_income",
    OpportunityType.INFO_PRODUCT: "info_product",
}

_DEFAULT_KEYS = ("default", "other")


class EstimateTables(BaseModel):
    """
    Immutable estimate configuration, one entry per type.
    Types without an entry use `default`.
    """

    model_config = ConfigDict(frozen=True)

    freelance: Optional[TypeEstimate] = None
    digital_product: Optional[TypeEstimate] = None
    content_creation: Optional[TypeEstimate] = None
    service_based: Optional[TypeEstimate] = None
    passive_income: Optional[TypeEstimate] = None
    info_product: Optional[TypeEstimate] = None
    default: TypeEstimate

    def for_type(self, opp_type: OpportunityType) -> TypeEstimate:
        """Estimate entry for a type, falling back to `default`."""
        entry = getattr(self, _TYPE_FIELDS[opp_type])
        return entry if entry is not None else self.default

    @classmethod
    def from_yaml(cls, path: str | Path, base: Optional["EstimateTables"] = None) -> "EstimateTables":
        """
        Load tables from YAML, merged over `base` (built-in defaults if omitted).
        Supports a nested `estimates:` section or a flat mapping. Keys may be
        attribute names ("digital_product"), display values ("Digital Product")
        or "default"/"other"; entries may be partial.
        """
        data = yaml.safe_load(Path(path).read_text()) or {}
        section = data.get("estimates", data) if isinstance(data, dict) else {}
        if not isinstance(section, dict):
            raise ValueError(f"Estimate tables in {path} must be a mapping")

        merged = (base or DEFAULT_TABLES).model_dump()
        for key, overrides in section.items():
            name = _field_for_key(str(key))
            current = merged.get(name) or merged["default"]
            merged[name] = {**current, **(overrides or {})}
        return cls.model_validate(merged)


def _field_for_key(key: str) -> str:
    """Map a YAML key to an EstimateTables attribute."""
    if key.strip().lower() in _DEFAULT_KEYS:
        return "default"
    if key in EstimateTables.model_fields:
        return key
    return _TYPE_FIELDS[classify_type(key)]


DEFAULT_TABLES = EstimateTables(
    freelance=TypeEstimate(
        roi_band=(65, 75),
        time_to_first_revenue="2-4 weeks",
        income_potential="$1,000-$5,000",
        startup_cost="$0-$100",
        skill_gap_days=7,
    ),
    digital_product=TypeEstimate(
        roi_band=(70, 90),
        time_to_first_revenue="1-3 months",
        income_potential="$500-$10,000",
        startup_cost="$100-$1,000",
        skill_gap_days=21,
    ),
    content_creation=TypeEstimate(
        roi_band=(60, 75),
        time_to_first_revenue="2-6 weeks",
        income_potential="$200-$5,000",
        startup_cost="$0-$500",
        skill_gap_days=14,
    ),
    service_based=TypeEstimate(
        roi_band=(70, 80),
        time_to_first_revenue="1-2 weeks",
        income_potential="$1,000-$8,000",
        startup_cost="$100-$500",
        skill_gap_days=10,
    ),
    passive_income=TypeEstimate(
        roi_band=(55, 80),
        time_to_first_revenue="3-6 months",
        income_potential="$100-$3,000",
        startup_cost="$500-$5,000",
        skill_gap_days=30,
    ),
    default=TypeEstimate(
        roi_band=(60, 80),
        time_to_first_revenue="~30 days",
        income_potential="$500-$5,000",
        startup_cost="$0-$500",
        skill_gap_days=14,
    ),
)
