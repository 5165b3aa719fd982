"""Canonical opportunity record and its enumerations."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OpportunityType(str, Enum):
    """The six opportunity categories used for filtering and display."""

    FREELANCE = "Freelance"
    DIGITAL_PRODUCT = "Digital Product"
    CONTENT = "Content Creation"
    SERVICE = "Service-Based"
    PASSIVE = "Passive Income"
    INFO_PRODUCT = "Info Product"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class PriorityBucket(str, Enum):
    """Display bucket derived from a record; never stored on it."""

    QUICK_WIN = "Quick Win"
    GROWTH = "Growth"
    ASPIRATIONAL = "Aspirational"
    PASSIVE_INCOME = "Passive Income"


_RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class Resource(BaseModel):
    """Learning or tooling link attached to an opportunity."""

    model_config = _RECORD_CONFIG

    title: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = None


class SuccessStory(BaseModel):
    """Someone who already made the opportunity work."""

    model_config = _RECORD_CONFIG

    name: Optional[str] = None
    profile_url: Optional[str] = None
    background: Optional[str] = None
    journey: Optional[str] = None
    outcome: Optional[str] = None


class OpportunityRecord(BaseModel):
    """
    Canonical opportunity record produced by the normalizer.
    Immutable; a changed upstream payload yields a new record.
    Serialized field names are camelCase to match the stored JSON shape.
    """

    model_config = _RECORD_CONFIG

    id: Optional[str] = Field(default=None, description="Assigned upstream")
    title: str = Field(..., min_length=1)
    type: OpportunityType = OpportunityType.FREELANCE
    description: str = Field(..., min_length=1)

    income_potential: str
    startup_cost: str
    risk_level: RiskLevel = RiskLevel.MEDIUM

    steps_to_start: tuple[str, ...] = ()
    resources: tuple[Resource, ...] = ()
    success_stories: tuple[SuccessStory, ...] = ()

    roi_score: int = Field(..., ge=0, le=100)
    time_to_first_revenue: str
    skill_gap_days: int = Field(..., ge=0)

    required_skills: tuple[str, ...] = ()
    skills: tuple[str, ...] = Field(default=(), description="Grouping tags")

    created_at: datetime
