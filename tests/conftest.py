"""Pytest fixtures for opportunity-engine tests."""

import json
from datetime import datetime, timezone

import pytest

INGESTED_AT = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def ingested_at() -> datetime:
    """Fixed ingestion timestamp; the engine never reads a clock."""
    return INGESTED_AT


@pytest.fixture
def ai_payload() -> dict:
    """Payload shaped like an AI-generated suggestion."""
    return {
        "id": "opp-ai-1",
        "title": "Notion template shop",
        "type": "DIGITAL_PRODUCT",
        "description": "Design and sell Notion templates for freelancers.",
        "incomePotential": "$500-$3,000/month",
        "startupCost": "$0-$50",
        "riskLevel": "low",
        "stepsToStart": ["Pick a niche", "Build 3 templates", "Open a Gumroad store"],
        "resources": [
            {"title": "Gumroad guide", "url": "https://gumroad.com/guide", "source": "Gumroad"},
        ],
        "successStories": [
            {
                "name": "Easlo",
                "profileUrl": "https://twitter.com/heyeaslo",
                "outcome": "$500k in template sales",
            }
        ],
        "roiScore": 88,
        "timeToFirstRevenue": "2-3 weeks",
        "skillGapDays": 5,
        "requiredSkills": ["Notion", "Design"],
        "skills": ["Notion", "Design"],
        "createdAt": "2025-03-01T09:30:00Z",
    }


@pytest.fixture
def stored_row(ai_payload: dict) -> dict:
    """Legacy storage row wrapping the payload as a JSON string."""
    inner = dict(ai_payload)
    for key in ("id", "title", "skills", "createdAt"):
        inner.pop(key)
    return {
        "id": 42,
        "userId": 7,
        "title": "Notion template shop",
        "opportunityData": json.dumps(inner),
        "skills": ["Notion", "Design"],
        "createdAt": "2025-03-01T09:30:00.000Z",
        "shared": False,
    }
