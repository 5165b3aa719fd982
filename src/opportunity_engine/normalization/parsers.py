"""Coercion helpers for loosely-typed opportunity payloads."""

import math
import re
from datetime import datetime
from typing import Any, Mapping, Optional

from opportunity_engine.models.opportunity import Resource, RiskLevel, SuccessStory

DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d", "%Y/%m/%d")

_NUMERIC_STRING = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(key: str) -> str:
    """incomePotential -> income_potential."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def get_field(data: Mapping[str, Any], *keys: str) -> Any:
    """
    First value present under any of `keys` or their snake_case variants.
    Producers mix "roiScore" and "roi_score"; both resolve here.
    """
    for key in keys:
        for candidate in (key, snake_case(key)):
            if candidate in data and data[candidate] is not None:
                return data[candidate]
    return None


def coerce_text(value: Any) -> Optional[str]:
    """Stripped string, or None when not a non-empty string."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def first_text(data: Mapping[str, Any], *keys: str) -> Optional[str]:
    """First non-empty string among `keys` (fallback chain)."""
    for key in keys:
        text = coerce_text(get_field(data, key))
        if text is not None:
            return text
    return None


def coerce_int(value: Any, minimum: Optional[int] = None, maximum: Optional[int] = None) -> Optional[int]:
    """
    Int from an int, a finite float (rounded) or a numeric string.
    Booleans and out-of-range values are rejected (None).
    """
    if isinstance(value, bool):
        return None
    result: Optional[int] = None
    if isinstance(value, int):
        result = value
    elif isinstance(value, float) and math.isfinite(value):
        result = round(value)
    elif isinstance(value, str) and _NUMERIC_STRING.match(value.strip()):
        parsed = float(value.strip())
        if math.isfinite(parsed):
            result = round(parsed)
    if result is None:
        return None
    if minimum is not None and result < minimum:
        return None
    if maximum is not None and result > maximum:
        return None
    return result


def coerce_str_list(value: Any) -> list[str]:
    """Stripped strings from a list, order kept; anything else -> []."""
    if not isinstance(value, list):
        return []
    return [s for s in (coerce_text(v) for v in value) if s is not None]


def unique(items: list[str]) -> tuple[str, ...]:
    """De-duplicate preserving first-seen order."""
    return tuple(dict.fromkeys(items))


def _string_fields(item: Mapping[str, Any], keys: tuple[str, ...]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key in keys:
        text = coerce_text(get_field(item, key))
        if text is not None:
            out[key] = text
    return out


def coerce_resources(value: Any) -> tuple[Resource, ...]:
    """Resources from a list of mappings; non-mapping items are dropped."""
    if not isinstance(value, list):
        return ()
    return tuple(
        Resource.model_validate(_string_fields(item, ("title", "url", "source")))
        for item in value
        if isinstance(item, Mapping)
    )


def coerce_success_stories(value: Any) -> tuple[SuccessStory, ...]:
    """Success stories from a list of mappings; non-mapping items are dropped."""
    if not isinstance(value, list):
        return ()
    keys = ("name", "profileUrl", "background", "journey", "outcome")
    return tuple(
        SuccessStory.model_validate(_string_fields(item, keys))
        for item in value
        if isinstance(item, Mapping)
    )


def parse_risk_level(value: Any) -> Optional[RiskLevel]:
    """Case-insensitive Low/Medium/High; None when unrecognized."""
    text = coerce_text(value)
    if text is None:
        return None
    lowered = text.lower()
    for level in RiskLevel:
        if lowered == level.value.lower():
            return level
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Datetime from a datetime or an ISO-8601-ish string ("...Z" accepted)."""
    if isinstance(value, datetime):
        return value
    text = coerce_text(value)
    if text is None:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text[:19], fmt)
        except ValueError:
            continue
    return None
