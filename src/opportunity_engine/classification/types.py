"""Map free-form or enum-coded type strings onto OpportunityType."""

import re
from typing import Any

from opportunity_engine.models.opportunity import OpportunityType

# Storage-style tokens with separators removed -> type
_EXACT_TOKENS: dict[str, OpportunityType] = {
    "FREELANCE": OpportunityType.FREELANCE,
    "FREELANCING": OpportunityType.FREELANCE,
    "DIGITALPRODUCT": OpportunityType.DIGITAL_PRODUCT,
    "CONTENT": OpportunityType.CONTENT,
    "CONTENTCREATION": OpportunityType.CONTENT,
    "SERVICE": OpportunityType.SERVICE,
    "SERVICEBASED": OpportunityType.SERVICE,
    "PASSIVE": OpportunityType.PASSIVE,
    "PASSIVEINCOME": OpportunityType.PASSIVE,
    "INFOPRODUCT": OpportunityType.INFO_PRODUCT,
}

# Substring -> type, checked in order; first hit wins
_SUBSTRING_RULES: tuple[tuple[tuple[str, ...], OpportunityType], ...] = (
    (("freelance", "consulting"), OpportunityType.FREELANCE),
    (("digital", "product"), OpportunityType.DIGITAL_PRODUCT),
    (("content", "creation", "blog"), OpportunityType.CONTENT),
    (("service",), OpportunityType.SERVICE),
    (("passive",), OpportunityType.PASSIVE),
    (("info", "course"), OpportunityType.INFO_PRODUCT),
)

DEFAULT_TYPE = OpportunityType.FREELANCE

_SEPARATORS = re.compile(r"[\s_\-]+")


def _token(raw_type: str) -> str:
    """Uppercase with underscores, hyphens and whitespace removed."""
    return _SEPARATORS.sub("", raw_type).upper()


def classify_type(raw_type: Any) -> OpportunityType:
    """
    Classify a type string. Total: anything unrecognized is Freelance.
    Exact storage tokens ("PASSIVE_INCOME", "Service-Based") are tried
    before substring rules ("blog writing" -> Content Creation).
    """
    if isinstance(raw_type, OpportunityType):
        return raw_type
    if not isinstance(raw_type, str) or not raw_type.strip():
        return DEFAULT_TYPE

    exact = _EXACT_TOKENS.get(_token(raw_type))
    if exact is not None:
        return exact

    lowered = raw_type.lower()
    for substrings, opp_type in _SUBSTRING_RULES:
        if any(s in lowered for s in substrings):
            return opp_type
    return DEFAULT_TYPE
