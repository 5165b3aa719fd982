"""Raw payload -> canonical OpportunityRecord."""

from .normalizer import (
    DEFAULT_DESCRIPTION,
    DEFAULT_STEPS,
    DEFAULT_TITLE,
    STUB_DESCRIPTION,
    build_stub,
    is_stored_row,
    normalize,
    normalize_stored,
    parse_payload,
    to_payload,
)

__all__ = [
    "DEFAULT_DESCRIPTION",
    "DEFAULT_STEPS",
    "DEFAULT_TITLE",
    "STUB_DESCRIPTION",
    "build_stub",
    "is_stored_row",
    "normalize",
    "normalize_stored",
    "parse_payload",
    "to_payload",
]
