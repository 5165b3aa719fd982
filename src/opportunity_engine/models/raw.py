"""Raw payload parse results before normalization."""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ParsedPayload(BaseModel):
    """
    Payload that decoded to a key/value mapping.
    Keys and value types are whatever the producer emitted.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["parsed"] = "parsed"
    data: dict[str, Any] = Field(default_factory=dict)


class StubPayload(BaseModel):
    """Payload that could not be decoded; normalizes to a stub record."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["stub"] = "stub"
    reason: str


ParseResult = Union[ParsedPayload, StubPayload]
