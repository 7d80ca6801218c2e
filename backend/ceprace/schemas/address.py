from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Address(BaseModel):
    """Normalized address returned by whichever provider answered first."""

    model_config = ConfigDict(frozen=True)

    postal_code: str
    street: str = ""
    neighborhood: str = ""
    city: str = ""
    region: str = ""
    complement: str = ""
    source: str = Field(description="Name of the provider that produced the address")


class LookupFailureResponse(BaseModel):
    detail: str
    reasons: dict[str, str] = Field(default_factory=dict)
