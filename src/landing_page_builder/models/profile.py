from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class BrandColors(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    primary: str = Field(pattern=HEX_COLOR_PATTERN)
    secondary: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)


class BusinessProfile(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "businessName": "Acme",
                "industry": "technology",
                "tone": "professional",
                "brandColors": {"primary": "#3b82f6", "secondary": "#93c5fd"},
                "keyFeatures": ["Speed", "Security"],
                "targetAudience": "Small engineering teams",
                "vision": "Make shipping software boring",
            }
        },
    )

    business_name: str = Field(min_length=1)
    industry: str
    tone: str = "professional"
    brand_colors: BrandColors
    target_audience: str | None = None
    vision: str | None = None
    key_features: Sequence[str] = Field(description="Ordered list of selling points, at least one")

    @field_validator("business_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("business name must not be blank")
        return value

    @field_validator("key_features")
    @classmethod
    def _require_features(cls, value: Sequence[str]) -> tuple[str, ...]:
        features = tuple(item.strip() for item in value if item and item.strip())
        if not features:
            raise ValueError("at least one non-empty key feature is required")
        return features


__all__ = ["BusinessProfile", "BrandColors", "HEX_COLOR_PATTERN"]
