from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .profile import HEX_COLOR_PATTERN, BusinessProfile
from .section import Section


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ColorScheme(str, Enum):
    light = "light"
    dark = "dark"


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ThemeColors(_Schema):
    primary: str = Field(pattern=HEX_COLOR_PATTERN)
    secondary: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    background: str = Field(pattern=HEX_COLOR_PATTERN)
    text: str = Field(pattern=HEX_COLOR_PATTERN)
    accent: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)


class ThemeFonts(_Schema):
    heading: str
    body: str


class Theme(_Schema):
    color_scheme: ColorScheme = ColorScheme.light
    colors: ThemeColors
    fonts: ThemeFonts


class LandingPage(_Schema):
    """A generated landing page document: ordered sections plus theme and metadata."""

    id: str | None = None
    title: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    business_profile: BusinessProfile
    sections: list[Section] = Field(default_factory=list)
    theme: Theme
    is_published: bool = False
    published_url: str | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "LandingPage":
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"duplicate section id: {section.id}")
            seen.add(section.id)
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not precede created_at")
        return self

    def find_section(self, section_id: str) -> Section | None:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None


__all__ = ["ColorScheme", "Theme", "ThemeColors", "ThemeFonts", "LandingPage", "utcnow"]
