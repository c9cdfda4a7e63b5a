from __future__ import annotations

import uuid
from enum import Enum
from typing import Annotated, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


class SectionVariant(str, Enum):
    hero = "hero"
    about = "about"
    features = "features"
    testimonials = "testimonials"
    cta = "cta"
    pricing = "pricing"
    custom = "custom"


class CustomLayout(str, Enum):
    text_only = "text-only"
    text_image = "text-image"
    custom_html = "custom-html"


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Content payloads, one per variant.


class HeroContent(_Schema):
    headline: str
    subheadline: str
    cta_text: str
    cta_link: str = "#contact"
    background_image: str | None = None


class AboutContent(_Schema):
    title: str
    content: str
    image: str | None = None


class Feature(_Schema):
    id: str = Field(default_factory=new_id)
    title: str
    description: str
    icon: str | None = None


class FeaturesContent(_Schema):
    title: str
    subtitle: str | None = None
    features: Sequence[Feature] = Field(default_factory=list)


class Testimonial(_Schema):
    id: str = Field(default_factory=new_id)
    quote: str
    author: str
    role: str | None = None
    company: str | None = None
    avatar: str | None = None


class TestimonialsContent(_Schema):
    title: str
    testimonials: Sequence[Testimonial] = Field(default_factory=list)


class CTAContent(_Schema):
    title: str
    subtitle: str | None = None
    button_text: str
    button_link: str = "#contact"
    background_image: str | None = None


class PricingTier(_Schema):
    id: str = Field(default_factory=new_id)
    name: str
    price: str
    description: str
    features: Sequence[str] = Field(default_factory=list)
    cta_text: str
    popular: bool = False


class PricingContent(_Schema):
    title: str
    subtitle: str | None = None
    tiers: Sequence[PricingTier] = Field(default_factory=list)


class CustomContent(_Schema):
    title: str
    content: str
    layout: CustomLayout = CustomLayout.text_only
    image: str | None = None
    custom_html: str | None = None


# Sections. ``variant`` is the discriminator of the ``Section`` union.


class _SectionBase(_Schema):
    id: str = Field(default_factory=new_id)
    title: str
    order: int | None = None


class HeroSection(_SectionBase):
    variant: Literal["hero"] = "hero"
    content: HeroContent


class AboutSection(_SectionBase):
    variant: Literal["about"] = "about"
    content: AboutContent


class FeaturesSection(_SectionBase):
    variant: Literal["features"] = "features"
    content: FeaturesContent


class TestimonialsSection(_SectionBase):
    variant: Literal["testimonials"] = "testimonials"
    content: TestimonialsContent


class CTASection(_SectionBase):
    variant: Literal["cta"] = "cta"
    content: CTAContent


class PricingSection(_SectionBase):
    variant: Literal["pricing"] = "pricing"
    content: PricingContent


class CustomSection(_SectionBase):
    variant: Literal["custom"] = "custom"
    content: CustomContent


Section = Annotated[
    Union[
        HeroSection,
        AboutSection,
        FeaturesSection,
        TestimonialsSection,
        CTASection,
        PricingSection,
        CustomSection,
    ],
    Field(discriminator="variant"),
]

SECTION_MODELS: dict[str, type[_SectionBase]] = {
    SectionVariant.hero.value: HeroSection,
    SectionVariant.about.value: AboutSection,
    SectionVariant.features.value: FeaturesSection,
    SectionVariant.testimonials.value: TestimonialsSection,
    SectionVariant.cta.value: CTASection,
    SectionVariant.pricing.value: PricingSection,
    SectionVariant.custom.value: CustomSection,
}

section_adapter: TypeAdapter[Section] = TypeAdapter(Section)


__all__ = [
    "new_id",
    "SectionVariant",
    "CustomLayout",
    "HeroContent",
    "AboutContent",
    "Feature",
    "FeaturesContent",
    "Testimonial",
    "TestimonialsContent",
    "CTAContent",
    "PricingTier",
    "PricingContent",
    "CustomContent",
    "HeroSection",
    "AboutSection",
    "FeaturesSection",
    "TestimonialsSection",
    "CTASection",
    "PricingSection",
    "CustomSection",
    "Section",
    "SECTION_MODELS",
    "section_adapter",
]
