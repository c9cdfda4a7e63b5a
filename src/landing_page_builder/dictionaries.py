from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .models.page import ColorScheme
from .models.section import SectionVariant

DEFAULT_HERO_IMAGE = (
    "https://images.pexels.com/photos/3183150/pexels-photo-3183150.jpeg"
    "?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=2"
)
DEFAULT_ABOUT_IMAGE = (
    "https://images.pexels.com/photos/3184339/pexels-photo-3184339.jpeg"
    "?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=2"
)
DEFAULT_CTA_IMAGE = (
    "https://images.pexels.com/photos/7130560/pexels-photo-7130560.jpeg"
    "?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=2"
)

ICON_SET: Sequence[str] = ("Zap", "Shield", "BarChart", "Clock", "Users")
DEFAULT_ICON = "Star"

DEFAULT_FONT = "Inter, sans-serif"
DEFAULT_SECONDARY_COLOR = "#93c5fd"
DEFAULT_ACCENT_COLOR = "#f97316"


@dataclass(frozen=True)
class Palette:
    background: str
    text: str


PALETTES: Mapping[ColorScheme, Palette] = {
    ColorScheme.light: Palette(background="#ffffff", text="#111827"),
    ColorScheme.dark: Palette(background="#121212", text="#ffffff"),
}

DOCUMENT_SEQUENCE: Sequence[SectionVariant] = (
    SectionVariant.hero,
    SectionVariant.about,
    SectionVariant.features,
    SectionVariant.testimonials,
    SectionVariant.cta,
)

SECTION_TITLES: Mapping[SectionVariant, str] = {
    SectionVariant.hero: "Hero Section",
    SectionVariant.about: "About Us",
    SectionVariant.features: "Features",
    SectionVariant.testimonials: "Testimonials",
    SectionVariant.cta: "Call to Action",
    SectionVariant.pricing: "Pricing",
    SectionVariant.custom: "Custom Section",
}


@dataclass(frozen=True)
class QuoteTemplate:
    quote: str
    author: str
    role: str
    company: str


# Quotes are formatted with ``business_name`` and ``industry``.
TESTIMONIAL_TEMPLATES: Sequence[QuoteTemplate] = (
    QuoteTemplate(
        quote="{business_name} has completely transformed our approach to {industry}. The results speak for themselves.",
        author="Jane Smith",
        role="CEO",
        company="Acme Inc.",
    ),
    QuoteTemplate(
        quote="Working with {business_name} has been a game-changer for our business. Highly recommended!",
        author="John Doe",
        role="Marketing Director",
        company="Global Corp",
    ),
    QuoteTemplate(
        quote="The team at {business_name} consistently delivers exceptional results. We couldn't be happier.",
        author="Sarah Johnson",
        role="Operations Manager",
        company="Tech Solutions",
    ),
)

# A standalone section is shorter than its counterpart in a full page.
STANDALONE_FEATURE_LIMIT = 3
STANDALONE_TESTIMONIAL_LIMIT = 2


@dataclass(frozen=True)
class PricingTemplate:
    name: str
    price: str
    description: str
    features: Sequence[str]
    cta_text: str
    popular: bool = False


PRICING_TEMPLATES: Sequence[PricingTemplate] = (
    PricingTemplate(
        name="Starter",
        price="$19/mo",
        description="Everything you need to get going with {business_name}.",
        features=("Core features", "Email support", "1 team member"),
        cta_text="Start Free Trial",
    ),
    PricingTemplate(
        name="Professional",
        price="$49/mo",
        description="For growing {industry} teams that need more power.",
        features=("Everything in Starter", "Priority support", "Up to 10 team members"),
        cta_text="Choose Professional",
        popular=True,
    ),
    PricingTemplate(
        name="Enterprise",
        price="Custom",
        description="Tailored {industry} solutions for large organizations.",
        features=("Everything in Professional", "Dedicated account manager", "Unlimited team members"),
        cta_text="Contact Sales",
    ),
)


__all__ = [
    "DEFAULT_HERO_IMAGE",
    "DEFAULT_ABOUT_IMAGE",
    "DEFAULT_CTA_IMAGE",
    "ICON_SET",
    "DEFAULT_ICON",
    "DEFAULT_FONT",
    "DEFAULT_SECONDARY_COLOR",
    "DEFAULT_ACCENT_COLOR",
    "Palette",
    "PALETTES",
    "DOCUMENT_SEQUENCE",
    "SECTION_TITLES",
    "QuoteTemplate",
    "TESTIMONIAL_TEMPLATES",
    "STANDALONE_FEATURE_LIMIT",
    "STANDALONE_TESTIMONIAL_LIMIT",
    "PricingTemplate",
    "PRICING_TEMPLATES",
]
