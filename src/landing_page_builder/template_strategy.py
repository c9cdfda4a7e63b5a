from __future__ import annotations

from typing import Callable

from .dictionaries import (
    DEFAULT_ABOUT_IMAGE,
    DEFAULT_CTA_IMAGE,
    DEFAULT_HERO_IMAGE,
    DOCUMENT_SEQUENCE,
    ICON_SET,
    PRICING_TEMPLATES,
    SECTION_TITLES,
    STANDALONE_FEATURE_LIMIT,
    STANDALONE_TESTIMONIAL_LIMIT,
    TESTIMONIAL_TEMPLATES,
)
from .models.profile import BusinessProfile
from .models.section import (
    AboutContent,
    AboutSection,
    CTAContent,
    CTASection,
    CustomContent,
    CustomLayout,
    CustomSection,
    Feature,
    FeaturesContent,
    FeaturesSection,
    HeroContent,
    HeroSection,
    PricingContent,
    PricingSection,
    PricingTier,
    Section,
    SectionVariant,
    Testimonial,
    TestimonialsContent,
    TestimonialsSection,
)


class TemplateStrategy:
    """Deterministic section synthesis from fixed copy templates.

    Needs no collaborator and never fails for a validated profile, which makes it
    the fallback whenever the AI strategy runs out of capacity.
    """

    name = "template"

    def __init__(self) -> None:
        self._builders: dict[SectionVariant, Callable[[BusinessProfile, bool], Section]] = {
            SectionVariant.hero: self._hero,
            SectionVariant.about: self._about,
            SectionVariant.features: self._features,
            SectionVariant.testimonials: self._testimonials,
            SectionVariant.cta: self._cta,
            SectionVariant.pricing: self._pricing,
            SectionVariant.custom: self._custom,
        }

    def build_sections(self, profile: BusinessProfile) -> list[Section]:
        return [self._builders[variant](profile, False) for variant in DOCUMENT_SEQUENCE]

    def build_section(
        self,
        variant: SectionVariant,
        profile: BusinessProfile,
        hint: str | None = None,
    ) -> Section:
        # Free-text hints only steer the AI strategy.
        return self._builders[variant](profile, True)

    def _hero(self, profile: BusinessProfile, standalone: bool) -> Section:
        return HeroSection(
            title=SECTION_TITLES[SectionVariant.hero],
            content=HeroContent(
                headline=f"Transform Your {profile.industry} with {profile.business_name}",
                subheadline=(
                    f"The {profile.tone} solution designed to help businesses thrive "
                    "in today's competitive landscape."
                ),
                cta_text="Get Started",
                cta_link="#contact",
                background_image=DEFAULT_HERO_IMAGE,
            ),
        )

    def _about(self, profile: BusinessProfile, standalone: bool) -> Section:
        name = profile.business_name
        industry = profile.industry
        paragraphs = [
            f"At {name}, we're passionate about delivering exceptional {industry} solutions "
            "that make a difference.",
            "Our team of experts works tirelessly to ensure that every client receives "
            "personalized service and outstanding results.",
        ]
        if not standalone:
            paragraphs.append(
                "With years of experience and a commitment to excellence, we've established "
                f"ourselves as leaders in the {industry} industry."
            )
        return AboutSection(
            title=SECTION_TITLES[SectionVariant.about],
            content=AboutContent(
                title="About Us",
                content=" ".join(paragraphs),
                image=DEFAULT_ABOUT_IMAGE,
            ),
        )

    def _features(self, profile: BusinessProfile, standalone: bool) -> Section:
        names = list(profile.key_features)
        if standalone:
            names = names[:STANDALONE_FEATURE_LIMIT]
        features = [
            Feature(
                title=name,
                description=(
                    f"Our {name} solution provides exceptional value by streamlining "
                    "processes and improving outcomes."
                ),
                icon=ICON_SET[index % len(ICON_SET)],
            )
            for index, name in enumerate(names)
        ]
        return FeaturesSection(
            title=SECTION_TITLES[SectionVariant.features],
            content=FeaturesContent(
                title="Our Key Features",
                subtitle="Discover what makes us different",
                features=features,
            ),
        )

    def _testimonials(self, profile: BusinessProfile, standalone: bool) -> Section:
        templates = list(TESTIMONIAL_TEMPLATES)
        if standalone:
            templates = templates[:STANDALONE_TESTIMONIAL_LIMIT]
        testimonials = [
            Testimonial(
                quote=template.quote.format(
                    business_name=profile.business_name,
                    industry=profile.industry,
                ),
                author=template.author,
                role=template.role,
                company=template.company,
            )
            for template in templates
        ]
        return TestimonialsSection(
            title=SECTION_TITLES[SectionVariant.testimonials],
            content=TestimonialsContent(title="What Our Clients Say", testimonials=testimonials),
        )

    def _cta(self, profile: BusinessProfile, standalone: bool) -> Section:
        return CTASection(
            title=SECTION_TITLES[SectionVariant.cta],
            content=CTAContent(
                title="Ready to Get Started?",
                subtitle=(
                    "Join the many satisfied clients who have already transformed their "
                    f"{profile.industry} with {profile.business_name}."
                ),
                button_text="Contact Us Today",
                button_link="#contact",
                background_image=DEFAULT_CTA_IMAGE,
            ),
        )

    def _pricing(self, profile: BusinessProfile, standalone: bool) -> Section:
        tiers = [
            PricingTier(
                name=template.name,
                price=template.price,
                description=template.description.format(
                    business_name=profile.business_name,
                    industry=profile.industry,
                ),
                features=list(template.features),
                cta_text=template.cta_text,
                popular=template.popular,
            )
            for template in PRICING_TEMPLATES
        ]
        return PricingSection(
            title=SECTION_TITLES[SectionVariant.pricing],
            content=PricingContent(
                title="Simple, Transparent Pricing",
                subtitle=f"Choose the {profile.business_name} plan that fits your needs.",
                tiers=tiers,
            ),
        )

    def _custom(self, profile: BusinessProfile, standalone: bool) -> Section:
        return CustomSection(
            title=SECTION_TITLES[SectionVariant.custom],
            content=CustomContent(
                title="Custom Section",
                content=(
                    f"This is a custom section for {profile.business_name}. It can be customized "
                    "to fit your specific needs and requirements."
                ),
                layout=CustomLayout.text_only,
            ),
        )


__all__ = ["TemplateStrategy"]
