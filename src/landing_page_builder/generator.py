from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol, TypeVar

from pydantic import ValidationError

from .assembler import assemble, derive_theme
from .errors import InvalidInputError, UpstreamCapacityError
from .models.page import LandingPage
from .models.profile import BusinessProfile
from .models.section import Section, SectionVariant
from .template_strategy import TemplateStrategy

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Generated using template content (AI capacity exceeded)"

T = TypeVar("T")


class GenerationStrategy(Protocol):
    name: str

    def build_sections(self, profile: BusinessProfile) -> list[Section]:
        ...

    def build_section(
        self,
        variant: SectionVariant,
        profile: BusinessProfile,
        hint: str | None = None,
    ) -> Section:
        ...


@dataclass
class GeneratedPage:
    page: LandingPage
    strategy: str
    warning: str | None = None

    @property
    def fallback_used(self) -> bool:
        return self.warning is not None

    def model_dump(self) -> dict[str, object]:
        return {
            "page": self.page.model_dump(mode="json", by_alias=True),
            "strategy": self.strategy,
            "fallbackUsed": self.fallback_used,
            "warning": self.warning,
        }


@dataclass
class GeneratedSection:
    section: Section
    strategy: str
    warning: str | None = None

    @property
    def fallback_used(self) -> bool:
        return self.warning is not None

    def model_dump(self) -> dict[str, object]:
        return {
            "section": self.section.model_dump(mode="json", by_alias=True),
            "strategy": self.strategy,
            "fallbackUsed": self.fallback_used,
            "warning": self.warning,
        }


class ContentGenerator:
    """Produces sections with the AI strategy when one is configured.

    A capacity failure on the AI path is retried once with the template strategy
    and reported through ``warning``. Every other failure propagates.
    """

    def __init__(
        self,
        *,
        ai_strategy: GenerationStrategy | None = None,
        fallback: GenerationStrategy | None = None,
    ) -> None:
        self._ai_strategy = ai_strategy
        self._fallback = fallback or TemplateStrategy()

    @property
    def ai_enabled(self) -> bool:
        return self._ai_strategy is not None

    def generate_document(self, profile: BusinessProfile | Mapping[str, Any] | None) -> GeneratedPage:
        profile = coerce_profile(profile)
        sections, strategy, warning = self._run(lambda s: s.build_sections(profile))
        for index, section in enumerate(sections):
            section.order = index
        page = assemble(profile, sections, derive_theme(profile))
        logger.info(
            "Generated landing page",
            extra={"page_id": page.id, "strategy": strategy, "section_count": len(sections)},
        )
        return GeneratedPage(page=page, strategy=strategy, warning=warning)

    def generate_section(
        self,
        variant: SectionVariant | str,
        profile: BusinessProfile | Mapping[str, Any] | None,
        hint: str | None = None,
    ) -> GeneratedSection:
        variant = coerce_variant(variant)
        profile = coerce_profile(profile)
        section, strategy, warning = self._run(lambda s: s.build_section(variant, profile, hint))
        section.order = None
        logger.info(
            "Generated section",
            extra={"variant": variant.value, "strategy": strategy, "section_id": section.id},
        )
        return GeneratedSection(section=section, strategy=strategy, warning=warning)

    def _run(self, action: Callable[[GenerationStrategy], T]) -> tuple[T, str, str | None]:
        strategy = self._ai_strategy or self._fallback
        try:
            return action(strategy), strategy.name, None
        except UpstreamCapacityError as exc:
            if strategy is self._fallback:
                raise
            logger.warning(
                "AI capacity exceeded, falling back to templates",
                extra={"reason": str(exc), "fallback": self._fallback.name},
            )
        return action(self._fallback), self._fallback.name, FALLBACK_WARNING


def coerce_profile(profile: BusinessProfile | Mapping[str, Any] | None) -> BusinessProfile:
    if profile is None:
        raise InvalidInputError("Business profile is required")
    if isinstance(profile, BusinessProfile):
        return profile
    try:
        return BusinessProfile.model_validate(profile)
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid business profile: {exc}") from exc


def coerce_variant(variant: SectionVariant | str) -> SectionVariant:
    try:
        return SectionVariant(variant)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown section variant: {variant!r}") from exc


__all__ = [
    "ContentGenerator",
    "GeneratedPage",
    "GeneratedSection",
    "GenerationStrategy",
    "FALLBACK_WARNING",
    "coerce_profile",
    "coerce_variant",
]
