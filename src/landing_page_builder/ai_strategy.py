from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Protocol, Sequence

from pydantic import ValidationError

from .dictionaries import DOCUMENT_SEQUENCE
from .errors import UpstreamParseError
from .models.profile import BusinessProfile
from .models.section import Section, SectionVariant, section_adapter

logger = logging.getLogger(__name__)


class AICollaborator(Protocol):
    """Anything that turns an instruction into parsed JSON.

    Implementations raise ``UpstreamCapacityError`` for quota/overload/timeout,
    ``UpstreamParseError`` for text that is not JSON and ``UpstreamError`` otherwise.
    """

    def generate_json(self, prompt: str) -> Any:
        ...


SYSTEM_PREAMBLE = (
    "You are a professional copywriter and web designer specializing in creating "
    "compelling landing pages."
)

# Output shape per variant, as the collaborator is asked to return it.
CONTENT_SHAPES: Mapping[SectionVariant, Mapping[str, Any]] = {
    SectionVariant.hero: {
        "headline": "",
        "subheadline": "",
        "ctaText": "",
        "ctaLink": "#contact",
    },
    SectionVariant.about: {"title": "", "content": ""},
    SectionVariant.features: {
        "title": "",
        "subtitle": "",
        "features": [{"title": "", "description": "", "icon": ""}],
    },
    SectionVariant.testimonials: {
        "title": "",
        "testimonials": [{"quote": "", "author": "", "role": "", "company": ""}],
    },
    SectionVariant.cta: {
        "title": "",
        "subtitle": "",
        "buttonText": "",
        "buttonLink": "#contact",
    },
    SectionVariant.pricing: {
        "title": "",
        "subtitle": "",
        "tiers": [
            {
                "name": "",
                "price": "",
                "description": "",
                "features": [""],
                "ctaText": "",
                "popular": False,
            }
        ],
    },
    SectionVariant.custom: {"title": "", "content": "", "layout": "text-only"},
}

SECTION_BRIEFS: Mapping[SectionVariant, str] = {
    SectionVariant.hero: "Hero section with headline, subheadline, and call-to-action text",
    SectionVariant.about: "About section with company description",
    SectionVariant.features: "Features section with descriptions for each key feature",
    SectionVariant.testimonials: "Testimonials section with 3 fictional customer quotes",
    SectionVariant.cta: "Call-to-action section",
    SectionVariant.pricing: "Pricing section with three tiers",
    SectionVariant.custom: "Custom text section",
}


def _shape(variant: SectionVariant) -> dict[str, Any]:
    return {"variant": variant.value, "content": CONTENT_SHAPES[variant]}


class AIStrategy:
    name = "ai"

    def __init__(self, collaborator: AICollaborator) -> None:
        self._collaborator = collaborator

    def build_sections(self, profile: BusinessProfile) -> list[Section]:
        prompt = self.page_prompt(profile)
        payload = self._collaborator.generate_json(prompt)
        raw_sections = payload.get("sections") if isinstance(payload, Mapping) else None
        if not isinstance(raw_sections, list) or not raw_sections:
            raise UpstreamParseError("AI response has no 'sections' list")
        sections = [self._to_section(raw) for raw in raw_sections]
        logger.info(
            "Parsed AI page sections",
            extra={"section_count": len(sections), "business_name": profile.business_name},
        )
        return sections

    def build_section(
        self,
        variant: SectionVariant,
        profile: BusinessProfile,
        hint: str | None = None,
    ) -> Section:
        payload = self._collaborator.generate_json(self.section_prompt(variant, profile, hint))
        section = self._to_section(payload)
        if section.variant != variant.value:
            raise UpstreamParseError(
                f"AI returned a '{section.variant}' section, expected '{variant.value}'"
            )
        return section

    def page_prompt(self, profile: BusinessProfile) -> str:
        briefs = "\n".join(
            f"{index}. {SECTION_BRIEFS[variant]}"
            for index, variant in enumerate(DOCUMENT_SEQUENCE, start=1)
        )
        shape = {"sections": [_shape(variant) for variant in DOCUMENT_SEQUENCE]}
        return f"""{SYSTEM_PREAMBLE}

{self._describe(profile)}

Generate the following sections for the landing page:
{briefs}

Format the response as a JSON object that follows this structure:
{json.dumps(shape, indent=2)}
"""

    def section_prompt(
        self,
        variant: SectionVariant,
        profile: BusinessProfile,
        hint: str | None = None,
    ) -> str:
        extra = f"\nAdditional instructions: {hint}\n" if hint else ""
        return f"""{SYSTEM_PREAMBLE}

Create a {variant.value} section for a landing page.
{self._describe(profile)}
{extra}
Format the response as a JSON object that follows this structure:
{json.dumps(_shape(variant), indent=2)}
"""

    def _describe(self, profile: BusinessProfile) -> str:
        return (
            f'The business is a {profile.industry} business called "{profile.business_name}".\n'
            f"The tone should be {profile.tone}.\n"
            f"The key features of the business are: {', '.join(profile.key_features)}.\n"
            f"The target audience is: {profile.target_audience or 'general customers'}.\n"
            f"Business vision: {profile.vision or 'Not specified'}."
        )

    def _to_section(self, raw: Any) -> Section:
        if not isinstance(raw, Mapping):
            raise UpstreamParseError("AI section is not a JSON object")
        variant = raw.get("variant") or raw.get("type")
        content = raw.get("content")
        if not isinstance(variant, str) or not isinstance(content, Mapping):
            raise UpstreamParseError("AI section is missing 'variant' or 'content'")
        title = raw.get("title") or content.get("title") or variant.capitalize()
        try:
            return section_adapter.validate_python(
                {"variant": variant, "title": title, "content": dict(content)}
            )
        except ValidationError as exc:
            logger.error(
                "AI section failed schema validation",
                extra={"variant": variant, "errors": _summarize(exc.errors())},
            )
            raise UpstreamParseError(
                f"AI '{variant}' section does not match the schema ({exc.error_count()} errors)"
            ) from exc


def _summarize(errors: Sequence[Mapping[str, Any]]) -> list[str]:
    return [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors]


__all__ = ["AICollaborator", "AIStrategy"]
