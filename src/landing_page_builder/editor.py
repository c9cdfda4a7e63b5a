from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from .dictionaries import PALETTES
from .errors import InvalidInputError, SectionNotFoundError
from .generator import ContentGenerator, GeneratedSection
from .models.page import ColorScheme, LandingPage, utcnow
from .models.profile import BusinessProfile
from .models.section import Section, SectionVariant

logger = logging.getLogger(__name__)


def touch(page: LandingPage) -> None:
    """Advance ``updated_at``; never moves backwards, even if the clock does."""
    page.updated_at = max(utcnow(), page.updated_at, page.created_at)


def sorted_sections(page: LandingPage) -> list[Section]:
    # sorted() is stable, so equal orders keep their list position.
    return sorted(
        page.sections,
        key=lambda section: section.order if section.order is not None else float("inf"),
    )


def next_order(page: LandingPage) -> int:
    orders = [section.order for section in page.sections if section.order is not None]
    return max(orders, default=-1) + 1


class PageEditor:
    """Section mutations on a single page.

    Callers must hold exclusive access to the page for the duration of a call.
    Every method mutates the page in place and bumps ``updated_at``.
    """

    def __init__(self, generator: ContentGenerator | None = None) -> None:
        self._generator = generator or ContentGenerator()

    def update_section_content(
        self,
        page: LandingPage,
        section_id: str,
        partial: Mapping[str, Any],
        *,
        title: str | None = None,
    ) -> LandingPage:
        section = self._require(page, section_id)
        content_model = type(section.content)
        merged = section.content.model_dump()
        merged.update(_to_field_names(content_model, partial))
        try:
            section.content = content_model.model_validate(merged)
        except ValidationError as exc:
            raise InvalidInputError(
                f"Invalid content for {section.variant} section {section_id}: {exc}"
            ) from exc
        if title is not None:
            section.title = title
        touch(page)
        return page

    def add_section(
        self,
        page: LandingPage,
        variant: SectionVariant | str,
        profile: BusinessProfile | Mapping[str, Any] | None = None,
        hint: str | None = None,
    ) -> GeneratedSection:
        generated = self._generator.generate_section(
            variant,
            profile if profile is not None else page.business_profile,
            hint,
        )
        section = generated.section
        # Generated ids are uuid4, a clash means the caller injected a duplicate.
        if page.find_section(section.id) is not None:
            raise InvalidInputError(f"Duplicate section id: {section.id}")
        section.order = next_order(page)
        page.sections.append(section)
        touch(page)
        logger.info(
            "Added section",
            extra={"page_id": page.id, "section_id": section.id, "order": section.order},
        )
        return generated

    def remove_section(self, page: LandingPage, section_id: str) -> LandingPage:
        section = self._require(page, section_id)
        page.sections = [item for item in page.sections if item is not section]
        touch(page)
        return page

    def reorder_sections(self, page: LandingPage, ordered_ids: Sequence[str]) -> LandingPage:
        """Give each listed section its index as order.

        Sections missing from ``ordered_ids`` keep their previous order, so a partial
        list can leave duplicate orders behind. Pass every id for a total order.
        """
        positions = {section_id: index for index, section_id in enumerate(ordered_ids)}
        for section in page.sections:
            if section.id in positions:
                section.order = positions[section.id]
        unknown = set(positions) - {section.id for section in page.sections}
        if unknown:
            logger.debug("Ignoring unknown ids in reorder", extra={"ids": sorted(unknown)})
        touch(page)
        return page

    def set_color_scheme(self, page: LandingPage, scheme: ColorScheme | str) -> LandingPage:
        try:
            scheme = ColorScheme(scheme)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown color scheme: {scheme!r}") from exc
        palette = PALETTES[scheme]
        page.theme.color_scheme = scheme
        page.theme.colors.background = palette.background
        page.theme.colors.text = palette.text
        touch(page)
        return page

    def toggle_dark_mode(self, page: LandingPage) -> LandingPage:
        scheme = ColorScheme.light if page.theme.color_scheme == ColorScheme.dark else ColorScheme.dark
        return self.set_color_scheme(page, scheme)

    def mark_published(self, page: LandingPage, url: str) -> LandingPage:
        page.is_published = True
        page.published_url = url
        touch(page)
        return page

    def _require(self, page: LandingPage, section_id: str) -> Section:
        section = page.find_section(section_id)
        if section is None:
            raise SectionNotFoundError(section_id)
        return section


def _to_field_names(model: type, partial: Mapping[str, Any]) -> dict[str, Any]:
    aliases = {field.alias: name for name, field in model.model_fields.items() if field.alias}
    result: dict[str, Any] = {}
    for key, value in partial.items():
        name = aliases.get(key, key)
        if name not in model.model_fields:
            raise InvalidInputError(f"Unknown field '{key}' for {model.__name__}")
        result[name] = value
    return result


__all__ = ["PageEditor", "sorted_sections", "next_order", "touch"]
