from __future__ import annotations

from typing import Sequence

from .dictionaries import DEFAULT_FONT, PALETTES
from .models.page import ColorScheme, LandingPage, Theme, ThemeColors, ThemeFonts, utcnow
from .models.profile import BusinessProfile
from .models.section import Section, new_id


def derive_theme(profile: BusinessProfile) -> Theme:
    palette = PALETTES[ColorScheme.light]
    return Theme(
        color_scheme=ColorScheme.light,
        colors=ThemeColors(
            primary=profile.brand_colors.primary,
            secondary=profile.brand_colors.secondary,
            background=palette.background,
            text=palette.text,
        ),
        fonts=ThemeFonts(heading=DEFAULT_FONT, body=DEFAULT_FONT),
    )


def assemble(profile: BusinessProfile, sections: Sequence[Section], theme: Theme) -> LandingPage:
    """Wrap generated sections and a theme into a fresh, unpublished page.

    No I/O happens here; the caller decides whether and where to persist the result.
    """
    now = utcnow()
    return LandingPage(
        id=new_id(),
        title=f"{profile.business_name} Landing Page",
        created_at=now,
        updated_at=now,
        business_profile=profile,
        sections=list(sections),
        theme=theme,
        is_published=False,
        published_url=None,
    )


__all__ = ["assemble", "derive_theme"]
