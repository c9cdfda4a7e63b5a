from __future__ import annotations


class LandingPageError(Exception):
    """Base class for every error raised by landing_page_builder."""


class InvalidInputError(LandingPageError):
    """Caller supplied a malformed profile, page or request."""


class NotFoundError(LandingPageError):
    pass


class PageNotFoundError(NotFoundError):
    def __init__(self, page_id: str) -> None:
        super().__init__(f"Page not found: {page_id}")
        self.page_id = page_id


class SectionNotFoundError(NotFoundError):
    def __init__(self, section_id: str) -> None:
        super().__init__(f"Section not found: {section_id}")
        self.section_id = section_id


class ExportNotFoundError(NotFoundError):
    def __init__(self, export_id: str, filename: str | None = None) -> None:
        target = f"{export_id}/{filename}" if filename else export_id
        super().__init__(f"Export not found: {target}")
        self.export_id = export_id
        self.filename = filename


class UpstreamError(LandingPageError):
    """The AI collaborator failed for a reason other than capacity."""


class UpstreamParseError(UpstreamError):
    """The AI collaborator answered, but the payload does not match the section schema."""


class UpstreamCapacityError(UpstreamError):
    """The AI collaborator is out of quota, overloaded or timed out."""


__all__ = [
    "LandingPageError",
    "InvalidInputError",
    "NotFoundError",
    "PageNotFoundError",
    "SectionNotFoundError",
    "ExportNotFoundError",
    "UpstreamError",
    "UpstreamParseError",
    "UpstreamCapacityError",
]
