from __future__ import annotations

import logging
import re

from .errors import InvalidInputError
from .models.page import LandingPage

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    return _WHITESPACE.sub("-", title.strip().lower())


class SlugDeployer:
    """Mock deploy target: publishes nothing, returns ``https://<slug>.<domain>``."""

    def __init__(self, *, domain: str = "netlify.app") -> None:
        self._domain = domain

    def deploy(self, page: LandingPage) -> str:
        slug = slugify(page.title or "")
        if not slug:
            raise InvalidInputError("Page title is required to deploy")
        url = f"https://{slug}.{self._domain}"
        logger.info("Deployed page", extra={"page_id": page.id, "url": url})
        return url


__all__ = ["SlugDeployer", "slugify"]
