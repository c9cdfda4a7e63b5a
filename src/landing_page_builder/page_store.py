from __future__ import annotations

import logging
import threading
from typing import Dict, Protocol

from .errors import PageNotFoundError
from .models.page import LandingPage
from .models.section import new_id

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100


class PageStore(Protocol):
    """Persistence for landing pages.

    ``list`` returns at most ``limit`` pages, most recently updated first.
    """

    def save(self, page: LandingPage) -> LandingPage:
        ...

    def find(self, page_id: str) -> LandingPage:
        ...

    def list(self, *, limit: int = DEFAULT_LIST_LIMIT) -> list[LandingPage]:
        ...

    def delete(self, page_id: str) -> None:
        ...


class InMemoryPageStore:
    """Process-local page store for development and tests.

    Pages are deep-copied on the way in and out so no caller shares a page with the store.
    """

    def __init__(self) -> None:
        self._pages: Dict[str, LandingPage] = {}
        self._lock = threading.Lock()

    def save(self, page: LandingPage) -> LandingPage:
        with self._lock:
            stored = page.model_copy(deep=True)
            if not stored.id:
                stored.id = new_id()
            self._pages[stored.id] = stored
            logger.debug("Saved page", extra={"page_id": stored.id})
            return stored.model_copy(deep=True)

    def find(self, page_id: str) -> LandingPage:
        with self._lock:
            page = self._pages.get(page_id)
            if page is None:
                raise PageNotFoundError(page_id)
            return page.model_copy(deep=True)

    def list(self, *, limit: int = DEFAULT_LIST_LIMIT) -> list[LandingPage]:
        with self._lock:
            pages = sorted(self._pages.values(), key=lambda page: page.updated_at, reverse=True)
            return [page.model_copy(deep=True) for page in pages[:limit]]

    def delete(self, page_id: str) -> None:
        with self._lock:
            if self._pages.pop(page_id, None) is None:
                raise PageNotFoundError(page_id)
            logger.debug("Deleted page", extra={"page_id": page_id})


__all__ = ["PageStore", "InMemoryPageStore", "DEFAULT_LIST_LIMIT"]
