from __future__ import annotations

import logging
from typing import Any

from google.cloud import firestore
from pydantic import ValidationError

from .errors import InvalidInputError, PageNotFoundError
from .models.page import LandingPage
from .page_store import DEFAULT_LIST_LIMIT

logger = logging.getLogger(__name__)


class FirestorePageStore:
    """Firestore-backed page store for production use."""

    COLLECTION_NAME = "pages"

    def __init__(self, project_id: str | None = None, *, client: Any | None = None) -> None:
        self._db = client or firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def save(self, page: LandingPage) -> LandingPage:
        """Create or replace a page document; assigns a Firestore id on first save."""
        stored = page.model_copy(deep=True)
        if not stored.id:
            # Use Firestore auto-generated ID for new pages
            stored.id = self._collection.document().id

        self._collection.document(stored.id).set(self._to_firestore_dict(stored))

        logger.info(
            "Saved page",
            extra={"page_id": stored.id, "section_count": len(stored.sections)},
        )
        return stored

    def find(self, page_id: str) -> LandingPage:
        doc = self._collection.document(page_id).get()
        if not doc.exists:
            raise PageNotFoundError(page_id)
        return self._from_firestore_dict(doc.id, doc.to_dict())

    def list(self, *, limit: int = DEFAULT_LIST_LIMIT) -> list[LandingPage]:
        """List pages, most recently updated first."""
        query = self._collection.order_by(
            "updatedAt", direction=firestore.Query.DESCENDING
        ).limit(limit)
        return [self._from_firestore_dict(doc.id, doc.to_dict()) for doc in query.stream()]

    def delete(self, page_id: str) -> None:
        doc_ref = self._collection.document(page_id)
        if not doc_ref.get().exists:
            raise PageNotFoundError(page_id)
        doc_ref.delete()
        logger.info("Deleted page", extra={"page_id": page_id})

    def _to_firestore_dict(self, page: LandingPage) -> dict[str, Any]:
        # Timestamps stay datetimes so Firestore can order by them.
        data = page.model_dump(mode="json", by_alias=True, exclude={"id"})
        data["createdAt"] = page.created_at
        data["updatedAt"] = page.updated_at
        return data

    def _from_firestore_dict(self, page_id: str, data: dict[str, Any] | None) -> LandingPage:
        try:
            return LandingPage.model_validate({**(data or {}), "id": page_id})
        except ValidationError as exc:
            logger.error("Stored page failed validation", extra={"page_id": page_id})
            raise InvalidInputError(f"Stored page {page_id} is malformed: {exc}") from exc


__all__ = ["FirestorePageStore"]
