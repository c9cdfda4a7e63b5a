from datetime import timedelta

import pytest

from landing_page_builder.compiler import TemplateCompiler
from landing_page_builder.deployer import SlugDeployer, slugify
from landing_page_builder.errors import (
    ExportNotFoundError,
    InvalidInputError,
    PageNotFoundError,
)
from landing_page_builder.export_store import FileSystemExportStore
from landing_page_builder.firestore_page_store import FirestorePageStore
from landing_page_builder.page_store import DEFAULT_LIST_LIMIT, InMemoryPageStore


def test_in_memory_store_round_trip(page):
    store = InMemoryPageStore()

    saved = store.save(page)

    assert saved.id == page.id
    assert store.find(page.id) == page


def test_in_memory_store_assigns_missing_id(page):
    page.id = None

    saved = InMemoryPageStore().save(page)

    assert saved.id
    assert page.id is None


def test_in_memory_store_isolates_callers(page):
    store = InMemoryPageStore()
    store.save(page)

    loaded = store.find(page.id)
    loaded.sections.clear()
    page.title = "Changed"

    stored = store.find(page.id)
    assert len(stored.sections) == 5
    assert stored.title == "Acme Landing Page"


def test_in_memory_store_lists_newest_first(page):
    store = InMemoryPageStore()
    older = page.model_copy(deep=True, update={"id": "older"})
    newer = page.model_copy(
        deep=True, update={"id": "newer", "updated_at": page.updated_at + timedelta(minutes=5)}
    )
    store.save(older)
    store.save(newer)

    assert [item.id for item in store.list()] == ["newer", "older"]


def test_stores_share_the_list_limit(page):
    stores = [InMemoryPageStore(), FirestorePageStore(client=FakeFirestoreClient())]
    for store in stores:
        for index in range(DEFAULT_LIST_LIMIT + 2):
            store.save(
                page.model_copy(
                    deep=True,
                    update={"id": f"page-{index}", "updated_at": page.updated_at + timedelta(seconds=index)},
                )
            )

        assert len(store.list()) == DEFAULT_LIST_LIMIT
        assert [item.id for item in store.list(limit=2)] == [
            f"page-{DEFAULT_LIST_LIMIT + 1}",
            f"page-{DEFAULT_LIST_LIMIT}",
        ]


def test_in_memory_store_reports_missing_pages(page):
    store = InMemoryPageStore()

    with pytest.raises(PageNotFoundError):
        store.find("missing")
    with pytest.raises(PageNotFoundError):
        store.delete("missing")

    store.save(page)
    store.delete(page.id)
    with pytest.raises(PageNotFoundError):
        store.find(page.id)


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self.exists = data is not None
        self._data = data

    def to_dict(self):
        return self._data


class FakeDocument:
    def __init__(self, documents, doc_id):
        self._documents = documents
        self.id = doc_id

    def set(self, data):
        self._documents[self.id] = data

    def get(self):
        return FakeSnapshot(self.id, self._documents.get(self.id))

    def delete(self):
        self._documents.pop(self.id, None)


class FakeQuery:
    def __init__(self, documents, field, descending):
        self._documents = documents
        self._field = field
        self._descending = descending
        self._limit = None

    def limit(self, count):
        self._limit = count
        return self

    def stream(self):
        items = sorted(
            self._documents.items(),
            key=lambda item: item[1][self._field],
            reverse=self._descending,
        )
        return [FakeSnapshot(doc_id, data) for doc_id, data in items[: self._limit]]


class FakeCollection:
    def __init__(self):
        self.documents = {}
        self._counter = 0

    def document(self, doc_id=None):
        if doc_id is None:
            self._counter += 1
            doc_id = f"auto-{self._counter}"
        return FakeDocument(self.documents, doc_id)

    def order_by(self, field, direction=None):
        return FakeQuery(self.documents, field, direction == "DESCENDING")


class FakeFirestoreClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


def test_firestore_store_round_trip(page):
    client = FakeFirestoreClient()
    store = FirestorePageStore(client=client)

    store.save(page)
    stored = client.collections["pages"].documents[page.id]

    assert "id" not in stored
    assert stored["businessProfile"]["businessName"] == "Acme"
    assert stored["updatedAt"] == page.updated_at
    assert store.find(page.id) == page


def test_firestore_store_assigns_document_id(page):
    page.id = None

    saved = FirestorePageStore(client=FakeFirestoreClient()).save(page)

    assert saved.id == "auto-1"


def test_firestore_store_lists_newest_first(page):
    store = FirestorePageStore(client=FakeFirestoreClient())
    store.save(page.model_copy(deep=True, update={"id": "older"}))
    store.save(
        page.model_copy(
            deep=True,
            update={"id": "newer", "updated_at": page.updated_at + timedelta(minutes=5)},
        )
    )

    assert [item.id for item in store.list()] == ["newer", "older"]


def test_firestore_store_reports_missing_pages():
    store = FirestorePageStore(client=FakeFirestoreClient())

    with pytest.raises(PageNotFoundError):
        store.find("missing")
    with pytest.raises(PageNotFoundError):
        store.delete("missing")


def test_firestore_store_rejects_malformed_documents():
    client = FakeFirestoreClient()
    client.collection("pages").documents["bad"] = {"title": "No theme"}

    with pytest.raises(InvalidInputError):
        FirestorePageStore(client=client).find("bad")


def test_export_store_writes_all_artifacts(page, tmp_path):
    store = FileSystemExportStore(base_path=tmp_path)

    export_id = store.create(page, year=2024)

    assert export_id.startswith("export_")
    assert sorted(path.name for path in (tmp_path / export_id).iterdir()) == [
        "index.html",
        "script.js",
        "styles.css",
    ]
    assert store.load(export_id) == TemplateCompiler().compile(page, year=2024)


def test_export_ids_are_unique(page, tmp_path):
    store = FileSystemExportStore(base_path=tmp_path)

    assert store.create(page) != store.create(page)


@pytest.mark.parametrize(
    "export_id, filename",
    [
        ("missing", "index.html"),
        ("../outside", "index.html"),
        (None, "page.json"),
        (None, "../styles.css"),
    ],
)
def test_export_store_rejects_unknown_artifacts(page, tmp_path, export_id, filename):
    store = FileSystemExportStore(base_path=tmp_path)
    created = store.create(page)

    with pytest.raises(ExportNotFoundError):
        store.read(export_id or created, filename)


@pytest.mark.parametrize(
    "title, slug",
    [
        ("Acme Landing Page", "acme-landing-page"),
        ("  Harbor   Bakery ", "harbor-bakery"),
        ("Solo", "solo"),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_deployer_returns_slug_url(page):
    assert SlugDeployer().deploy(page) == "https://acme-landing-page.netlify.app"
    assert SlugDeployer(domain="example.com").deploy(page) == "https://acme-landing-page.example.com"


def test_deployer_requires_title(page):
    page.title = "   "

    with pytest.raises(InvalidInputError):
        SlugDeployer().deploy(page)
