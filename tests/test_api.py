import gc

import pytest
from fastapi.testclient import TestClient

from conftest import load_fixture
from landing_page_builder.export_store import FileSystemExportStore
from landing_page_builder.page_store import InMemoryPageStore
from services.api import main


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(main, "page_store", InMemoryPageStore())
    monkeypatch.setattr(main, "export_store", FileSystemExportStore(base_path=tmp_path))
    return TestClient(main.app)


@pytest.fixture
def created(client):
    response = client.post("/v1/pages:generate", json={"formData": load_fixture("acme")})
    assert response.status_code == 200
    return response.json()


def test_healthcheck(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "running"


def test_generate_page_saves_by_default(client, created):
    page = created["page"]

    assert created["success"] is True
    assert created["strategy"] == "template"
    assert created["fallbackUsed"] is False
    assert [section["variant"] for section in page["sections"]] == [
        "hero",
        "about",
        "features",
        "testimonials",
        "cta",
    ]
    assert client.get(f"/v1/pages/{page['id']}").json()["title"] == "Acme Landing Page"
    assert [item["id"] for item in client.get("/v1/pages").json()] == [page["id"]]


def test_generate_page_rejects_invalid_profile(client):
    profile = {**load_fixture("acme"), "keyFeatures": []}

    response = client.post("/v1/pages:generate", json={"profile": profile})

    assert response.status_code == 422


def test_generate_section_is_not_persisted(client):
    response = client.post(
        "/v1/sections:generate",
        json={"variant": "pricing", "profile": load_fixture("acme")},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["section"]["variant"] == "pricing"
    assert body["section"]["order"] is None
    assert client.get("/v1/pages").json() == []


def test_section_mutations(client, created):
    page_id = created["page"]["id"]
    hero_id = created["page"]["sections"][0]["id"]

    added = client.post(f"/v1/pages/{page_id}/sections", json={"variant": "custom"}).json()
    assert added["page"]["sections"][-1]["order"] == 5

    updated = client.patch(
        f"/v1/pages/{page_id}/sections/{hero_id}",
        json={"content": {"headline": "Hello"}},
    ).json()
    assert updated["sections"][0]["content"]["headline"] == "Hello"

    ids = [section["id"] for section in updated["sections"]]
    reordered = client.put(
        f"/v1/pages/{page_id}/sections:reorder", json={"orderedIds": list(reversed(ids))}
    ).json()
    assert reordered["sections"][0]["order"] == len(ids) - 1

    removed = client.delete(f"/v1/pages/{page_id}/sections/{added['sectionId']}").json()
    assert added["sectionId"] not in [section["id"] for section in removed["sections"]]


def test_missing_resources_are_404(client, created):
    page_id = created["page"]["id"]

    assert client.get("/v1/pages/missing").status_code == 404
    response = client.delete(f"/v1/pages/{page_id}/sections/missing")
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"
    assert client.get("/v1/exports/missing/index.html").status_code == 404


def test_invalid_content_is_400(client, created):
    page_id = created["page"]["id"]
    hero_id = created["page"]["sections"][0]["id"]

    response = client.patch(
        f"/v1/pages/{page_id}/sections/{hero_id}", json={"content": {"nope": 1}}
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "invalid_input"


def test_theme_export_and_deploy(client, created):
    page_id = created["page"]["id"]

    themed = client.put(f"/v1/pages/{page_id}/theme", json={"colorScheme": "dark"}).json()
    assert themed["theme"]["colors"]["background"] == "#121212"

    exported = client.post(f"/v1/pages/{page_id}:export").json()
    index = client.get(exported["files"]["index.html"])
    assert index.headers["content-type"].startswith("text/html")
    assert '<body class="dark-mode">' in index.text
    styles = client.get(exported["files"]["styles.css"])
    assert styles.headers["content-type"].startswith("text/css")

    deployed = client.post(f"/v1/pages/{page_id}:deploy").json()
    assert deployed["url"] == "https://acme-landing-page.netlify.app"
    assert client.get(f"/v1/pages/{page_id}").json()["isPublished"] is True


def test_delete_page(client, created):
    page_id = created["page"]["id"]

    assert client.delete(f"/v1/pages/{page_id}").json()["success"] is True
    assert client.get(f"/v1/pages/{page_id}").status_code == 404


def test_requests_for_missing_pages_leave_no_locks(client):
    for index in range(50):
        response = client.patch(
            f"/v1/pages/missing-{index}/sections/x", json={"content": {}}
        )
        assert response.status_code == 404
        assert client.delete(f"/v1/pages/missing-{index}").status_code == 404
    gc.collect()

    assert len(main._page_locks) == 0


def test_locks_are_released_after_mutations(client, created):
    page_id = created["page"]["id"]

    client.put(f"/v1/pages/{page_id}/theme", json={"colorScheme": "dark"})
    gc.collect()

    assert page_id not in main._page_locks


def test_list_pages_honours_limit(client, created):
    client.post("/v1/pages:generate", json={"formData": load_fixture("harbor-bakery")})

    assert len(client.get("/v1/pages").json()) == 2
    assert len(client.get("/v1/pages", params={"limit": 1}).json()) == 1
    assert client.get("/v1/pages", params={"limit": 0}).status_code == 422
