from __future__ import annotations

import asyncio
import logging
import os
import uuid
import weakref
from pathlib import Path
from typing import Any, Mapping

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from landing_page_builder.ai_strategy import AIStrategy
from landing_page_builder.compiler import INDEX_FILENAME, SCRIPT_FILENAME, STYLES_FILENAME
from landing_page_builder.deployer import SlugDeployer
from landing_page_builder.editor import PageEditor
from landing_page_builder.errors import (
    InvalidInputError,
    LandingPageError,
    NotFoundError,
    UpstreamParseError,
)
from landing_page_builder.export_store import FileSystemExportStore
from landing_page_builder.generator import ContentGenerator
from landing_page_builder.logging_config import set_trace_id, setup_logging, trace_from_header
from landing_page_builder.models.page import ColorScheme, LandingPage, utcnow
from landing_page_builder.models.profile import BusinessProfile
from landing_page_builder.models.section import SectionVariant
from landing_page_builder.page_store import DEFAULT_LIST_LIMIT, InMemoryPageStore, PageStore


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeneratePageRequest(_Request):
    profile: BusinessProfile = Field(validation_alias=AliasChoices("profile", "formData"))
    save: bool = True


class GenerateSectionRequest(_Request):
    variant: SectionVariant
    profile: BusinessProfile
    prompt: str | None = None


class AddSectionRequest(_Request):
    variant: SectionVariant
    prompt: str | None = None


class UpdateSectionRequest(_Request):
    content: Mapping[str, Any] = Field(default_factory=dict)
    title: str | None = None


class ReorderSectionsRequest(_Request):
    ordered_ids: list[str]


class ThemeRequest(_Request):
    color_scheme: ColorScheme


CONTENT_TYPES = {
    INDEX_FILENAME: "text/html",
    STYLES_FILENAME: "text/css",
    SCRIPT_FILENAME: "application/javascript",
}


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
VERTEX_LOCATION = os.getenv("VERTEX_LOCATION", "us-central1")
VERTEX_MODEL = os.getenv("VERTEX_MODEL", "gemini-1.5-pro")
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))
PAGE_STORE = os.getenv("PAGE_STORE", "memory")
EXPORT_DIR = Path(os.getenv("EXPORT_DIR", "exports")).resolve()
DEPLOY_DOMAIN = os.getenv("DEPLOY_DOMAIN", "netlify.app")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="Landing Page Builder API", version="0.1.0")


def _build_page_store() -> PageStore:
    if PAGE_STORE == "firestore":
        from landing_page_builder.firestore_page_store import FirestorePageStore

        return FirestorePageStore(project_id=PROJECT_ID)
    return InMemoryPageStore()


def _build_generator() -> ContentGenerator:
    # Vertex AI needs a project; without one every page comes from templates.
    if not PROJECT_ID:
        return ContentGenerator()
    from landing_page_builder.vertex_ai_adapter import VertexAIAdapter

    adapter = VertexAIAdapter(
        project_id=PROJECT_ID,
        location=VERTEX_LOCATION,
        model_name=VERTEX_MODEL,
        timeout=AI_TIMEOUT_SECONDS,
    )
    return ContentGenerator(ai_strategy=AIStrategy(adapter))


page_store = _build_page_store()
content_generator = _build_generator()
page_editor = PageEditor(content_generator)
export_store = FileSystemExportStore(base_path=EXPORT_DIR)
deployer = SlugDeployer(domain=DEPLOY_DOMAIN)

# One writer per page at a time. A lock lives only while some request holds it.
_page_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def _page_lock(page_id: str) -> asyncio.Lock:
    lock = _page_locks.get(page_id)
    if lock is None:
        lock = asyncio.Lock()
        _page_locks[page_id] = lock
    return lock


def _dump(page: LandingPage) -> dict[str, Any]:
    return page.model_dump(mode="json", by_alias=True)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    header = request.headers.get("x-cloud-trace-context")
    set_trace_id(trace_from_header(header, PROJECT_ID) or uuid.uuid4().hex)
    return await call_next(request)


@app.exception_handler(LandingPageError)
async def handle_landing_page_error(request: Request, exc: LandingPageError) -> JSONResponse:
    if isinstance(exc, InvalidInputError):
        status_code, kind = 400, "invalid_input"
    elif isinstance(exc, NotFoundError):
        status_code, kind = 404, "not_found"
    elif isinstance(exc, UpstreamParseError):
        status_code, kind = 502, "upstream_malformed"
    else:
        status_code, kind = 502, "upstream_unavailable"
    logger.warning(
        "Request failed",
        extra={"path": request.url.path, "kind": kind, "error": str(exc)},
    )
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "kind": kind, "error": str(exc)},
    )


@app.get("/")
async def root() -> dict[str, Any]:
    return {
        "message": "Landing Page Builder API",
        "status": "running",
        "ai": "configured" if content_generator.ai_enabled else "not configured",
    }


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})


@app.post("/v1/pages:generate")
async def generate_page(request: GeneratePageRequest) -> dict[str, Any]:
    generated = await asyncio.to_thread(content_generator.generate_document, request.profile)
    page = page_store.save(generated.page) if request.save else generated.page
    result = generated.model_dump()
    result["page"] = _dump(page)
    return {"success": True, **result}


@app.post("/v1/sections:generate")
async def generate_section(request: GenerateSectionRequest) -> dict[str, Any]:
    generated = await asyncio.to_thread(
        content_generator.generate_section,
        request.variant,
        request.profile,
        request.prompt,
    )
    return {"success": True, **generated.model_dump()}


@app.get("/v1/pages")
async def list_pages(limit: int = Query(DEFAULT_LIST_LIMIT, ge=1)) -> list[dict[str, Any]]:
    return [_dump(page) for page in page_store.list(limit=limit)]


@app.post("/v1/pages", status_code=201)
async def create_page(page: LandingPage) -> dict[str, Any]:
    now = utcnow()
    page.created_at = now
    page.updated_at = now
    return _dump(page_store.save(page))


@app.get("/v1/pages/{page_id}")
async def get_page(page_id: str) -> dict[str, Any]:
    return _dump(page_store.find(page_id))


@app.put("/v1/pages/{page_id}")
async def replace_page(page_id: str, page: LandingPage) -> dict[str, Any]:
    async with _page_lock(page_id):
        existing = page_store.find(page_id)
        page.id = page_id
        page.created_at = existing.created_at
        page.updated_at = max(utcnow(), existing.updated_at, existing.created_at)
        return _dump(page_store.save(page))


@app.delete("/v1/pages/{page_id}")
async def delete_page(page_id: str) -> dict[str, Any]:
    async with _page_lock(page_id):
        page_store.delete(page_id)
    return {"success": True, "message": "Page deleted successfully"}


@app.post("/v1/pages/{page_id}/sections", status_code=201)
async def add_section(page_id: str, request: AddSectionRequest) -> dict[str, Any]:
    async with _page_lock(page_id):
        page = page_store.find(page_id)
        generated = await asyncio.to_thread(
            page_editor.add_section, page, request.variant, None, request.prompt
        )
        page = page_store.save(page)
    return {
        "success": True,
        "page": _dump(page),
        "sectionId": generated.section.id,
        "fallbackUsed": generated.fallback_used,
        "warning": generated.warning,
    }


@app.patch("/v1/pages/{page_id}/sections/{section_id}")
async def update_section(page_id: str, section_id: str, request: UpdateSectionRequest) -> dict[str, Any]:
    async with _page_lock(page_id):
        page = page_store.find(page_id)
        page_editor.update_section_content(page, section_id, request.content, title=request.title)
        return _dump(page_store.save(page))


@app.delete("/v1/pages/{page_id}/sections/{section_id}")
async def remove_section(page_id: str, section_id: str) -> dict[str, Any]:
    async with _page_lock(page_id):
        page = page_store.find(page_id)
        page_editor.remove_section(page, section_id)
        return _dump(page_store.save(page))


@app.put("/v1/pages/{page_id}/sections:reorder")
async def reorder_sections(page_id: str, request: ReorderSectionsRequest) -> dict[str, Any]:
    async with _page_lock(page_id):
        page = page_store.find(page_id)
        page_editor.reorder_sections(page, request.ordered_ids)
        return _dump(page_store.save(page))


@app.put("/v1/pages/{page_id}/theme")
async def set_theme(page_id: str, request: ThemeRequest) -> dict[str, Any]:
    async with _page_lock(page_id):
        page = page_store.find(page_id)
        page_editor.set_color_scheme(page, request.color_scheme)
        return _dump(page_store.save(page))


@app.post("/v1/pages/{page_id}:export")
async def export_page(page_id: str) -> dict[str, Any]:
    page = page_store.find(page_id)
    export_id = await asyncio.to_thread(export_store.create, page)
    return {
        "success": True,
        "message": "Landing page exported successfully",
        "exportId": export_id,
        "files": {
            filename: f"/v1/exports/{export_id}/{filename}" for filename in CONTENT_TYPES
        },
    }


@app.get("/v1/exports/{export_id}/{filename}")
async def download_export(export_id: str, filename: str) -> PlainTextResponse:
    text = export_store.read(export_id, filename)
    return PlainTextResponse(text, media_type=CONTENT_TYPES[filename])


@app.post("/v1/pages/{page_id}:deploy")
async def deploy_page(page_id: str) -> dict[str, Any]:
    async with _page_lock(page_id):
        page = page_store.find(page_id)
        url = deployer.deploy(page)
        page_editor.mark_published(page, url)
        page = page_store.save(page)
    return {
        "success": True,
        "message": "Landing page deployed successfully",
        "url": url,
        "page": _dump(page),
    }
