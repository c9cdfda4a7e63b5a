from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path

from .compiler import (
    ARTIFACT_FILENAMES,
    INDEX_FILENAME,
    SCRIPT_FILENAME,
    STYLES_FILENAME,
    CompiledSite,
    TemplateCompiler,
)
from .errors import ExportNotFoundError
from .models.page import LandingPage

logger = logging.getLogger(__name__)

_EXPORT_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class FileSystemExportStore:
    """Keeps compiled artifacts under ``<base_path>/<export_id>/``."""

    def __init__(self, *, base_path: Path, compiler: TemplateCompiler | None = None) -> None:
        self._base_path = base_path
        self._compiler = compiler or TemplateCompiler()

    def create(self, page: LandingPage, *, year: int | None = None) -> str:
        site = self._compiler.compile(page, year=year)
        export_id = self._generate_id()
        export_dir = self._base_path / export_id
        export_dir.mkdir(parents=True, exist_ok=False)
        for filename, text in site.files().items():
            (export_dir / filename).write_text(text, encoding="utf-8")
        logger.info("Exported page", extra={"page_id": page.id, "export_id": export_id})
        return export_id

    def read(self, export_id: str, filename: str) -> str:
        if filename not in ARTIFACT_FILENAMES:
            raise ExportNotFoundError(export_id, filename)
        file_path = self._export_dir(export_id) / filename
        if not file_path.is_file():
            raise ExportNotFoundError(export_id, filename)
        return file_path.read_text(encoding="utf-8")

    def load(self, export_id: str) -> CompiledSite:
        return CompiledSite(
            markup=self.read(export_id, INDEX_FILENAME),
            stylesheet=self.read(export_id, STYLES_FILENAME),
            script=self.read(export_id, SCRIPT_FILENAME),
        )

    def _export_dir(self, export_id: str) -> Path:
        if not _EXPORT_ID.match(export_id):
            raise ExportNotFoundError(export_id)
        export_dir = self._base_path / export_id
        if not export_dir.is_dir():
            raise ExportNotFoundError(export_id)
        return export_dir

    def _generate_id(self) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        suffix = uuid.uuid4().hex[:6]
        return f"export_{ts}_{suffix}"


__all__ = ["FileSystemExportStore"]
