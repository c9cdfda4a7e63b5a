"""Structured logging for the landing page builder API.

Outside ``dev`` with a project configured, records go to Google Cloud Logging.
Everywhere else they are written to stdout as one JSON object per line, carrying
the request trace and any ``extra=`` fields (``page_id``, ``strategy`` ...).
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

from google.cloud import logging as cloud_logging

SERVICE_NAME = "landing-page-builder"
TRACE_FIELD = "logging.googleapis.com/trace"

trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class StructuredFormatter(logging.Formatter):
    def __init__(self, service: str = SERVICE_NAME) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "service": self._service,
            "message": record.getMessage(),
            "logger": record.name,
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        trace_id = trace_id_var.get()
        if trace_id:
            entry[TRACE_FIELD] = trace_id

        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and key not in entry
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def trace_from_header(header: str | None, project_id: str | None = None) -> str | None:
    """Turn ``X-Cloud-Trace-Context: TRACE_ID/SPAN_ID;o=1`` into a log trace value.

    With a project the result is the ``projects/<id>/traces/<trace>`` resource name
    Cloud Logging links to Cloud Trace; without one it is the bare trace id.
    """
    if not header:
        return None
    trace = header.split("/", 1)[0].split(";", 1)[0].strip()
    if not trace:
        return None
    return f"projects/{project_id}/traces/{trace}" if project_id else trace


def setup_logging(
    *,
    environment: str = "dev",
    project_id: str | None = None,
    use_cloud_logging: bool = True,
) -> None:
    """Configure root logging for the API process.

    Args:
        environment: ``dev`` logs DEBUG to stdout; anything else logs INFO
        project_id: GCP project that receives Cloud Logging entries
        use_cloud_logging: Set to False to keep stdout JSON outside ``dev``
    """
    log_level = logging.DEBUG if environment == "dev" else logging.INFO

    if use_cloud_logging and project_id and environment != "dev":
        client = cloud_logging.Client(project=project_id)
        client.setup_logging(log_level=log_level)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logging.basicConfig(level=log_level, handlers=[handler], force=True)

    # Vertex AI, Firestore and their transports are chatty at INFO.
    for name in ("google", "urllib3", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)


def set_trace_id(trace_id: str | None) -> None:
    trace_id_var.set(trace_id)


def get_trace_id() -> str | None:
    return trace_id_var.get()


__all__ = [
    "setup_logging",
    "set_trace_id",
    "get_trace_id",
    "trace_from_header",
    "StructuredFormatter",
    "SERVICE_NAME",
]
