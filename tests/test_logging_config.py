import json
import logging

from landing_page_builder.logging_config import (
    SERVICE_NAME,
    StructuredFormatter,
    get_trace_id,
    set_trace_id,
    trace_from_header,
)


def make_record(**extra):
    record = logging.LogRecord(
        "landing_page_builder.generator", logging.INFO, __file__, 10, "Generated %s", ("page",), None,
        func="generate_document",
    )
    record.__dict__.update(extra)
    return record


def test_formatter_emits_json_with_extra_fields():
    payload = json.loads(StructuredFormatter().format(make_record(page_id="p-1", section_count=5)))

    assert payload["severity"] == "INFO"
    assert payload["message"] == "Generated page"
    assert payload["logger"] == "landing_page_builder.generator"
    assert payload["page_id"] == "p-1"
    assert payload["section_count"] == 5
    assert "args" not in payload


def test_formatter_includes_trace_id():
    set_trace_id("trace-123")

    payload = json.loads(StructuredFormatter().format(make_record()))

    assert get_trace_id() == "trace-123"
    assert payload["logging.googleapis.com/trace"] == "trace-123"


def test_formatter_labels_service_and_location():
    payload = json.loads(StructuredFormatter().format(make_record()))

    assert payload["service"] == SERVICE_NAME
    assert payload["location"] == "test_logging_config.generate_document:10"


def test_trace_from_header():
    header = "105445aa7843bc8bf206b12000100000/1;o=1"

    assert trace_from_header(header) == "105445aa7843bc8bf206b12000100000"
    assert (
        trace_from_header(header, "acme-prod")
        == "projects/acme-prod/traces/105445aa7843bc8bf206b12000100000"
    )
    assert trace_from_header(None) is None
    assert trace_from_header("/1;o=1") is None
