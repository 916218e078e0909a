"""Unit tests for observability module."""

import json
import logging
import sys

from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode
import pytest

from flux_docs.adapters.document_store import DocumentStore
from flux_docs.observability import (
    JsonFormatter,
    configure_logging,
    create_span,
    get_trace_context,
    init_tracing,
    set_trace_context,
    tracing as tracing_module,
)
from flux_docs.search.ranking import RankingEngine


def _record(msg: str = "test message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="flux_docs.adapters.document_store",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_trace_context(self):
        data = json.loads(JsonFormatter().format(_record()))

        assert data["message"] == "test message"
        assert data["level"] == "INFO"
        assert data["logger"] == "flux_docs.adapters.document_store"
        assert "timestamp" in data
        assert len(data["trace_id"]) == 32
        assert len(data["span_id"]) == 16
        assert "command" not in data

    def test_format_includes_command_from_context(self):
        set_trace_context("a" * 32, "b" * 16, command="search")

        data = json.loads(JsonFormatter().format(_record()))

        assert data["trace_id"] == "a" * 32
        assert data["command"] == "search"

    def test_format_includes_extra_fields(self):
        logger = logging.getLogger("flux_docs.test")
        record = logger.makeRecord(
            logger.name,
            logging.WARNING,
            "test.py",
            1,
            "Skipping %s",
            ("broken",),
            None,
            extra={"category": "guides", "record_name": "broken"},
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "Skipping broken"
        assert data["category"] == "guides"
        assert data["record_name"] == "broken"
        assert "args" not in data

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]


@pytest.mark.unit
class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_replaces_handlers_with_single_stderr_handler(self):
        configure_logging("info", json_output=True)

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_plain_formatter(self):
        configure_logging("warning")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)


@pytest.mark.unit
class TestTracing:
    @pytest.fixture
    def exporter(self) -> InMemorySpanExporter:
        exporter = InMemorySpanExporter()
        provider = init_tracing("test-service")
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        return exporter

    def test_get_tracer_initializes_when_missing(self, monkeypatch):
        monkeypatch.setattr(tracing_module, "_provider", None)

        assert tracing_module.get_tracer() is not None
        assert tracing_module._provider is not None

    def test_init_tracing_sets_service_name(self):
        provider = init_tracing("test-service")
        assert provider.resource.attributes["service.name"] == "test-service"

    def test_create_span_binds_trace_context(self, exporter):
        set_trace_context("0" * 32, "0" * 16, command="show")

        with create_span("test.operation", attributes={"test.key": "value"}) as span:
            ctx = get_trace_context()
            assert ctx["span_id"] == format(span.get_span_context().span_id, "016x")
            assert ctx["command"] == "show"

        finished = exporter.get_finished_spans()
        assert [s.name for s in finished] == ["test.operation"]
        assert finished[0].attributes["test.key"] == "value"

    def test_create_span_records_errors(self, exporter):
        with pytest.raises(ValueError), create_span("test.failure"):
            raise ValueError("bad")

        span = exporter.get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert span.events[0].name == "exception"

    def test_rebuild_and_search_are_traced(self, exporter, populated_store: DocumentStore):
        populated_store.rebuild_index()
        RankingEngine(populated_store).search("modal", limit=3)

        spans = {span.name: span for span in exporter.get_finished_spans()}
        assert spans["docs.rebuild_index"].attributes["docs.items"] == 5
        assert spans["docs.rebuild_index"].attributes["docs.skipped"] == 0
        assert spans["docs.search"].attributes["docs.query"] == "modal"
        assert spans["docs.search"].attributes["docs.limit"] == 3
        assert spans["docs.search"].attributes["docs.matches"] >= 1
