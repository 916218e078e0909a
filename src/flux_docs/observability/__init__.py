"""Logging and tracing for flux-docs runs."""

from flux_docs.observability.context import get_trace_context, set_trace_context, trace_context
from flux_docs.observability.logging import JsonFormatter, configure_logging
from flux_docs.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "trace_context",
]
