"""OpenTelemetry spans around index rebuilds and searches."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import Status, StatusCode

from flux_docs.observability.context import bind_span


if TYPE_CHECKING:
    from collections.abc import Iterator

    from opentelemetry.trace import Span, Tracer

_provider: TracerProvider | None = None


def init_tracing(service_name: str = "flux-docs") -> TracerProvider:
    """Install a fresh SDK tracer provider.

    The tool is offline, so no exporter is attached. Only the first provider
    becomes the process-global one; later calls replace the provider used by
    :func:`get_tracer`.
    """
    global _provider
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if _provider is None:
        trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer() -> Tracer:
    provider = _provider or init_tracing()
    return provider.get_tracer("flux_docs")


@contextmanager
def create_span(name: str, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
    """Run the block inside span ``name`` and point log correlation at it."""
    with get_tracer().start_as_current_span(name, attributes=attributes, record_exception=False) as span:
        bind_span(span)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise
