"""Per-run correlation ids shared by spans and JSON log lines."""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from opentelemetry.trace import Span

trace_context: ContextVar[dict[str, str] | None] = ContextVar("trace_context", default=None)


def get_trace_context() -> dict[str, str]:
    """Return the active ids, minting fresh ones on first use in a run."""
    ctx = trace_context.get()
    if not ctx:
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: str) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def bind_span(span: Span) -> None:
    """Adopt the ids of ``span`` while keeping tags such as ``command``."""
    span_ctx = span.get_span_context()
    set_trace_context(
        format(span_ctx.trace_id, "032x"),
        format(span_ctx.span_id, "016x"),
        **{key: value for key, value in (trace_context.get() or {}).items() if key not in ("trace_id", "span_id")},
    )
