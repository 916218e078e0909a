"""Log output for CLI runs: plain lines for people, JSON lines for tooling.

Everything goes to stderr; stdout carries command output only.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import sys
from typing import Any

import orjson

from flux_docs.observability.context import get_trace_context


PLAIN_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord has; anything else came in through ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, tagged with the active trace ids and command."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "trace_id": ctx["trace_id"],
            "span_id": ctx["span_id"],
        }
        if "command" in ctx:
            entry["command"] = ctx["command"]
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        return orjson.dumps(entry, default=str).decode("utf-8")


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Route all logging through a single stderr handler at ``level``."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
