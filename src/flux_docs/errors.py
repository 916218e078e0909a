"""Exceptions raised by the document store."""

from __future__ import annotations

from pathlib import Path


class FluxDocsError(Exception):
    """Base class for flux-docs errors."""


class RecordLoadError(FluxDocsError):
    """Raised when a record file exists but cannot be parsed or validated."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load record {path}: {reason}")


class IndexLoadError(FluxDocsError):
    """Raised when the aggregate index file exists but is unreadable."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load search index {path}: {reason}")
