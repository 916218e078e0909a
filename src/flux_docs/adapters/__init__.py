"""Adapters layer - filesystem persistence for records and the search index."""

from flux_docs.adapters.document_store import DocumentStore


__all__ = ["DocumentStore"]
