"""Domain layer for flux-docs.

Pure data models with no filesystem dependencies.
"""

from flux_docs.domain.model import (
    CATEGORY_ORDER,
    AggregateIndex,
    Category,
    IndexEntry,
    Prop,
    Record,
    ReferenceEntry,
    SearchHit,
    Section,
)


__all__ = [
    "CATEGORY_ORDER",
    "AggregateIndex",
    "Category",
    "IndexEntry",
    "Prop",
    "Record",
    "ReferenceEntry",
    "SearchHit",
    "Section",
]
