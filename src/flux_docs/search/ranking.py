"""Relevance ranking over the aggregate index.

Scoring is a fixed heuristic. Exact name and title matches short-circuit;
everything else accumulates:

    name   startswith +70 | contains +50
    title  startswith +40 | contains +30
    description contains +20
    each keyword  equal +15 | contains +10
    name within 1-2 edits of the query +15 / +5
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flux_docs.domain.model import IndexEntry, SearchHit
from flux_docs.errors import IndexLoadError
from flux_docs.observability.tracing import create_span
from flux_docs.search.fuzzy import fuzzy_name_bonus


if TYPE_CHECKING:
    from flux_docs.adapters.document_store import DocumentStore


logger = logging.getLogger(__name__)

EXACT_NAME_SCORE = 100
EXACT_TITLE_SCORE = 90
NAME_PREFIX_SCORE = 70
NAME_CONTAINS_SCORE = 50
TITLE_PREFIX_SCORE = 40
TITLE_CONTAINS_SCORE = 30
DESCRIPTION_CONTAINS_SCORE = 20
KEYWORD_EXACT_SCORE = 15
KEYWORD_CONTAINS_SCORE = 10


def normalize_query(query: str) -> str:
    return query.strip().lower()


def score_entry(query: str, entry: IndexEntry) -> int:
    """Score one index entry against an already-normalized query."""
    name = entry.name.lower()
    title = entry.title.lower()

    if name == query:
        return EXACT_NAME_SCORE
    if title == query:
        return EXACT_TITLE_SCORE

    score = 0

    if name.startswith(query):
        score += NAME_PREFIX_SCORE
    elif query in name:
        score += NAME_CONTAINS_SCORE

    if title.startswith(query):
        score += TITLE_PREFIX_SCORE
    elif query in title:
        score += TITLE_CONTAINS_SCORE

    if query in entry.description.lower():
        score += DESCRIPTION_CONTAINS_SCORE

    for keyword in entry.keywords:
        keyword = keyword.lower()
        if keyword == query:
            score += KEYWORD_EXACT_SCORE
        elif query in keyword:
            score += KEYWORD_CONTAINS_SCORE

    score += fuzzy_name_bonus(query, name)
    return score


class RankingEngine:
    """Ranks aggregate index entries against free-text queries.

    Holds no state of its own; the index is reloaded through the store on
    every call and treated as read-only.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    def search(self, query: str, limit: int = 10) -> list[SearchHit]:
        """Return at most ``limit`` matching entries, highest score first.

        An exact name match always leads. Entries with equal scores keep
        their index order. A missing, empty or unreadable index yields an
        empty list.
        """
        with create_span("docs.search", attributes={"docs.query": query, "docs.limit": limit}) as span:
            try:
                index = self.store.load_index()
            except IndexLoadError as exc:
                logger.warning("Search index unreadable, run a rebuild: %s", exc.reason)
                return []

            if index is None or not index.items or limit <= 0:
                return []

            normalized = normalize_query(query)
            ranked: list[tuple[bool, SearchHit]] = []
            for entry in index.items:
                score = score_entry(normalized, entry)
                if score > 0:
                    exact = entry.name.lower() == normalized
                    ranked.append((exact, SearchHit(**entry.model_dump(), score=score)))

            # Accumulated scores can pass 100, so exact name matches are pinned first
            ranked.sort(key=lambda pair: (pair[0], pair[1].score), reverse=True)
            hits = [hit for _exact, hit in ranked]
            span.set_attribute("docs.matches", len(hits))
            logger.debug("Query %r matched %d of %d entries", normalized, len(hits), len(index.items))
            return hits[:limit]
