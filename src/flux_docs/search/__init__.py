"""Keyword extraction, fuzzy matching and relevance ranking."""

from flux_docs.search.fuzzy import fuzzy_name_bonus, levenshtein_distance, rank_by_distance
from flux_docs.search.keywords import extract_keywords
from flux_docs.search.ranking import RankingEngine, normalize_query, score_entry


__all__ = [
    "RankingEngine",
    "extract_keywords",
    "fuzzy_name_bonus",
    "levenshtein_distance",
    "normalize_query",
    "rank_by_distance",
    "score_entry",
]
