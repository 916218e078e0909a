"""Filesystem-backed store for documentation records and the search index.

Layout under the data directory:
- ``{category}/{name}.json`` holds one record
- ``index.json`` holds the aggregate index snapshot
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
import logging
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from flux_docs.domain.model import CATEGORY_ORDER, AggregateIndex, Category, IndexEntry, Record
from flux_docs.errors import IndexLoadError, RecordLoadError
from flux_docs.observability.tracing import create_span
from flux_docs.search.fuzzy import rank_by_distance
from flux_docs.search.keywords import extract_keywords


logger = logging.getLogger(__name__)

RECORD_SUFFIX = ".json"
INDEX_FILENAME = "index.json"
INDEX_VERSION = "1.0"

_JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


def _write_json(path: Path, payload: Any) -> None:
    path.write_bytes(orjson.dumps(payload, option=_JSON_OPTIONS))


def _categories(category: Category | str | None) -> tuple[Category, ...]:
    if category is None:
        return CATEGORY_ORDER
    return (Category(category),)


class DocumentStore:
    """Reads and writes documentation records and the aggregate index.

    The data directory is injected rather than discovered, so tests and
    alternate corpora only need a different path.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir.expanduser().resolve(strict=False)

    @property
    def index_path(self) -> Path:
        return self.data_dir / INDEX_FILENAME

    def record_path(self, category: Category | str, name: str) -> Path:
        return self.data_dir / Category(category).value / f"{name}{RECORD_SUFFIX}"

    def list_category(self, category: Category | str) -> list[str]:
        """Sorted record names in a category; empty when the directory is missing."""
        path = self.data_dir / Category(category).value
        if not path.is_dir():
            return []
        return sorted(file.stem for file in path.glob(f"*{RECORD_SUFFIX}") if file.is_file())

    def list(self, category: Category | str | None = None) -> dict[str, list[str]]:
        """Map category name to its sorted record names.

        All categories are included, in probe order, when ``category`` is None.
        """
        return {cat.value: self.list_category(cat) for cat in _categories(category)}

    def find(self, name: str, category: Category | str | None = None) -> Record | None:
        """Find a record by name, probing categories in fixed order.

        Returns:
            The first matching record, or None when no category holds it.

        Raises:
            RecordLoadError: The file exists but is not a valid record.
        """
        for cat in _categories(category):
            path = self.record_path(cat, name)
            if path.is_file():
                return self._load_record(path)
        return None

    def save(self, category: Category | str, name: str, record: Record | Mapping[str, Any]) -> Path:
        """Write a record as pretty-printed JSON, replacing any existing file."""
        if not isinstance(record, Record):
            record = Record.model_validate(record)

        path = self.record_path(category, name)
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_json(path, record.model_dump(mode="json"))
        logger.debug("Saved record %s/%s", Category(category).value, name)
        return path

    def get_all_names(self) -> list[str]:
        """All record names across categories, first occurrence wins."""
        names: list[str] = []
        for cat in CATEGORY_ORDER:
            names.extend(self.list_category(cat))
        return list(dict.fromkeys(names))

    def suggest(self, name: str, limit: int = 5) -> list[str]:
        """Known names closest to ``name`` by case-insensitive edit distance."""
        if limit <= 0:
            return []
        ranked = rank_by_distance(name, self.get_all_names())
        return [candidate for candidate, _distance in ranked[:limit]]

    def load_index(self) -> AggregateIndex | None:
        """Load the aggregate index, or None if it was never built.

        Raises:
            IndexLoadError: The index file exists but cannot be parsed.
        """
        path = self.index_path
        if not path.is_file():
            return None
        try:
            return AggregateIndex.model_validate(orjson.loads(path.read_bytes()))
        except (orjson.JSONDecodeError, ValidationError) as exc:
            raise IndexLoadError(path, str(exc)) from exc

    def save_index(self, index: AggregateIndex) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        _write_json(self.index_path, index.model_dump(mode="json"))

    def rebuild_index(self) -> AggregateIndex:
        """Rebuild the aggregate index from every record on disk.

        Records that cannot be loaded are logged and skipped; the rebuild
        itself only fails on environment errors (unreadable directories).
        """
        with create_span("docs.rebuild_index", attributes={"docs.data_dir": str(self.data_dir)}) as span:
            items: list[IndexEntry] = []
            skipped = 0

            for cat in CATEGORY_ORDER:
                for name in self.list_category(cat):
                    try:
                        record = self.find(name, cat)
                    except RecordLoadError as exc:
                        skipped += 1
                        logger.warning(
                            "Skipping unreadable record %s/%s: %s",
                            cat.value,
                            name,
                            exc.reason,
                            extra={"category": cat.value, "record_name": name},
                        )
                        continue

                    if record is None:
                        # Removed between listing and reading
                        continue

                    items.append(self._build_entry(record, name, cat))

            index = AggregateIndex(
                version=INDEX_VERSION,
                updated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
                items=items,
            )
            self.save_index(index)

            span.set_attribute("docs.items", len(items))
            span.set_attribute("docs.skipped", skipped)
            logger.info("Rebuilt search index with %d items (%d skipped)", len(items), skipped)
            return index

    @staticmethod
    def _build_entry(record: Record, name: str, category: Category) -> IndexEntry:
        if not record.name:
            record = record.model_copy(update={"name": name})
        return IndexEntry(
            name=record.name,
            title=record.display_title,
            description=record.description,
            category=category,
            pro=record.pro,
            keywords=extract_keywords(record),
        )

    @staticmethod
    def _load_record(path: Path) -> Record:
        try:
            return Record.model_validate(orjson.loads(path.read_bytes()))
        except (orjson.JSONDecodeError, ValidationError) as exc:
            raise RecordLoadError(path, str(exc)) from exc
