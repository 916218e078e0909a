"""Shared test fixtures and configuration."""

import os
from pathlib import Path

import pytest

from flux_docs.adapters.document_store import DocumentStore
from flux_docs.domain.model import AggregateIndex, Category, IndexEntry
from flux_docs.observability.context import trace_context


# Environment every test starts from; FLUX_DOCS_* values from the developer's
# shell must never leak into assertions.
TEST_ENV = {
    "FLUX_DOCS_LOG_LEVEL": "warning",
    "FLUX_DOCS_LOG_JSON": "false",
    "FLUX_DOCS_SEARCH_LIMIT": "10",
    "FLUX_DOCS_SUGGESTION_LIMIT": "5",
    "FLUX_DOCS_DESCRIPTION_WIDTH": "50",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path: Path):
    """Reset FLUX_DOCS_* variables and run from an empty directory (no stray .env)."""
    for key in list(os.environ):
        if key.upper().startswith("FLUX_DOCS_"):
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture(autouse=True)
def reset_trace_context():
    """Keep trace ids and command tags from leaking between tests."""
    token = trace_context.set(None)
    yield
    trace_context.reset(token)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def store(data_dir: Path) -> DocumentStore:
    return DocumentStore(data_dir)


@pytest.fixture
def modal_record() -> dict:
    """A realistic component record with every keyword source populated."""
    return {
        "name": "modal",
        "title": "Modal",
        "description": "A dialog overlay",
        "category": "components",
        "pro": False,
        "related": ["button", "card"],
        "sections": [
            {"title": "Usage", "content": "Wrap content in a modal trigger."},
            {"title": "Flyout", "examples": [{"code": "<flux:modal variant=\"flyout\" />"}]},
        ],
        "reference": {
            "flux:modal": {
                "props": [
                    {"name": "name", "description": "Unique modal name"},
                    {"name": "variant", "default": "default"},
                    {"name": "dismissible"},
                ]
            },
            "flux:modal.trigger": {"props": [{"name": "name"}, {"name": "shortcut"}]},
        },
    }


@pytest.fixture
def populated_store(store: DocumentStore, modal_record: dict) -> DocumentStore:
    """A small corpus spread over all three categories."""
    store.save(Category.COMPONENTS, "modal", modal_record)
    store.save(
        Category.COMPONENTS,
        "button",
        {
            "name": "button",
            "title": "Button",
            "description": "A powerful and customizable button component",
            "related": ["dropdown"],
            "reference": {"flux:button": {"props": [{"name": "variant"}, {"name": "icon"}]}},
        },
    )
    store.save(
        Category.COMPONENTS,
        "date-picker",
        {"name": "date-picker", "title": "Date picker", "description": "Select a date", "pro": True},
    )
    store.save(
        Category.LAYOUTS,
        "sidebar",
        {"name": "sidebar", "title": "Sidebar", "description": "Application shell with a sidebar"},
    )
    store.save(
        Category.GUIDES,
        "dark-mode",
        {"name": "dark-mode", "title": "Dark mode", "sections": [{"title": "Toggle"}]},
    )
    return store


def write_index(store: DocumentStore, entries: list[dict]) -> AggregateIndex:
    """Persist a hand-built index so ranking tests do not depend on rebuilds."""
    items = [IndexEntry.model_validate({"category": "components", "description": "", **entry}) for entry in entries]
    index = AggregateIndex(updated_at="2025-01-01T00:00:00+00:00", items=items)
    store.save_index(index)
    return index


@pytest.fixture
def index_writer(store: DocumentStore):
    def _write(entries: list[dict]) -> AggregateIndex:
        return write_index(store, entries)

    return _write
