"""Command-line interface for browsing and searching the documentation corpus."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys
from typing import Any

import orjson
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flux_docs.adapters.document_store import DocumentStore
from flux_docs.config import Settings
from flux_docs.domain.model import Category, Record, SearchHit
from flux_docs.errors import FluxDocsError
from flux_docs.observability import configure_logging, get_trace_context, set_trace_context
from flux_docs.search.ranking import RankingEngine


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

_CATEGORY_CHOICES = [category.value for category in Category]


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flux-docs",
        description="Offline lookup and fuzzy search for Flux UI documentation",
    )
    parser.add_argument("--data-dir", type=Path, help="Documentation data directory (overrides FLUX_DOCS_DATA_DIR)")
    parser.add_argument("--log-level", help="Log level (overrides FLUX_DOCS_LOG_LEVEL)")
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit structured JSON logs")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    docs = subparsers.add_parser("docs", help="List available documentation")
    docs.add_argument("--category", choices=_CATEGORY_CHOICES, help="Only list one category")
    docs.add_argument("--json", action="store_true", help="Output as JSON")

    search = subparsers.add_parser("search", help="Fuzzy search documentation")
    search.add_argument("query", help="Search term")
    search.add_argument("-l", "--limit", type=int, help="Maximum number of results")
    search.add_argument("--json", action="store_true", help="Output as JSON")

    show = subparsers.add_parser("show", help="Show documentation for one item")
    show.add_argument("name", help="Item name, e.g. modal")
    show.add_argument("--category", choices=_CATEGORY_CHOICES, help="Only look in one category")
    show.add_argument("-s", "--section", help="Only show the section with this title")
    show.add_argument("--json", action="store_true", help="Output as JSON")

    rebuild = subparsers.add_parser("rebuild", help="Rebuild the search index")
    rebuild.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, letting explicit flags win."""
    overrides: dict[str, Any] = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.log_json is not None:
        overrides["log_json"] = args.log_json
    return Settings(**overrides)


def _write(text: str = "") -> None:
    sys.stdout.write(text + "\n")


def _write_json(payload: Any) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE).decode("utf-8"))


def _error(message: str, *, as_json: bool = False, **extra: Any) -> int:
    if as_json:
        payload = {"error": message, **extra}
        sys.stderr.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE).decode("utf-8"))
    else:
        sys.stderr.write(f"Error: {message}\n")
    return EXIT_FAILURE


def _truncate(text: str, width: int) -> str:
    if len(text) > width:
        return text[:width] + "..."
    return text


def cmd_docs(store: DocumentStore, args: argparse.Namespace) -> int:
    items = store.list(args.category)

    if args.json:
        _write_json(items)
        return EXIT_OK

    total = 0
    for category, names in items.items():
        if not names:
            continue
        _write(f"{category.capitalize()} ({len(names)})")
        _write("  " + ", ".join(names))
        _write()
        total += len(names)

    if total == 0:
        sys.stderr.write(f"No documentation found in {store.data_dir}.\n")
    return EXIT_OK


def _results_table(hits: Sequence[SearchHit], width: int) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta")
    table.add_column("Description")

    for hit in hits:
        description = _truncate(hit.description, width)
        if hit.pro:
            description += " [Pro]"
        table.add_row(escape(hit.name), hit.category.value, escape(description))
    return table


def cmd_search(store: DocumentStore, settings: Settings, args: argparse.Namespace) -> int:
    limit = args.limit if args.limit is not None else settings.search_limit
    if not store.index_path.is_file():
        return _error('Search index not found. Run "flux-docs rebuild" first.', as_json=args.json)

    hits = RankingEngine(store).search(args.query, limit)

    if args.json:
        _write_json([hit.model_dump(mode="json") for hit in hits])
        return EXIT_OK

    if not hits:
        _write(f"No results for: {args.query}")
        _write('Try a different search term or run "flux-docs docs" to see all items.')
        return EXIT_OK

    _write(f"Results for: {args.query}")
    _write()
    Console().print(_results_table(hits, settings.description_width))
    return EXIT_OK


def _render_record(record: Record) -> str:
    lines = [record.display_title + (" [Pro]" if record.pro else "")]
    if record.description:
        lines += ["", record.description]
    if record.sections:
        lines += ["", "Sections:"]
        lines += [f"  - {section.title}" for section in record.sections if section.title]
    if record.reference:
        lines += ["", "Reference:"]
        for component, entry in record.reference.items():
            props = ", ".join(prop.name for prop in entry.props if prop.name)
            lines.append(f"  {component}: {props}" if props else f"  {component}")
    if record.related:
        lines += ["", "Related: " + ", ".join(record.related)]
    return "\n".join(lines)


def _render_section(payload: dict[str, Any]) -> str:
    lines = [payload.pop("title", "")]
    for key, value in payload.items():
        lines.append("")
        if isinstance(value, str):
            lines.append(value)
        else:
            lines.append(f"{key}:")
            lines.append(orjson.dumps(value, option=orjson.OPT_INDENT_2).decode("utf-8"))
    return "\n".join(lines)


def cmd_show(store: DocumentStore, settings: Settings, args: argparse.Namespace) -> int:
    record = store.find(args.name, args.category)

    if record is None:
        suggestions = store.suggest(args.name, settings.suggestion_limit)
        if args.json:
            return _error(f"Not found: {args.name}", as_json=True, suggestions=suggestions)
        _error(f"Not found: {args.name}")
        if suggestions:
            sys.stderr.write("Did you mean: " + ", ".join(suggestions) + "?\n")
        return EXIT_FAILURE

    if args.section:
        section = record.section(args.section)
        if section is None:
            available = [item.title for item in record.sections if item.title]
            return _error(
                f"Section not found: {args.section}",
                as_json=args.json,
                available_sections=available,
            )
        payload = section.model_dump(mode="json")
        if args.json:
            _write_json(payload)
        else:
            _write(_render_section(payload))
        return EXIT_OK

    if args.json:
        _write_json(record.model_dump(mode="json"))
    else:
        _write(_render_record(record))
    return EXIT_OK


def cmd_rebuild(store: DocumentStore, args: argparse.Namespace) -> int:
    index = store.rebuild_index()
    if args.json:
        _write_json({"version": index.version, "updated_at": index.updated_at, "items": len(index.items)})
    else:
        _write(f"Indexed {len(index.items)} items into {store.index_path}")
    return EXIT_OK


def run(args: argparse.Namespace, settings: Settings) -> int:
    store = DocumentStore(settings.data_dir)
    if args.command == "docs":
        return cmd_docs(store, args)
    if args.command == "search":
        return cmd_search(store, settings, args)
    if args.command == "show":
        return cmd_show(store, settings, args)
    if args.command == "rebuild":
        return cmd_rebuild(store, args)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        return _error(f"Invalid configuration: {exc}", as_json=getattr(args, "json", False))

    configure_logging(settings.log_level, settings.log_json)
    ctx = get_trace_context()
    set_trace_context(ctx["trace_id"], ctx["span_id"], command=args.command)

    try:
        return run(args, settings)
    except FluxDocsError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        return _error(str(exc), as_json=getattr(args, "json", False))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
