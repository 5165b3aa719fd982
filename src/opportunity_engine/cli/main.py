"""Main CLI entry point."""

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

TABLES_ENV = "OPPORTUNITY_ENGINE_TABLES"
PAGE_SIZE_ENV = "OPPORTUNITY_ENGINE_PAGE_SIZE"


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="opportunity-engine",
        description="Normalize, classify and query monetization opportunities",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # normalize
    normalize_parser = subparsers.add_parser("normalize", help="Normalize raw payloads to canonical records")
    normalize_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON array of raw payloads (strings, objects or stored rows)",
    )
    normalize_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write normalized JSON to file (default: stdout)",
    )
    normalize_parser.add_argument(
        "--tables",
        type=Path,
        default=None,
        help=f"Estimate tables YAML (default: ${TABLES_ENV} or built-in)",
    )

    # catalog
    catalog_parser = subparsers.add_parser("catalog", help="Filter, search and page normalized opportunities")
    catalog_parser.add_argument("--input", type=Path, required=True, help="JSON array of raw payloads")
    catalog_parser.add_argument("--type", dest="opp_type", default=None, help="Opportunity type filter")
    catalog_parser.add_argument(
        "--priority",
        default=None,
        help="Priority filter (quick-wins, growth, aspirational, passive)",
    )
    catalog_parser.add_argument("--search", default=None, help="Text search over title, description, type")
    catalog_parser.add_argument(
        "--sort",
        default=None,
        choices=["roi", "newest", "income", "title"],
        help="Sort order (default: input order)",
    )
    catalog_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    catalog_parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"Items per page (default: ${PAGE_SIZE_ENV} or 10)",
    )
    catalog_parser.add_argument(
        "--group-by-skill",
        action="store_true",
        help="Print skill groups instead of a page",
    )
    catalog_parser.add_argument("--tables", type=Path, default=None, help="Estimate tables YAML")
    catalog_parser.add_argument("--output", type=Path, default=None, help="Write results to file")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "normalize":
        _run_normalize(args)
    elif args.command == "catalog":
        _run_catalog(args)
    else:
        parser.print_help()


def _load_raw_items(path: Path) -> list:
    """Read a JSON array of raw payloads; a single object is treated as one item."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SystemExit(f"Input file not found: {path}")
    except json.JSONDecodeError as e:
        raise SystemExit(f"Input file {path} is not valid JSON: {e}")
    return data if isinstance(data, list) else [data]


def _load_tables(path: Path | None):
    """Estimate tables from --tables, then the environment, then built-in defaults."""
    from opportunity_engine.estimation import DEFAULT_TABLES, EstimateTables

    env_path = os.environ.get(TABLES_ENV)
    chosen = path or (Path(env_path) if env_path else None)
    if chosen is None:
        return DEFAULT_TABLES
    if not chosen.exists():
        raise SystemExit(f"Estimate tables file not found: {chosen}")
    return EstimateTables.from_yaml(chosen)


def _page_size(value: int | None) -> int:
    from opportunity_engine.catalog import DEFAULT_PAGE_SIZE

    if value is None:
        env_value = os.environ.get(PAGE_SIZE_ENV)
        if not env_value:
            return DEFAULT_PAGE_SIZE
        try:
            value = int(env_value)
        except ValueError:
            raise SystemExit(f"Invalid {PAGE_SIZE_ENV}: {env_value!r} (expected an integer)")
    if value < 1:
        raise SystemExit("Page size must be at least 1.")
    return value


def _emit(payload, output: Path | None, summary: str) -> None:
    text = json.dumps(payload, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        print(f"{summary} (wrote to {output})")
    else:
        print(text)


def _run_normalize(args: argparse.Namespace) -> None:
    """Run normalize command."""
    from opportunity_engine.classification import PriorityClassifier
    from opportunity_engine.pipeline import describe, normalize_many

    raw_items = _load_raw_items(args.input)
    tables = _load_tables(args.tables)
    records = normalize_many(raw_items, ingested_at=datetime.now(timezone.utc), tables=tables)
    classifier = PriorityClassifier()
    _emit(
        [describe(r, classifier) for r in records],
        args.output,
        f"Normalized {len(records)} opportunities",
    )


def _run_catalog(args: argparse.Namespace) -> None:
    """Run catalog command. A page past the end is reset to page 1."""
    from opportunity_engine.catalog import CatalogQuery, group_by_skill
    from opportunity_engine.classification import PriorityClassifier
    from opportunity_engine.pipeline import describe, normalize_many, run_catalog

    raw_items = _load_raw_items(args.input)
    tables = _load_tables(args.tables)
    ingested_at = datetime.now(timezone.utc)
    query = CatalogQuery(
        opp_type=args.opp_type,
        priority=args.priority,
        text=args.search,
        sort=args.sort,
        page=args.page,
        page_size=_page_size(args.page_size),
    )
    classifier = PriorityClassifier()

    if args.group_by_skill:
        records = query.matching(normalize_many(raw_items, ingested_at=ingested_at, tables=tables), classifier)
        groups = group_by_skill(records)
        _emit(
            {skill: [{"id": r.id, "title": r.title} for r in members] for skill, members in groups.items()},
            args.output,
            f"Grouped {len(records)} opportunities into {len(groups)} skills",
        )
        return

    result = run_catalog(raw_items, query, ingested_at=ingested_at, tables=tables, clamp_page=True)
    _emit(
        {
            "page": result.page,
            "page_size": result.page_size,
            "total": result.total,
            "total_pages": result.total_pages,
            "items": [describe(r, classifier) for r in result.items],
        },
        args.output,
        f"Page {result.page}/{result.total_pages}: {len(result.items)} of {result.total} opportunities",
    )


if __name__ == "__main__":
    main()
