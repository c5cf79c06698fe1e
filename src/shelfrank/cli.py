"""Command line entry point.

    shelfrank analyze products.xlsx --export productos_ordenados.csv
    shelfrank template
    shelfrank catalog list --query laptop
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .catalog import CatalogStore
from .config import AppConfig, load_config
from .errors import CatalogError, ConfigError, IngestionError
from .export import export_comparison_workbook, export_csv, write_template_csv
from .ingestion import ingest_path
from .logging_utils import get_logger, get_user_logger
from .models import ScoredBatch
from .scoring import apply_suggested_ranks, get_provider


def _format_comparison(batch: ScoredBatch) -> List[str]:
    lines = ["Suggested order:"]
    for p in batch.products:
        lines.append(
            f"  {p.suggested_rank:>3}. {p.product_name} (was {p.current_rank}, score {p.score:.2f}) - {p.justification}"
        )
    if batch.analysis is not None:
        m = batch.analysis.metrics
        lines.append(
            f"Products: {batch.analysis.total_products} | changes: {batch.analysis.changes_count}"
        )
        lines.append(
            f"Units sold: {m.total_units_sold} | stock: {m.total_stock} | "
            f"inventory value: {m.inventory_value:.2f} | avg units sold: {m.average_units_sold:.2f}"
        )
    return lines


def _cmd_analyze(args: argparse.Namespace, config: AppConfig, logger: logging.Logger, user: logging.Logger) -> int:
    records = ingest_path(args.file)
    logger.info("Ingested %d products from %s", len(records), args.file)

    batch = get_provider(config).analyze(records)
    logger.info("Scored %d products (%d rank changes)", len(batch), batch.analysis.changes_count)
    for line in _format_comparison(batch):
        user.info(line)

    if args.workbook:
        export_comparison_workbook(batch, args.workbook)
        user.info(f"Comparison workbook: {args.workbook}")

    if args.export:
        to_export = apply_suggested_ranks(batch) if args.apply else batch
        export_csv(to_export, args.export)
        user.info(f"Exported: {args.export}")
    return 0


def _cmd_template(args: argparse.Namespace, config: AppConfig, logger: logging.Logger, user: logging.Logger) -> int:
    dest = Path(args.destination or config.export.template_file_name)
    write_template_csv(dest)
    user.info(f"Template written: {dest}")
    return 0


def _cmd_catalog(args: argparse.Namespace, config: AppConfig, logger: logging.Logger, user: logging.Logger) -> int:
    store = CatalogStore(args.catalog or config.paths.catalog_path)
    action = args.action
    if action == "list":
        products = store.list(args.query)
        for p in products:
            user.info(f"{p.identifier}  {p.name}  price={p.price:.2f}  stock={p.stock}  {p.description}")
        user.info(f"{len(products)} product(s)")
    elif action == "add":
        p = store.create(
            name=args.name,
            description=args.description or "",
            price=args.price,
            stock=args.stock,
            image=args.image or "",
        )
        user.info(f"Created {p.identifier}")
    elif action == "update":
        payload = {
            k: v
            for k, v in (
                ("name", args.name),
                ("description", args.description),
                ("price", args.price),
                ("stock", args.stock),
                ("image", args.image),
            )
            if v is not None
        }
        p = store.update(args.identifier, **payload)
        user.info(f"Updated {p.identifier}")
    elif action == "delete":
        store.delete(args.identifier)
        user.info(f"Deleted {args.identifier}")
    elif action == "import":
        added = store.import_records(ingest_path(args.file))
        user.info(f"Imported {len(added)} product(s)")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Create an argument parser for the shelfrank CLI."""

    parser = argparse.ArgumentParser(prog="shelfrank", description="Product listing ingestion and display-order scoring")
    parser.add_argument("--config", default=None, help="Path to YAML configuration file")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Ingest a CSV/Excel file and suggest a new display order")
    analyze.add_argument("file", help="Input file (.csv, .xlsx, .xls)")
    analyze.add_argument("--export", help="Write the ordered products to this CSV path")
    analyze.add_argument("--workbook", help="Write a before/after comparison workbook (.xlsx)")
    analyze.add_argument("--apply", action="store_true", help="Export suggested ranks as the new current ranks")
    analyze.set_defaults(handler=_cmd_analyze)

    template = sub.add_parser("template", help="Write an example input CSV")
    template.add_argument("destination", nargs="?", help="Output path (defaults to export.template_file_name)")
    template.set_defaults(handler=_cmd_template)

    catalog = sub.add_parser("catalog", help="Manage the local product catalog")
    catalog.add_argument("--catalog", help="Catalog JSON path (defaults to paths.catalog_path)")
    actions = catalog.add_subparsers(dest="action", required=True)
    c_list = actions.add_parser("list")
    c_list.add_argument("--query", help="Filter by name or description")
    c_add = actions.add_parser("add")
    c_add.add_argument("--name", required=True)
    c_add.add_argument("--description")
    c_add.add_argument("--price", default="0")
    c_add.add_argument("--stock", default="0")
    c_add.add_argument("--image", help="Image URL or path")
    c_update = actions.add_parser("update")
    c_update.add_argument("identifier")
    c_update.add_argument("--name")
    c_update.add_argument("--description")
    c_update.add_argument("--price")
    c_update.add_argument("--stock")
    c_update.add_argument("--image", help="Image URL or path")
    c_delete = actions.add_parser("delete")
    c_delete.add_argument("identifier")
    c_import = actions.add_parser("import")
    c_import.add_argument("file", help="Input file (.csv, .xlsx, .xls)")
    catalog.set_defaults(handler=_cmd_catalog)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    user = get_user_logger()
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        user.error(str(exc))
        return 1
    logger = get_logger(config)
    try:
        return args.handler(args, config, logger, user)
    except (IngestionError, CatalogError, FileNotFoundError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        user.error(str(exc))
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI guard
    sys.exit(main())
