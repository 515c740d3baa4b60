"""Point d'entrée en ligne de commande : anicatalog update / anicatalog load."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from anicatalog.core.catalog.loader import load_catalog
from anicatalog.core.models import Catalog, CatalogConfig
from anicatalog.core.pipeline.context import PipelineContext
from anicatalog.core.pipeline.runner import PipelineRunner
from anicatalog.core.pipeline.tasks import build_update_steps
from anicatalog.core.storage.catalog_store import JsonFileCatalogStore
from anicatalog.core.storage.config import load_config
from anicatalog.core.utils.http import DocumentFetcher
from anicatalog.core.utils.logging import level_from_verbosity, setup_logging

logger = logging.getLogger("anicatalog")

# Code de sortie conventionnel après SIGINT
EXIT_CANCELLED = 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anicatalog",
        description="Met à jour un catalogue d'anime à partir d'exports texte (titres + URL).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Logs détaillés (DEBUG).")
    parser.add_argument("-q", "--quiet", action="store_true", help="Seulement les avertissements.")
    parser.add_argument("--config", type=Path, default=None, help="Fichier TOML (défaut: DIR/anicatalog.toml).")
    parser.add_argument("--log-file", type=Path, default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    update = sub.add_parser("update", help="Parse filtered*.txt et réécrit le catalogue JSON.")
    update.add_argument("directory", nargs="?", type=Path, default=Path("."))
    update.add_argument("--pattern", default=None, help="Motif des exports (défaut: filtered*.txt).")
    update.add_argument("--catalog-file", default=None, help="Nom du JSON (défaut: anime_data.json).")

    load = sub.add_parser("load", help="Charge le catalogue (local, puis export combiné, puis JSON distant).")
    load.add_argument("directory", nargs="?", type=Path, default=Path("."))
    load.add_argument("--catalog-file", default=None)
    load.add_argument("--combined-url", default=None)
    load.add_argument("--fallback-url", default=None)
    return parser


def _print_summary(catalog: Catalog) -> None:
    print(f"  Series: {catalog.total_series} | Episodes: {catalog.total_episodes}")


@contextmanager
def _cancel_on_interrupt(runner: PipelineRunner) -> Iterator[None]:
    """Ctrl-C annule le pipeline entre deux exports ; le catalogue n'est pas écrit."""

    def handler(signum, frame):
        logger.warning("Interrupted, cancelling update...")
        runner.cancel()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _log_progress(step_name: str, percent: float, message: str) -> None:
    logger.debug("[%3d%%] %s", round(percent * 100), message)


def run_update(config: CatalogConfig) -> int:
    store = JsonFileCatalogStore(config.catalog_path)
    context: PipelineContext = {"config": config, "store": store}
    runner = PipelineRunner()
    cancelled: list[bool] = []
    errors: list[str] = []
    with _cancel_on_interrupt(runner):
        results = runner.run(
            build_update_steps(),
            context,
            on_progress=_log_progress,
            on_error=lambda step_name, exc: errors.append(f"{step_name}: {exc}"),
            on_cancelled=lambda: cancelled.append(True),
        )
    if cancelled:
        print("Update cancelled, catalog left untouched.", file=sys.stderr)
        return EXIT_CANCELLED
    if not results or not all(r.success for r in results):
        failed = errors[-1] if errors else "no step executed"
        print(f"Update failed: {failed}", file=sys.stderr)
        return 1

    files = context.get("dump_files") or []
    print(f"Found {len(files)} {config.dump_pattern} file(s):")
    for path in files:
        print(f"   {path.name}")
    if not files:
        print("Nothing to do.")
        return 0

    catalog = context["catalog"]
    stats = context["stats"]
    print(f"Parsed {len(context.get('groups') or {})} unique anime series.")
    for name in stats.added_names:
        print(f"  + ADD: {name}")
    for name in stats.removed_names:
        print(f"  - REMOVE: {name}")
    print(f"\nDone! {config.catalog_file} updated.")
    _print_summary(catalog)
    print(f"  Added: {stats.added} | Updated: {stats.updated} | Removed: {stats.removed}")
    return 0


def run_load(config: CatalogConfig) -> int:
    store = JsonFileCatalogStore(config.catalog_path)
    catalog = load_catalog(
        store,
        DocumentFetcher.from_config(config),
        combined_url=config.combined_url,
        fallback_json_url=config.fallback_json_url,
    )
    if catalog is None:
        print("No catalog available.", file=sys.stderr)
        return 1
    updated = catalog.last_updated.isoformat() if catalog.last_updated else "unknown"
    print(f"Catalog (last updated {updated}):")
    _print_summary(catalog)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    overrides = {
        "catalog_file": args.catalog_file,
        "log_file": args.log_file.resolve() if args.log_file else None,
    }
    if args.command == "update":
        overrides["dump_pattern"] = args.pattern
    else:
        overrides["combined_url"] = args.combined_url
        overrides["fallback_json_url"] = args.fallback_url
    try:
        config = load_config(args.directory, args.config, overrides)
    except (OSError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    setup_logging(level=level_from_verbosity(args.verbose, args.quiet), log_file=config.log_file)
    logger.debug("Starting anicatalog %s in %s", args.command, config.dumps_dir)
    if args.command == "update":
        return run_update(config)
    return run_load(config)


if __name__ == "__main__":
    sys.exit(main())
