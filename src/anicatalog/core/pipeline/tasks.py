"""Tâches concrètes du pipeline : DiscoverDumps, ParseDumps, MergeCatalog, SaveCatalog."""

from __future__ import annotations

import datetime
import logging
from typing import Callable

from anicatalog.core.catalog import merge_catalog, parse_content
from anicatalog.core.grouping import GroupMap, merge_group_maps
from anicatalog.core.models import CatalogConfig
from anicatalog.core.pipeline.context import PipelineContext
from anicatalog.core.pipeline.steps import Step, StepResult
from anicatalog.core.storage.dumps import list_dump_files, read_dump

logger = logging.getLogger(__name__)


def _make_log(on_log: Callable[[str, str], None] | None):
    def log(level: str, msg: str):
        if on_log:
            on_log(level, msg)
        getattr(logger, level.lower(), logger.info)(msg)

    return log


class DiscoverDumpsStep(Step):
    """Liste les exports filtered*.txt du répertoire configuré."""

    name = "discover_dumps"

    def run(
        self,
        context: PipelineContext,
        *,
        on_progress: Callable[[str, float, str], None] | None = None,
        on_log: Callable[[str, str], None] | None = None,
    ) -> StepResult:
        config: CatalogConfig = context["config"]
        if not config.dumps_dir.is_dir():
            return StepResult(False, f"Dumps directory not found: {config.dumps_dir}")
        files = list_dump_files(config.dumps_dir, config.dump_pattern)
        context["dump_files"] = files
        if not files:
            return StepResult(True, "No dump files found", {"dump_files": []})
        return StepResult(True, f"Found {len(files)} dump file(s)", {"dump_files": files})


class ParseDumpsStep(Step):
    """Parse chaque export séparément puis fusionne les séries (premier fichier gagnant)."""

    name = "parse_dumps"

    def run(
        self,
        context: PipelineContext,
        *,
        on_progress: Callable[[str, float, str], None] | None = None,
        on_log: Callable[[str, str], None] | None = None,
    ) -> StepResult:
        log = _make_log(on_log)
        files = context.get("dump_files") or []
        is_cancelled = context.get("is_cancelled")
        per_file: list[GroupMap] = []
        for n, path in enumerate(files):
            if is_cancelled and is_cancelled():
                return StepResult(False, "Cancelled")
            if on_progress:
                on_progress(self.name, n / len(files), f"Parsing {path.name}...")
            try:
                content = read_dump(path)
            except OSError as exc:
                log("warning", f"Skipping unreadable dump {path.name}: {exc}")
                continue
            groups = parse_content(content)
            log("debug", f"{path.name}: {len(groups)} series")
            per_file.append(groups)
        combined = merge_group_maps(per_file)
        context["groups"] = combined
        return StepResult(True, f"Parsed {len(combined)} unique series", {"series": len(combined)})


class MergeCatalogStep(Step):
    """Charge le catalogue précédent et le remplace par les séries parsées."""

    name = "merge_catalog"

    def __init__(self, today: datetime.date | None = None):
        self.today = today

    def run(
        self,
        context: PipelineContext,
        *,
        on_progress: Callable[[str, float, str], None] | None = None,
        on_log: Callable[[str, str], None] | None = None,
    ) -> StepResult:
        if not context.get("dump_files"):
            return StepResult(True, "Nothing to merge", {"skipped": True})
        previous = context["store"].load()
        context["previous"] = previous
        catalog, stats = merge_catalog(previous, context.get("groups") or {}, today=self.today)
        context["catalog"] = catalog
        context["stats"] = stats
        return StepResult(
            True,
            f"Added: {stats.added} | Updated: {stats.updated} | Removed: {stats.removed}",
            {"added": stats.added, "updated": stats.updated, "removed": stats.removed},
        )


class SaveCatalogStep(Step):
    """Écrit le catalogue complet via le store (jamais de mise à jour partielle)."""

    name = "save_catalog"

    def run(
        self,
        context: PipelineContext,
        *,
        on_progress: Callable[[str, float, str], None] | None = None,
        on_log: Callable[[str, str], None] | None = None,
    ) -> StepResult:
        catalog = context.get("catalog")
        if catalog is None:
            return StepResult(True, "Nothing to save", {"skipped": True})
        if not context["store"].save(catalog):
            return StepResult(False, "Catalog could not be saved")
        return StepResult(True, f"Catalog saved: {catalog.total_series} series")


def build_update_steps(today: datetime.date | None = None) -> list[Step]:
    """Étapes d'une mise à jour complète du catalogue."""
    return [DiscoverDumpsStep(), ParseDumpsStep(), MergeCatalogStep(today=today), SaveCatalogStep()]
