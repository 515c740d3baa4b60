"""Fusion des séries nouvellement construites avec le catalogue précédent."""

from __future__ import annotations

import datetime
import logging
from typing import Mapping

from anicatalog.core.catalog.builder import build_entry
from anicatalog.core.models import Catalog, EpisodeRecord, MergeStats

logger = logging.getLogger(__name__)


def merge_catalog(
    previous: Catalog | None,
    groups: Mapping[str, Mapping[str, EpisodeRecord]],
    *,
    today: datetime.date | None = None,
) -> tuple[Catalog, MergeStats]:
    """
    Remplace le catalogue : seules les séries présentes dans groups sont conservées.

    Returns:
        (nouveau catalogue trié par nom, bilan added/updated/removed).
    """
    previous_names = dict.fromkeys(previous.names()) if previous else {}
    stats = MergeStats()
    entries = []
    for name, videos in groups.items():
        if not videos:
            continue
        entries.append(build_entry(name, videos.values()))
        if name in previous_names:
            stats.updated += 1
        else:
            stats.added += 1
            stats.added_names.append(name)

    for name in previous_names:
        if name not in groups:
            stats.removed += 1
            stats.removed_names.append(name)

    entries.sort(key=lambda e: e.name)
    catalog = Catalog(
        series_list=entries,
        total_series=len(entries),
        last_updated=today or datetime.date.today(),
    )
    logger.debug(
        "Catalog merged: %d series (added=%d updated=%d removed=%d)",
        catalog.total_series,
        stats.added,
        stats.updated,
        stats.removed,
    )
    return catalog, stats
