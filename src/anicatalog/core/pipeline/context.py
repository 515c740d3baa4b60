"""Contrat typé du contexte passé au pipeline (runner et steps)."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypedDict

from anicatalog.core.grouping import GroupMap
from anicatalog.core.models import Catalog, CatalogConfig, MergeStats
from anicatalog.core.storage.catalog_store import CatalogStore


class _PipelineContextOptional(TypedDict, total=False):
    """Clés optionnelles du contexte pipeline (remplies par les étapes)."""

    dump_files: list[Path]
    """Exports trouvés par DiscoverDumpsStep."""
    groups: GroupMap
    """Séries regroupées (tous exports confondus) produites par ParseDumpsStep."""
    previous: Catalog | None
    catalog: Catalog
    """Nouveau catalogue produit par MergeCatalogStep."""
    stats: MergeStats
    is_cancelled: Callable[[], bool] | None
    """If present, steps may check this in loops to abort early."""


class PipelineContext(_PipelineContextOptional):
    """
    Contexte passé à chaque étape du pipeline et au runner.

    Clés requises :
        config : configuration (CatalogConfig).
        store : persistance du catalogue (CatalogStore).

    Les étapes écrivent leurs résultats dans le contexte partagé
    (dump_files, groups, previous, catalog, stats).
    """

    config: CatalogConfig
    store: CatalogStore
