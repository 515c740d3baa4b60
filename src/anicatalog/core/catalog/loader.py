"""
Chargement opportuniste du catalogue.
Ordre : catalogue stocké -> export combiné distant (parsé, fusionné, stocké) -> JSON distant.
"""

from __future__ import annotations

import datetime
import json
import logging
from typing import Protocol

from anicatalog.core.catalog.content import parse_content
from anicatalog.core.catalog.merger import merge_catalog
from anicatalog.core.catalog.serialize import catalog_from_dict
from anicatalog.core.models import Catalog
from anicatalog.core.storage.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, identifier: str) -> str | None:
        """Contenu texte du document, ou None (toute erreur = absent)."""
        ...


def load_catalog(
    store: CatalogStore,
    fetcher: Fetcher | None = None,
    *,
    combined_url: str = "",
    fallback_json_url: str = "",
    today: datetime.date | None = None,
) -> Catalog | None:
    """Retourne le premier catalogue disponible, ou None."""
    stored = store.load()
    if stored is not None:
        return stored

    if fetcher is not None and combined_url:
        text = fetcher.fetch(combined_url)
        if text:
            catalog, stats = merge_catalog(stored, parse_content(text), today=today)
            if not store.save(catalog):
                logger.warning("Catalog rebuilt from %s but not saved", combined_url)
            logger.info(
                "Catalog rebuilt from %s: %d series (added=%d)", combined_url, catalog.total_series, stats.added
            )
            return catalog

    if fetcher is not None and fallback_json_url:
        text = fetcher.fetch(fallback_json_url)
        if text:
            try:
                payload = json.loads(text)
            except ValueError as exc:
                logger.warning("Invalid JSON catalog at %s: %s", fallback_json_url, exc)
                return None
            return catalog_from_dict(payload)
    return None
