"""
Stores de catalogue : load() -> Catalog | None, save(Catalog) -> bool.
Les erreurs de lecture/écriture sont journalisées, jamais propagées.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import MutableMapping, Protocol

from anicatalog.core.catalog.serialize import catalog_from_dict, catalog_to_dict
from anicatalog.core.models import Catalog, CatalogConfig

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "anime_data"


class CatalogStore(Protocol):
    """Protocol pour un support de persistance du catalogue."""

    def load(self) -> Catalog | None:
        """Catalogue persisté, ou None si absent / illisible."""
        ...

    def save(self, catalog: Catalog) -> bool:
        """True si le catalogue complet a été écrit."""
        ...


class JsonFileCatalogStore:
    """Catalogue dans un fichier JSON (écriture atomique via fichier temporaire)."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Catalog | None:
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Impossible de charger %s: %s", self.path, exc)
            return None
        return catalog_from_dict(payload)

    def save(self, catalog: Catalog) -> bool:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(
                json.dumps(catalog_to_dict(catalog), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            tmp.replace(self.path)
        except OSError as exc:
            logger.warning("Catalog not saved to %s: %s", self.path, exc)
            tmp.unlink(missing_ok=True)
            return False
        return True


class KeyValueCatalogStore:
    """Catalogue sérialisé en JSON sous une clé d'un mapping (mémoire, cache clé/valeur)."""

    def __init__(self, backend: MutableMapping[str, str] | None = None, key: str = DEFAULT_STORAGE_KEY):
        self.backend: MutableMapping[str, str] = backend if backend is not None else {}
        self.key = key

    @classmethod
    def from_config(cls, config: CatalogConfig, backend: MutableMapping[str, str] | None = None) -> "KeyValueCatalogStore":
        return cls(backend, key=config.storage_key)

    def load(self) -> Catalog | None:
        raw = self.backend.get(self.key)
        if not raw:
            return None
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            logger.warning("Invalid catalog under key %r: %s", self.key, exc)
            return None
        return catalog_from_dict(payload)

    def save(self, catalog: Catalog) -> bool:
        try:
            self.backend[self.key] = json.dumps(catalog_to_dict(catalog), ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Catalog not saved under key %r: %s", self.key, exc)
            return False
        return True
