"""Modèle de données : dataclasses typées pour triplets, épisodes, séries, catalogue."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_USER_AGENT = "anicatalog/0.1 (catalog updater)"


@dataclass(frozen=True)
class CatalogConfig:
    """Configuration d'une mise à jour de catalogue."""

    dumps_dir: Path
    """Répertoire contenant les exports texte (filtered*.txt)."""
    dump_pattern: str = "filtered*.txt"
    """Motif glob des exports à traiter."""
    catalog_file: str = "anime_data.json"
    """Nom du fichier catalogue JSON (relatif à dumps_dir)."""
    storage_key: str = "anime_data"
    """Clé utilisée par les stores clé/valeur."""
    combined_url: str = ""
    """URL d'un export combiné (combined.txt) à essayer avant le JSON serveur."""
    fallback_json_url: str = ""
    """URL d'un catalogue JSON précalculé (dernier recours)."""
    user_agent: str = DEFAULT_USER_AGENT
    """User-Agent pour les requêtes HTTP."""
    timeout_s: float = 30.0
    retries: int = 3
    backoff_s: float = 2.0
    log_file: Path | None = None
    """Fichier de log optionnel."""

    @property
    def catalog_path(self) -> Path:
        return Path(self.dumps_dir) / self.catalog_file


@dataclass(frozen=True)
class RawTriple:
    """Un titre, son URL et les lignes qui suivent (chapitres)."""

    title: str
    url: str
    body: str = ""


@dataclass(frozen=True)
class EpisodeRecord:
    """Un épisode (ou un chapitre de marathon) extrait d'un titre."""

    series_name: str
    episode: float
    display_title: str
    url: str
    video_id: str | None
    end_episode: int | None = None
    """Fin de plage (ex: Episode 1-3), absent sinon."""
    start_seconds: int | None = None
    """Début du chapitre dans la vidéo marathon."""
    chapter_title: str | None = None
    is_marathon: bool = False
    is_donghua: bool = False

    @property
    def is_chaptered(self) -> bool:
        return self.start_seconds is not None


@dataclass
class SeriesEntry:
    """Une série du catalogue final (vidéos triées, dédoublonnées)."""

    name: str
    videos: list[EpisodeRecord] = field(default_factory=list)
    episode_count: int = 0
    thumbnail_video_id: str | None = None
    min_episode: float | None = None
    marathon_video_id: str | None = None
    marathon_title: str | None = None
    is_donghua: bool = False


@dataclass
class Catalog:
    """Catalogue persisté : liste des séries triée par nom."""

    series_list: list[SeriesEntry] = field(default_factory=list)
    total_series: int = 0
    last_updated: datetime.date | None = None

    def names(self) -> list[str]:
        return [entry.name for entry in self.series_list]

    @property
    def total_episodes(self) -> int:
        return sum(entry.episode_count for entry in self.series_list)


@dataclass
class MergeStats:
    """Bilan d'une fusion de catalogue."""

    added: int = 0
    updated: int = 0
    removed: int = 0
    added_names: list[str] = field(default_factory=list)
    removed_names: list[str] = field(default_factory=list)
