"""
Regroupement des épisodes en séries.

1. Buckets exacts sur le nom normalisé (minuscules, alphanumérique).
2. Fusion floue itérative (inclusion ou distance d'édition), vetoée si les deux
   buckets partagent au moins 2 numéros d'épisode. Une fusion par passe, puis
   reprise depuis le début : le résultat dépend de l'ordre d'entrée.
3. Nom canonique = plus court des noms d'affichage rencontrés.
4. Dédoublonnage par video_id (ou video_id + épisode pour les chapitres).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from anicatalog.core.grouping.similarity import keys_related
from anicatalog.core.models import EpisodeRecord
from anicatalog.core.utils.text import normalize_for_compare

logger = logging.getLogger(__name__)

# À partir de 2 épisodes en commun, deux buckets sont des séries distinctes
CONFLICT_VETO = 2
# Clé de dédoublonnage des vidéos sans identifiant
MISSING_VIDEO_ID = ""

GroupMap = dict[str, dict[str, EpisodeRecord]]
"""Nom canonique -> (clé de dédoublonnage -> épisode)."""


@dataclass
class Bucket:
    """Cluster provisoire de la phase de regroupement."""

    normalized_key: str
    display_names: list[str] = field(default_factory=list)
    """Noms d'affichage candidats, dans l'ordre de rencontre (sans doublon)."""
    records: list[EpisodeRecord] = field(default_factory=list)

    def add(self, record: EpisodeRecord) -> None:
        self.add_name(record.series_name)
        self.records.append(record)

    def add_name(self, name: str) -> None:
        if name not in self.display_names:
            self.display_names.append(name)

    def episodes(self) -> set[float]:
        return {r.episode for r in self.records}

    def conflict_count(self, other: "Bucket") -> int:
        """Nombre d'épisodes de other dont le numéro existe déjà ici."""
        mine = self.episodes()
        return sum(1 for r in other.records if r.episode in mine)

    def canonical_name(self) -> str:
        # min() garde le premier rencontré en cas d'égalité
        return min(self.display_names, key=len)


def record_dedup_key(record: EpisodeRecord) -> str:
    """video_id, ou video_id + épisode pour un chapitre de vidéo marathon."""
    video_id = record.video_id or MISSING_VIDEO_ID
    if record.is_chaptered:
        return f"{video_id}_ep{record.episode}"
    return video_id


def bucket_exact(records: Iterable[EpisodeRecord]) -> list[Bucket]:
    """Étape 1 : un bucket par nom normalisé, dans l'ordre de première apparition."""
    by_key: dict[str, Bucket] = {}
    for record in records:
        key = normalize_for_compare(record.series_name)
        bucket = by_key.get(key)
        if bucket is None:
            bucket = Bucket(normalized_key=key)
            by_key[key] = bucket
        bucket.add(record)
    return list(by_key.values())


def merge_buckets(first: Bucket, second: Bucket) -> Bucket:
    """
    Fusionne deux buckets : le plus gros (le premier à égalité) absorbe l'autre.
    La clé conservée est la plus courte des deux ; les noms restent dans l'ordre
    de rencontre (ceux de first d'abord).
    """
    absorber, absorbed = (second, first) if len(second.records) > len(first.records) else (first, second)
    merged = Bucket(
        normalized_key=absorber.normalized_key,
        records=list(absorber.records) + list(absorbed.records),
    )
    for name in first.display_names + second.display_names:
        merged.add_name(name)
    if len(absorbed.normalized_key) < len(absorber.normalized_key):
        merged.normalized_key = absorbed.normalized_key
    return merged


def _find_merge(buckets: list[Bucket]) -> tuple[int, int] | None:
    """Première paire (i < j) fusionnable, ou None."""
    for i in range(len(buckets)):
        for j in range(i + 1, len(buckets)):
            b1, b2 = buckets[i], buckets[j]
            if not keys_related(b1.normalized_key, b2.normalized_key):
                continue
            conflicts = b1.conflict_count(b2)
            if conflicts < CONFLICT_VETO:
                return i, j
            logger.debug(
                "Merge vetoed: %r / %r (%d shared episodes)",
                b1.normalized_key,
                b2.normalized_key,
                conflicts,
            )
    return None


def fuzzy_merge(buckets: list[Bucket]) -> list[Bucket]:
    """Étape 2 : fusions successives, reprise depuis le début après chaque fusion."""
    work = list(buckets)
    while True:
        pair = _find_merge(work)
        if pair is None:
            return work
        i, j = pair
        merged = merge_buckets(work[i], work[j])
        logger.debug("Merged %r + %r -> %r", work[i].normalized_key, work[j].normalized_key, merged.normalized_key)
        work = [merged if k == i else b for k, b in enumerate(work) if k != j]


def dedup_records(records: Iterable[EpisodeRecord]) -> dict[str, EpisodeRecord]:
    """Étape 4 : premier épisode gagnant par clé de dédoublonnage."""
    unique: dict[str, EpisodeRecord] = {}
    for record in records:
        key = record_dedup_key(record)
        if key not in unique:
            unique[key] = record
    return unique


def group_records(records: Iterable[EpisodeRecord]) -> GroupMap:
    """Regroupe une liste plate d'épisodes en séries nommées."""
    buckets = fuzzy_merge(bucket_exact(records))
    groups: GroupMap = {}
    for bucket in buckets:
        name = bucket.canonical_name()
        renamed = (replace(r, series_name=name) for r in bucket.records)
        groups[name] = dedup_records(renamed)
    return groups


def merge_group_maps(group_maps: Iterable[GroupMap]) -> GroupMap:
    """
    Fusionne les résultats de plusieurs exports.

    Les séries sont rapprochées par nom normalisé (le premier nom canonique
    rencontré est conservé) ; sur collision de clé, le premier fichier gagne.
    Pas de fusion floue ni de veto entre fichiers.
    """
    combined: GroupMap = {}
    name_by_key: dict[str, str] = {}
    for groups in group_maps:
        for name, videos in groups.items():
            key = normalize_for_compare(name)
            canonical = name_by_key.setdefault(key, name)
            dest = combined.setdefault(canonical, {})
            for dedup_key, record in videos.items():
                if dedup_key not in dest:
                    dest[dedup_key] = replace(record, series_name=canonical)
    return combined
