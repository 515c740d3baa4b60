"""Sérialisation JSON du catalogue (forme anime_list / total_series / last_updated)."""

from __future__ import annotations

import datetime
import logging
import math
from typing import Any

from anicatalog.core.models import Catalog, EpisodeRecord, SeriesEntry

logger = logging.getLogger(__name__)


def _json_number(value: float | None) -> int | float | None:
    """Un numéro entier reste un entier JSON (3 et non 3.0)."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _read_number(value: Any) -> float | None:
    """Nombre fini, ou None (json.loads accepte NaN et Infinity)."""
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, (int, float)):
        try:
            text = str(value).strip()
            value = float(text) if "." in text else int(text)
        except (TypeError, ValueError):
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _read_int(value: Any) -> int | None:
    number = _read_number(value)
    return int(number) if number is not None else None


def record_to_dict(record: EpisodeRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": record.display_title,
        "url": record.url,
        "video_id": record.video_id,
        "episode": _json_number(record.episode),
    }
    if record.end_episode is not None:
        payload["end_episode"] = record.end_episode
    if record.start_seconds is not None:
        payload["start_seconds"] = record.start_seconds
    if record.chapter_title is not None:
        payload["chapter_title"] = record.chapter_title
    if record.is_marathon:
        payload["is_marathon"] = True
    if record.is_donghua:
        payload["is_donghua"] = True
    return payload


def entry_to_dict(entry: SeriesEntry) -> dict[str, Any]:
    return {
        "name": entry.name,
        "videos": [record_to_dict(v) for v in entry.videos],
        "episode_count": entry.episode_count,
        "thumbnail_video_id": entry.thumbnail_video_id,
        "min_episode": _json_number(entry.min_episode),
        "marathon_video_id": entry.marathon_video_id,
        "marathon_title": entry.marathon_title,
        "is_donghua": entry.is_donghua,
    }


def catalog_to_dict(catalog: Catalog) -> dict[str, Any]:
    return {
        "anime_list": [entry_to_dict(e) for e in catalog.series_list],
        "total_series": catalog.total_series,
        "last_updated": catalog.last_updated.isoformat() if catalog.last_updated else None,
    }


def record_from_dict(series_name: str, row: dict[str, Any]) -> EpisodeRecord | None:
    """Retourne None si la ligne n'a pas de numéro d'épisode exploitable."""
    episode = _read_number(row.get("episode"))
    if episode is None:
        return None
    chapter_title = row.get("chapter_title")
    return EpisodeRecord(
        series_name=series_name,
        episode=episode,
        display_title=str(row.get("title", "") or ""),
        url=str(row.get("url", "") or ""),
        video_id=row.get("video_id") or None,
        end_episode=_read_int(row.get("end_episode")),
        start_seconds=_read_int(row.get("start_seconds")),
        chapter_title=str(chapter_title) if chapter_title is not None else None,
        is_marathon=bool(row.get("is_marathon", False)),
        is_donghua=bool(row.get("is_donghua", False)),
    )


def entry_from_dict(row: dict[str, Any]) -> SeriesEntry | None:
    name = str(row.get("name", "") or "").strip()
    if not name:
        return None
    raw_videos = row.get("videos", [])
    videos: list[EpisodeRecord] = []
    if isinstance(raw_videos, list):
        for raw in raw_videos:
            if not isinstance(raw, dict):
                continue
            record = record_from_dict(name, raw)
            if record is not None:
                videos.append(record)
    episode_count = _read_int(row.get("episode_count"))
    return SeriesEntry(
        name=name,
        videos=videos,
        episode_count=episode_count if episode_count is not None else len(videos),
        thumbnail_video_id=row.get("thumbnail_video_id") or None,
        min_episode=_read_number(row.get("min_episode")),
        marathon_video_id=row.get("marathon_video_id") or None,
        marathon_title=row.get("marathon_title") or None,
        is_donghua=bool(row.get("is_donghua", False)),
    )


def catalog_from_dict(payload: Any) -> Catalog | None:
    """
    Reconstruit un catalogue depuis le JSON persisté.
    Retourne None si la structure est inattendue ; les entrées malformées sont ignorées.
    """
    if not isinstance(payload, dict):
        logger.warning("Catalogue ignoré: structure inattendue (%s)", type(payload).__name__)
        return None
    raw_list = payload.get("anime_list")
    if not isinstance(raw_list, list):
        logger.warning("Catalogue ignoré: clé 'anime_list' invalide")
        return None
    entries = [e for e in (entry_from_dict(r) for r in raw_list if isinstance(r, dict)) if e is not None]
    last_updated: datetime.date | None = None
    raw_date = payload.get("last_updated")
    if isinstance(raw_date, str):
        try:
            last_updated = datetime.date.fromisoformat(raw_date[:10])
        except ValueError:
            last_updated = None
    return Catalog(series_list=entries, total_series=len(entries), last_updated=last_updated)
