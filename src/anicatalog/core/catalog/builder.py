"""Construction d'une entrée de catalogue (SeriesEntry) à partir des épisodes d'une série."""

from __future__ import annotations

from typing import Iterable

from anicatalog.core.models import EpisodeRecord, SeriesEntry


def episode_key(record: EpisodeRecord) -> tuple[float, int | None]:
    """Clé d'unicité dans une série : (épisode, début de chapitre ou None)."""
    return (record.episode, record.start_seconds)


def sort_and_dedup(records: Iterable[EpisodeRecord]) -> list[EpisodeRecord]:
    """
    Trie par numéro d'épisode (tri stable) puis garde la première occurrence par clé.
    Rattrape les doublons d'un même épisode publiés sous deux video_id.
    """
    ordered = sorted(records, key=lambda r: r.episode)
    seen: set[tuple[float, int | None]] = set()
    unique: list[EpisodeRecord] = []
    for record in ordered:
        key = episode_key(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def is_marathon(records: list[EpisodeRecord]) -> bool:
    """Marathon si chapitres horodatés, ou >= 2 vidéos toutes marquées marathon."""
    if any(r.is_chaptered for r in records):
        return True
    return len(records) > 1 and all(r.is_marathon for r in records)


def build_entry(name: str, records: Iterable[EpisodeRecord]) -> SeriesEntry:
    videos = sort_and_dedup(records)
    first = videos[0] if videos else None
    marathon = bool(videos) and is_marathon(videos)
    return SeriesEntry(
        name=name,
        videos=videos,
        episode_count=len(videos),
        thumbnail_video_id=first.video_id if first else None,
        min_episode=first.episode if first else None,
        marathon_video_id=first.video_id if marathon and first else None,
        marathon_title=name if marathon else None,
        is_donghua=any(r.is_donghua for r in videos),
    )
