"""Tests de la forme JSON du catalogue."""

from __future__ import annotations

import datetime
import json

from anicatalog.core.catalog import catalog_from_dict, catalog_to_dict, merge_catalog, record_to_dict
from anicatalog.core.grouping import group_records


def test_catalog_json_shape(make_record) -> None:
    groups = group_records(
        [
            make_record("Foo", 2.0, video_id="B"),
            make_record("Foo", 1, video_id="A"),
            make_record("Foo", 1.5, video_id="S"),
        ]
    )
    catalog, _ = merge_catalog(None, groups, today=datetime.date(2024, 5, 1))
    payload = catalog_to_dict(catalog)

    assert set(payload) == {"anime_list", "total_series", "last_updated"}
    assert payload["total_series"] == 1
    assert payload["last_updated"] == "2024-05-01"
    entry = payload["anime_list"][0]
    assert entry["name"] == "Foo"
    assert entry["episode_count"] == 3
    assert entry["thumbnail_video_id"] == "A"
    assert [v["episode"] for v in entry["videos"]] == [1, 1.5, 2]
    # épisode entier sérialisé sans ".0"
    assert isinstance(entry["videos"][2]["episode"], int)
    assert '"episode": 2}' in json.dumps(entry["videos"][2])


def test_optional_record_fields_only_when_set(make_record) -> None:
    video = record_to_dict(
        make_record("Foo", 1, video_id="MAR", start_seconds=0, chapter_title="Start", is_marathon=True)
    )
    assert video["start_seconds"] == 0
    assert video["chapter_title"] == "Start"
    assert video["is_marathon"] is True
    assert "end_episode" not in video
    assert "is_donghua" not in video


def test_catalog_from_dict_round_trip_preserves_names_and_counts(make_record) -> None:
    groups = group_records([make_record("Foo", 1), make_record("Bar", 1), make_record("Bar", 2)])
    catalog, _ = merge_catalog(None, groups, today=datetime.date(2024, 5, 1))
    restored = catalog_from_dict(json.loads(json.dumps(catalog_to_dict(catalog))))
    assert restored is not None
    assert restored.names() == ["Bar", "Foo"]
    assert restored.total_episodes == 3
    assert restored.last_updated == datetime.date(2024, 5, 1)
    assert restored.series_list[0].videos[0].series_name == "Bar"


def test_catalog_from_dict_rejects_unexpected_structure() -> None:
    assert catalog_from_dict([]) is None
    assert catalog_from_dict({"anime_list": "nope"}) is None


def test_catalog_from_dict_skips_malformed_entries() -> None:
    payload = {
        "anime_list": [
            {"name": "", "videos": []},
            "junk",
            {"name": "Foo", "videos": [{"episode": "3", "video_id": "A"}, {"title": "no episode"}]},
        ],
        "last_updated": "not a date",
    }
    catalog = catalog_from_dict(payload)
    assert catalog.names() == ["Foo"]
    assert [v.episode for v in catalog.series_list[0].videos] == [3]
    assert catalog.last_updated is None


def test_catalog_from_dict_rejects_non_finite_numbers() -> None:
    catalog = catalog_from_dict(
        {"anime_list": [{"name": "Foo", "episode_count": float("nan"), "videos": [{"episode": "1e999.0"}]}]}
    )
    assert catalog.series_list[0].episode_count == 0
    assert catalog.series_list[0].videos == []
