"""Tests des stores de catalogue (fichier JSON, clé/valeur)."""

from __future__ import annotations

import datetime

from anicatalog.core.catalog import merge_catalog
from anicatalog.core.grouping import group_records
from anicatalog.core.models import CatalogConfig
from anicatalog.core.storage.catalog_store import JsonFileCatalogStore, KeyValueCatalogStore


def _catalog(make_record):
    catalog, _ = merge_catalog(
        None, group_records([make_record("Foo", 1), make_record("Bar", 1)]), today=datetime.date(2024, 5, 1)
    )
    return catalog


def test_json_store_missing_file_loads_none(tmp_path) -> None:
    assert JsonFileCatalogStore(tmp_path / "anime_data.json").load() is None


def test_json_store_save_then_load(tmp_path, make_record) -> None:
    path = tmp_path / "out" / "anime_data.json"
    store = JsonFileCatalogStore(path)
    assert store.save(_catalog(make_record)) is True
    assert path.exists()
    assert not (tmp_path / "out" / "anime_data.json.tmp").exists()
    loaded = store.load()
    assert loaded.names() == ["Bar", "Foo"]


def test_json_store_invalid_json_is_absent(tmp_path) -> None:
    path = tmp_path / "anime_data.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileCatalogStore(path).load() is None


def test_json_store_save_failure_returns_false(tmp_path, make_record) -> None:
    # le chemin cible est un répertoire : remplacement impossible
    target = tmp_path / "anime_data.json"
    target.mkdir()
    (target / "keep").write_text("x", encoding="utf-8")
    assert JsonFileCatalogStore(target).save(_catalog(make_record)) is False
    assert not (tmp_path / "anime_data.json.tmp").exists()


def test_key_value_store_round_trip(make_record) -> None:
    backend: dict[str, str] = {}
    store = KeyValueCatalogStore(backend, key="anime_data")
    assert store.load() is None
    assert store.save(_catalog(make_record)) is True
    assert "anime_data" in backend
    assert KeyValueCatalogStore(backend).load().names() == ["Bar", "Foo"]


def test_key_value_store_invalid_payload() -> None:
    assert KeyValueCatalogStore({"anime_data": "][", "other": "{}"}).load() is None
    assert KeyValueCatalogStore({"anime_data": "{}"}).load() is None


class _ReadOnlyBackend(dict):
    def __setitem__(self, key, value):
        raise OSError("quota exceeded")


def test_key_value_store_save_failure_returns_false(make_record) -> None:
    assert KeyValueCatalogStore(_ReadOnlyBackend()).save(_catalog(make_record)) is False


def test_key_value_store_uses_configured_key(tmp_path, make_record) -> None:
    backend: dict[str, str] = {}
    config = CatalogConfig(dumps_dir=tmp_path, storage_key="catalog_v2")
    store = KeyValueCatalogStore.from_config(config, backend)
    assert store.save(_catalog(make_record))
    assert list(backend) == ["catalog_v2"]


def test_json_store_non_finite_numbers_are_ignored(tmp_path) -> None:
    path = tmp_path / "anime_data.json"
    path.write_text(
        '{"anime_list": [{"name": "A", "episode_count": NaN, "min_episode": Infinity,'
        ' "videos": [{"episode": NaN, "video_id": "X"}, {"episode": 2, "start_seconds": -Infinity}]}]}',
        encoding="utf-8",
    )
    catalog = JsonFileCatalogStore(path).load()
    entry = catalog.series_list[0]
    assert entry.name == "A"
    assert [v.episode for v in entry.videos] == [2]
    assert entry.videos[0].start_seconds is None
    assert entry.episode_count == 1
    assert entry.min_episode is None
