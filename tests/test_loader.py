"""Tests du chargement opportuniste (local -> export combiné -> JSON distant)."""

from __future__ import annotations

import datetime
import json

from anicatalog.core.catalog import catalog_to_dict, merge_catalog
from anicatalog.core.catalog.loader import load_catalog
from anicatalog.core.grouping import group_records
from anicatalog.core.storage.catalog_store import KeyValueCatalogStore

TODAY = datetime.date(2024, 5, 1)
COMBINED_URL = "https://example.test/combined.txt"
JSON_URL = "https://example.test/anime_data.json"

COMBINED = """Title: 《Foo》 #1 (ID Sub)【Ani-One Indonesia】
URL: https://www.youtube.com/watch?v=AAA
----------
Title: 《Foo》 #2 (ID Sub)【Ani-One Indonesia】
URL: https://www.youtube.com/watch?v=BBB
"""


class _FakeFetcher:
    def __init__(self, documents: dict[str, str]):
        self.documents = documents
        self.requested: list[str] = []

    def fetch(self, identifier: str) -> str | None:
        self.requested.append(identifier)
        return self.documents.get(identifier)


def _stored_catalog(make_record):
    catalog, _ = merge_catalog(None, group_records([make_record("Stored", 1)]), today=TODAY)
    return catalog


def test_stored_catalog_wins_without_fetching(make_record) -> None:
    store = KeyValueCatalogStore()
    store.save(_stored_catalog(make_record))
    fetcher = _FakeFetcher({COMBINED_URL: COMBINED})
    catalog = load_catalog(store, fetcher, combined_url=COMBINED_URL)
    assert catalog.names() == ["Stored"]
    assert fetcher.requested == []


def test_combined_dump_parsed_merged_and_stored() -> None:
    store = KeyValueCatalogStore()
    fetcher = _FakeFetcher({COMBINED_URL: COMBINED})
    catalog = load_catalog(store, fetcher, combined_url=COMBINED_URL, fallback_json_url=JSON_URL, today=TODAY)
    assert catalog.names() == ["Foo"]
    assert catalog.series_list[0].episode_count == 2
    assert catalog.last_updated == TODAY
    assert fetcher.requested == [COMBINED_URL]
    assert store.load().names() == ["Foo"]


def test_fallback_json_when_combined_missing(make_record) -> None:
    payload = json.dumps(catalog_to_dict(_stored_catalog(make_record)))
    fetcher = _FakeFetcher({JSON_URL: payload})
    catalog = load_catalog(KeyValueCatalogStore(), fetcher, combined_url=COMBINED_URL, fallback_json_url=JSON_URL)
    assert catalog.names() == ["Stored"]
    assert fetcher.requested == [COMBINED_URL, JSON_URL]


def test_nothing_available_returns_none() -> None:
    fetcher = _FakeFetcher({JSON_URL: "<html>not json</html>"})
    assert load_catalog(KeyValueCatalogStore(), fetcher, combined_url=COMBINED_URL, fallback_json_url=JSON_URL) is None
    assert load_catalog(KeyValueCatalogStore()) is None


def test_empty_stored_catalog_is_still_used() -> None:
    store = KeyValueCatalogStore({"anime_data": json.dumps({"anime_list": [], "total_series": 0})})
    fetcher = _FakeFetcher({COMBINED_URL: COMBINED})
    catalog = load_catalog(store, fetcher, combined_url=COMBINED_URL, today=TODAY)
    assert catalog is not None
    assert catalog.series_list == []
    assert fetcher.requested == []
