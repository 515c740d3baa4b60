"""Tests de la fusion avec le catalogue précédent."""

from __future__ import annotations

import datetime

from anicatalog.core.catalog import merge_catalog
from anicatalog.core.grouping import group_records

TODAY = datetime.date(2024, 5, 1)


def _groups(make_record, *names: str):
    return group_records([make_record(name, 1) for name in names])


def test_first_run_everything_added(make_record) -> None:
    catalog, stats = merge_catalog(None, _groups(make_record, "Zeta", "Alpha"), today=TODAY)
    assert catalog.names() == ["Alpha", "Zeta"]
    assert catalog.total_series == 2
    assert catalog.last_updated == TODAY
    assert (stats.added, stats.updated, stats.removed) == (2, 0, 0)
    assert stats.added_names == ["Zeta", "Alpha"]


def test_added_updated_removed_counts(make_record) -> None:
    previous, _ = merge_catalog(None, _groups(make_record, "Alpha", "Beta", "Dandadan"), today=TODAY)
    catalog, stats = merge_catalog(previous, _groups(make_record, "Beta", "Dandadan", "Gamma"), today=TODAY)
    assert (stats.added, stats.updated, stats.removed) == (1, 2, 1)
    assert stats.added_names == ["Gamma"]
    assert stats.removed_names == ["Alpha"]
    assert catalog.names() == ["Beta", "Dandadan", "Gamma"]


def test_empty_groups_remove_everything(make_record) -> None:
    previous, _ = merge_catalog(None, _groups(make_record, "Alpha", "Beta"), today=TODAY)
    catalog, stats = merge_catalog(previous, {}, today=TODAY)
    assert catalog.series_list == []
    assert catalog.total_series == 0
    assert stats.removed == 2


def test_series_without_videos_skipped(make_record) -> None:
    groups = _groups(make_record, "Alpha")
    groups["Empty"] = {}
    catalog, stats = merge_catalog(None, groups, today=TODAY)
    assert catalog.names() == ["Alpha"]
    assert stats.added == 1


def test_same_input_twice_is_stable(make_record) -> None:
    groups = _groups(make_record, "Alpha", "Beta")
    first, _ = merge_catalog(None, groups, today=TODAY)
    second, stats = merge_catalog(first, groups, today=TODAY)
    assert first.names() == second.names()
    assert (stats.added, stats.updated, stats.removed) == (0, 2, 0)


def test_last_updated_defaults_to_today(make_record) -> None:
    catalog, _ = merge_catalog(None, _groups(make_record, "Alpha"))
    assert catalog.last_updated == datetime.date.today()
