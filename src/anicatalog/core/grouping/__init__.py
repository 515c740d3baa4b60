"""Regroupement flou des épisodes en séries."""

from anicatalog.core.grouping.buckets import (
    Bucket,
    GroupMap,
    bucket_exact,
    fuzzy_merge,
    group_records,
    merge_group_maps,
    record_dedup_key,
)
from anicatalog.core.grouping.similarity import edit_distance, keys_related

__all__ = [
    "Bucket",
    "GroupMap",
    "bucket_exact",
    "fuzzy_merge",
    "group_records",
    "merge_group_maps",
    "record_dedup_key",
    "edit_distance",
    "keys_related",
]
