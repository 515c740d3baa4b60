"""Construction, fusion et sérialisation du catalogue."""

from anicatalog.core.catalog.builder import build_entry, is_marathon, sort_and_dedup
from anicatalog.core.catalog.content import parse_content, parse_multiple
from anicatalog.core.catalog.merger import merge_catalog
from anicatalog.core.catalog.serialize import (
    catalog_from_dict,
    catalog_to_dict,
    entry_to_dict,
    record_to_dict,
)

__all__ = [
    "build_entry",
    "is_marathon",
    "sort_and_dedup",
    "parse_content",
    "parse_multiple",
    "merge_catalog",
    "catalog_from_dict",
    "catalog_to_dict",
    "entry_to_dict",
    "record_to_dict",
]
