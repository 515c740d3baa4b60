"""Export texte -> séries regroupées (triplets, routage, regroupement)."""

from __future__ import annotations

import logging
from typing import Iterable

from anicatalog.core.extract import extract_triples
from anicatalog.core.grouping import GroupMap, group_records, merge_group_maps
from anicatalog.core.parsers import dispatch

logger = logging.getLogger(__name__)


def parse_content(content: str) -> GroupMap:
    """Parse un export complet et retourne ses séries (nom canonique -> épisodes)."""
    triples = extract_triples(content)
    records = dispatch(triples)
    groups = group_records(records)
    logger.debug(
        "Parsed %d triples -> %d records -> %d series", len(triples), len(records), len(groups)
    )
    return groups


def parse_multiple(contents: Iterable[str]) -> GroupMap:
    """Chaque export est regroupé séparément, puis les résultats sont fusionnés (premier gagnant)."""
    return merge_group_maps(parse_content(content) for content in contents)
