"""
Routage des triplets vers le parser de chaîne adapté.
Filtre global d'abord (doublage anglais, PV), puis première route correspondante.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

# Import pour enregistrement des parsers dans le registre
import anicatalog.core.parsers.channels  # noqa: F401
from anicatalog.core.models import EpisodeRecord, RawTriple
from anicatalog.core.parsers.base import ParserRegistry

logger = logging.getLogger(__name__)

# Doublage anglais explicite ou bande-annonce (PV) : jamais d'épisode
GLOBAL_DROP = re.compile(r"(en\s*dub|en-dub|\bpv\b)", re.IGNORECASE)
INDONESIAN_DUB = re.compile(r"(id\s*dub|id-dub|bahasa\s*indonesia)", re.IGNORECASE)
# "<mot> dub" quelconque ; seul le doublage japonais reste dans le flux normal d'une chaîne
GENERIC_DUB = re.compile(r"\b\w+\s*dub\b", re.IGNORECASE)
JAPANESE_DUB = re.compile(r"(jp\s*dub|japanese\s*dub)", re.IGNORECASE)


@dataclass(frozen=True)
class Route:
    """Une route : motifs déclencheurs (un seul suffit) -> parser."""

    name: str
    patterns: tuple[re.Pattern[str], ...]
    parser_id: str
    drop_foreign_dubs: bool = False
    """Si True, un titre "<langue> dub" (hors japonais) est écarté avant le parser."""

    def matches(self, title: str) -> bool:
        return any(p.search(title) for p in self.patterns)


# Ordre = priorité (première route correspondante gagne)
DEFAULT_ROUTES: tuple[Route, ...] = (
    Route("indonesian_dub", (INDONESIAN_DUB,), "id_dub"),
    Route("ani_one", (re.compile(r"【Ani-One Indonesia】"),), "ani_one", drop_foreign_dubs=True),
    Route("ani_one_asia", (re.compile(r"【Ani-One Asia】", re.IGNORECASE),), "ani_one_asia", drop_foreign_dubs=True),
    Route("ani_mi_asia", (re.compile(r"【Ani-Mi Asia】", re.IGNORECASE),), "ani_mi_asia", drop_foreign_dubs=True),
    Route(
        "takarir",
        (re.compile(r"\[Takarir Indonesia\]", re.IGNORECASE), re.compile(r"Muse Indonesia", re.IGNORECASE)),
        "takarir",
    ),
    Route("its_anime", (re.compile(r"It's Anime", re.IGNORECASE),), "its_anime"),
    Route(
        "tropics",
        (re.compile(r"TROPICS ENTERTAINMENT"), re.compile(r"【Subtitle Indonesia】")),
        "tropics",
    ),
)


def is_globally_dropped(title: str) -> bool:
    """True si le titre est un doublage anglais ou un PV (toutes chaînes)."""
    return bool(GLOBAL_DROP.search(title))


def is_foreign_dub(title: str) -> bool:
    """True si le titre annonce un doublage autre que japonais."""
    return bool(GENERIC_DUB.search(title)) and not JAPANESE_DUB.search(title)


def select_route(title: str, routes: Iterable[Route] = DEFAULT_ROUTES) -> Route | None:
    for route in routes:
        if route.matches(title):
            return route
    return None


def dispatch_triple(triple: RawTriple, routes: Iterable[Route] = DEFAULT_ROUTES) -> list[EpisodeRecord]:
    """Parse un triplet ; liste vide si écarté ou non reconnu."""
    title = triple.title
    if is_globally_dropped(title):
        logger.debug("Dropped (EN dub / PV): %s", title)
        return []
    route = select_route(title, routes)
    if route is None:
        return []
    if route.drop_foreign_dubs and is_foreign_dub(title):
        logger.debug("Dropped (%s dub variant): %s", route.name, title)
        return []
    parser = ParserRegistry.get_or_raise(route.parser_id)
    records = parser.parse(title, triple.url, triple.body)
    if not records:
        logger.debug("Not parseable by %s: %s", route.parser_id, title)
        return []
    return list(records)


def dispatch(triples: Iterable[RawTriple], routes: Iterable[Route] = DEFAULT_ROUTES) -> list[EpisodeRecord]:
    """Liste plate des épisodes, dans l'ordre des triplets."""
    routes = tuple(routes)
    records: list[EpisodeRecord] = []
    for triple in triples:
        records.extend(dispatch_triple(triple, routes))
    return records
