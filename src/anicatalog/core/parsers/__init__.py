"""Parsers de titres par chaîne et routage."""

from anicatalog.core.parsers.base import ChannelParser, ParserRegistry
from anicatalog.core.parsers.channels import (
    AniMiAsiaParser,
    AniOneAsiaParser,
    AniOneParser,
    IndonesianDubParser,
    ItsAnimeParser,
    TakarirParser,
    TropicsParser,
)
from anicatalog.core.parsers.dispatcher import (
    DEFAULT_ROUTES,
    Route,
    dispatch,
    dispatch_triple,
    is_foreign_dub,
    is_globally_dropped,
)

__all__ = [
    "ChannelParser",
    "ParserRegistry",
    "AniMiAsiaParser",
    "AniOneAsiaParser",
    "AniOneParser",
    "IndonesianDubParser",
    "ItsAnimeParser",
    "TakarirParser",
    "TropicsParser",
    "DEFAULT_ROUTES",
    "Route",
    "dispatch",
    "dispatch_triple",
    "is_foreign_dub",
    "is_globally_dropped",
]
