"""Interface des parsers de chaîne + registre."""

from __future__ import annotations

from typing import Protocol

from anicatalog.core.models import EpisodeRecord


class ChannelParser(Protocol):
    """Protocol pour un parser de titres propre à une chaîne."""

    id: str

    def parse(self, title: str, url: str, body: str) -> list[EpisodeRecord] | None:
        """
        Convertit un triplet en épisodes.
        Returns:
            None (ou liste vide) si le titre n'est pas au format de la chaîne.
        """
        ...


class ParserRegistry:
    """Registre des parsers disponibles."""

    _parsers: dict[str, ChannelParser] = {}

    @classmethod
    def register(cls, parser: ChannelParser) -> None:
        cls._parsers[parser.id] = parser

    @classmethod
    def get(cls, parser_id: str) -> ChannelParser | None:
        """Retourne le parser correspondant ou None si non trouvé."""
        return cls._parsers.get(parser_id)

    @classmethod
    def get_or_raise(cls, parser_id: str) -> ChannelParser:
        """Retourne le parser correspondant ou lève une exception claire."""
        parser = cls._parsers.get(parser_id)
        if not parser:
            available = ", ".join(cls._parsers.keys()) if cls._parsers else "(aucun)"
            raise ValueError(
                f"Parser '{parser_id}' introuvable. Parsers disponibles : {available}"
            )
        return parser

    @classmethod
    def list_ids(cls) -> list[str]:
        return list(cls._parsers.keys())
