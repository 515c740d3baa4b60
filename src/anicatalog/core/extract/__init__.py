"""Extraction des triplets titre/URL/corps depuis les exports texte."""

from anicatalog.core.extract.triples import extract_triples

__all__ = ["extract_triples"]
