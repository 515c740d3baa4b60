"""
Similarité de noms normalisés pour le regroupement en séries.
Distance d'édition (insertion, suppression, substitution) via rapidfuzz.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

# Tolérance : au plus 2 fautes, entre clés de longueurs proches (écart <= 3)
MAX_EDIT_DISTANCE = 2
MAX_LENGTH_GAP = 3


def edit_distance(a: str, b: str) -> int:
    """Distance de Levenshtein classique (coût 1 par opération)."""
    return Levenshtein.distance(a, b)


def keys_related(a: str, b: str) -> bool:
    """
    True si deux clés normalisées désignent probablement la même série :
    - inclusion de l'une dans l'autre, ou
    - longueurs proches et distance d'édition <= 2.
    """
    if a in b or b in a:
        return True
    if abs(len(a) - len(b)) > MAX_LENGTH_GAP:
        return False
    return edit_distance(a, b) <= MAX_EDIT_DISTANCE
