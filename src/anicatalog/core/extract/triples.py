"""
Découpage d'un export texte en triplets (titre, URL, corps).
Le corps contient les lignes situées sous l'URL (ex: section Chapters:).
"""

from __future__ import annotations

import re

from anicatalog.core.models import RawTriple
from anicatalog.core.utils.text import is_separator_line, looks_like_url

# Libellés optionnels en début de ligne ("Title: ...", "URL: ...")
LABEL_PREFIX = re.compile(r"^(?:Title:|URL:)\s*", re.IGNORECASE)


def _clean_lines(content: str) -> list[str]:
    text = content.replace("\r\n", "\n").replace("\r", "\n")
    if text.startswith("\ufeff"):
        text = text[1:]
    return [LABEL_PREFIX.sub("", line.strip()).strip() for line in text.split("\n")]


def _is_blank_or_separator(line: str) -> bool:
    return not line or is_separator_line(line)


def extract_triples(content: str) -> list[RawTriple]:
    """
    Parse le contenu d'un export. Retourne les triplets dans l'ordre du fichier.

    Un titre sans URL avant le titre suivant (ou la fin) est ignoré.
    """
    triples: list[RawTriple] = []
    lines = _clean_lines(content)
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_blank_or_separator(line) or looks_like_url(line):
            i += 1
            continue
        j = i + 1
        while j < len(lines) and _is_blank_or_separator(lines[j]):
            j += 1
        if j >= len(lines) or not looks_like_url(lines[j]):
            i += 1
            continue
        body_lines: list[str] = []
        k = j + 1
        while k < len(lines):
            nxt = lines[k]
            if _is_blank_or_separator(nxt) or looks_like_url(nxt):
                break
            body_lines.append(nxt)
            k += 1
        triples.append(RawTriple(title=line, url=lines[j], body="\n".join(body_lines)))
        i = k
    return triples
