"""Utilitaires texte."""

import re

# Identifiant vidéo dans une URL de type watch?v=XXXX
VIDEO_ID_PATTERN = re.compile(r"[?&]v=([a-zA-Z0-9_-]+)")
# Ligne séparatrice horizontale (---, -----)
SEPARATOR_PATTERN = re.compile(r"^-{3,}$")
# Ponctuation finale à retirer d'un nom de série (ex: "Foo -", "Bar~")
TRAILING_PUNCT_PATTERN = re.compile(r"[.\-~]+$")
NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]")


def extract_video_id(url: str | None) -> str | None:
    """Retourne l'identifiant vidéo (paramètre v=) ou None."""
    m = VIDEO_ID_PATTERN.search(url or "")
    return m.group(1) if m else None


def clean_series_name(name: str) -> str:
    """Retire la ponctuation finale (. - ~) puis les espaces autour du nom."""
    return TRAILING_PUNCT_PATTERN.sub("", name.strip()).strip()


def normalize_for_compare(name: str) -> str:
    """Forme de comparaison : minuscules, alphanumérique ASCII uniquement."""
    return NON_ALNUM_PATTERN.sub("", name.lower())


def looks_like_url(line: str) -> bool:
    """True si la ligne commence par http (http:// ou https://)."""
    return line.startswith("http")


def is_separator_line(line: str) -> bool:
    """True si la ligne est un séparateur horizontal (3 tirets ou plus)."""
    return bool(SEPARATOR_PATTERN.match(line))

