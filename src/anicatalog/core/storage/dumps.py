"""Énumération et lecture des exports texte (filtered*.txt)."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DUMP_PATTERN = "filtered*.txt"

# Encodages stricts à essayer avant latin-1 (exports Windows / utilisateur)
_DUMP_ENCODINGS = ("utf-8", "cp1252")


def list_dump_files(directory: Path, pattern: str = DEFAULT_DUMP_PATTERN) -> list[Path]:
    """
    Exports du répertoire triés par nom.
    Un même fichier atteint par deux noms (lien, casse) n'est gardé qu'une fois.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    # glob est sensible à la casse sous Linux : filtrage insensible sur le nom
    pattern_lower = pattern.lower()
    candidates = sorted(
        (p for p in directory.iterdir() if p.is_file() and fnmatch.fnmatch(p.name.lower(), pattern_lower)),
        key=lambda p: p.name,
    )
    files: list[Path] = []
    seen: set[Path] = set()
    for path in candidates:
        try:
            resolved = path.resolve()
        except OSError:
            resolved = path.absolute()
        if resolved in seen or any(_same_file(path, kept) for kept in files):
            logger.debug("Skipping duplicate dump: %s", path)
            continue
        seen.add(resolved)
        files.append(path)
    return files


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.samefile(b)
    except OSError:
        return False


def read_dump(path: Path) -> str:
    """
    Lit un export en essayant utf-8, puis cp1252, puis latin-1.

    Raises:
        OSError: Si le fichier est illisible.
    """
    for enc in _DUMP_ENCODINGS:
        try:
            return path.read_text(encoding=enc)
        except UnicodeDecodeError:
            continue
    # latin-1 décode n'importe quelle suite d'octets
    return path.read_text(encoding="latin-1")
