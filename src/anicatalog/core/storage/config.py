"""Chargement de la configuration TOML (anicatalog.toml) en CatalogConfig."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from anicatalog.core.models import CatalogConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "anicatalog.toml"

_STR_KEYS = ("dump_pattern", "catalog_file", "storage_key", "combined_url", "fallback_json_url", "user_agent")
_FLOAT_KEYS = ("timeout_s", "backoff_s")
_INT_KEYS = ("retries",)


def read_toml(path: Path) -> dict[str, Any]:
    """Lit un fichier TOML (stdlib tomllib)."""
    with open(path, "rb") as file_obj:
        return tomllib.load(file_obj)


def _coerce(key: str, value: Any) -> Any:
    if key in _STR_KEYS:
        return str(value)
    try:
        if key in _FLOAT_KEYS:
            number: float | int = float(value)
        else:
            number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Valeur invalide pour '{key}': {value!r}") from None
    if number < 0:
        raise ValueError(f"Valeur négative pour '{key}': {value!r}")
    return number


def config_from_mapping(dumps_dir: Path, data: dict[str, Any]) -> CatalogConfig:
    """Construit la config ; les clés inconnues sont ignorées, None = valeur par défaut."""
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key in _STR_KEYS or key in _FLOAT_KEYS or key in _INT_KEYS:
            kwargs[key] = _coerce(key, value)
        elif key == "log_file":
            log_file = Path(str(value))
            kwargs["log_file"] = log_file if log_file.is_absolute() else Path(dumps_dir) / log_file
        elif key == "dumps_dir":
            continue
        else:
            logger.debug("Ignoring unknown config key: %s", key)
    return CatalogConfig(dumps_dir=Path(dumps_dir), **kwargs)


def load_config(
    dumps_dir: Path,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> CatalogConfig:
    """
    Charge la configuration.

    Args:
        dumps_dir: Répertoire des exports.
        config_path: Fichier TOML explicite (doit exister) ; sinon
            dumps_dir/anicatalog.toml s'il existe.
        overrides: Valeurs prioritaires (options CLI) ; None = non fourni.

    Raises:
        FileNotFoundError: Si config_path est fourni mais absent.
        ValueError: Si une valeur est invalide (fichier illisible ou type).
    """
    dumps_dir = Path(dumps_dir)
    data: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Fichier de configuration introuvable: {config_path}")
        path: Path | None = config_path
    else:
        candidate = dumps_dir / CONFIG_FILENAME
        path = candidate if candidate.exists() else None
    if path is not None:
        try:
            data.update(read_toml(path))
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Configuration invalide ({path}): {exc}") from exc
        logger.debug("Loaded config from %s", path)
    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value
    return config_from_mapping(dumps_dir, data)
