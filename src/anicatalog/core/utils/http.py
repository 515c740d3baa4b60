"""Utilitaires HTTP : requêtes avec timeout, retry, backoff ; fetcher de documents tolérant."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from anicatalog.core.models import DEFAULT_USER_AGENT, CatalogConfig

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {
    408,  # Request Timeout
    425,  # Too Early
    429,  # Too Many Requests
    500,
    502,
    503,
    504,
}


def _parse_retry_after_seconds(response: httpx.Response | None) -> float | None:
    """Parse Retry-After en secondes (format numérique uniquement)."""
    if response is None:
        return None
    raw = (response.headers.get("Retry-After") or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if value < 0:
        return None
    return value


def get_text(
    url: str,
    *,
    timeout_s: float = 30.0,
    user_agent: Optional[str] = None,
    retries: int = 3,
    backoff_s: float = 2.0,
) -> str:
    """
    Récupère le contenu texte d'une URL avec retry et backoff.

    Args:
        url: URL à récupérer.
        timeout_s: Timeout en secondes.
        user_agent: User-Agent (optionnel).
        retries: Nombre de tentatives en cas d'échec.
        backoff_s: Délai de base entre tentatives (backoff exponentiel).

    Returns:
        Contenu de la réponse en texte (UTF-8 si le charset est absent).

    Raises:
        httpx.HTTPError: Si toutes les tentatives échouent.
    """
    headers = {}
    if user_agent:
        headers["User-Agent"] = user_agent

    attempts = max(1, int(retries))
    backoff_base = max(0.0, float(backoff_s))
    last_exc: Exception | None = None

    with httpx.Client(timeout=timeout_s, follow_redirects=True) as client:
        for attempt in range(attempts):
            try:
                resp = client.get(url, headers=headers or None)
                resp.raise_for_status()
                if resp.encoding in (None, "ascii", "ISO-8859-1"):
                    resp.encoding = "utf-8"
                return resp.text
            except httpx.HTTPStatusError as exc:
                last_exc = exc
                status_code = exc.response.status_code if exc.response is not None else None
                is_retryable = status_code in _RETRYABLE_STATUS_CODES
                if not is_retryable or attempt >= attempts - 1:
                    raise
                retry_after = _parse_retry_after_seconds(exc.response)
                delay = retry_after if retry_after is not None else backoff_base * (2**attempt)
                if delay > 0:
                    time.sleep(delay)
            except httpx.TransportError as exc:
                last_exc = exc
                if attempt >= attempts - 1:
                    break
                delay = backoff_base * (2**attempt)
                if delay > 0:
                    time.sleep(delay)

    if last_exc is not None:
        raise last_exc
    raise RuntimeError("get_text failed without explicit exception")


class DocumentFetcher:
    """
    Récupère un document distant par identifiant (URL).
    Toute erreur (réseau, statut HTTP, URL invalide) est convertie en None.
    """

    def __init__(
        self,
        *,
        timeout_s: float = 30.0,
        user_agent: str | None = DEFAULT_USER_AGENT,
        retries: int = 3,
        backoff_s: float = 2.0,
    ):
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self.retries = retries
        self.backoff_s = backoff_s

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "DocumentFetcher":
        return cls(
            timeout_s=config.timeout_s,
            user_agent=config.user_agent,
            retries=config.retries,
            backoff_s=config.backoff_s,
        )

    def fetch(self, identifier: str) -> str | None:
        if not identifier:
            return None
        try:
            return get_text(
                identifier,
                timeout_s=self.timeout_s,
                user_agent=self.user_agent,
                retries=self.retries,
                backoff_s=self.backoff_s,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Fetch failed for %s: %s", identifier, exc)
            return None
