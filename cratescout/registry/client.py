"""Synchronous crates.io search client.

Wraps one ``httpx.Client`` and converts every failure into ``RegistryError``.
Used directly by ``--find`` and from worker threads by ``AsyncSearcher``.
"""

from __future__ import annotations

import logging

import httpx

from .. import __version__
from ..errors import RegistryError
from .models import SearchPage, SortOrder, page_from_payload

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://crates.io/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0
USER_AGENT = f"cratescout/{__version__} (terminal crate search)"


class RegistryClient:
    """Blocking search client for the registry's ``/crates`` endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            transport=transport,
        )

    def search(self, query: str, page: int, per_page: int, sort: SortOrder) -> SearchPage:
        """Fetch one page of results for ``query`` ordered by ``sort``."""
        if query is None or sort is None:
            raise RegistryError("search requires a query and a sort order")
        params = {
            "q": query,
            "page": max(1, int(page)),
            "per_page": max(1, int(per_page)),
            "sort": sort.key,
        }
        logger.debug("registry search %s", params)
        try:
            response = self._client.get("/crates", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise RegistryError(f"registry returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise RegistryError(f"registry request failed: {exc}") from exc
        except ValueError as exc:
            raise RegistryError("registry response is not valid JSON") from exc
        return page_from_payload(payload)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()


__all__ = [
    "DEFAULT_REGISTRY_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "USER_AGENT",
    "RegistryClient",
]
