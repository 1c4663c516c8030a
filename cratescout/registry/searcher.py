"""Background search dispatch onto the shared event channel."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..errors import ChannelClosed, RegistryError
from ..events import EventChannel, SearchResultEvent
from .models import SearchPage, SortOrder

logger = logging.getLogger(__name__)

GRID_PAGE_SIZE = 5


class AsyncSearcher:
    """Run each search on its own daemon thread and post exactly one result.

    Requests are never collapsed, cancelled, or retried. Every call gets a
    fresh request id so consumers can tell superseded results apart.
    """

    def __init__(
        self,
        search_page: Callable[[str, int, int, SortOrder], SearchPage],
        channel: EventChannel,
        per_page: int = GRID_PAGE_SIZE,
    ) -> None:
        self._search_page = search_page
        self._channel = channel
        self._per_page = per_page
        self._lock = threading.Lock()
        self._next_request_id = 1

    def _worker(self, request_id: int, query: str, page: int, sort: SortOrder) -> None:
        try:
            result = self._search_page(query, page, self._per_page, sort)
        except RegistryError as exc:
            logger.warning("search #%d for %r failed: %s", request_id, query, exc)
            event = SearchResultEvent(request_id=request_id, error=str(exc))
        except Exception as exc:
            logger.exception("search #%d for %r crashed", request_id, query)
            event = SearchResultEvent(request_id=request_id, error=f"search failed: {exc}")
        else:
            event = SearchResultEvent(
                request_id=request_id,
                records=result.records,
                total=result.total,
            )
        try:
            self._channel.send(event)
        except ChannelClosed:
            logger.debug("dropping result of search #%d; channel closed", request_id)

    def search(self, query: str, page: int, sort: SortOrder, request_id: int | None = None) -> int:
        """Start a search and return its request id without waiting.

        Callers that track request ids themselves pass ``request_id``;
        otherwise the next id from an internal counter is used.
        """
        with self._lock:
            if request_id is None:
                request_id = self._next_request_id
            self._next_request_id = max(self._next_request_id, request_id) + 1
        logger.info("search #%d query=%r page=%d sort=%s", request_id, query, page, sort.key)
        worker = threading.Thread(
            target=self._worker,
            args=(request_id, query, page, sort),
            name=f"cratescout-search-{request_id}",
            daemon=True,
        )
        worker.start()
        return request_id


__all__ = ["GRID_PAGE_SIZE", "AsyncSearcher"]
