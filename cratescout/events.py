"""Merged event stream types and the channel that carries them.

Input keys and search results share one FIFO so the runtime sees a single
linear stream. Producers may live on any thread; there is one consumer.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Union

from .errors import ChannelClosed
from .registry.models import PackageRecord


@dataclass(frozen=True)
class CharKey:
    char: str


@dataclass(frozen=True)
class EscapeKey:
    pass


@dataclass(frozen=True)
class EnterKey:
    pass


@dataclass(frozen=True)
class BackspaceKey:
    pass


@dataclass(frozen=True)
class Tick:
    """Heartbeat emitted when no event arrived within the receive timeout."""


@dataclass(frozen=True)
class SearchResultEvent:
    """Outcome of one asynchronous search request."""

    request_id: int
    records: tuple[PackageRecord, ...] = ()
    total: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


InputEvent = Union[CharKey, EscapeKey, EnterKey, BackspaceKey, Tick]
Event = Union[CharKey, EscapeKey, EnterKey, BackspaceKey, Tick, SearchResultEvent]


class EventChannel:
    """Multi-producer, single-consumer event queue with close semantics."""

    def __init__(self) -> None:
        self._queue: Queue[Event] = Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, event: Event) -> None:
        """Publish ``event``; raise ``ChannelClosed`` once the consumer is gone."""
        if self._closed.is_set():
            raise ChannelClosed("event channel is closed")
        self._queue.put(event)

    def receive(self, timeout: float | None = None) -> Event | None:
        """Return the next event, or ``None`` when ``timeout`` elapses first."""
        try:
            return self._queue.get(timeout=timeout)
        except Empty:
            return None

    def close(self) -> None:
        self._closed.set()


__all__ = [
    "CharKey",
    "EscapeKey",
    "EnterKey",
    "BackspaceKey",
    "Tick",
    "SearchResultEvent",
    "InputEvent",
    "Event",
    "EventChannel",
]
