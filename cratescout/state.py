"""Session state and the closed set of UI modes.

All types here are frozen; the state machine derives new values with
``dataclasses.replace`` instead of mutating in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .registry.models import DEFAULT_SORT, PackageRecord, SortOrder


@dataclass(frozen=True)
class NormalMode:
    """Browsing results."""


@dataclass(frozen=True)
class InputMode:
    """Composing a query. Cursor is visible while ``tick`` is even."""

    buffer: str = ""
    tick: int = 0

    @property
    def cursor_visible(self) -> bool:
        return self.tick % 2 == 0


@dataclass(frozen=True)
class SortingMode:
    """Choosing a sort order; ``selection`` indexes ``options``."""

    selection: int = 0
    options: tuple[SortOrder, ...] = field(default_factory=SortOrder.options)

    @classmethod
    def for_sort(cls, sort: SortOrder) -> SortingMode:
        options = SortOrder.options()
        return cls(selection=options.index(sort), options=options)

    @property
    def highlighted(self) -> SortOrder:
        return self.options[self.selection]


AppMode = Union[NormalMode, InputMode, SortingMode]


@dataclass(frozen=True)
class SessionState:
    query: str = ""
    page: int = 1
    sort: SortOrder = DEFAULT_SORT
    results: tuple[PackageRecord, ...] | None = None
    selection: int | None = None
    mode: AppMode = field(default_factory=InputMode)
    quit: bool = False
    total: int = 0
    error: str | None = None
    status: str = ""
    last_request_id: int = 0

    @property
    def selected_record(self) -> PackageRecord | None:
        if self.results is None or self.selection is None:
            return None
        if 0 <= self.selection < len(self.results):
            return self.results[self.selection]
        return None


def initial_state(sort: SortOrder = DEFAULT_SORT) -> SessionState:
    """Startup state: empty query, page 1, query editor open."""
    return SessionState(sort=sort, mode=InputMode(buffer="", tick=0))


__all__ = [
    "NormalMode",
    "InputMode",
    "SortingMode",
    "AppMode",
    "SessionState",
    "initial_state",
]
