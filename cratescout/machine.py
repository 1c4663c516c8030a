"""Application state machine.

``update`` is a pure function from (session state, event) to a new state
plus the side effects the runtime should perform. It never touches threads,
the terminal, the network, or the clipboard, which keeps every transition
testable on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from .events import BackspaceKey, CharKey, EnterKey, EscapeKey, Event, SearchResultEvent, Tick
from .input.key_registry import KeyComboBinding, KeyComboRegistry
from .registry.models import SortOrder
from .state import InputMode, NormalMode, SessionState, SortingMode

TICK_MODULUS = 2**64


@dataclass(frozen=True)
class SearchRequested:
    """Ask the searcher to fetch ``page`` of ``query`` ordered by ``sort``."""

    request_id: int
    query: str
    page: int
    sort: SortOrder


@dataclass(frozen=True)
class CopyRequested:
    """Ask the clipboard to store the dependency line of package ``name``."""

    name: str
    text: str


Effect = Union[SearchRequested, CopyRequested]


@dataclass(frozen=True)
class Transition:
    state: SessionState
    effects: tuple[Effect, ...] = ()


def _unchanged(state: SessionState) -> Transition:
    return Transition(state)


def _with_search(state: SessionState, **changes) -> Transition:
    """Apply ``changes`` and issue a search for the resulting parameters."""
    request_id = state.last_request_id + 1
    next_state = replace(state, last_request_id=request_id, **changes)
    return Transition(
        next_state,
        (SearchRequested(request_id, next_state.query, next_state.page, next_state.sort),),
    )


def _apply_results(state: SessionState, event: SearchResultEvent) -> SessionState:
    if not event.ok:
        return replace(state, results=(), selection=None, total=0, error=event.error)
    records = tuple(event.records)
    return replace(
        state,
        results=records,
        selection=0 if records else None,
        total=event.total,
        error=None,
    )


# Normal mode


def _open_query_editor(state: SessionState) -> Transition:
    return Transition(replace(state, mode=InputMode(buffer="", tick=0)))


def _quit(state: SessionState) -> Transition:
    return Transition(replace(state, quit=True))


def _next_page(state: SessionState) -> Transition:
    if not state.results:
        return _unchanged(state)
    return _with_search(state, page=state.page + 1)


def _previous_page(state: SessionState) -> Transition:
    if state.page <= 1:
        return _unchanged(state)
    return _with_search(state, page=state.page - 1)


def _select_next(state: SessionState) -> Transition:
    if state.selection is None or not state.results:
        return _unchanged(state)
    return Transition(replace(state, selection=min(state.selection + 1, len(state.results) - 1)))


def _select_previous(state: SessionState) -> Transition:
    if state.selection is None:
        return _unchanged(state)
    return Transition(replace(state, selection=max(state.selection - 1, 0)))


def _open_sort_picker(state: SessionState) -> Transition:
    return Transition(replace(state, mode=SortingMode.for_sort(state.sort)))


def _copy_selection(state: SessionState) -> Transition:
    record = state.selected_record
    if record is None:
        return _unchanged(state)
    return Transition(state, (CopyRequested(record.name, record.dependency_line()),))


NORMAL_KEYS: KeyComboRegistry[SessionState, Transition] = KeyComboRegistry(normalize=str.lower).register_bindings(
    KeyComboBinding(("f",), _open_query_editor),
    KeyComboBinding(("q",), _quit),
    KeyComboBinding(("n",), _next_page),
    KeyComboBinding(("p",), _previous_page),
    KeyComboBinding(("j",), _select_next),
    KeyComboBinding(("k",), _select_previous),
    KeyComboBinding(("s",), _open_sort_picker),
    KeyComboBinding(("c",), _copy_selection),
)


def _update_normal(state: SessionState, event: Event) -> Transition:
    if isinstance(event, CharKey):
        handled = NORMAL_KEYS.dispatch(event.char, state)
        if handled is not None:
            return handled
    return _unchanged(state)


# Input mode


def _update_input(state: SessionState, mode: InputMode, event: Event) -> Transition:
    if isinstance(event, EscapeKey):
        return Transition(replace(state, mode=NormalMode()))
    if isinstance(event, EnterKey):
        return _with_search(state, query=mode.buffer, page=1, mode=NormalMode())
    if isinstance(event, BackspaceKey):
        if not mode.buffer:
            return _unchanged(state)
        return Transition(replace(state, mode=replace(mode, buffer=mode.buffer[:-1])))
    if isinstance(event, CharKey):
        return Transition(replace(state, mode=replace(mode, buffer=mode.buffer + event.char)))
    if isinstance(event, Tick):
        return Transition(replace(state, mode=replace(mode, tick=(mode.tick + 1) % TICK_MODULUS)))
    return _unchanged(state)


# Sorting mode


def _sort_previous(state: SessionState) -> Transition:
    mode = state.mode
    assert isinstance(mode, SortingMode)
    return Transition(replace(state, mode=replace(mode, selection=max(mode.selection - 1, 0))))


def _sort_next(state: SessionState) -> Transition:
    mode = state.mode
    assert isinstance(mode, SortingMode)
    last = len(mode.options) - 1
    return Transition(replace(state, mode=replace(mode, selection=min(mode.selection + 1, last))))


SORTING_KEYS: KeyComboRegistry[SessionState, Transition] = KeyComboRegistry(normalize=str.lower).register_bindings(
    KeyComboBinding(("k",), _sort_previous),
    KeyComboBinding(("j",), _sort_next),
)


def _update_sorting(state: SessionState, mode: SortingMode, event: Event) -> Transition:
    if isinstance(event, EscapeKey):
        return Transition(replace(state, mode=NormalMode()))
    if isinstance(event, EnterKey):
        return _with_search(state, sort=mode.highlighted, page=1, mode=NormalMode())
    if isinstance(event, CharKey):
        handled = SORTING_KEYS.dispatch(event.char, state)
        if handled is not None:
            return handled
    return _unchanged(state)


def update(state: SessionState, event: Event, *, discard_stale: bool = False) -> Transition:
    """Apply one event to ``state`` and return the next state and its effects.

    Search results are honored in every mode. With ``discard_stale`` set, a
    result older than the most recently issued request is ignored; otherwise
    the last result to arrive wins.
    """
    if isinstance(event, SearchResultEvent):
        if discard_stale and event.request_id < state.last_request_id:
            return _unchanged(state)
        return Transition(_apply_results(state, event))

    mode = state.mode
    if isinstance(mode, InputMode):
        return _update_input(state, mode, event)
    if isinstance(mode, SortingMode):
        return _update_sorting(state, mode, event)
    return _update_normal(state, event)


__all__ = [
    "SearchRequested",
    "CopyRequested",
    "Effect",
    "Transition",
    "NORMAL_KEYS",
    "SORTING_KEYS",
    "update",
]
