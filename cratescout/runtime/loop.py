"""Main interactive event loop for the terminal UI.

Drains the merged event channel one event at a time, feeds each event through
the state machine, executes the resulting effects, and re-renders when the
visible state changed. Feature logic lives in the state machine and callbacks.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from ..events import EventChannel, Tick
from ..machine import CopyRequested, SearchRequested, update
from ..registry.models import SortOrder
from ..state import SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    receive_timeout_seconds: float = 0.5
    status_message_seconds: float = 2.5


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``.

    Keeping the loop callback-driven isolates rendering, networking, and
    clipboard access from the loop and makes it easy to unit test.
    """

    render: Callable[[SessionState], None]
    terminal_size: Callable[[], tuple[int, int]]
    start_search: Callable[[SearchRequested], None]
    copy_text: Callable[[CopyRequested], str]
    sort_committed: Callable[[SortOrder], None] | None = None


def run_main_loop(
    state: SessionState,
    channel: EventChannel,
    terminal,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
    *,
    discard_stale: bool = False,
) -> SessionState:
    """Run the interactive loop until the quit flag is set; return the final state.

    A receive timeout is turned into a ``Tick`` so the query cursor keeps
    blinking and resizes are picked up without key presses. Render and
    terminal failures propagate after ``terminal.raw_mode`` restores the tty.
    """
    ops = callbacks
    status_until = 0.0
    last_size: tuple[int, int] | None = None
    dirty = True

    with terminal.raw_mode():
        while True:
            now = time.monotonic()
            if state.status and now >= status_until:
                state = replace(state, status="")
                dirty = True
            size = ops.terminal_size()
            if size != last_size:
                last_size = size
                dirty = True
            if dirty:
                ops.render(state)
                dirty = False

            try:
                event = channel.receive(timing.receive_timeout_seconds)
            except KeyboardInterrupt:
                # Raw mode delivers Ctrl+C as a byte; a stray SIGINT must not kill the session.
                continue
            if event is None:
                event = Tick()

            transition = update(state, event, discard_stale=discard_stale)
            if transition.state != state:
                dirty = True
            if transition.state.sort != state.sort and ops.sort_committed is not None:
                ops.sort_committed(transition.state.sort)
            state = transition.state

            for effect in transition.effects:
                if isinstance(effect, SearchRequested):
                    ops.start_search(effect)
                elif isinstance(effect, CopyRequested):
                    message = ops.copy_text(effect)
                    if message:
                        state = replace(state, status=message)
                        status_until = time.monotonic() + timing.status_message_seconds
                        dirty = True

            if state.quit:
                logger.info("quit requested")
                return state


__all__ = ["RuntimeLoopTiming", "RuntimeLoopCallbacks", "run_main_loop"]
