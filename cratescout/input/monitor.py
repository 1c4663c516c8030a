"""Terminal input monitor thread.

Polls stdin with a bounded timeout, maps key tokens onto the closed set of
input events, and publishes them onto the shared event channel.
"""

from __future__ import annotations

import logging
import threading

from ..errors import ChannelClosed
from ..events import BackspaceKey, CharKey, EnterKey, EscapeKey, EventChannel, InputEvent
from .reader import read_key, wait_for_input

logger = logging.getLogger(__name__)

POLL_TIMEOUT_SECONDS = 10.0


def event_for_key(key: str) -> InputEvent | None:
    """Translate a key token into an input event; ``None`` for ignored keys."""
    if key == "ESC":
        return EscapeKey()
    if key in {"ENTER", "ENTER_CR", "ENTER_LF"}:
        return EnterKey()
    if key == "BACKSPACE":
        return BackspaceKey()
    # U+FFFD comes from a stray or truncated UTF-8 sequence.
    if len(key) == 1 and key.isprintable() and key != "\ufffd":
        return CharKey(key)
    return None


class InputMonitor:
    """Publish key events from ``stdin_fd`` until stopped or the channel closes."""

    def __init__(
        self,
        stdin_fd: int,
        channel: EventChannel,
        poll_timeout: float = POLL_TIMEOUT_SECONDS,
    ) -> None:
        self.stdin_fd = stdin_fd
        self._channel = channel
        self._poll_timeout = poll_timeout
        self._stop = threading.Event()
        self._skip_next_lf = False

    def _event_for(self, key: str) -> InputEvent | None:
        if self._skip_next_lf and key == "ENTER_LF":
            self._skip_next_lf = False
            return None
        self._skip_next_lf = key == "ENTER_CR"
        return event_for_key(key)

    def monitor(self) -> None:
        """Blocking poll loop; returns quietly on stop, channel close, EOF, or read failure."""
        while not self._stop.is_set():
            try:
                if not wait_for_input(self.stdin_fd, self._poll_timeout):
                    continue
                if self._stop.is_set():
                    return
                key = read_key(self.stdin_fd)
            except OSError:
                logger.exception("terminal read failed; input monitor exiting")
                return
            if key == "EOF":
                logger.info("terminal input closed; input monitor exiting")
                return
            event = self._event_for(key)
            if event is None:
                continue
            try:
                self._channel.send(event)
            except ChannelClosed:
                logger.debug("event channel closed; input monitor exiting")
                return

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.monitor, name="cratescout-input", daemon=True)
        thread.start()
        return thread

    def stop(self) -> None:
        """Ask the monitor to exit at its next poll."""
        self._stop.set()


__all__ = ["POLL_TIMEOUT_SECONDS", "InputMonitor", "event_for_key"]
