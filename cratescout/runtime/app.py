"""Runtime composition layer for cratescout.

Builds the event channel, producers, clipboard, and terminal controller,
wires them into the main loop, and tears everything down on exit.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from dataclasses import dataclass

from ..errors import ClipboardError, CratescoutError
from ..events import EventChannel
from ..input.monitor import InputMonitor
from ..machine import CopyRequested, SearchRequested
from ..registry.client import RegistryClient
from ..registry.searcher import AsyncSearcher
from ..render import RenderContext, render_frame
from ..state import SessionState, initial_state
from ..ui_theme import resolve_theme
from .clipboard import ClipboardProvider, create_clipboard
from .config import Settings, save_default_sort
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppOptions:
    """Interactive-session options after merging CLI flags over config."""

    settings: Settings
    theme: str | None = None
    no_color: bool = False
    copy_enabled: bool = True


def copy_dependency(clipboard: ClipboardProvider | None, effect: CopyRequested) -> str:
    """Copy ``effect.text``; return a status message, empty when copy is disabled."""
    if clipboard is None:
        return ""
    try:
        clipboard.set(effect.text)
    except ClipboardError as exc:
        logger.warning("copy of %s failed via %s: %s", effect.name, clipboard.name, exc)
        return f"copy failed: {exc}"
    logger.info("copied %r via %s", effect.text, clipboard.name)
    return f"copied {effect.text}"


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def run_app(options: AppOptions) -> SessionState:
    """Run one interactive session and return its final state."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        raise CratescoutError("interactive mode needs a terminal; use --find for scripted searches")

    settings = options.settings
    theme = resolve_theme(options.theme or settings.theme, no_color=options.no_color)
    clipboard = create_clipboard(settings.clipboard, stdout_fd) if options.copy_enabled else None
    channel = EventChannel()
    client = RegistryClient(base_url=settings.registry_url, timeout=settings.request_timeout)
    searcher = AsyncSearcher(client.search, channel)
    monitor = InputMonitor(stdin_fd, channel)
    terminal = TerminalController(stdin_fd, stdout_fd)

    def render(state: SessionState) -> None:
        columns, lines = _terminal_size()
        render_frame(
            RenderContext(
                state=state,
                width=columns,
                height=lines,
                theme=theme,
                copy_enabled=clipboard is not None,
            ),
            stdout_fd,
        )

    def start_search(effect: SearchRequested) -> None:
        searcher.search(effect.query, effect.page, effect.sort, request_id=effect.request_id)

    callbacks = RuntimeLoopCallbacks(
        render=render,
        terminal_size=_terminal_size,
        start_search=start_search,
        copy_text=lambda effect: copy_dependency(clipboard, effect),
        sort_committed=save_default_sort,
    )
    logger.info(
        "session start sort=%s clipboard=%s discard_stale=%s",
        settings.default_sort.key,
        clipboard.name if clipboard is not None else "off",
        settings.discard_stale_results,
    )
    monitor.start()
    try:
        return run_main_loop(
            initial_state(settings.default_sort),
            channel,
            terminal,
            RuntimeLoopTiming(),
            callbacks,
            discard_stale=settings.discard_stale_results,
        )
    finally:
        channel.close()
        monitor.stop()
        client.close()
        logger.info("session end")


__all__ = ["AppOptions", "copy_dependency", "run_app"]
