"""Clipboard providers used by the copy action.

``set`` raises ``ClipboardError`` on failure; callers treat that as a
recoverable status message. A disabled clipboard is represented by ``None``.
"""

from __future__ import annotations

import base64
import os
import shutil
import subprocess
import sys
from typing import Protocol

from ..errors import ClipboardError

# Some terminals cap OSC 52 payloads (base64 encoded) at roughly this size.
OSC52_MAX_BYTES = 74994


class ClipboardProvider(Protocol):
    name: str

    def set(self, text: str) -> None: ...


def native_clipboard_commands() -> list[list[str]]:
    """Return installed clipboard commands in platform preference order."""
    command_candidates: list[list[str]] = []
    if sys.platform == "darwin":
        command_candidates.append(["pbcopy"])
    elif os.name == "nt":
        command_candidates.append(["clip"])
    else:
        if os.environ.get("XDG_SESSION_TYPE", "").lower() == "wayland" or os.environ.get("WAYLAND_DISPLAY"):
            command_candidates.append(["wl-copy"])
        command_candidates.extend(
            [
                ["xclip", "-selection", "clipboard"],
                ["xsel", "--clipboard", "--input"],
                ["wl-copy"],
            ]
        )
    seen: set[str] = set()
    out: list[list[str]] = []
    for command in command_candidates:
        if command[0] in seen or shutil.which(command[0]) is None:
            continue
        seen.add(command[0])
        out.append(command)
    return out


class NativeClipboard:
    """Pipe text into the first working system clipboard tool."""

    def __init__(self, commands: list[list[str]] | None = None) -> None:
        self._commands = native_clipboard_commands() if commands is None else commands

    @property
    def available(self) -> bool:
        return bool(self._commands)

    @property
    def name(self) -> str:
        return self._commands[0][0] if self._commands else "native (unavailable)"

    def set(self, text: str) -> None:
        if not self._commands:
            raise ClipboardError("no clipboard tool found (install wl-copy, xclip, or xsel)")
        failures: list[str] = []
        for command in self._commands:
            # Output is discarded: wl-copy and xclip leave a background child holding inherited pipes.
            try:
                proc = subprocess.run(
                    command,
                    input=text,
                    text=True,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    check=False,
                    timeout=5,
                )
            except (OSError, subprocess.TimeoutExpired) as exc:
                failures.append(f"{command[0]}: {exc}")
                continue
            if proc.returncode == 0:
                return
            failures.append(f"{command[0]} exited with {proc.returncode}")
        raise ClipboardError("; ".join(failures))


class OSC52Clipboard:
    """Write text through the terminal's OSC 52 clipboard escape.

    Works over SSH without external tools. Delivery cannot be confirmed.
    """

    name = "osc52"

    def __init__(self, stdout_fd: int) -> None:
        self._stdout_fd = stdout_fd

    def set(self, text: str) -> None:
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        if len(encoded) > OSC52_MAX_BYTES:
            raise ClipboardError("text too large for OSC 52")
        try:
            os.write(self._stdout_fd, f"\x1b]52;c;{encoded}\x07".encode("ascii"))
        except OSError as exc:
            raise ClipboardError(f"terminal write failed: {exc}") from exc


def create_clipboard(mechanism: str, stdout_fd: int) -> ClipboardProvider | None:
    """Build the provider for ``mechanism``; ``None`` when copying is disabled.

    ``auto`` prefers a native tool and falls back to OSC 52.
    """
    if mechanism == "off":
        return None
    if mechanism == "osc52":
        return OSC52Clipboard(stdout_fd)
    native = NativeClipboard()
    if mechanism == "native" or native.available:
        return native
    return OSC52Clipboard(stdout_fd)


__all__ = [
    "OSC52_MAX_BYTES",
    "ClipboardProvider",
    "NativeClipboard",
    "OSC52Clipboard",
    "create_clipboard",
    "native_clipboard_commands",
]
