"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, multi-byte UTF-8 characters, and swallows
mouse reports so they never surface as text.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def wait_for_input(fd: int, timeout_seconds: float) -> bool:
    """Return whether ``fd`` has input (or a pending byte) within the timeout."""
    if _PENDING_BYTES:
        return True
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_seconds))
    return bool(ready)


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_char(fd: int, first: bytes) -> str:
    payload = bytearray(first)
    for _ in range(_utf8_length(first[0]) - 1):
        more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        payload.extend(more)
    return payload.decode("utf-8", errors="replace")


def _skip_csi_tail(fd: int) -> None:
    # CSI parameters end with a final byte in 0x40..0x7e.
    for _ in range(64):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None or 0x40 <= part[0] <= 0x7E:
            return


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token.

    Returns ``""`` when nothing arrived within ``timeout_ms`` and ``"EOF"`` when
    the input side of the terminal has been closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return "EOF"

    if ch == b"\t":
        return "TAB"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    if ch == b"\x03":
        return "CTRL_C"
    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"
    if ch[0] < 0x20 and ch != b"\x1b":
        return "CTRL"

    if ch != b"\x1b":
        return _decode_char(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"O":
        # SS3 arrows/function keys: ESC O <final>.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        return {b"A": "UP", b"B": "DOWN", b"C": "RIGHT", b"D": "LEFT"}.get(final or b"", "ESC")
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    if seq == b"<":
        # SGR mouse: ESC [ < btn ; col ; row (M/m)
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None or part in {b"M", b"m"}:
                return "MOUSE"
    if 0x40 <= seq[0] <= 0x7E:
        return "CSI"
    _skip_csi_tail(fd)
    return "CSI"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "_PENDING_BYTES", "read_key", "wait_for_input"]
