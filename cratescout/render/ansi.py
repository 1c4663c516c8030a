"""ANSI-aware text measurement and line shaping utilities.

Provides clipping, padding, and word wrapping that preserve escape sequences.
These helpers keep card borders aligned when color codes and wide chars are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` with escape sequences ignored."""
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` to exactly ``width`` display columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def truncate_with_ellipsis(text: str, width: int) -> str:
    """Shorten plain ``text`` to ``width`` columns, marking the cut with ``…``."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    return clip_ansi_line(text, width - 1) + "…"


def wrap_plain_text(text: str, width: int, max_lines: int | None = None) -> list[str]:
    """Greedy word wrap for unstyled text.

    Words longer than ``width`` are hard-split. When ``max_lines`` cuts the
    output short, the last kept line ends with an ellipsis.
    """
    if width <= 0:
        return []
    lines: list[str] = []
    current = ""
    for word in text.split():
        while display_width(word) > width:
            if current:
                lines.append(current)
                current = ""
            head = clip_ansi_line(word, width)
            lines.append(head)
            word = word[len(head):]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if display_width(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    if max_lines is not None and len(lines) > max_lines:
        lines = lines[:max_lines]
        if lines:
            lines[-1] = truncate_with_ellipsis(lines[-1] + " …", width)
    return lines


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "display_width",
    "clip_ansi_line",
    "pad_ansi_line",
    "truncate_with_ellipsis",
    "wrap_plain_text",
]
