"""Mode-specific control hints shown in the frame header."""

from __future__ import annotations

from ..state import AppMode, InputMode, SortingMode
from ..ui_theme import UITheme

HintLine = tuple[tuple[str, str], ...]

NORMAL_HINTS: tuple[HintLine, ...] = (
    (("n/p", "next/prev page"), ("f", "search"), ("s", "sort"), ("q", "quit")),
    (("j/k", "move highlight"), ("c", "copy Cargo.toml line")),
)

NORMAL_HINTS_NO_COPY: tuple[HintLine, ...] = (
    NORMAL_HINTS[0],
    (("j/k", "move highlight"),),
)

INPUT_HINTS: tuple[HintLine, ...] = (
    (("type", "enter your search term"), ("Enter", "confirm"), ("Esc", "cancel")),
)

SORTING_HINTS: tuple[HintLine, ...] = (
    (("j/k", "move between options"), ("Enter", "confirm"), ("Esc", "cancel")),
)


def hints_for_mode(mode: AppMode, copy_enabled: bool = True) -> tuple[HintLine, ...]:
    if isinstance(mode, InputMode):
        return INPUT_HINTS
    if isinstance(mode, SortingMode):
        return SORTING_HINTS
    return NORMAL_HINTS if copy_enabled else NORMAL_HINTS_NO_COPY


def format_hint_line(line: HintLine, theme: UITheme) -> str:
    """Render ``key action`` pairs separated by two spaces."""
    parts = [f"{theme.hint_key}{key}{theme.reset} {theme.hint}{action}{theme.reset}" for key, action in line]
    return "  ".join(parts)


def header_lines(mode: AppMode, theme: UITheme, copy_enabled: bool = True) -> list[str]:
    return [format_hint_line(line, theme) for line in hints_for_mode(mode, copy_enabled)]


__all__ = [
    "NORMAL_HINTS",
    "INPUT_HINTS",
    "SORTING_HINTS",
    "hints_for_mode",
    "format_hint_line",
    "header_lines",
]
