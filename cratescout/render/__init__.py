"""Rendering engine for the search results view.

Builds a full frame (header, result grid, footer) or a full-screen modal from
a read-only session snapshot and writes it as one ANSI payload. Frame
building is pure; only ``render_frame`` touches the terminal.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..registry.models import PackageRecord
from ..state import InputMode, SessionState, SortingMode
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import display_width, pad_ansi_line, truncate_with_ellipsis, wrap_plain_text
from .help import format_hint_line, header_lines, hints_for_mode

APP_TITLE = "cratescout (a crates.io quick search TUI)"
GRID_COLUMN_PERCENTAGES: tuple[int, ...] = (20, 20, 20, 20, 20)
MIN_WIDTH = 24
MIN_HEIGHT = 8

LIGHT_BOX = ("┌", "─", "┐", "│", "└", "┘")
HEAVY_BOX = ("┏", "━", "┓", "┃", "┗", "┛")


@dataclass(frozen=True)
class RenderContext:
    state: SessionState
    width: int
    height: int
    theme: UITheme = DEFAULT_THEME
    copy_enabled: bool = True


def split_percentages(total: int, percentages: tuple[int, ...]) -> list[int]:
    """Split ``total`` columns by percentage; the last slot absorbs rounding."""
    widths = [total * percent // 100 for percent in percentages]
    if widths:
        widths[-1] += total * sum(percentages) // 100 - sum(widths)
    return widths


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _boxed(
    body: list[str],
    width: int,
    height: int,
    *,
    title: str = "",
    border_style: str = "",
    title_style: str = "",
    theme: UITheme = DEFAULT_THEME,
    heavy: bool = False,
) -> list[str]:
    """Wrap ``body`` rows in a ``width`` x ``height`` box with optional title."""
    if width < 2 or height < 2:
        return [" " * max(0, width)] * max(0, height)
    tl, h, tr, v, bl, br = HEAVY_BOX if heavy else LIGHT_BOX
    inner_width = width - 2
    top_fill = h * inner_width
    if title:
        label = truncate_with_ellipsis(f" {title} ", max(0, inner_width - 1))
        rest = h * max(0, inner_width - 1 - display_width(label))
        top = _styled(f"{tl}{h}", border_style, theme) + _styled(label, title_style, theme) + _styled(f"{rest}{tr}", border_style, theme)
    else:
        top = _styled(f"{tl}{top_fill}{tr}", border_style, theme)
    side = _styled(v, border_style, theme)
    rows = [top]
    for idx in range(height - 2):
        line = body[idx] if idx < len(body) else ""
        rows.append(f"{side}{pad_ansi_line(line, inner_width)}{theme.reset}{side}")
    rows.append(_styled(f"{bl}{top_fill}{br}", border_style, theme))
    return rows


def _format_count(value: int) -> str:
    return f"{value:,}"


def card_body_lines(record: PackageRecord, inner_width: int, inner_height: int, theme: UITheme) -> list[str]:
    """Lines shown inside one result card, clipped to the card's interior."""
    stats = [
        _styled(truncate_with_ellipsis(f"↓ {_format_count(record.downloads)} all-time", inner_width), theme.card_stat, theme),
        _styled(truncate_with_ellipsis(f"↓ {_format_count(record.recent_downloads)} recent", inner_width), theme.card_stat, theme),
    ]
    if record.updated_at:
        stats.append(_styled(truncate_with_ellipsis(f"↻ {record.updated_at[:10]}", inner_width), theme.card_stat, theme))
    head = [
        _styled(truncate_with_ellipsis(record.name, inner_width), theme.card_name, theme),
        _styled(truncate_with_ellipsis(f"v{record.version}", inner_width), theme.card_version, theme),
        "",
    ]
    description_rows = max(0, inner_height - len(head) - len(stats) - 1)
    description = [
        _styled(line, theme.card_text, theme)
        for line in wrap_plain_text(record.description or "(no description)", inner_width, description_rows)
    ]
    filler = [""] * max(0, inner_height - len(head) - len(description) - len(stats))
    return (head + description + filler + stats)[:inner_height]


def _join_columns(columns: list[list[str]], widths: list[int], height: int) -> list[str]:
    rows: list[str] = []
    for row in range(height):
        parts = []
        for column, width in zip(columns, widths):
            cell = column[row] if row < len(column) else ""
            parts.append(pad_ansi_line(cell, width))
        rows.append("".join(parts))
    return rows


def _centered(lines: list[str], width: int, height: int) -> list[str]:
    top = max(0, (height - len(lines)) // 2)
    out = [""] * top
    for line in lines[: max(0, height - top)]:
        out.append(" " * max(0, (width - display_width(line)) // 2) + line)
    return out


def result_grid_lines(context: RenderContext, width: int, height: int) -> list[str]:
    """Up to five cards side by side, with the selected card highlighted."""
    state = context.state
    theme = context.theme
    if state.results is None:
        return _centered([_styled("Press f to search crates.io", theme.hint, theme)], width, height)
    if not state.results:
        message = "No crates found" if state.error is None else "Search failed"
        return _centered([_styled(message, theme.hint, theme)], width, height)

    grid_width = max(0, width - 2)
    widths = split_percentages(grid_width, GRID_COLUMN_PERCENTAGES)
    columns: list[list[str]] = []
    for idx, record in enumerate(state.results[: len(widths)]):
        card_width = widths[idx]
        selected = state.selection == idx
        body = card_body_lines(record, max(0, card_width - 2), max(0, height - 2), theme)
        columns.append(
            _boxed(
                body,
                card_width,
                height,
                border_style=theme.card_selected_border if selected else theme.card_border,
                theme=theme,
                heavy=selected,
            )
        )
    return [f" {row} " for row in _join_columns(columns, widths, height)]


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Left-aligned text and right-aligned text on one ``width``-column line."""
    if width <= 0:
        return ""
    right = truncate_with_ellipsis(right_text, width)
    left_limit = max(0, width - display_width(right) - 1) if right else width
    left = truncate_with_ellipsis(left_text, left_limit)
    gap = " " * max(0, width - display_width(left) - display_width(right))
    return f"{left}{gap}{right}"


def footer_line(context: RenderContext, width: int) -> str:
    state = context.state
    theme = context.theme
    left = f" Page {state.page} · sort: {state.sort.label}"
    if state.query:
        left += f" · “{state.query}”"
    if state.results is not None and state.error is None:
        left += f" · {_format_count(state.total)} crates"
    if state.error:
        right = f"{state.error} "
        line = build_status_line(left, width, right)
        cut = len(line) - len(right) if line.endswith(right) else len(line)
        return f"{theme.footer}{line[:cut]}{theme.reset}{theme.error}{line[cut:]}{theme.reset}"
    right = f"{state.status} " if state.status else ""
    return _styled(build_status_line(left, width, right), theme.footer, theme)


def normal_frame_lines(context: RenderContext) -> list[str]:
    width, height = context.width, context.height
    theme = context.theme
    inner_width = width - 2
    inner_height = height - 2
    header = header_lines(context.state.mode, theme, context.copy_enabled)
    header = (header + ["", ""])[:2]
    grid_height = max(0, inner_height - len(header) - 1)
    body = header + result_grid_lines(context, inner_width, grid_height)
    body = (body + [""] * grid_height)[: len(header) + grid_height]
    body.append(footer_line(context, inner_width))
    return _boxed(
        body,
        width,
        height,
        title=APP_TITLE,
        border_style=theme.border,
        title_style=theme.title,
        theme=theme,
        heavy=True,
    )


def input_modal_lines(context: RenderContext, mode: InputMode) -> list[str]:
    theme = context.theme
    inner_width = context.width - 2
    cursor_glyph = _styled(" ", theme.modal_cursor, theme) if theme.modal_cursor else "_"
    cursor = cursor_glyph if mode.cursor_visible else " "
    field_width = max(1, inner_width - 6)
    visible = mode.buffer
    while visible and display_width(visible) > field_width - 1:
        visible = visible[1:]
    prompt = f"  > {visible}{cursor}"
    hints = [format_hint_line(line, theme) for line in hints_for_mode(mode)]
    body = _centered([prompt, "", *hints], inner_width, context.height - 2)
    return _boxed(
        body,
        context.width,
        context.height,
        title="Enter your search term",
        border_style=theme.modal_border,
        title_style=theme.modal_title,
        theme=theme,
    )


def sorting_modal_lines(context: RenderContext, mode: SortingMode) -> list[str]:
    theme = context.theme
    inner_width = context.width - 2
    options: list[str] = []
    label_width = max(display_width(option.label) for option in mode.options) + 12
    for idx, option in enumerate(mode.options):
        suffix = " (current)" if option == context.state.sort else ""
        text = f"{option.label}{suffix}"
        if idx == mode.selection:
            row = f"› {text}".ljust(label_width)
            options.append(_styled(row, f"{theme.picker_selected}{theme.reverse}", theme))
        else:
            options.append(f"  {text}".ljust(label_width))
    hints = [format_hint_line(line, theme) for line in hints_for_mode(mode)]
    body = _centered([*options, "", *hints], inner_width, context.height - 2)
    return _boxed(
        body,
        context.width,
        context.height,
        title="Select your sorting method",
        border_style=theme.modal_border,
        title_style=theme.modal_title,
        theme=theme,
    )


def build_frame(context: RenderContext) -> list[str]:
    """Compose exactly ``context.height`` rows for the current mode."""
    if context.width < MIN_WIDTH or context.height < MIN_HEIGHT:
        message = truncate_with_ellipsis("terminal too small", max(1, context.width))
        return [message] + [""] * max(0, context.height - 1)
    mode = context.state.mode
    if isinstance(mode, InputMode):
        return input_modal_lines(context, mode)
    if isinstance(mode, SortingMode):
        return sorting_modal_lines(context, mode)
    return normal_frame_lines(context)


def render_frame(context: RenderContext, stdout_fd: int | None = None) -> None:
    """Write one composed frame; terminal write errors propagate to the caller."""
    out: list[str] = ["\033[H"]
    rows = build_frame(context)
    for idx, row in enumerate(rows):
        out.append(row)
        out.append("\033[0m\033[K")
        if idx < len(rows) - 1:
            out.append("\r\n")
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "APP_TITLE",
    "GRID_COLUMN_PERCENTAGES",
    "RenderContext",
    "split_percentages",
    "card_body_lines",
    "result_grid_lines",
    "build_status_line",
    "footer_line",
    "build_frame",
    "render_frame",
]
