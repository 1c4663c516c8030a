"""UI theme definitions and selection helpers.

Themes are ANSI palettes for frame chrome, result cards, and modals.
Syntax colors for ``--find`` output come from pygments instead.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    title: str
    border: str
    hint: str
    hint_key: str
    card_border: str
    card_selected_border: str
    card_name: str
    card_version: str
    card_text: str
    card_stat: str
    footer: str
    error: str
    modal_title: str
    modal_border: str
    modal_cursor: str
    picker_selected: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;38;5;214m",
    border="\033[1;38;5;214m",
    hint="\033[2;38;5;250m",
    hint_key="\033[38;5;229m",
    card_border="\033[38;5;244m",
    card_selected_border="\033[1;38;5;81m",
    card_name="\033[1;38;5;255m",
    card_version="\033[38;5;114m",
    card_text="\033[38;5;252m",
    card_stat="\033[38;5;109m",
    footer="\033[7m",
    error="\033[1;38;5;203m",
    modal_title="\033[1;38;5;45m",
    modal_border="\033[38;5;45m",
    modal_cursor="\033[7m",
    picker_selected="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;38;5;45m",
    border="\033[1;38;5;31m",
    hint="\033[2;38;5;110m",
    hint_key="\033[38;5;153m",
    card_border="\033[38;5;24m",
    card_selected_border="\033[1;38;5;45m",
    card_name="\033[1;38;5;117m",
    card_version="\033[38;5;84m",
    card_text="\033[38;5;252m",
    card_stat="\033[38;5;73m",
    footer="\033[7;38;5;31m",
    error="\033[1;38;5;209m",
    modal_title="\033[1;38;5;39m",
    modal_border="\033[38;5;39m",
    modal_cursor="\033[7m",
    picker_selected="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    title="",
    border="",
    hint="",
    hint_key="",
    card_border="",
    card_selected_border="",
    card_name="",
    card_version="",
    card_text="",
    card_stat="",
    footer="",
    error="",
    modal_title="",
    modal_border="",
    modal_cursor="",
    picker_selected="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
