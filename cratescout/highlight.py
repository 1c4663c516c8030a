"""Syntax highlighting for dependency declarations printed by ``--find``."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TOMLLexer
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_LEXER = TOMLLexer()


def colorize_toml(source: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return ``source`` highlighted as TOML, without a trailing newline."""
    if no_color or not source:
        return source
    try:
        formatter = Terminal256Formatter(style=style)
    except ClassNotFound:
        formatter = Terminal256Formatter()
    return highlight(source, _LEXER, formatter).rstrip("\n")


__all__ = ["DEFAULT_STYLE", "colorize_toml"]
