"""Exception hierarchy shared across cratescout layers.

Background producers convert these into events or quiet exits.
Only main-loop failures propagate to the CLI.
"""

from __future__ import annotations


class CratescoutError(Exception):
    """Base class for errors raised by cratescout."""


class RegistryError(CratescoutError):
    """Search request failed in transport, HTTP status, or payload decoding."""


class ClipboardError(CratescoutError):
    """Clipboard provider could not store the requested text."""


class ChannelClosed(CratescoutError):
    """Event channel no longer accepts messages."""


__all__ = [
    "CratescoutError",
    "RegistryError",
    "ClipboardError",
    "ChannelClosed",
]
