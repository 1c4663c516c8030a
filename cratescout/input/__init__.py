"""Input-layer public API: key decoding, key dispatch tables, and the monitor.

Exports are split between low-level terminal decoding (``read_key``) and
the background thread that turns keys into channel events.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .monitor import POLL_TIMEOUT_SECONDS, InputMonitor, event_for_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key, wait_for_input

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "POLL_TIMEOUT_SECONDS",
    "InputMonitor",
    "KeyComboBinding",
    "KeyComboRegistry",
    "event_for_key",
    "read_key",
    "wait_for_input",
]
