"""Persistent JSON config helpers.

Stores the default sort order, UI theme, clipboard mechanism, stale-result
policy, and registry connection settings. All access is defensive:
malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from ..registry.client import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT_SECONDS
from ..registry.models import DEFAULT_SORT, SortOrder

logger = logging.getLogger(__name__)

APP_NAME = "cratescout"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "cratescout.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME

CLIPBOARD_MECHANISMS: tuple[str, ...] = ("auto", "native", "osc52", "off")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings after sanitizing the config file."""

    default_sort: SortOrder = DEFAULT_SORT
    theme: str | None = None
    clipboard: str = "auto"
    discard_stale_results: bool = False
    registry_url: str = DEFAULT_REGISTRY_URL
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never interrupts a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config %s: %s", CONFIG_PATH, exc)


def load_default_sort() -> SortOrder:
    """Return persisted default sort order, falling back to relevance."""
    value = load_config().get("default_sort")
    if not isinstance(value, str):
        return DEFAULT_SORT
    try:
        return SortOrder.parse(value)
    except ValueError:
        return DEFAULT_SORT


def save_default_sort(sort: SortOrder) -> None:
    config = load_config()
    config["default_sort"] = sort.key
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_clipboard_mechanism() -> str:
    value = load_config().get("clipboard")
    if isinstance(value, str) and value.strip().lower() in CLIPBOARD_MECHANISMS:
        return value.strip().lower()
    return "auto"


def load_discard_stale_results() -> bool:
    """Only explicit booleans are accepted; anything else means ``False``."""
    value = load_config().get("discard_stale_results")
    return value if isinstance(value, bool) else False


def load_registry_url() -> str:
    value = load_config().get("registry_url")
    if isinstance(value, str) and value.strip().startswith(("http://", "https://")):
        return value.strip()
    return DEFAULT_REGISTRY_URL


def load_request_timeout() -> float:
    value = load_config().get("request_timeout")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return float(value)


def load_settings() -> Settings:
    return Settings(
        default_sort=load_default_sort(),
        theme=load_theme_name(),
        clipboard=load_clipboard_mechanism(),
        discard_stale_results=load_discard_stale_results(),
        registry_url=load_registry_url(),
        request_timeout=load_request_timeout(),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_LOG_PATH",
    "CLIPBOARD_MECHANISMS",
    "Settings",
    "load_config",
    "save_config",
    "load_default_sort",
    "save_default_sort",
    "load_theme_name",
    "load_clipboard_mechanism",
    "load_discard_stale_results",
    "load_registry_url",
    "load_request_timeout",
    "load_settings",
]
