"""Registry data types: sort orders, package records, and result pages.

Records are immutable once decoded from a registry payload.
Decoding is tolerant of missing optional fields but strict about names.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass

from ..errors import RegistryError


class SortOrder(enum.Enum):
    """Registry sort orders in picker display order."""

    RELEVANCE = ("relevance", "Relevance")
    ALL_TIME_DOWNLOADS = ("downloads", "All-Time Downloads")
    RECENT_DOWNLOADS = ("recent-downloads", "Recent Downloads")
    RECENT_UPDATES = ("recent-updates", "Recent Updates")
    NEWLY_ADDED = ("new", "Newly Added")

    @property
    def key(self) -> str:
        """Query-string value understood by the registry."""
        return self.value[0]

    @property
    def label(self) -> str:
        """Stable human-readable label."""
        return self.value[1]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def options(cls) -> tuple[SortOrder, ...]:
        return tuple(cls)

    @classmethod
    def parse(cls, text: str) -> SortOrder:
        """Resolve a sort order from its key, label, or enum name.

        Matching ignores case, and treats ``-``, ``_`` and spaces alike so
        ``recent_downloads``, ``Recent Downloads`` and ``recent-downloads``
        all resolve to the same member.
        """

        def fold(value: str) -> str:
            return value.strip().lower().replace("_", "-").replace(" ", "-")

        wanted = fold(text)
        for member in cls:
            if wanted in {fold(member.key), fold(member.label), fold(member.name)}:
                return member
        raise ValueError(f"unknown sort order: {text!r}")


DEFAULT_SORT = SortOrder.RELEVANCE


@dataclass(frozen=True)
class PackageRecord:
    """One registry entry as shown in the result grid."""

    name: str
    version: str
    description: str = ""
    downloads: int = 0
    recent_downloads: int = 0
    updated_at: str = ""
    created_at: str = ""
    repository: str | None = None
    documentation: str | None = None
    homepage: str | None = None

    def dependency_line(self) -> str:
        """Return the manifest line that depends on this exact version."""
        return f'{self.name} = "{self.version}"'


@dataclass(frozen=True)
class SearchPage:
    """Records returned for one (query, page, sort) request."""

    records: tuple[PackageRecord, ...]
    total: int = 0


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


def _as_optional_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_count(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def record_from_payload(entry: Mapping[str, object]) -> PackageRecord:
    """Decode one crate object from a search response."""
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise RegistryError("registry entry is missing a crate name")
    version = (
        _as_str(entry.get("max_stable_version"))
        or _as_str(entry.get("max_version"))
        or _as_str(entry.get("newest_version"))
    )
    description = " ".join(_as_str(entry.get("description")).split())
    return PackageRecord(
        name=name,
        version=version or "*",
        description=description,
        downloads=_as_count(entry.get("downloads")),
        recent_downloads=_as_count(entry.get("recent_downloads")),
        updated_at=_as_str(entry.get("updated_at")),
        created_at=_as_str(entry.get("created_at")),
        repository=_as_optional_str(entry.get("repository")),
        documentation=_as_optional_str(entry.get("documentation")),
        homepage=_as_optional_str(entry.get("homepage")),
    )


def page_from_payload(payload: object) -> SearchPage:
    """Decode a full search response body."""
    if not isinstance(payload, Mapping):
        raise RegistryError("registry response is not a JSON object")
    crates = payload.get("crates")
    if not isinstance(crates, list):
        raise RegistryError("registry response has no crate list")
    records = tuple(record_from_payload(entry) for entry in crates if isinstance(entry, Mapping))
    meta = payload.get("meta")
    total = _as_count(meta.get("total")) if isinstance(meta, Mapping) else len(records)
    return SearchPage(records=records, total=total)


__all__ = [
    "SortOrder",
    "DEFAULT_SORT",
    "PackageRecord",
    "SearchPage",
    "record_from_payload",
    "page_from_payload",
]
