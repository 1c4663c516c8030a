"""Registry access: data model and blocking client.

The channel-posting ``AsyncSearcher`` lives in ``registry.searcher`` and is
imported from there, since it depends on the event types.
"""

from .client import DEFAULT_REGISTRY_URL, RegistryClient
from .models import DEFAULT_SORT, PackageRecord, SearchPage, SortOrder

__all__ = [
    "DEFAULT_REGISTRY_URL",
    "DEFAULT_SORT",
    "PackageRecord",
    "RegistryClient",
    "SearchPage",
    "SortOrder",
]
