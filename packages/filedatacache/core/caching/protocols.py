"""Protocol for metadata cache backends."""

from collections.abc import Mapping
from typing import Protocol

from .models import Key, Metadata


class MetadataCache(Protocol):
    """
    Protocol for per-file metadata caches.

    All implementations must support:
    - Miss-on-error semantics (absent, stale, or corrupt record -> None)
    - Full replace on every put (no in-place update)
    """

    def get(self, key: Key) -> Metadata | None:
        """
        Return the metadata cached for ``key``.

        Args:
            key: Freshly resolved key for the source file

        Returns:
            Cached metadata, or None on miss
        """
        ...

    def put(self, key: Key, metadata: Mapping[str, str]) -> None:
        """
        Replace the cached metadata for ``key``.

        Raises:
            OSError: On write failure
        """
        ...

    def invalidate(self, key: Key) -> bool:
        """Drop the cached record for ``key``. Returns True if one was removed."""
        ...
