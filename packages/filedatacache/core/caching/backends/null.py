"""No-op metadata cache.

Always reports cache miss, discards all stores.
"""

from collections.abc import Mapping

from filedatacache.core.caching.models import Key, Metadata


class NullMetadataCache:
    """
    No-op cache for callers that want caching switched off.
    """

    def get(self, key: Key) -> Metadata | None:
        """Always returns None."""
        return None

    def put(self, key: Key, metadata: Mapping[str, str]) -> None:
        """Discard."""
        pass

    def invalidate(self, key: Key) -> bool:
        """Nothing to remove."""
        return False
