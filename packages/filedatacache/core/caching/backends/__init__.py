"""Metadata cache backends."""

from filedatacache.core.caching.backends.fs import FileDataCache
from filedatacache.core.caching.backends.null import NullMetadataCache

__all__ = ["FileDataCache", "NullMetadataCache"]
