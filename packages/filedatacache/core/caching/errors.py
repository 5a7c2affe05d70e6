"""Cache-specific errors.

Filesystem failures surface as the builtin FileNotFoundError / OSError.
"""


class FileDataCacheError(Exception):
    """Base exception for filedatacache errors."""

    pass


class InvalidMetadataError(FileDataCacheError, ValueError):
    """Raised when metadata cannot be written in the line-oriented record format."""

    pass


class CacheRootError(FileDataCacheError):
    """Raised when no cache root is configured and none can be derived."""

    pass
