"""Filesystem helpers for filedatacache.

Provides the atomic replace-on-write primitive used by the cache store.

Example:
    >>> from filedatacache.core.io import write_text_atomic
    >>> result = write_text_atomic("/tmp/record.txt", "hello\\n")
    >>> result.bytes_written
    6
"""

from .atomic import atomic_write, set_mtime_ns, write_text_atomic
from .models import WriteResult

__all__ = [
    "WriteResult",
    "atomic_write",
    "set_mtime_ns",
    "write_text_atomic",
]
