"""Per-file metadata cache for filedatacache.

Memoizes file-derived metadata (checksums, parsed headers, tags) on disk,
invalidated automatically when the file's mtime or size changes.

Key features:
- Keys derived from live filesystem state (normalized path, mtime, size)
- Versioned line-oriented record format with sorted, deterministic output
- Atomic replace-on-write; readers never see a partial record
- Miss-on-error semantics (absent, stale, or corrupt record -> miss)
"""

from filedatacache.core.caching.backends.fs import FileDataCache
from filedatacache.core.caching.backends.null import NullMetadataCache
from filedatacache.core.caching.errors import (
    CacheRootError,
    FileDataCacheError,
    InvalidMetadataError,
)
from filedatacache.core.caching.keys import key_from_path, normalize_path
from filedatacache.core.caching.models import (
    RECORD_FORMAT,
    CacheOptions,
    CacheRecord,
    Key,
    Metadata,
    RecordLocation,
)
from filedatacache.core.caching.protocols import MetadataCache
from filedatacache.core.caching.record import (
    format_mtime,
    parse_mtime,
    parse_record,
    render_record,
    validate_metadata,
)
from filedatacache.core.caching.wrapper import cached_metadata

__all__ = [
    # Core
    "Key",
    "Metadata",
    "CacheRecord",
    "CacheOptions",
    "RecordLocation",
    "MetadataCache",
    "RECORD_FORMAT",
    # Backends
    "FileDataCache",
    "NullMetadataCache",
    # Errors
    "FileDataCacheError",
    "InvalidMetadataError",
    "CacheRootError",
    # Keys and records
    "key_from_path",
    "normalize_path",
    "format_mtime",
    "parse_mtime",
    "parse_record",
    "render_record",
    "validate_metadata",
    # Utils
    "cached_metadata",
]
