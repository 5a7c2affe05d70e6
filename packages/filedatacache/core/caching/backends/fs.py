"""Filesystem-backed metadata cache.

One record file per cached path under ``<root>/path/<normalized path>``,
written with atomic replace and stamped with the source file's mtime.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
import os
from pathlib import Path

from filedatacache.core.caching.errors import CacheRootError
from filedatacache.core.caching.models import RECORD_DIRNAME, Key, Metadata, RecordLocation
from filedatacache.core.caching.record import parse_record, render_record
from filedatacache.core.config import CacheConfig, default_cache_root
from filedatacache.core.io import set_mtime_ns, write_text_atomic

logger = logging.getLogger(__name__)


class FileDataCache:
    """
    Per-file metadata cache rooted at a directory.

    Holds no state beyond the root path, so several instances may share a
    root. Concurrent puts on one key are not coordinated: each replace is
    atomic and the last one wins.
    """

    def __init__(self, root: str | Path) -> None:
        """
        Initialize the cache.

        Args:
            root: Cache root directory (created lazily on first put)
        """
        self.root = Path(root)

    @classmethod
    def from_config(cls, config: CacheConfig) -> FileDataCache:
        """
        Build a cache from configuration, falling back to the platform default root.

        Raises:
            CacheRootError: If no root is configured and none can be derived
        """
        root = config.root or default_cache_root()
        if root is None:
            raise CacheRootError("Can't find cache root: set a root or FILEDATACACHE_ROOT")
        return cls(root)

    @property
    def records_dir(self) -> Path:
        return self.root / RECORD_DIRNAME

    def record_path(self, key: Key | str) -> Path:
        """Compute the record file location for a key (or normalized path)."""
        path = key.path if isinstance(key, Key) else key
        return Path(f"{self.records_dir}/{path}")

    def get(self, key: Key) -> Metadata | None:
        """
        Return cached metadata for ``key``.

        The record is valid only if its own mtime equals ``key.mod_time_ns``,
        its header is intact, its size matches ``key.size``, and every
        metadata line is well formed.

        Args:
            key: Freshly resolved key

        Returns:
            Metadata mapping, or None on miss (absent, stale, or corrupt)
        """
        p = self.record_path(key)

        try:
            st = p.stat()
        except OSError:
            logger.debug(f"Cache miss (no record): {key.path}")
            return None

        if st.st_mtime_ns != key.mod_time_ns:
            logger.debug(f"Cache miss (mtime changed): {key.path}")
            return None

        try:
            text = p.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug(f"Cache miss (unreadable record): {key.path}")
            return None

        record = parse_record(text)
        if record is None:
            logger.debug(f"Cache miss (corrupt record): {key.path}")
            return None

        if record.size != key.size:
            logger.debug(f"Cache miss (size changed): {key.path}")
            return None

        return record.metadata

    def put(self, key: Key, metadata: Mapping[str, str]) -> None:
        """
        Replace the cached metadata for ``key``.

        Args:
            key: Key the metadata was computed for
            metadata: String-to-string mapping (not mutated)

        Raises:
            InvalidMetadataError: If an entry cannot be represented in a record
            OSError: On directory creation, write, replace, or mtime failure
        """
        content = render_record(key, metadata)
        p = self.record_path(key)

        p.parent.mkdir(parents=True, exist_ok=True)
        result = write_text_atomic(p, content)
        set_mtime_ns(p, key.mod_time_ns)

        logger.debug(
            f"Cached {len(metadata)} entries for {key.path} "
            f"({result.bytes_written} bytes, {result.duration_ms:.1f}ms)"
        )

    def invalidate(self, key: Key | str) -> bool:
        """Remove the record for a key (or normalized path). Returns True if removed."""
        p = self.record_path(key)
        try:
            p.unlink()
        except FileNotFoundError:
            return False
        return True

    def iter_records(self) -> Iterator[RecordLocation]:
        """
        Enumerate every record file under the cache root.

        Yields:
            RecordLocation with the record path and the source path it describes
        """
        records_dir = self.records_dir
        for dirpath, _dirnames, filenames in os.walk(records_dir):
            for name in filenames:
                record_path = Path(dirpath) / name
                source_path = "/" + record_path.relative_to(records_dir).as_posix()
                yield RecordLocation(record_path=record_path, source_path=source_path)
