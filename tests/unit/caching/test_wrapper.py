"""Tests for cached_metadata wrapper.

Tests the get-or-compute helper that sits in front of a metadata cache.
"""

from collections.abc import Mapping
import logging
from pathlib import Path

import pytest

from filedatacache.core.caching import (
    CacheOptions,
    FileDataCache,
    Key,
    Metadata,
    NullMetadataCache,
    cached_metadata,
    key_from_path,
)


class CountingCompute:
    """Compute function that records how often it runs."""

    def __init__(self, metadata: Metadata | None = None):
        self.metadata = metadata if metadata is not None else {"len": "8"}
        self.calls: list[str] = []

    def __call__(self, path: str) -> Metadata:
        self.calls.append(path)
        return dict(self.metadata)


class FailingPutCache:
    """Cache that always misses and cannot store."""

    def get(self, key: Key) -> Metadata | None:
        return None

    def put(self, key: Key, metadata: Mapping[str, str]) -> None:
        raise PermissionError(13, "Permission denied", "/cache/path")

    def invalidate(self, key: Key) -> bool:
        return False


class TestCacheHit:
    """Tests for cache hit behavior."""

    def test_second_call_uses_cached_metadata(self, cache: FileDataCache, source_file: Path):
        """Test a hit returns stored metadata without recomputing."""
        compute = CountingCompute()

        first = cached_metadata(cache, source_file, compute)
        second = cached_metadata(cache, source_file, compute)

        assert first == second == {"len": "8"}
        assert len(compute.calls) == 1

    def test_compute_receives_normalized_path(
        self, cache: FileDataCache, source_file: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test compute is called with the key's absolute path."""
        monkeypatch.chdir(source_file.parent)
        compute = CountingCompute()

        cached_metadata(cache, "F", compute)

        assert compute.calls == [str(source_file)]

    def test_result_is_stored_under_key(self, cache: FileDataCache, source_file: Path):
        """Test a miss writes through to the cache."""
        cached_metadata(cache, source_file, CountingCompute({"C": "JAM"}))

        assert cache.get(key_from_path(source_file)) == {"C": "JAM"}


class TestCacheMiss:
    """Tests for recompute behavior."""

    def test_modified_file_is_recomputed(self, cache: FileDataCache, source_file: Path):
        """Test a change to the source invalidates the stored metadata."""
        compute = CountingCompute()
        cached_metadata(cache, source_file, compute)

        source_file.write_bytes(b"jam")
        cached_metadata(cache, source_file, compute)

        assert len(compute.calls) == 2

    def test_missing_file_raises(self, cache: FileDataCache, base_dir: Path):
        """Test an unresolvable path propagates before compute runs."""
        compute = CountingCompute()

        with pytest.raises(FileNotFoundError):
            cached_metadata(cache, base_dir / "missing", compute)

        assert compute.calls == []


class TestCacheOptions:
    """Tests for per-call options."""

    def test_force_recomputes_and_stores(self, cache: FileDataCache, source_file: Path):
        """Test force skips the lookup but still refreshes the record."""
        cached_metadata(cache, source_file, CountingCompute({"v": "1"}))

        compute = CountingCompute({"v": "2"})
        result = cached_metadata(cache, source_file, compute, CacheOptions(force=True))

        assert result == {"v": "2"}
        assert len(compute.calls) == 1
        assert cache.get(key_from_path(source_file)) == {"v": "2"}

    def test_disabled_neither_reads_nor_writes(self, cache: FileDataCache, source_file: Path):
        """Test enabled=False bypasses the cache entirely."""
        compute = CountingCompute()
        options = CacheOptions(enabled=False)

        cached_metadata(cache, source_file, compute, options)
        cached_metadata(cache, source_file, compute, options)

        assert len(compute.calls) == 2
        assert not cache.record_path(key_from_path(source_file)).exists()


class TestFailures:
    """Tests for store failures."""

    def test_put_failure_still_returns_metadata(
        self, source_file: Path, caplog: pytest.LogCaptureFixture
    ):
        """Test an OSError from put is logged and the value is returned."""
        with caplog.at_level(logging.WARNING):
            result = cached_metadata(FailingPutCache(), source_file, CountingCompute())

        assert result == {"len": "8"}
        assert "Could not cache metadata" in caplog.text

    def test_invalid_metadata_propagates(self, cache: FileDataCache, source_file: Path):
        """Test unrepresentable metadata from compute is a caller error."""
        with pytest.raises(ValueError):
            cached_metadata(cache, source_file, CountingCompute({"a: b": "v"}))


class TestNullCache:
    """Tests for the no-op backend."""

    def test_null_cache_always_computes(self, source_file: Path):
        """Test the null backend never returns stored metadata."""
        cache = NullMetadataCache()
        compute = CountingCompute()

        cached_metadata(cache, source_file, compute)
        cached_metadata(cache, source_file, compute)

        assert len(compute.calls) == 2

    def test_null_cache_operations(self, source_file: Path):
        """Test get misses, put discards, invalidate removes nothing."""
        cache = NullMetadataCache()
        key = key_from_path(source_file)

        cache.put(key, {"len": "8"})

        assert cache.get(key) is None
        assert cache.invalidate(key) is False
