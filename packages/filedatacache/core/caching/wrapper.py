"""Memoization helper for file-derived metadata.

Provides cached_metadata(), the get-or-compute entry point for callers.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
import time

from .keys import key_from_path
from .models import CacheOptions, Metadata
from .protocols import MetadataCache

logger = logging.getLogger(__name__)


def cached_metadata(
    cache: MetadataCache,
    path: str | Path,
    compute: Callable[[str], Metadata],
    options: CacheOptions | None = None,
) -> Metadata:
    """
    Return metadata for ``path``, computing and caching it on a miss.

    Workflow:
    1. Resolve the key from the live file
    2. Attempt cache get (if enabled and not forced)
    3. On miss: run compute(normalized path), put the result (if enabled)
    4. Return metadata

    A failed put is logged and the computed metadata is still returned;
    the value just isn't memoized this time.

    Args:
        cache: Metadata cache backend
        path: Source file path
        compute: Function computing metadata from the normalized path
        options: Optional cache behavior overrides

    Returns:
        Cached or freshly computed metadata

    Raises:
        FileNotFoundError: If ``path`` does not exist
        OSError: If ``path`` cannot be resolved

    Example:
        >>> md = cached_metadata(
        ...     cache=FileDataCache("/tmp/fdc"),
        ...     path="song.flac",
        ...     compute=lambda p: {"sha256": sha256_file(p)},
        ... )
    """
    opts = options or CacheOptions()
    key = key_from_path(path)

    if opts.enabled and not opts.force:
        metadata = cache.get(key)
        if metadata is not None:
            return metadata

    start = time.perf_counter()
    metadata = compute(key.path)
    compute_ms = (time.perf_counter() - start) * 1000
    logger.debug(f"Computed metadata for {key.path} in {compute_ms:.1f}ms")

    if opts.enabled:
        try:
            cache.put(key, metadata)
        except OSError as e:
            logger.warning(f"Could not cache metadata for {key.path}: {e}")

    return metadata
