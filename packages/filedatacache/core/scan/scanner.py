"""Whole-cache scan: summarize valid records and prune invalid ones.

Records are checked by a bounded pool of worker tasks. Workers never touch
the summary; they send each RecordCheck to a single aggregating consumer.
"""

from __future__ import annotations

import asyncio
import logging

import aiofiles.os  # type: ignore[import-untyped]

from filedatacache.core.caching.backends.fs import FileDataCache
from filedatacache.core.caching.keys import key_from_path
from filedatacache.core.caching.models import RecordLocation
from filedatacache.core.utils.logging import get_logger

from .models import RecordCheck, ScanSummary

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 32


async def check_record(
    cache: FileDataCache, location: RecordLocation, prune: bool = True
) -> RecordCheck:
    """
    Check one record against its live source file.

    The record is invalid if the source path no longer resolves or if a get
    with the freshly resolved key misses. Invalid records are removed when
    ``prune`` is set.
    """
    log = get_logger(__name__, record_path=str(location.record_path))

    try:
        key = await asyncio.to_thread(key_from_path, location.source_path)
    except OSError as e:
        log.debug(f"Source unavailable for {location.source_path}: {e}")
        return await _invalid(location, prune)

    metadata = await asyncio.to_thread(cache.get, key)
    if metadata is None:
        return await _invalid(location, prune)

    return RecordCheck(location=location, key=key, metadata=metadata)


async def _invalid(location: RecordLocation, prune: bool) -> RecordCheck:
    if not prune:
        return RecordCheck(location=location)

    try:
        await aiofiles.os.remove(location.record_path)
    except FileNotFoundError:
        return RecordCheck(location=location)
    except OSError as e:
        logger.warning(f"Could not remove invalid record {location.record_path}: {e}")
        return RecordCheck(location=location)

    logger.debug(f"Removed invalid record {location.record_path}")
    return RecordCheck(location=location, deleted=True)


async def scan_cache(
    cache: FileDataCache,
    workers: int = DEFAULT_WORKERS,
    prune: bool = True,
) -> ScanSummary:
    """
    Scan every record under the cache root.

    At most ``workers`` records are checked concurrently. All workers are
    awaited before the aggregated summary is returned.

    Args:
        cache: Cache to scan
        workers: Maximum concurrent record checks
        prune: Remove stale, corrupt, or orphaned records

    Returns:
        ScanSummary for the whole cache

    Raises:
        ValueError: If workers < 1
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    summary = ScanSummary()
    results: asyncio.Queue[RecordCheck | None] = asyncio.Queue()
    slots = asyncio.Semaphore(workers)

    async def aggregate() -> None:
        while (check := await results.get()) is not None:
            summary.add(check)

    async def worker(location: RecordLocation) -> None:
        try:
            check = await check_record(cache, location, prune)
        finally:
            slots.release()
        await results.put(check)

    consumer = asyncio.create_task(aggregate())

    locations = await asyncio.to_thread(lambda: list(cache.iter_records()))
    logger.debug(f"Scanning {len(locations)} records under {cache.root}")

    tasks: list[asyncio.Task[None]] = []
    try:
        for location in locations:
            await slots.acquire()
            tasks.append(asyncio.create_task(worker(location)))
        await asyncio.gather(*tasks)
    finally:
        await results.put(None)
        await consumer

    logger.info(
        f"Scanned {len(locations)} records: {summary.num_files} valid, "
        f"{summary.num_invalid} invalid, {summary.num_deletes} removed"
    )
    return summary


def scan_cache_sync(
    cache: FileDataCache,
    workers: int = DEFAULT_WORKERS,
    prune: bool = True,
) -> ScanSummary:
    """Scan the cache (blocking)."""
    return asyncio.run(scan_cache(cache, workers=workers, prune=prune))
