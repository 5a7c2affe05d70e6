"""Cache scanning: summary statistics and pruning of invalid records."""

from filedatacache.core.scan.histogram import (
    combine_histogram,
    hash_bar,
    histogram_buckets,
    render_size_histogram,
)
from filedatacache.core.scan.models import HistogramRow, RecordCheck, ScanSummary
from filedatacache.core.scan.scanner import check_record, scan_cache, scan_cache_sync

__all__ = [
    "HistogramRow",
    "RecordCheck",
    "ScanSummary",
    "check_record",
    "combine_histogram",
    "hash_bar",
    "histogram_buckets",
    "render_size_histogram",
    "scan_cache",
    "scan_cache_sync",
]
