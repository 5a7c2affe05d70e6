"""Bucketed histograms for scan summaries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import HistogramRow

DEFAULT_BAR_WIDTH = 40


def histogram_buckets(
    values: Iterable[int], buckets: int
) -> tuple[dict[int, int], int, int, int]:
    """
    Assign each value to a 1-based bucket of equal width.

    Buckets span [low, high] in steps of (high - low) // buckets. Values past
    the last full step land in the last bucket. When the range is narrower
    than the bucket count the step is 1 and fewer buckets are used.

    Args:
        values: Values to bucket (duplicates allowed)
        buckets: Number of buckets wanted

    Returns:
        (bucket index by value, low, step, high); ({}, 0, 0, 0) for no values

    Example:
        >>> histogram_buckets([0, 50, 100], 4)
        ({0: 1, 50: 3, 100: 4}, 0, 25, 100)
    """
    distinct = sorted(set(values))
    if not distinct:
        return {}, 0, 0, 0

    buckets = max(buckets, 1)
    low, high = distinct[0], distinct[-1]
    step = max((high - low) // buckets, 1)

    index = {v: min((v - low) // step + 1, buckets) for v in distinct}
    return index, low, step, high


def combine_histogram(counts: Mapping[int, int], bucket_by_value: Mapping[int, int]) -> dict[int, int]:
    """Sum per-value counts into per-bucket counts."""
    combined: dict[int, int] = {}
    for value, count in counts.items():
        bucket = bucket_by_value[value]
        combined[bucket] = combined.get(bucket, 0) + count
    return combined


def hash_bar(num: int, low: int, high: int, width: int = DEFAULT_BAR_WIDTH) -> str:
    """Render ``num`` as a bar of '#' proportional to its place in [low, high]."""
    if high <= low:
        return ""
    num = min(max(num, low), high)
    return "#" * ((num - low) * width // (high - low))


def render_size_histogram(
    size_counts: Mapping[int, int],
    buckets: int = 8,
    width: int = DEFAULT_BAR_WIDTH,
) -> list[HistogramRow]:
    """
    Build display rows for a size -> count histogram.

    Args:
        size_counts: Number of records per source file size
        buckets: Number of rows wanted
        width: Width of the longest bar

    Returns:
        One HistogramRow per used bucket, lowest sizes first
    """
    bucket_by_value, low, step, high = histogram_buckets(size_counts, buckets)
    if not bucket_by_value:
        return []

    per_bucket = combine_histogram(size_counts, bucket_by_value)
    num_rows = max(bucket_by_value.values())
    peak = max(per_bucket.values())

    rows: list[HistogramRow] = []
    row_low = low
    for bucket in range(1, num_rows + 1):
        row_high = high if bucket == num_rows else row_low + step
        count = per_bucket.get(bucket, 0)
        rows.append(
            HistogramRow(
                low=row_low,
                high=row_high,
                count=count,
                bar=hash_bar(count, 0, peak, width),
            )
        )
        row_low = row_high

    return rows
