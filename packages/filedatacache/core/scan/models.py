"""Models for cache scans."""

from pydantic import BaseModel, ConfigDict, Field

from filedatacache.core.caching.models import Key, Metadata, RecordLocation


class RecordCheck(BaseModel):
    """Outcome of checking one record during a scan.

    ``key`` and ``metadata`` are set only for valid records.
    """

    model_config = ConfigDict(frozen=True)

    location: RecordLocation
    key: Key | None = None
    metadata: Metadata | None = None
    deleted: bool = False

    @property
    def valid(self) -> bool:
        return self.metadata is not None


class ScanSummary(BaseModel):
    """Aggregated statistics for a whole cache scan."""

    num_files: int = Field(default=0, description="Valid records found")
    num_invalid: int = Field(default=0, description="Stale, corrupt, or orphaned records found")
    num_deletes: int = Field(default=0, description="Invalid records removed")
    size_counts: dict[int, int] = Field(
        default_factory=dict, description="Source file size -> number of records"
    )
    entry_counts: dict[int, int] = Field(
        default_factory=dict, description="Metadata entry count -> number of records"
    )

    def add(self, check: RecordCheck) -> None:
        """Fold one record check into the summary."""
        if check.key is not None and check.metadata is not None:
            self.num_files += 1
            self.size_counts[check.key.size] = self.size_counts.get(check.key.size, 0) + 1
            n = len(check.metadata)
            self.entry_counts[n] = self.entry_counts.get(n, 0) + 1
            return

        self.num_invalid += 1
        if check.deleted:
            self.num_deletes += 1


class HistogramRow(BaseModel):
    """One rendered histogram row."""

    low: int
    high: int
    count: int
    bar: str = ""
