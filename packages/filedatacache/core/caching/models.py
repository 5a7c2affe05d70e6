"""Models for the file metadata cache.

Provides the cache key, parsed record, and per-call option models.
"""

from pathlib import Path
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

RECORD_FORMAT = "filedatacache-1.0"
RECORD_DIRNAME = "path"

Metadata: TypeAlias = dict[str, str]


class Key(BaseModel):
    """
    Identity and staleness fingerprint of a cached file.

    Two keys address the same cache slot iff their paths are equal; a
    different mod_time_ns or size on the same path invalidates the record
    rather than selecting another slot.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Normalized absolute path (symlinks resolved)")
    mod_time_ns: int = Field(description="Modification time in nanoseconds since the epoch")
    size: int = Field(ge=0, description="File size in bytes")

    @property
    def mod_time_seconds(self) -> float:
        return self.mod_time_ns / 1_000_000_000

    def __str__(self) -> str:
        return f"{self.path}@{self.mod_time_ns}:{self.size}"


class CacheRecord(BaseModel):
    """
    Parsed on-disk record.

    The mtime header is kept verbatim; staleness is decided by the record
    file's own modification time, not by this value.
    """

    mtime: str = Field(description="Raw value of the mtime header line")
    size: int = Field(description="Source file size at write time")
    metadata: Metadata = Field(default_factory=dict)


class CacheOptions(BaseModel):
    """
    Per-call cache behavior configuration.
    """

    enabled: bool = Field(default=True, description="Cache toggle for this call")
    force: bool = Field(
        default=False,
        description="Ignore cached metadata and recompute (still stores if enabled)",
    )


class RecordLocation(BaseModel):
    """A record file found under the cache root and the source path it describes."""

    model_config = ConfigDict(frozen=True)

    record_path: Path
    source_path: str
