"""Configuration models for filedatacache."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="WARNING",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )
    format: str | None = Field(default=None, description="Custom log format string")
    structured: bool = Field(default=False, description="Emit JSON log lines")


class ScanConfig(BaseModel):
    """Cache summary / prune walk configuration."""

    workers: int = Field(default=32, gt=0, description="Maximum concurrent record checks")
    buckets: int = Field(default=8, gt=0, description="Rows in the file size histogram")
    prune: bool = Field(default=True, description="Delete stale or corrupt records found")


class CacheConfig(BaseModel):
    """Top-level configuration.

    ``root`` is fixed once a store is built from this config; when unset the
    platform default (see ``default_cache_root``) is used.
    """

    root: Path | None = Field(default=None, description="Cache root directory override")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
