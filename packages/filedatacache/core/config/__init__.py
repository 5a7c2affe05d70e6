"""Configuration for filedatacache."""

from filedatacache.core.config.loader import (
    default_cache_root,
    load_cache_config,
    load_config,
    user_cache_dir,
)
from filedatacache.core.config.models import CacheConfig, LoggingConfig, ScanConfig

__all__ = [
    "CacheConfig",
    "LoggingConfig",
    "ScanConfig",
    "default_cache_root",
    "load_cache_config",
    "load_config",
    "user_cache_dir",
]
