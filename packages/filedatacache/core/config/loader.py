"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import sys
from typing import Any

import yaml

from filedatacache.core.config.models import CacheConfig, LoggingConfig, ScanConfig

logger = logging.getLogger(__name__)

CACHE_DIRNAME = "filedatacache"

ENV_ROOT = "FILEDATACACHE_ROOT"
ENV_WORKERS = "FILEDATACACHE_WORKERS"
ENV_LOG_LEVEL = "FILEDATACACHE_LOG_LEVEL"


def user_cache_dir() -> Path | None:
    """Return the platform's per-user cache directory.

    - Windows: %LocalAppData%
    - macOS: ~/Library/Caches
    - Others: $XDG_CACHE_HOME if absolute, else ~/.cache

    Returns:
        Directory path, or None if it cannot be determined
    """
    if sys.platform == "win32":
        local_app_data = os.getenv("LocalAppData")
        return Path(local_app_data) if local_app_data else None

    if sys.platform == "darwin":
        home = os.getenv("HOME")
        return Path(home) / "Library" / "Caches" if home else None

    xdg = os.getenv("XDG_CACHE_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)

    home = os.getenv("HOME")
    return Path(home) / ".cache" if home else None


def default_cache_root() -> Path | None:
    """Return the conventional cache root, or None if there is no user cache dir."""
    base = user_cache_dir()
    if base is None:
        return None
    return base / CACHE_DIRNAME


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("fdc.json")
        'json'
        >>> detect_format("fdc.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return content


def load_cache_config(path: str | Path | None = None) -> CacheConfig:
    """Load and validate configuration.

    Values from the file (if given) are overridden by environment variables
    FILEDATACACHE_ROOT, FILEDATACACHE_WORKERS and FILEDATACACHE_LOG_LEVEL.

    Args:
        path: Optional path to a config file (.json, .yaml, or .yml)

    Returns:
        Validated CacheConfig instance

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist
        ValueError: If the file or an environment override is invalid
        ValidationError: If config is invalid
    """
    raw_config = load_config(path) if path is not None else {}
    config = CacheConfig.model_validate(raw_config)

    return _apply_env_overrides(config)


def _apply_env_overrides(config: CacheConfig) -> CacheConfig:
    updates: dict[str, Any] = {}

    root = os.getenv(ENV_ROOT)
    if root:
        logger.debug(f"Using cache root from {ENV_ROOT}: {root}")
        updates["root"] = Path(root)

    workers = os.getenv(ENV_WORKERS)
    if workers:
        scan_cfg = config.scan.model_dump()
        scan_cfg["workers"] = workers
        updates["scan"] = ScanConfig.model_validate(scan_cfg)

    level = os.getenv(ENV_LOG_LEVEL)
    if level:
        logging_cfg = config.logging.model_dump()
        logging_cfg["level"] = level.upper()
        updates["logging"] = LoggingConfig.model_validate(logging_cfg)

    if not updates:
        return config
    return config.model_copy(update=updates)
