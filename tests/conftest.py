"""Shared pytest fixtures for filedatacache tests."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from filedatacache.core.caching import FileDataCache

# 2023-11-14T22:13:20.5Z; the half second exercises the fractional mtime header
# while staying representable on filesystems with coarse timestamps.
SOURCE_MTIME_NS = 1_700_000_000_500_000_000


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FILEDATACACHE_* settings from the host out of tests."""
    for name in ("FILEDATACACHE_ROOT", "FILEDATACACHE_WORKERS", "FILEDATACACHE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    # Only the exact handler types configure_logging() installs; pytest's own
    # capture handlers are subclasses and manage themselves.
    for handler in root.handlers[:]:
        if handler not in handlers and type(handler) in (
            logging.StreamHandler,
            logging.FileHandler,
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Temp directory with symlinks in its own ancestry resolved."""
    return tmp_path.resolve()


@pytest.fixture
def cache_root(base_dir: Path) -> Path:
    """Cache root directory (not created up front)."""
    return base_dir / "cache"


@pytest.fixture
def cache(cache_root: Path) -> FileDataCache:
    """Provide a FileDataCache over a fresh root."""
    return FileDataCache(cache_root)


@pytest.fixture
def source_mtime_ns() -> int:
    """Modification time given to source_file."""
    return SOURCE_MTIME_NS


@pytest.fixture
def source_file(base_dir: Path) -> Path:
    """Source file containing "james" (5 bytes) with a fixed mtime."""
    path = base_dir / "data" / "F"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"james")
    os.utime(path, ns=(SOURCE_MTIME_NS, SOURCE_MTIME_NS))
    return path
