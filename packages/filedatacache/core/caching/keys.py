"""Key resolution from live filesystem state."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import stat

from .models import Key

logger = logging.getLogger(__name__)


def normalize_path(path: str | Path) -> str:
    """
    Normalize a path into the form used as the cache slot identity.

    The path is made absolute. If it names a symbolic link it is replaced
    by its fully resolved target (following chained links); otherwise the
    absolute form is kept as-is.

    Args:
        path: Any filesystem path

    Returns:
        Normalized absolute path string

    Raises:
        FileNotFoundError: If the path (or a link target) does not exist
        OSError: On any other lstat / resolution failure
    """
    abs_path = os.path.abspath(path)

    st = os.lstat(abs_path)
    if stat.S_ISLNK(st.st_mode):
        return os.path.realpath(abs_path, strict=True)

    return abs_path


def key_from_path(path: str | Path) -> Key:
    """
    Build a full Key for ``path`` by stat-ing the live file.

    Modification time and size come from a stat that follows symlinks, so
    they describe the file whose contents would be read.

    Args:
        path: Any filesystem path

    Returns:
        Key with normalized path, mtime (ns), and size

    Raises:
        FileNotFoundError: If the path does not exist
        OSError: On any other stat / normalization failure

    Example:
        >>> key = key_from_path("data/song.mp3")
        >>> key.path
        '/home/user/project/data/song.mp3'
    """
    st = os.stat(path)
    key = Key(path=normalize_path(path), mod_time_ns=st.st_mtime_ns, size=st.st_size)
    logger.debug(f"Resolved {path} -> {key}")
    return key
