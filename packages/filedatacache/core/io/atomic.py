"""Atomic file replacement.

Writes go to a sibling temp file which is then moved over the target
with os.replace(), so readers see either the old file or the new one.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
import time
from typing import TextIO

from .models import WriteResult

logger = logging.getLogger(__name__)


@contextmanager
def atomic_write(path: str | Path, encoding: str = "utf-8") -> Iterator[TextIO]:
    """
    Open a text handle whose contents replace ``path`` on successful exit.

    The temp file lives in the target's directory so the final rename never
    crosses filesystems. If the block raises, the temp file is removed and the
    target is left untouched.

    Args:
        path: Target file path (parent directory must exist)
        encoding: Text encoding

    Yields:
        Writable text handle onto the temp file

    Raises:
        OSError: On temp file creation, write, or replace failure

    Example:
        >>> with atomic_write("/tmp/out.txt") as f:
        ...     f.write("hello\\n")
    """
    target = Path(path)
    tmp = NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        newline="\n",
        dir=target.parent,
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = tmp.name

    try:
        with tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temp file {tmp_path}: {e}")
        raise


def write_text_atomic(path: str | Path, content: str, encoding: str = "utf-8") -> WriteResult:
    """Atomically write ``content`` to ``path``."""
    start = time.perf_counter()

    with atomic_write(path, encoding=encoding) as f:
        f.write(content)

    duration = (time.perf_counter() - start) * 1000
    return WriteResult(
        path=str(path),
        bytes_written=len(content.encode(encoding)),
        duration_ms=duration,
    )


def set_mtime_ns(path: str | Path, mod_time_ns: int) -> None:
    """Set the modification time of ``path`` exactly; access time becomes now."""
    os.utime(path, ns=(time.time_ns(), mod_time_ns))
