"""Line-oriented record codec.

Record layout (UTF-8, newline-terminated lines):

    filedatacache-1.0
    mtime: <sec>[.<9-digit fraction>]
    size: <bytes>
    <key>: <value>
    ...

Metadata lines are written in sorted key order so identical metadata
always produces byte-identical records. Any structural anomaly on read
makes the whole record invalid.
"""

from __future__ import annotations

from collections.abc import Mapping
import re

from .errors import InvalidMetadataError
from .models import RECORD_FORMAT, CacheRecord, Key, Metadata

_NS_PER_SECOND = 1_000_000_000
_SEPARATOR = ": "
_MTIME_PREFIX = "mtime: "
_SIZE_PREFIX = "size: "

_MTIME_RE = re.compile(r"(-?[0-9]+)(?:\.([0-9]{9}))?")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def format_mtime(mod_time_ns: int) -> str:
    """
    Encode a nanosecond timestamp for the mtime header.

    Example:
        >>> format_mtime(1_700_000_000_000_000_000)
        '1700000000'
        >>> format_mtime(1_700_000_000_000_000_042)
        '1700000000.000000042'
    """
    seconds, fraction = divmod(mod_time_ns, _NS_PER_SECOND)
    if fraction == 0:
        return f"{seconds}"
    return f"{seconds}.{fraction:09d}"


def parse_mtime(text: str) -> int | None:
    """Decode an mtime header value back to nanoseconds, or None if malformed."""
    m = _MTIME_RE.fullmatch(text)
    if m is None:
        return None
    seconds = int(m.group(1))
    fraction = int(m.group(2)) if m.group(2) else 0
    return seconds * _NS_PER_SECOND + fraction


def validate_metadata(metadata: Mapping[str, str]) -> None:
    """
    Check that every entry survives a write/read cycle.

    Raises:
        InvalidMetadataError: If a key contains ": " or a key/value contains
            a line break, or if either is not a string
    """
    for k, v in metadata.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise InvalidMetadataError(f"Metadata entries must be str -> str, got {k!r}: {v!r}")
        if _SEPARATOR in k:
            raise InvalidMetadataError(f"Metadata key must not contain {_SEPARATOR!r}: {k!r}")
        if any(ch in k or ch in v for ch in ("\n", "\r")):
            raise InvalidMetadataError(f"Metadata entry must not contain line breaks: {k!r}")
        try:
            (k + v).encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidMetadataError(f"Metadata entry is not valid UTF-8 text: {k!r}") from e


def render_record(key: Key, metadata: Mapping[str, str]) -> str:
    """Serialize a record for ``key`` holding ``metadata``."""
    validate_metadata(metadata)

    lines = [
        RECORD_FORMAT,
        f"{_MTIME_PREFIX}{format_mtime(key.mod_time_ns)}",
        f"{_SIZE_PREFIX}{key.size}",
    ]
    lines.extend(f"{k}{_SEPARATOR}{metadata[k]}" for k in sorted(metadata))

    return "\n".join(lines) + "\n"


def _split_lines(text: str) -> list[str]:
    # Only "\n" terminates a line; a trailing "\r" is dropped per line.
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_record(text: str) -> CacheRecord | None:
    """
    Parse record text.

    Returns:
        CacheRecord, or None if the text is not a complete, well-formed record
    """
    lines = _split_lines(text)

    if len(lines) < 3 or lines[0] != RECORD_FORMAT:
        return None

    mtime_line, size_line = lines[1], lines[2]
    if not mtime_line.startswith(_MTIME_PREFIX):
        return None
    if not size_line.startswith(_SIZE_PREFIX):
        return None

    size_text = size_line[len(_SIZE_PREFIX) :]
    if _INT_RE.fullmatch(size_text) is None:
        return None

    metadata: Metadata = {}
    for line in lines[3:]:
        k, sep, v = line.partition(_SEPARATOR)
        if not sep:
            return None
        metadata[k] = v

    return CacheRecord(
        mtime=mtime_line[len(_MTIME_PREFIX) :],
        size=int(size_text),
        metadata=metadata,
    )
