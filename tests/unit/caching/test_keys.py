"""Tests for key resolution and path normalization."""

from __future__ import annotations

import os
from pathlib import Path
import sys

import pytest

from filedatacache.core.caching import FileDataCache, key_from_path, normalize_path

needs_symlinks = pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")


class TestKeyFromPath:
    """Tests for building keys from live files."""

    def test_key_captures_size_and_mtime(self, source_file: Path, source_mtime_ns: int):
        """Test stat fields are copied into the key."""
        key = key_from_path(source_file)

        assert key.path == str(source_file)
        assert key.size == 5
        assert key.mod_time_ns == source_mtime_ns
        assert key.mod_time_seconds == pytest.approx(1_700_000_000.5)

    def test_missing_path_raises_file_not_found(self, base_dir: Path):
        """Test a nonexistent path is NotFound."""
        with pytest.raises(FileNotFoundError):
            key_from_path(base_dir / "missing")

    def test_relative_path_becomes_absolute(
        self, source_file: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """Test relative input is resolved against the working directory."""
        monkeypatch.chdir(source_file.parent)

        assert key_from_path("F").path == str(source_file)

    def test_keys_are_immutable_values(self, source_file: Path):
        """Test keys for an unchanged file compare equal and are frozen."""
        key = key_from_path(source_file)

        assert key == key_from_path(source_file)
        with pytest.raises(Exception):
            key.size = 0  # type: ignore[misc]


@needs_symlinks
class TestSymlinks:
    """Tests for symlink normalization."""

    def test_symlink_resolves_to_target(self, source_file: Path):
        """Test a key via a symlink has the target's path."""
        link = source_file.parent / "link"
        link.symlink_to(source_file)

        assert key_from_path(link).path == key_from_path(source_file).path

    def test_chained_symlinks_resolve_fully(self, source_file: Path):
        """Test link -> link -> file resolves to the file."""
        first = source_file.parent / "first"
        second = source_file.parent / "second"
        first.symlink_to(source_file)
        second.symlink_to(first)

        assert normalize_path(second) == str(source_file)

    def test_symlink_key_uses_target_stat(self, source_file: Path, source_mtime_ns: int):
        """Test size and mtime describe the target, not the link."""
        link = source_file.parent / "link"
        link.symlink_to(source_file)

        key = key_from_path(link)
        assert key.size == 5
        assert key.mod_time_ns == source_mtime_ns

    def test_symlinked_parent_is_kept(self, source_file: Path, base_dir: Path):
        """Test only a final-component link is resolved; parent links are kept."""
        linked_dir = base_dir / "linked"
        linked_dir.symlink_to(source_file.parent, target_is_directory=True)

        assert key_from_path(linked_dir / "F").path == os.path.abspath(linked_dir / "F")

    def test_dangling_symlink_is_not_found(self, base_dir: Path):
        """Test a link to nothing cannot be resolved."""
        link = base_dir / "dangling"
        link.symlink_to(base_dir / "nowhere")

        with pytest.raises(FileNotFoundError):
            key_from_path(link)

    def test_put_via_link_get_via_target(self, cache: FileDataCache, source_file: Path):
        """Test a link and its target share one cache slot."""
        link = source_file.parent / "link"
        link.symlink_to(source_file)

        cache.put(key_from_path(link), {"len": "8"})

        assert cache.get(key_from_path(source_file)) == {"len": "8"}
