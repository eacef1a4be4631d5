"""Tests for path security validation utilities."""

import tempfile
from pathlib import Path

from tunebox.core.path_security import is_path_within_root, validate_stored_path


class TestIsPathWithinRoot:
    """Test path boundary validation."""

    def test_valid_path_within_root(self):
        """Test that valid paths within the upload dir are accepted."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir) / "uploads"
            root.mkdir()

            test_file = root / "a1b2c3"
            test_file.write_bytes(b"fake audio")

            assert is_path_within_root(test_file, root)

    def test_directory_traversal_blocked(self):
        """Test that directory traversal attacks are blocked."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir) / "uploads"
            root.mkdir()

            outside_file = Path(temp_dir) / "outside.mp3"
            outside_file.write_bytes(b"fake audio")

            traversal_path = root / ".." / "outside.mp3"

            assert not is_path_within_root(traversal_path, root)

    def test_symlink_escape_blocked(self):
        """Test that symlinks pointing outside the root are blocked."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir) / "uploads"
            root.mkdir()

            outside_file = Path(temp_dir) / "outside.mp3"
            outside_file.write_bytes(b"fake audio")

            symlink = root / "evil_link"
            symlink.symlink_to(outside_file)

            assert not is_path_within_root(symlink, root)


class TestValidateStoredPath:
    """Test complete stored path validation."""

    def test_existing_file_allowed(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            test_file = root / "a1b2c3"
            test_file.write_bytes(b"fake audio")

            assert validate_stored_path(test_file, root) == test_file

    def test_nonexistent_file_rejected(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            assert validate_stored_path(root / "missing", root) is None

    def test_directory_rejected(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / "nested").mkdir()
            assert validate_stored_path(root / "nested", root) is None
