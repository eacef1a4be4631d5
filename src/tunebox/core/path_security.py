"""
Path security validation utilities for Tunebox.

Provides pure functions to validate stored file paths are within the upload
directory, preventing directory traversal and symlink escapes.
"""

from pathlib import Path
from typing import Optional


def is_path_within_root(file_path: Path, root: Path) -> bool:
    """Pure function - validates path is within the storage root.

    Uses Path.resolve() to handle symlinks and relative paths, then checks if the
    resolved path is a child of the root directory.

    Args:
        file_path: The file path to validate
        root: Allowed storage root directory

    Returns:
        True if path is within the root, False otherwise
    """
    try:
        resolved_path = file_path.resolve()
        resolved_path.relative_to(root.resolve())
        return True
    except ValueError:
        # relative_to raises ValueError if path is not a subpath
        return False
    except (OSError, RuntimeError):
        # Path.resolve() can raise OSError for invalid paths or RuntimeError for recursion
        return False


def validate_stored_path(file_path: Path, root: Path) -> Optional[Path]:
    """Pure function - returns validated path or None.

    Args:
        file_path: The file path to validate
        root: Allowed storage root directory

    Returns:
        The validated Path object if it exists inside root, None otherwise
    """
    if not is_path_within_root(file_path, root):
        return None

    if not file_path.is_file():
        return None

    return file_path
