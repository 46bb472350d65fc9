"""File permission helpers."""

from __future__ import annotations

import os
import stat
from pathlib import Path

EXECUTABLE_MODE = 0o755


def make_executable(path: Path) -> None:
    """Set rwxr-xr-x on path. Raises OSError on failure."""
    os.chmod(path, EXECUTABLE_MODE)


def is_executable(path: Path) -> bool:
    """Return True if the owner execute bit is set on path."""
    try:
        return bool(path.stat().st_mode & stat.S_IXUSR)
    except OSError:
        return False
