"""Atomic file staging (stream copy, then rename)."""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

COPY_CHUNK_SIZE = 1024 * 1024


def atomic_copy_stream(source: BinaryIO, dest: Path) -> int:
    """Copy a binary stream to dest atomically. Returns the number of bytes written.

    The bytes land in a unique temp file next to dest and are moved into
    place with os.replace, so concurrent writers never interleave and
    readers only ever see a complete file.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=dest.parent, suffix=".tmp", prefix=".ffmpeg_locator_"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            shutil.copyfileobj(source, f, COPY_CHUNK_SIZE)
            written = f.tell()
        os.replace(tmp_path, dest)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
    return written
